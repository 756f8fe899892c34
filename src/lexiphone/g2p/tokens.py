"""Token, context and cluster records used by the G2P pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass
class TokenMeta:
    """Per-token metadata carried between pipeline stages.

    Attributes:
        is_head: False marks a fragment to be merged into the previous token.
        alias: Word to look up instead of the surface text (e.g. "2" -> "to").
        stress: Explicit stress directive, see apply_stress().
        currency: Currency symbol carried from a preceding symbol token.
        num_flags: Sorted, de-duplicated single-character numeral flags.
        prespace: Insert a space before this token's phonemes inside a cluster.
        rating: Confidence of the phonemes: 5 override, 4 exact match,
            3 secondary/stemmed/heuristic, 1 fallback, None unresolved.
    """

    is_head: bool = True
    alias: Optional[str] = None
    stress: Optional[float] = None
    currency: Optional[str] = None
    num_flags: str = ""
    prespace: bool = False
    rating: Optional[int] = None


@dataclass
class MToken:
    """A word-level token with its tag, trailing whitespace and phonemes.

    ``phonemes`` is None while unresolved; an empty string means the token
    is silent.
    """

    text: str
    tag: str
    whitespace: str
    phonemes: Optional[str] = None
    start_ts: Optional[float] = None
    end_ts: Optional[float] = None
    meta: TokenMeta = field(default_factory=TokenMeta)

    def copy(self, **changes) -> "MToken":
        """Return a copy with its own metadata block."""
        changes.setdefault("meta", replace(self.meta))
        return replace(self, **changes)


@dataclass(frozen=True)
class TokenContext:
    """What the pipeline knows about the token to the right.

    Attributes:
        future_vowel: Whether the next audible unit starts with a vowel;
            None when unknown (e.g. end of text or punctuation follows).
        future_to: Whether the next token is an infinitive "to".
    """

    future_vowel: Optional[bool] = None
    future_to: bool = False


@dataclass
class Cluster:
    """Subtokens with no whitespace between them, phonemized as one unit."""

    tokens: List[MToken]

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]

    @property
    def text(self) -> str:
        return "".join(tk.text + tk.whitespace for tk in self.tokens[:-1]) + self.tokens[-1].text


def merge_tokens(tokens: List[MToken], unk: Optional[str] = None) -> MToken:
    """Merge consecutive tokens into one.

    Text is joined with the inner whitespace, the tag comes from the token
    with the most (uppercase-weighted) characters. Phonemes are only joined
    when ``unk`` is given, using ``unk`` for unresolved members.

    Raises:
        ValueError: If ``tokens`` is empty.
    """
    if not tokens:
        raise ValueError("Cannot merge an empty token list")

    stresses = {tk.meta.stress for tk in tokens if tk.meta.stress is not None}
    currencies = {tk.meta.currency for tk in tokens if tk.meta.currency is not None}
    ratings = {tk.meta.rating for tk in tokens}

    if unk is None:
        phonemes = None
    else:
        phonemes = ""
        for tk in tokens:
            if tk.meta.prespace and phonemes and not phonemes[-1].isspace() and tk.phonemes:
                phonemes += " "
            phonemes += unk if tk.phonemes is None else tk.phonemes

    return MToken(
        text="".join(tk.text + tk.whitespace for tk in tokens[:-1]) + tokens[-1].text,
        tag=max(tokens, key=lambda tk: sum(1 if c == c.lower() else 2 for c in tk.text)).tag,
        whitespace=tokens[-1].whitespace,
        phonemes=phonemes,
        start_ts=tokens[0].start_ts,
        end_ts=tokens[-1].end_ts,
        meta=TokenMeta(
            is_head=tokens[0].meta.is_head,
            alias=None,
            stress=next(iter(stresses)) if len(stresses) == 1 else None,
            currency=max(currencies) if currencies else None,
            num_flags="".join(sorted({c for tk in tokens for c in tk.meta.num_flags})),
            prespace=tokens[0].meta.prespace,
            rating=None if None in ratings else min(ratings),
        ),
    )


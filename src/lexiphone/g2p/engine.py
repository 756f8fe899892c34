"""
English grapheme-to-phoneme conversion.

Pipeline: markup preprocessing -> host tokenizer -> feature application ->
fold of non-head fragments -> subtoken split and classification ->
right-to-left resolution (lexicon, fallback, cluster heuristics) -> merge.

Example:
    >>> from lexiphone import G2P
    >>> from lexiphone.g2p import SpacyTokenizer
    >>> g2p = G2P(SpacyTokenizer())
    >>> phonemes, tokens = g2p("[Hello](/həlˈO/) world!")
    >>> phonemes
    'həlˈO wˈɜɹld!'
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple, Union

from lexiphone.data.dictionaries import Dictionaries
from lexiphone.g2p.fallback import FallbackAdapter
from lexiphone.g2p.lexicon import Lexicon
from lexiphone.g2p.numbers import NumberVerbalizer, is_digit
from lexiphone.g2p.preprocess import AlignmentMiss, apply_features, preprocess
from lexiphone.g2p.stress import apply_stress, stress_weight
from lexiphone.g2p.tokenizer import Tokenizer
from lexiphone.g2p.tokens import Cluster, MToken, TokenContext, TokenMeta, merge_tokens
from lexiphone.utils.constants import (
    CONSONANTS,
    CURRENCIES,
    EM_DASH,
    LEGACY_SUBSTITUTIONS,
    NON_QUOTE_PUNCTS,
    PRIMARY_STRESS,
    PUNCT_TAG_PHONEMES,
    PUNCT_TAGS,
    PUNCTS,
    SUBTOKEN_JUNKS,
    SUBTOKEN_PATTERN,
    VOWELS,
)

logger = logging.getLogger(__name__)

Unit = Union[MToken, Cluster]

Preprocessor = Callable[[str], Tuple[str, List[str], dict]]

CURRENT_VERSION = "2.0"


def subtokenize(word: str) -> List[str]:
    """Split a tagger token at case, digit, hyphen and quote boundaries.

    Example:
        >>> subtokenize("iPhone15")
        ['i', 'Phone', '15']
    """
    return SUBTOKEN_PATTERN.findall(word)


def token_context(ctx: TokenContext, ps: Optional[str], tk: MToken) -> TokenContext:
    """Context seen by the unit to the left of ``tk``."""
    vowel = ctx.future_vowel
    if ps:
        for c in ps:
            if c in NON_QUOTE_PUNCTS:
                vowel = None
                break
            if c in VOWELS or c in CONSONANTS:
                vowel = c in VOWELS
                break
    future_to = tk.text in ("to", "To") or (tk.text == "TO" and tk.tag in ("TO", "IN"))
    return TokenContext(future_vowel=vowel, future_to=future_to)


def resolve_tokens(cluster: Cluster) -> None:
    """Fill silent members of an unresolved cluster and balance its stress.

    Clusters with internal separation (spaces, slashes, or a mix of letters,
    digits and symbols) get a space between members. Otherwise, when more
    than half of the members carry primary stress, the lightest half is
    demoted to secondary stress.
    """
    text = cluster.text
    prespace = (
        " " in text
        or "/" in text
        or len({0 if c.isalpha() else 1 if is_digit(c) else 2 for c in text if c not in SUBTOKEN_JUNKS}) > 1
    )
    last = len(cluster) - 1
    for i, tk in enumerate(cluster):
        if tk.phonemes is None:
            if i == last and tk.text in NON_QUOTE_PUNCTS:
                tk.phonemes = tk.text
                tk.meta.rating = 3
            elif all(c in SUBTOKEN_JUNKS for c in tk.text):
                tk.phonemes = ""
                tk.meta.rating = 3
        elif i > 0:
            tk.meta.prespace = prespace
    if prespace:
        return

    indices = [
        (PRIMARY_STRESS in tk.phonemes, stress_weight(tk.phonemes), i)
        for i, tk in enumerate(cluster)
        if tk.phonemes
    ]
    if len(indices) == 2 and len(cluster[indices[0][2]].text) == 1:
        i = indices[1][2]
        cluster[i].phonemes = apply_stress(cluster[i].phonemes, -0.5)
        return
    if len(indices) < 2 or sum(has_primary for has_primary, _, _ in indices) <= (len(indices) + 1) // 2:
        return
    for _, _, i in sorted(indices)[: len(indices) // 2]:
        cluster[i].phonemes = apply_stress(cluster[i].phonemes, -0.5)


class G2P:
    """
    English grapheme-to-phoneme engine.

    Args:
        tokenizer: Host tokenizer/tagger, see lexiphone.g2p.tokenizer.
        dictionaries: Gold/silver dictionaries. Loaded (and downloaded if
            needed) for the locale when omitted.
        british: Use British English (default: American).
        version: Output version. Anything but "2.0" replaces ɾ with T and
            ʔ with t.
        fallback: Predictor ``text -> (phonemes, rating)`` or a
            FallbackAdapter, used for words no rule resolves.
        unk: Placeholder for unresolved tokens.
        verbalizer: Number-to-words strategy (default: num2words).

    Raises:
        ValueError: If ``dictionaries`` were built for the other locale.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        dictionaries: Optional[Dictionaries] = None,
        british: bool = False,
        version: Optional[str] = None,
        fallback=None,
        unk: str = "❓",
        verbalizer: Optional[NumberVerbalizer] = None,
    ):
        if dictionaries is None:
            from lexiphone.data.loader import load_dictionaries
            dictionaries = load_dictionaries(british)
        self._check_locale(dictionaries, british)
        self.tokenizer = tokenizer
        self.british = british
        self.version = version
        self.unk = unk
        self.verbalizer = verbalizer
        if fallback is not None and not isinstance(fallback, FallbackAdapter):
            fallback = FallbackAdapter(fallback)
        self.fallback: Optional[FallbackAdapter] = fallback
        self.lexicon = Lexicon(dictionaries, verbalizer)

    @staticmethod
    def _check_locale(dictionaries: Dictionaries, british: bool) -> None:
        if dictionaries.british != british:
            raise ValueError(
                "Dictionaries are for %s English but the engine is %s"
                % ("British" if dictionaries.british else "American",
                   "British" if british else "American")
            )

    @property
    def dictionaries(self) -> Dictionaries:
        return self.lexicon.dictionaries

    def swap_dictionaries(self, dictionaries: Dictionaries) -> None:
        """Replace the dictionaries without disturbing conversions in flight.

        Raises:
            ValueError: If ``dictionaries`` were built for the other locale.
        """
        self._check_locale(dictionaries, self.british)
        self.lexicon = Lexicon(dictionaries, self.verbalizer)
        logger.info(
            "Swapped dictionaries (%d gold, %d silver entries)",
            len(dictionaries.golds), len(dictionaries.silvers),
        )

    # -------------------------------------------------------------------------
    # Pipeline stages
    # -------------------------------------------------------------------------

    def tokenize(
        self,
        text: str,
        words: List[str],
        features: dict,
    ) -> Tuple[List[MToken], List[AlignmentMiss]]:
        """Run the host tokenizer and attach markup features."""
        tokens = [MToken(text=t.text, tag=t.tag, whitespace=t.whitespace) for t in self.tokenizer(text)]
        return apply_features(tokens, words, features, align=getattr(self.tokenizer, "align", None))

    def fold_left(self, tokens: List[MToken]) -> List[MToken]:
        """Merge every non-head token into the token before it."""
        result: List[MToken] = []
        for tk in tokens:
            if result and not tk.meta.is_head:
                pair = [result.pop(), tk]
                unk = self.unk if any(t.phonemes is not None for t in pair) else None
                tk = merge_tokens(pair, unk=unk)
            result.append(tk)
        return result

    @staticmethod
    def _split(tk: MToken) -> List[MToken]:
        if tk.meta.alias is not None or tk.phonemes is not None:
            return [tk]
        parts = subtokenize(tk.text)
        if not parts or "".join(parts) != tk.text:
            return [tk.copy()]
        return [
            tk.copy(
                text=part,
                whitespace="",
                meta=TokenMeta(num_flags=tk.meta.num_flags, stress=tk.meta.stress),
            )
            for part in parts
        ]

    @staticmethod
    def retokenize(tokens: List[MToken]) -> List[Unit]:
        """Split tokens into subtokens, classify them and group clusters."""
        units: List[Union[MToken, List[MToken]]] = []
        currency = None
        for i, token in enumerate(tokens):
            parts = G2P._split(token)
            parts[-1].whitespace = token.whitespace
            for j, tk in enumerate(parts):
                if tk.meta.alias is not None or tk.phonemes is not None:
                    pass
                elif tk.tag == "$" and tk.text in CURRENCIES:
                    currency = tk.text
                    tk.phonemes = ""
                    tk.meta.rating = 4
                elif tk.tag == ":" and tk.text in ("-", "–"):
                    tk.phonemes = EM_DASH
                    tk.meta.rating = 3
                elif tk.tag in PUNCT_TAGS and not tk.text.isalnum():
                    tk.phonemes = PUNCT_TAG_PHONEMES.get(tk.tag, "".join(c for c in tk.text if c in PUNCTS))
                    tk.meta.rating = 4
                elif currency is not None:
                    if tk.tag != "CD":
                        currency = None
                    elif j + 1 == len(parts) and (i + 1 == len(tokens) or tokens[i + 1].tag != "CD"):
                        tk.meta.currency = currency
                elif 0 < j < len(parts) - 1 and tk.text == "2" and (parts[j - 1].text[-1] + parts[j + 1].text[0]).isalpha():
                    tk.meta.alias = "to"

                if tk.meta.alias is not None or tk.phonemes is not None:
                    units.append(tk)
                elif units and isinstance(units[-1], list) and not units[-1][-1].whitespace:
                    tk.meta.is_head = False
                    units[-1].append(tk)
                else:
                    units.append(tk if tk.whitespace else [tk])
        return [
            (u[0] if len(u) == 1 else Cluster(u)) if isinstance(u, list) else u
            for u in units
        ]

    def _resolve_token(self, lexicon: Lexicon, tk: MToken, ctx: TokenContext) -> TokenContext:
        if tk.phonemes is None:
            tk.phonemes, tk.meta.rating = lexicon(tk, ctx)
        if tk.phonemes is None and self.fallback is not None:
            tk.phonemes, tk.meta.rating = self.fallback(tk)
        return token_context(ctx, tk.phonemes, tk)

    def _resolve_cluster(self, lexicon: Lexicon, cluster: Cluster, ctx: TokenContext) -> TokenContext:
        # Longest span first, shrinking from the left, then drop the rightmost member
        left, right = 0, len(cluster)
        should_fallback = False
        while left < right:
            span = cluster.tokens[left:right]
            if any(tk.meta.alias is not None or tk.phonemes is not None for tk in span):
                merged = None
                ps, rating = None, None
            else:
                merged = merge_tokens(span)
                ps, rating = lexicon(merged, ctx)
            if ps is not None:
                cluster[left].phonemes = ps
                cluster[left].meta.rating = rating
                for tk in span[1:]:
                    tk.phonemes = ""
                    tk.meta.rating = rating
                ctx = token_context(ctx, ps, merged)
                right = left
                left = 0
            elif left + 1 < right:
                left += 1
            else:
                right -= 1
                tk = cluster[right]
                if tk.phonemes is None:
                    if all(c in SUBTOKEN_JUNKS for c in tk.text):
                        tk.phonemes = ""
                        tk.meta.rating = 3
                    elif self.fallback is not None:
                        should_fallback = True
                        break
                left = 0

        if should_fallback:
            merged = merge_tokens(cluster.tokens)
            ps, rating = self.fallback(merged)
            cluster[0].phonemes, cluster[0].meta.rating = ps, rating
            for tk in cluster.tokens[1:]:
                tk.phonemes = ""
                tk.meta.rating = rating
            return token_context(ctx, ps, merged)
        resolve_tokens(cluster)
        return ctx

    def resolve(self, units: List[Unit]) -> List[Unit]:
        """Resolve units right to left, threading the context leftwards."""
        lexicon = self.lexicon
        ctx = TokenContext()
        for unit in reversed(units):
            try:
                if isinstance(unit, Cluster):
                    ctx = self._resolve_cluster(lexicon, unit, ctx)
                else:
                    ctx = self._resolve_token(lexicon, unit, ctx)
            except Exception as e:
                text = unit.text
                logger.warning("Failed to resolve %r, leaving it unresolved: %s", text, e)
        return units

    def _finalize(self, units: List[Unit]) -> List[MToken]:
        tokens = [merge_tokens(u.tokens, unk=self.unk) if isinstance(u, Cluster) else u for u in units]
        if self.version != CURRENT_VERSION:
            for tk in tokens:
                if tk.phonemes:
                    for old, new in LEGACY_SUBSTITUTIONS:
                        tk.phonemes = tk.phonemes.replace(old, new)
        return tokens

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def convert(
        self,
        text: str,
        apply_preprocessing: Union[bool, Preprocessor] = True,
    ) -> Tuple[str, List[MToken]]:
        """
        Convert text to phonemes.

        Args:
            text: Input text, optionally with ``[text](feature)`` markup.
            apply_preprocessing: True to parse markup, False to take the
                text verbatim, or a custom preprocessor with the signature
                of lexiphone.g2p.preprocess.preprocess.

        Returns:
            Tuple of (phoneme string, tokens). The phoneme string joins
            each token's phonemes (or the placeholder) and its trailing
            whitespace.
        """
        pre = preprocess if apply_preprocessing is True else apply_preprocessing
        plain, words, features = pre(text) if pre else (text, [], {})
        tokens, misses = self.tokenize(plain, words, features)
        tokens = self.fold_left(tokens)
        units = self.resolve(self.retokenize(tokens))
        tokens = self._finalize(units)
        logger.debug(
            "Converted %d tokens (%d clusters, %d alignment misses)",
            len(tokens), sum(isinstance(u, Cluster) for u in units), len(misses),
        )
        result = "".join((self.unk if tk.phonemes is None else tk.phonemes) + tk.whitespace for tk in tokens)
        return result, tokens

    def __call__(
        self,
        text: str,
        preprocess: Union[bool, Preprocessor] = True,
    ) -> Tuple[str, List[MToken]]:
        return self.convert(text, apply_preprocessing=preprocess)

    def __repr__(self) -> str:
        locale = "gb" if self.british else "us"
        return f"G2P(locale='{locale}', version={self.version!r}, fallback={self.fallback is not None})"


__all__ = ["G2P", "resolve_tokens", "subtokenize", "token_context"]

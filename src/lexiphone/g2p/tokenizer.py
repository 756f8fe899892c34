"""
Tokenizer interface - the host tagger that feeds the G2P pipeline.

Any callable returning ``(text, tag, whitespace)`` triples works as a
tokenizer. A tokenizer may also expose ``align(words, tokens)`` to map the
whitespace-split words seen by the markup preprocessor onto its own token
boundaries; without it, a cumulative-text heuristic is used.

The default adapter wraps spaCy, which is an optional dependency:

    pip install lexiphone[spacy]
    python -m spacy download en_core_web_sm

Example:
    >>> from lexiphone.g2p import SpacyTokenizer
    >>> tok = SpacyTokenizer()
    >>> tok("Hello world!")
    [TaggedToken(text='Hello', tag='UH', whitespace=' '), ...]
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Protocol

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_SPACY_MODEL = "en_core_web_sm"


class TaggedToken(NamedTuple):
    """One token from the host tagger."""

    text: str
    tag: str
    whitespace: str


class Tokenizer(Protocol):
    """Maps plain text to tagged tokens, in order."""

    def __call__(self, text: str) -> List[TaggedToken]:
        ...


def _get_spacy_module():
    """Lazy import of spacy."""
    try:
        import spacy
        return spacy
    except ImportError:
        raise ImportError(
            "The 'spacy' library is required for SpacyTokenizer.\n"
            "Install it with: pip install lexiphone[spacy]"
        )


def decode_alignment(data, lengths, n_words: int) -> List[List[int]]:
    """Invert a ragged token -> word alignment into word -> token indices.

    ``data`` lists, token by token, the word indices each token overlaps;
    ``lengths`` gives how many entries of ``data`` belong to each token.
    """
    data = np.asarray(data, dtype=np.int64)
    lengths = np.asarray(lengths, dtype=np.int64)
    token_ids = np.repeat(np.arange(len(lengths)), lengths)
    return [np.unique(token_ids[data == k]).tolist() for k in range(n_words)]


class SpacyTokenizer:
    """
    Tokenizer backed by a spaCy pipeline.

    Args:
        model: Name of an installed spaCy pipeline (default: en_core_web_sm).
        nlp: An already loaded ``spacy.language.Language``; overrides ``model``.

    Tokens without a fine-grained tag get one derived from their lexical
    attributes (punctuation, number-like, currency).
    """

    def __init__(self, model: str = DEFAULT_SPACY_MODEL, nlp=None):
        self._spacy = _get_spacy_module()
        if nlp is None:
            logger.info("Loading spaCy pipeline %s", model)
            nlp = self._spacy.load(model)
        self.nlp = nlp

    @staticmethod
    def _tag(tk) -> str:
        if tk.tag_:
            return tk.tag_
        if tk.is_currency:
            return "$"
        if tk.is_punct:
            return "."
        if tk.like_num:
            return "CD"
        return tk.pos_ or "XX"

    def __call__(self, text: str) -> List[TaggedToken]:
        doc = self.nlp(text)
        return [TaggedToken(tk.text, self._tag(tk), tk.whitespace_) for tk in doc]

    def align(self, words: List[str], tokens: List[str]) -> List[List[int]]:
        """Map each word to the indices of the tokens it overlaps."""
        from spacy.training import Alignment

        alignment = Alignment.from_strings(words, tokens)
        return decode_alignment(alignment.y2x.data, alignment.y2x.lengths, len(words))

    def __repr__(self) -> str:
        name: Optional[str] = self.nlp.meta.get("name") if hasattr(self.nlp, "meta") else None
        return f"SpacyTokenizer(model='{name}')"

"""Inline pronunciation markup and its application to tagged tokens.

Markup has the form ``[literal text](feature)``:

- ``[word](2)`` / ``[word](-1)`` / ``[word](0.5)``: stress directive
- ``[word](/fˈoʊnimz/)``: forced phonemes
- ``[1984](#a#)``: numeral flags

Example:
    >>> preprocess("[Nike](/nˈIki/) shoes")
    ('Nike shoes', ['Nike', 'shoes'], {0: PhonemeOverride(phonemes='nˈIki')})
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from lexiphone.g2p.numbers import is_digit
from lexiphone.g2p.tokens import MToken
from lexiphone.utils.constants import LINK_PATTERN

logger = logging.getLogger(__name__)


class PhonemeOverride(NamedTuple):
    """Forced pronunciation from ``/.../`` markup."""

    phonemes: str


class NumFlags(NamedTuple):
    """Numeral flags from ``#...#`` markup."""

    flags: str


Feature = Union[int, float, PhonemeOverride, NumFlags]

Aligner = Callable[[List[str], List[str]], List[List[int]]]


class AlignmentMiss(NamedTuple):
    """A feature that could not be attached to any tagged token."""

    position: int
    word: Optional[str]
    feature: Feature


def parse_feature(feature: str) -> Optional[Feature]:
    """Parse the parenthesized part of a markup link.

    Returns None for anything that is not a recognized feature.

    Example:
        >>> parse_feature("-2")
        -2
        >>> parse_feature("#a&#")
        NumFlags(flags='&a')
    """
    if is_digit(feature[1:] if feature[:1] in ("-", "+") else feature):
        return int(feature)
    if feature in ("0.5", "+0.5"):
        return 0.5
    if feature == "-0.5":
        return -0.5
    if len(feature) > 1 and feature[0] == "/" and feature[-1] == "/":
        return PhonemeOverride(feature[1:-1])
    if len(feature) > 1 and feature[0] == "#" and feature[-1] == "#":
        return NumFlags("".join(sorted(set(feature[1:-1]))))
    return None


def preprocess(text: str) -> Tuple[str, List[str], Dict[int, Feature]]:
    """Strip markup from ``text``.

    Returns:
        Tuple of (plain text, whitespace-split words of the plain text,
        word position -> feature). A feature's position is the index of
        the word holding its literal text.
    """
    result = ""
    words: List[str] = []
    features: Dict[int, Feature] = {}
    last_end = 0
    text = text.lstrip()
    for match in LINK_PATTERN.finditer(text):
        result += text[last_end:match.start()]
        words.extend(text[last_end:match.start()].split())
        feature = parse_feature(match.group(2))
        if feature is not None:
            features[len(words)] = feature
        else:
            logger.debug("Ignoring unrecognized feature %r", match.group(2))
        result += match.group(1)
        words.append(match.group(1))
        last_end = match.end()
    if last_end < len(text):
        result += text[last_end:]
        words.extend(text[last_end:].split())
    return result, words, features


def align_words(words: List[str], tokens: List[str]) -> List[List[int]]:
    """Map each word to the tokens covering it by cumulative text offsets.

    Both sides are stripped of whitespace and laid end to end; a token
    belongs to a word when their character spans overlap. A word only
    matches if the two character streams agree over its span, so once the
    tokenizer drops or rewrites characters later words stop matching.
    """
    words = ["".join(w.split()) for w in words]
    tokens = ["".join(t.split()) for t in tokens]
    word_ends = np.cumsum([len(w) for w in words], dtype=np.int64)
    word_starts = word_ends - np.array([len(w) for w in words], dtype=np.int64)
    token_lens = np.array([len(t) for t in tokens], dtype=np.int64)
    token_ends = np.cumsum(token_lens, dtype=np.int64)
    token_starts = token_ends - token_lens
    stream = "".join(tokens)

    alignment: List[List[int]] = []
    for word, start, end in zip(words, word_starts, word_ends):
        if not word or stream[start:end] != word:
            alignment.append([])
            continue
        overlap = (token_starts < end) & (token_ends > start) & (token_lens > 0)
        alignment.append(np.flatnonzero(overlap).tolist())
    return alignment


def apply_features(
    tokens: List[MToken],
    words: List[str],
    features: Dict[int, Feature],
    align: Optional[Aligner] = None,
) -> Tuple[List[MToken], List[AlignmentMiss]]:
    """Attach markup features to tagged tokens.

    Args:
        tokens: Tagged tokens; they are copied, never modified.
        words: Whitespace-split words from preprocess().
        features: Word position -> feature from preprocess().
        align: Word/token aligner (default: align_words()).

    Returns:
        Tuple of (tokens with features applied, features that matched no token).
    """
    tokens = [tk.copy() for tk in tokens]
    misses: List[AlignmentMiss] = []
    if not features:
        return tokens, misses

    alignment = (align or align_words)(words, [tk.text for tk in tokens])
    for position, feature in sorted(features.items()):
        matched = alignment[position] if position < len(alignment) else []
        matched = [j for j in matched if j < len(tokens)]
        if not matched:
            word = words[position] if position < len(words) else None
            logger.warning("Dropping feature %r: no token matches word %r at %d", feature, word, position)
            misses.append(AlignmentMiss(position, word, feature))
            continue
        for i, j in enumerate(matched):
            tk = tokens[j]
            if isinstance(feature, PhonemeOverride):
                tk.phonemes = feature.phonemes if i == 0 else ""
                tk.meta.is_head = i == 0
                tk.meta.rating = 5
            elif isinstance(feature, NumFlags):
                tk.meta.num_flags = feature.flags
            else:
                tk.meta.stress = feature
    return tokens, misses

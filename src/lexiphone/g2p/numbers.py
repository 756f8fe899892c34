"""Numeral detection and verbalization strategies.

The lexicon reads numbers by turning them into words with a
``NumberVerbalizer`` and then looking each word up. The default strategy
uses num2words; any object with the same four methods can replace it
(e.g. for another locale).
"""
from __future__ import annotations

import unicodedata
from typing import Protocol, Tuple

from num2words import num2words

from lexiphone.utils.constants import DIGITS_PATTERN, ORDINALS

# Suffixes stripped before deciding whether a word is numeric
NUMBER_SUFFIXES: Tuple[str, ...] = ("ing", "'d", "ed", "'s", *sorted(ORDINALS), "s")


class NumberVerbalizer(Protocol):
    """Turns numbers into lowercase English words."""

    def cardinal(self, number: int) -> str:
        ...

    def ordinal(self, number: int) -> str:
        ...

    def year(self, number: int) -> str:
        ...

    def decimal(self, number: str) -> str:
        ...


class Num2WordsVerbalizer:
    """NumberVerbalizer backed by the num2words library.

    Args:
        lang: num2words language code (default "en").

    Example:
        >>> Num2WordsVerbalizer().cardinal(21)
        'twenty-one'
        >>> Num2WordsVerbalizer().year(1984)
        'nineteen eighty-four'
    """

    def __init__(self, lang: str = "en"):
        self.lang = lang

    def cardinal(self, number: int) -> str:
        return num2words(number, lang=self.lang, to="cardinal")

    def ordinal(self, number: int) -> str:
        return num2words(number, lang=self.lang, to="ordinal")

    def year(self, number: int) -> str:
        return num2words(number, lang=self.lang, to="year")

    def decimal(self, number: str) -> str:
        return num2words(float(number), lang=self.lang, to="cardinal")

    def __repr__(self) -> str:
        return f"Num2WordsVerbalizer(lang='{self.lang}')"


def is_digit(text: str) -> bool:
    """True if ``text`` is a non-empty run of ASCII digits."""
    return bool(DIGITS_PATTERN.fullmatch(text))


def numeric_if_needed(c: str) -> str:
    """Map a non-ASCII digit character (e.g. '٣', '³') to its ASCII digit.

    Fractions and characters without an integer value are returned unchanged.
    """
    if not c.isdigit():
        return c
    n = unicodedata.numeric(c, None)
    if n is None or n != int(n):
        return c
    return str(int(n))


def is_number(word: str, is_head: bool) -> bool:
    """Whether a word reads as a numeral.

    One inflection, ordinal or possessive suffix is ignored; what is left
    may hold only digits, commas and periods, plus a leading minus sign
    when the word is a head token.

    Example:
        >>> is_number("1,000", True)
        True
        >>> is_number("21st", True)
        True
        >>> is_number("4u2", True)
        False
    """
    if not any(is_digit(c) for c in word):
        return False
    for suffix in NUMBER_SUFFIXES:
        if word.endswith(suffix):
            word = word[: -len(suffix)]
            break
    return all(
        is_digit(c) or c in ",." or (is_head and i == 0 and c == "-")
        for i, c in enumerate(word)
    )


def is_currency_amount(word: str) -> bool:
    """Whether a number can be read as a money amount (at most 2 decimals, or all zeros)."""
    if "." not in word:
        return True
    if word.count(".") > 1:
        return False
    cents = word.split(".")[1]
    return len(cents) < 3 or set(cents) == {"0"}

"""Pronunciation dictionary entries and the immutable dictionary snapshot.

A dictionary maps a word to either a flat phoneme string or a mapping of
part-of-speech tag to phoneme string. Both shapes are parsed once at load
time into ``FlatEntry`` / ``ConditionalEntry`` and resolved through
``Entry.resolve`` afterwards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional, Union

from lexiphone.utils.constants import (
    DEFAULT_KEY,
    GB_VOCAB,
    UNKNOWN_CONTEXT_KEY,
    US_VOCAB,
)

logger = logging.getLogger(__name__)


def parent_tag(tag: Optional[str]) -> Optional[str]:
    """Collapse a fine-grained POS tag into its family.

    Example:
        >>> parent_tag("VBD")
        'VERB'
        >>> parent_tag("DT")
        'DT'
    """
    if tag is None:
        return tag
    if tag.startswith("VB"):
        return "VERB"
    if tag.startswith("NN"):
        return "NOUN"
    if tag.startswith("ADV") or tag.startswith("RB") or tag == "RP":
        return "ADV"
    if tag.startswith("ADJ") or tag.startswith("JJ"):
        return "ADJ"
    return tag


@dataclass(frozen=True)
class FlatEntry:
    """A single pronunciation used for every tag."""

    phonemes: str

    def resolve(self, tag: Optional[str], unknown_context: bool = False) -> Optional[str]:
        return self.phonemes

    def phoneme_strings(self) -> Iterator[str]:
        yield self.phonemes


@dataclass(frozen=True)
class ConditionalEntry:
    """Pronunciations keyed by POS tag, tag family, or the unknown-context key.

    ``variants`` always holds a ``DEFAULT`` key. A variant may be None,
    meaning the word has no pronunciation for that tag.
    """

    variants: Mapping[str, Optional[str]]

    def resolve(self, tag: Optional[str], unknown_context: bool = False) -> Optional[str]:
        """Pick the pronunciation for a tag.

        Order: unknown-context key (when the following word is unknown),
        exact tag, tag family, then DEFAULT.
        """
        if unknown_context and UNKNOWN_CONTEXT_KEY in self.variants:
            key = UNKNOWN_CONTEXT_KEY
        elif tag in self.variants:
            key = tag
        else:
            key = parent_tag(tag)
        if key in self.variants:
            return self.variants[key]
        return self.variants[DEFAULT_KEY]

    def phoneme_strings(self) -> Iterator[str]:
        for phonemes in self.variants.values():
            if phonemes is not None:
                yield phonemes


Entry = Union[FlatEntry, ConditionalEntry]


def parse_entry(word: str, raw: Any, name: str) -> Entry:
    """Convert one raw JSON value into a dictionary entry.

    Raises:
        ValueError: If the value is neither a string nor a tag mapping,
            or a tag mapping lacks DEFAULT.
    """
    if isinstance(raw, str):
        return FlatEntry(raw)
    if isinstance(raw, dict):
        if DEFAULT_KEY not in raw:
            raise ValueError(
                "Missing %s in %s dictionary entry '%s': %r" % (DEFAULT_KEY, name, word, raw)
            )
        for tag, phonemes in raw.items():
            if phonemes is not None and not isinstance(phonemes, str):
                raise ValueError(
                    "Unexpected value for tag '%s' in %s dictionary entry '%s': %r"
                    % (tag, name, word, phonemes)
                )
        return ConditionalEntry(MappingProxyType(dict(raw)))
    raise ValueError(
        "Unexpected type in %s dictionary entry '%s': %r" % (name, word, raw)
    )


def grow_dictionary(d: Mapping[str, Entry]) -> Dict[str, Entry]:
    """Add capitalization variants of multi-letter keys.

    A lowercase key also registers its Capitalized form, and a Capitalized
    key registers its lowercase form. Existing keys always win.

    Example:
        >>> sorted(grow_dictionary({"cat": FlatEntry("kˈæt")}))
        ['Cat', 'cat']
    """
    grown: Dict[str, Entry] = {}
    for key, value in d.items():
        if len(key) < 2:
            continue
        if key == key.lower():
            if key != key.capitalize():
                grown[key.capitalize()] = value
        elif key == key.lower().capitalize():
            grown[key.lower()] = value
    return {**grown, **d}


def validate_entries(entries: Mapping[str, Entry], vocab: FrozenSet[str], name: str) -> None:
    """Check every phoneme string against the locale alphabet.

    Raises:
        ValueError: On the first phoneme character outside ``vocab``.
    """
    for word, entry in entries.items():
        for phonemes in entry.phoneme_strings():
            bad = sorted(set(phonemes) - vocab)
            if bad:
                raise ValueError(
                    "Invalid phoneme in %s dictionary entry '%s': %r (unknown symbols: %s)"
                    % (name, word, phonemes, "".join(bad))
                )


def parse_dictionary(
    raw: Mapping[str, Any],
    name: str,
    vocab: Optional[FrozenSet[str]] = None,
) -> Dict[str, Entry]:
    """Parse a raw word -> value mapping and add capitalization variants.

    When ``vocab`` is given, entries are validated before the variants are
    added, so errors name the key as written in the file.
    """
    entries = {word: parse_entry(word, value, name) for word, value in raw.items()}
    if vocab is not None:
        validate_entries(entries, vocab, name)
    return grow_dictionary(entries)


@dataclass(frozen=True)
class Dictionaries:
    """Read-only gold and silver dictionaries for one locale.

    Built once and shared by every conversion call. To reload, build a new
    instance and swap the reference.
    """

    golds: Mapping[str, Entry]
    silvers: Mapping[str, Entry]
    british: bool = False

    @classmethod
    def from_raw(
        cls,
        gold: Mapping[str, Any],
        silver: Mapping[str, Any],
        british: bool = False,
    ) -> "Dictionaries":
        """Parse raw JSON-shaped dictionaries.

        Only the gold dictionary is checked against the phoneme alphabet.

        Raises:
            ValueError: If either dictionary is malformed or the gold
                dictionary uses symbols outside the locale alphabet.
        """
        golds = parse_dictionary(gold, "gold", GB_VOCAB if british else US_VOCAB)
        silvers = parse_dictionary(silver, "silver")
        logger.debug("Parsed %d gold and %d silver entries", len(golds), len(silvers))
        return cls(
            golds=MappingProxyType(golds),
            silvers=MappingProxyType(silvers),
            british=british,
        )

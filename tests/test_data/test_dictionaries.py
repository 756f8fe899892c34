"""Tests for dictionary entries, parsing and validation."""
from __future__ import annotations

import pytest

from lexiphone.data.dictionaries import (
    ConditionalEntry,
    Dictionaries,
    FlatEntry,
    grow_dictionary,
    parent_tag,
    parse_dictionary,
    parse_entry,
)


class TestParentTag:
    """Tests for tag families."""

    def test_families(self):
        """Should collapse fine-grained tags."""
        assert parent_tag("VBD") == "VERB"
        assert parent_tag("NNS") == "NOUN"
        assert parent_tag("RB") == "ADV"
        assert parent_tag("RP") == "ADV"
        assert parent_tag("JJR") == "ADJ"

    def test_passthrough(self):
        """Should keep other tags and None."""
        assert parent_tag("DT") == "DT"
        assert parent_tag(None) is None


class TestEntries:
    """Tests for entry parsing and resolution."""

    def test_flat(self):
        """Should parse strings as flat entries."""
        entry = parse_entry("cat", "kˈæt", "gold")
        assert entry == FlatEntry("kˈæt")
        assert entry.resolve("VB") == "kˈæt"

    def test_conditional_resolution_order(self):
        """Should resolve exact tag, then family, then DEFAULT."""
        entry = parse_entry("read", {"DEFAULT": "ɹˈid", "VBD": "ɹˈɛd", "NOUN": "ɹˈiːd"}, "gold")
        assert isinstance(entry, ConditionalEntry)
        assert entry.resolve("VBD") == "ɹˈɛd"
        assert entry.resolve("NNS") == "ɹˈiːd"
        assert entry.resolve("VB") == "ɹˈid"
        assert entry.resolve(None) == "ɹˈid"

    def test_unknown_context_key(self):
        """Should prefer the unknown-context reading when the next word is unknown."""
        entry = parse_entry("wind", {"DEFAULT": "wˈɪnd", "None": "wˈInd"}, "gold")
        assert entry.resolve("NN", unknown_context=True) == "wˈInd"
        assert entry.resolve("NN") == "wˈɪnd"

    def test_explicit_null(self):
        """Should return None for tags mapped to null."""
        entry = parse_entry("wind", {"DEFAULT": "wˈɪnd", "VB": None}, "gold")
        assert entry.resolve("VB") is None

    def test_missing_default(self):
        """Should reject tag mappings without DEFAULT."""
        with pytest.raises(ValueError, match="Missing DEFAULT in gold dictionary entry 'read'"):
            parse_entry("read", {"VBD": "ɹˈɛd"}, "gold")

    def test_bad_type(self):
        """Should reject values that are neither strings nor mappings."""
        with pytest.raises(ValueError, match="Unexpected type"):
            parse_entry("cat", 42, "gold")

    def test_bad_tag_value(self):
        """Should reject non-string tag values."""
        with pytest.raises(ValueError, match="Unexpected value"):
            parse_entry("cat", {"DEFAULT": "kˈæt", "NN": 3}, "gold")


class TestGrowDictionary:
    """Tests for capitalization growth."""

    def test_adds_capitalized(self):
        """Should add Capitalized and lowercase variants."""
        grown = grow_dictionary({"cat": FlatEntry("kˈæt"), "Paris": FlatEntry("pˈɛɹᵻs")})
        assert grown["Cat"] == FlatEntry("kˈæt")
        assert grown["paris"] == FlatEntry("pˈɛɹᵻs")

    def test_existing_keys_win(self):
        """Should never overwrite an existing key."""
        grown = grow_dictionary({"polish": FlatEntry("pˈɑlɪʃ"), "Polish": FlatEntry("pˈOlɪʃ")})
        assert grown["Polish"] == FlatEntry("pˈOlɪʃ")
        assert grown["polish"] == FlatEntry("pˈɑlɪʃ")

    def test_skips_single_letters_and_caps(self):
        """Should leave single letters and all-caps keys alone."""
        grown = grow_dictionary({"a": FlatEntry("ɐ"), "NASA": FlatEntry("nˈæsə")})
        assert set(grown) == {"a", "NASA"}


class TestDictionaries:
    """Tests for the immutable snapshot."""

    def test_from_raw(self, gold_raw, silver_raw):
        """Should parse both tiers."""
        dictionaries = Dictionaries.from_raw(gold_raw, silver_raw)
        assert "Hello" in dictionaries.golds
        assert "zebra" in dictionaries.silvers
        assert dictionaries.british is False

    def test_read_only(self, dictionaries):
        """Should not allow entries to be changed."""
        with pytest.raises(TypeError):
            dictionaries.golds["cat"] = FlatEntry("dˈɔɡ")

    def test_frozen(self, dictionaries):
        """Should not allow the tiers to be replaced."""
        with pytest.raises(AttributeError):
            dictionaries.golds = {}

    def test_invalid_gold_phoneme(self):
        """Should fail loudly on gold phonemes outside the alphabet."""
        with pytest.raises(ValueError, match="Invalid phoneme in gold dictionary entry 'cat'"):
            Dictionaries.from_raw({"cat": "kæt!"}, {})

    def test_invalid_entry_named_as_written(self):
        """Should name the key from the file, not a capitalization variant."""
        with pytest.raises(ValueError, match="entry 'Paris'"):
            Dictionaries.from_raw({"Paris": "pˈɛɹɪs!"}, {})

    def test_locale_alphabet(self):
        """Should validate against the British alphabet for British dictionaries."""
        with pytest.raises(ValueError):
            Dictionaries.from_raw({"butter": "bˈʌɾəɹ"}, {}, british=True)
        Dictionaries.from_raw({"butter": "bˈʌtə"}, {}, british=True)

    def test_silver_not_validated(self):
        """Should accept silver entries without validation."""
        dictionaries = Dictionaries.from_raw({}, {"odd": "ʘd"})
        assert dictionaries.silvers["odd"].resolve(None) == "ʘd"


class TestParseDictionary:
    """Tests for whole-dictionary parsing."""

    def test_validates_before_growth(self):
        """Should report the original key when validation fails."""
        with pytest.raises(ValueError) as excinfo:
            parse_dictionary({"dog": "dˈɔɡ?"}, "gold", frozenset("dˈɔɡ"))
        assert "'dog'" in str(excinfo.value)
        assert "'Dog'" not in str(excinfo.value)

    def test_grows_after_validation(self):
        """Should still add capitalization variants to valid entries."""
        parsed = parse_dictionary({"dog": "dˈɔɡ"}, "gold", frozenset("dˈɔɡ"))
        assert set(parsed) == {"dog", "Dog"}

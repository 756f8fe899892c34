"""Tests for stress-mark manipulation."""
from __future__ import annotations

import pytest

from lexiphone.g2p.stress import apply_stress, stress_weight

SAMPLES = ["kˈæt", "nˌIntˈin", "ðə", "tʊ", "ˌɛnˌAʧˈɛs", "bˌɑks", "ʃ", ""]


class TestApplyStress:
    """Tests for apply_stress directives."""

    @pytest.mark.parametrize("ps", SAMPLES)
    def test_no_directive_is_identity(self, ps):
        """Should return the string unchanged without a directive."""
        assert apply_stress(ps, None) == ps

    def test_none_phonemes(self):
        """Should pass None through."""
        assert apply_stress(None, 2) is None

    @pytest.mark.parametrize("ps", SAMPLES)
    def test_strip_after_any_stress(self, ps):
        """Should strip every mark with a directive below -1."""
        result = apply_stress(apply_stress(ps, 1), -2)
        assert "ˈ" not in result
        assert "ˌ" not in result

    def test_demote_on_minus_one(self):
        """Should drop secondary marks and demote primary ones."""
        assert apply_stress("nˌIntˈin", -1) == "nIntˌin"

    def test_demote_on_zero_with_primary(self):
        """Should demote primary stress for 0 and -0.5."""
        assert apply_stress("kˈæt", 0) == "kˌæt"
        assert apply_stress("kˈæt", -0.5) == "kˌæt"

    def test_minus_half_without_primary_unchanged(self):
        """Should leave strings without primary stress alone for -0.5."""
        assert apply_stress("ðə", -0.5) == "ðə"
        assert apply_stress("kˌæt", -0.5) == "kˌæt"

    def test_add_secondary_before_first_vowel(self):
        """Should insert secondary stress before the first vowel."""
        assert apply_stress("ðə", 0.5) == "ðˌə"
        assert apply_stress("tʊ", 1) == "tˌʊ"

    def test_no_vowel_unchanged(self):
        """Should not add marks to strings without vowels."""
        assert apply_stress("ʃ", 0.5) == "ʃ"
        assert apply_stress("ʃ", 2) == "ʃ"

    def test_promote_secondary(self):
        """Should promote the first secondary mark for directives >= 1."""
        assert apply_stress("kˌæt", 1) == "kˈæt"
        assert apply_stress("ˌɛnˌɛs", 2) == "ˈɛnˌɛs"

    def test_add_primary(self):
        """Should insert primary stress for directives above 1 on unstressed strings."""
        assert apply_stress("ðə", 2) == "ðˈə"

    def test_primary_kept_for_high_directive(self):
        """Should leave strings with primary stress unchanged for 2."""
        assert apply_stress("kˈæt", 2) == "kˈæt"


class TestStressWeight:
    """Tests for stress_weight."""

    def test_counts_diphthongs_double(self):
        """Should count diphthongs twice."""
        assert stress_weight("kˈæt") == 4
        assert stress_weight("fˈIv") == 5

    def test_empty(self):
        """Should weigh empty or missing strings as zero."""
        assert stress_weight("") == 0
        assert stress_weight(None) == 0

"""Tests for the fallback adapter."""
from __future__ import annotations

import logging

from lexiphone.g2p.fallback import FallbackAdapter
from lexiphone.g2p.tokens import MToken, TokenMeta


class TestFallbackAdapter:
    """Tests for FallbackAdapter."""

    def test_default_rating(self):
        """Should rate unrated predictions 1."""
        fallback = FallbackAdapter(lambda text: ("blˈɔɹp", None))
        assert fallback(MToken("blorp", "NN", "")) == ("blˈɔɹp", 1)

    def test_keeps_predictor_rating(self):
        """Should keep a rating supplied by the predictor."""
        fallback = FallbackAdapter(lambda text: ("blˈɔɹp", 2))
        assert fallback(MToken("blorp", "NN", "")) == ("blˈɔɹp", 2)

    def test_no_prediction(self):
        """Should report a missing prediction as unresolved."""
        fallback = FallbackAdapter(lambda text: (None, 1))
        assert fallback(MToken("blorp", "NN", "")) == (None, None)

    def test_uses_alias(self):
        """Should predict from the alias when set."""
        seen = []

        def predictor(text):
            seen.append(text)
            return None, None

        fallback = FallbackAdapter(predictor)
        fallback(MToken("2", "CD", "", meta=TokenMeta(alias="to")))
        assert seen == ["to"]

    def test_override_untouched(self):
        """Should return explicit overrides unchanged without calling the predictor."""
        calls = []
        fallback = FallbackAdapter(lambda text: calls.append(text) or ("XX", 1))
        tk = MToken("hello", "UH", "", phonemes="hɛˈloʊ", meta=TokenMeta(rating=5))
        assert fallback(tk) == ("hɛˈloʊ", 5)
        assert calls == []

    def test_failure(self, caplog):
        """Should log predictor errors and report unresolved."""
        def predictor(text):
            raise ValueError("bad input")

        fallback = FallbackAdapter(predictor)
        with caplog.at_level(logging.WARNING, logger="lexiphone.g2p.fallback"):
            assert fallback(MToken("blorp", "NN", "")) == (None, None)
        assert "bad input" in caplog.text

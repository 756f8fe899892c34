"""Pytest configuration and shared fixtures for lexiphone tests."""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from lexiphone.g2p.tokenizer import TaggedToken

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class StubTokenizer:
    """Deterministic stand-in for the host tagger.

    Either replays a fixed token list, or splits on whitespace and tags
    words from a lookup table (digits default to CD, everything else NN).
    """

    def __init__(
        self,
        tokens: Optional[List[TaggedToken]] = None,
        tags: Optional[Dict[str, str]] = None,
    ):
        self.tokens = tokens
        self.tags = tags or {}
        self.calls: List[str] = []

    def __call__(self, text: str) -> List[TaggedToken]:
        self.calls.append(text)
        if self.tokens is not None:
            return list(self.tokens)
        result = []
        for match in re.finditer(r"(\S+)(\s*)", text):
            word = match.group(1)
            default = "CD" if word.replace(",", "").replace(".", "").isdigit() else "NN"
            result.append(TaggedToken(word, self.tags.get(word, default), match.group(2)))
        return result


@pytest.fixture
def gold_raw():
    """Raw American English gold dictionary."""
    with open(FIXTURES_DIR / "us_gold.json", "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def silver_raw():
    """Raw American English silver dictionary."""
    with open(FIXTURES_DIR / "us_silver.json", "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def dictionaries(gold_raw, silver_raw):
    """Parsed American English dictionaries."""
    from lexiphone.data.dictionaries import Dictionaries

    return Dictionaries.from_raw(gold_raw, silver_raw, british=False)


@pytest.fixture
def british_dictionaries(gold_raw, silver_raw):
    """The same entries loaded as British English (inflection rules only)."""
    from lexiphone.data.dictionaries import Dictionaries

    return Dictionaries(
        golds=Dictionaries.from_raw(gold_raw, {}).golds,
        silvers=Dictionaries.from_raw({}, silver_raw).silvers,
        british=True,
    )


@pytest.fixture
def lexicon(dictionaries):
    """Lexicon over the fixture dictionaries."""
    from lexiphone.g2p.lexicon import Lexicon

    return Lexicon(dictionaries)


@pytest.fixture
def make_g2p(dictionaries):
    """Factory building a G2P engine over a stub tokenizer."""
    from lexiphone.g2p.engine import G2P

    def _make(tokens=None, tags=None, **kwargs):
        kwargs.setdefault("version", "2.0")
        return G2P(StubTokenizer(tokens=tokens, tags=tags), dictionaries=dictionaries, **kwargs)

    return _make


@pytest.fixture
def g2p(make_g2p):
    """G2P engine with a whitespace stub tokenizer."""
    return make_g2p()

"""Phonetic constants: stress marks, phoneme inventories, punctuation, patterns.

Shared reference data for the lexicon and the G2P pipeline. Phonemes are
single Unicode characters; diphthongs and affricates are written with one
capital letter or ligature each (e.g. ``A`` = /eɪ/, ``ʤ`` = /dʒ/).
"""
from __future__ import annotations

import re
from typing import Dict, FrozenSet, Tuple

import regex

# =============================================================================
# Stress marks
# =============================================================================

PRIMARY_STRESS = "ˈ"
SECONDARY_STRESS = "ˌ"
STRESSES = SECONDARY_STRESS + PRIMARY_STRESS

# Default stress for (Capitalized, ALL-CAPS) words when none is given
CAP_STRESSES: Tuple[float, float] = (0.5, 2)

# =============================================================================
# Phoneme classes
# =============================================================================

# Counted twice by stress_weight()
DIPHTHONGS: FrozenSet[str] = frozenset("AIOQWYʤʧ")

VOWELS: FrozenSet[str] = frozenset("AIOQWYaiuæɑɒɔəɛɜɪʊʌᵻ")

CONSONANTS: FrozenSet[str] = frozenset("bdfhjklmnpstvwzðŋɡɹɾʃʒʤʧθ")

# Vowels (and ɹ) after which a US "t" flaps to ɾ
US_TAUS: FrozenSet[str] = frozenset("AIOWYiuæɑəɛɪɹʊʌ")

# =============================================================================
# Locale phoneme alphabets
# =============================================================================

US_VOCAB: FrozenSet[str] = frozenset("AIOWYbdfhijklmnpstuvwzæðŋɑɔəɛɜɡɪɹɾʃʊʌʒʤʧˈˌθᵊᵻʔ")

GB_VOCAB: FrozenSet[str] = frozenset("AIQWYabdfhijklmnpstuvwzðŋɑɒɔəɛɜɡɪɹʃʊʌʒʤʧˈˌːθᵊ")

# Legacy glyph substitutions applied unless version == "2.0"
LEGACY_SUBSTITUTIONS: Tuple[Tuple[str, str], ...] = (("ɾ", "T"), ("ʔ", "t"))

# ASCII apostrophe, hyphen, A-Z, a-z
LEXICON_ORDS: FrozenSet[int] = frozenset(
    [39, 45, *range(65, 91), *range(97, 123)]
)

# =============================================================================
# Words, symbols and currencies
# =============================================================================

CURRENCIES: Dict[str, Tuple[str, str]] = {
    "$": ("dollar", "cent"),
    "£": ("pound", "pence"),
    "€": ("euro", "cent"),
}

ORDINALS: FrozenSet[str] = frozenset(["st", "nd", "rd", "th"])

# Read only when the tagger marks the token as ADD (URLs, emails)
ADD_SYMBOLS: Dict[str, str] = {".": "dot", "/": "slash"}

SYMBOLS: Dict[str, str] = {"%": "percent", "&": "and", "+": "plus", "@": "at"}

# Tag-conditioned dictionary key used when the following context is unknown
UNKNOWN_CONTEXT_KEY = "None"

DEFAULT_KEY = "DEFAULT"

# =============================================================================
# Punctuation
# =============================================================================

PUNCTS: FrozenSet[str] = frozenset(';:,.!?—…"“”')

NON_QUOTE_PUNCTS: FrozenSet[str] = frozenset(p for p in PUNCTS if p not in '"“”')

# Characters a subtoken may consist of and still be silent
SUBTOKEN_JUNKS: FrozenSet[str] = frozenset("',-._‘’/")

PUNCT_TAGS: FrozenSet[str] = frozenset(
    [".", ",", "-LRB-", "-RRB-", "``", '""', "''", ":", "$", "#", "NFP"]
)

PUNCT_TAG_PHONEMES: Dict[str, str] = {
    "-LRB-": "(",
    "-RRB-": ")",
    "``": "“",
    '""': "”",
    "''": "”",
}

EM_DASH = "—"

# =============================================================================
# Patterns
# =============================================================================

# Splits one tagger token into subtokens: leading quotes, camel-case capitals,
# signed digit runs, hyphen/underscore runs, doubled quotes, lowercase runs
# before an uppercase letter, letter runs with inner apostrophes, any other
# single character, trailing quotes.
SUBTOKEN_PATTERN = regex.compile(
    r"^['‘’]+|\p{Lu}(?=\p{Lu}\p{Ll})|(?:^-)?(?:\d?[,.]?\d)+|[-_]+|['‘’]{2,}"
    r"|\p{L}*?(?:['‘’]\p{L})*?\p{Ll}(?=\p{Lu})|\p{L}+(?:['‘’]\p{L})*"
    r"|[^-_\p{L}'‘’\d]|['‘’]+$"
)

# [literal text](feature)
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^\)]*)\)")

DIGITS_PATTERN = re.compile(r"[0-9]+")

VERSUS_PATTERN = re.compile(r"(?i)vs\.?$")

DOUBLED_ING_PATTERN = re.compile(r"([bcdgklmnprstvxz])\1ing$|cking$")

NUMBER_SUFFIX_PATTERN = re.compile(r"[a-z']+$")

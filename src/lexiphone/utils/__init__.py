"""lexiphone utility functions."""
from lexiphone.utils.constants import (
    # Stress
    PRIMARY_STRESS,
    SECONDARY_STRESS,
    STRESSES,
    # Phonemes
    VOWELS,
    CONSONANTS,
    DIPHTHONGS,
    US_VOCAB,
    GB_VOCAB,
    # Words
    CURRENCIES,
    SYMBOLS,
)
from lexiphone.utils.download import (
    download_dictionary,
    get_dictionaries_cache_dir,
    get_dictionary_path,
    get_dictionary_url,
)

__all__ = [
    # Stress
    "PRIMARY_STRESS",
    "SECONDARY_STRESS",
    "STRESSES",
    # Phonemes
    "VOWELS",
    "CONSONANTS",
    "DIPHTHONGS",
    "US_VOCAB",
    "GB_VOCAB",
    # Words
    "CURRENCIES",
    "SYMBOLS",
    # Download
    "download_dictionary",
    "get_dictionaries_cache_dir",
    "get_dictionary_path",
    "get_dictionary_url",
]

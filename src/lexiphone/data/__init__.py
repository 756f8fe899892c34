"""lexiphone dictionary utilities.

Provides access to the gold and silver pronunciation dictionaries with
offline-first caching.

Example:
    >>> from lexiphone.data import load_dictionaries, list_dictionaries
    >>> list_dictionaries()
    ['gb_gold', 'gb_silver', 'us_gold', 'us_silver']
    >>> dictionaries = load_dictionaries(british=False)
"""
from lexiphone.data.dictionaries import (
    ConditionalEntry,
    Dictionaries,
    FlatEntry,
    parent_tag,
)
from lexiphone.data.loader import load_dictionaries, read_dictionary_file
from lexiphone.data.registry import dictionary_info, list_dictionaries

__all__ = [
    "load_dictionaries",
    "read_dictionary_file",
    "list_dictionaries",
    "dictionary_info",
    "Dictionaries",
    "FlatEntry",
    "ConditionalEntry",
    "parent_tag",
]

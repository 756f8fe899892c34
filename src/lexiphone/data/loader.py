"""Dictionary loading logic for lexiphone.

Provides load_dictionaries() which resolves the gold and silver files for a
locale (explicit path, local cache, or download) and parses them into an
immutable Dictionaries snapshot.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from lexiphone.data.dictionaries import Dictionaries
from lexiphone.data.registry import dictionary_info, get_dictionary_name, locale_for

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_dictionary_file(path: PathLike) -> Dict[str, Any]:
    """Read a raw dictionary JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file does not hold a JSON object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError("Dictionary file not found: %s" % path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(
            "Dictionary file %s must contain a JSON object, got %s"
            % (path, type(data).__name__)
        )
    logger.info("Loaded %d entries from %s", len(data), path)
    return data


def _resolve_path(locale: str, tier: str, path: Optional[PathLike]) -> Path:
    """Use the explicit path if given, otherwise the cached/downloaded file."""
    if path is not None:
        return Path(path)
    from lexiphone.utils.download import get_dictionary_path

    info = dictionary_info(get_dictionary_name(locale, tier))
    return get_dictionary_path(info["filename"])


def load_dictionaries(
    british: bool = False,
    gold_path: Optional[PathLike] = None,
    silver_path: Optional[PathLike] = None,
) -> Dictionaries:
    """Load the gold and silver dictionaries for a locale.

    Checks explicit paths first, then the local cache, then downloads.
    After first download, works fully offline.

    Args:
        british: Load British English (gb) instead of American English (us).
        gold_path: Optional path to a gold dictionary JSON file.
        silver_path: Optional path to a silver dictionary JSON file.

    Returns:
        Immutable Dictionaries snapshot.

    Raises:
        ValueError: If a dictionary is malformed.
        RuntimeError: If a dictionary is neither cached nor downloadable.

    Example:
        >>> from lexiphone.data import load_dictionaries
        >>> dictionaries = load_dictionaries(british=False)
        >>> "hello" in dictionaries.golds
        True
    """
    locale = locale_for(british)
    gold = read_dictionary_file(_resolve_path(locale, "gold", gold_path))
    silver = read_dictionary_file(_resolve_path(locale, "silver", silver_path))
    return Dictionaries.from_raw(gold, silver, british=british)

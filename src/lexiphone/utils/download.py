"""Dictionary download and caching utility for lexiphone.

Downloads pronunciation dictionaries on first use and caches them
locally at ~/.cache/lexiphone/dictionaries/ for offline use.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DICT_BASE_URL = "https://raw.githubusercontent.com/hexgrad/misaki/main/misaki/data/{filename}"

_CACHE_DIR_ENV = "LEXIPHONE_CACHE_DIR"
_DICT_URL_ENV = "LEXIPHONE_DICT_URL"
_DEFAULT_CACHE_DIR = os.path.join("~", ".cache", "lexiphone")


def get_dictionaries_cache_dir() -> Path:
    """Get the dictionaries cache directory, creating it if needed.

    Uses $LEXIPHONE_CACHE_DIR/dictionaries/ if env var is set,
    otherwise ~/.cache/lexiphone/dictionaries/.

    Returns:
        Path to the dictionaries cache directory.
    """
    base = Path(os.environ.get(_CACHE_DIR_ENV, _DEFAULT_CACHE_DIR)).expanduser()
    dict_dir = base / "dictionaries"
    dict_dir.mkdir(parents=True, exist_ok=True)
    return dict_dir


def get_dictionary_url(filename: str) -> str:
    """Build the download URL for a dictionary file.

    $LEXIPHONE_DICT_URL overrides the default template; it must contain
    a ``{filename}`` placeholder.
    """
    template = os.environ.get(_DICT_URL_ENV, DICT_BASE_URL)
    if "{filename}" not in template:
        raise ValueError(
            "%s must contain a '{filename}' placeholder, got: %s"
            % (_DICT_URL_ENV, template)
        )
    return template.format(filename=filename)


def _stream(response, f, desc: str) -> int:
    """Copy a streamed response body into ``f``, with a progress bar if tqdm is installed."""
    try:
        from tqdm import tqdm
    except ImportError:
        tqdm = None

    total = int(response.headers.get("content-length", 0))
    progress = tqdm(total=total, unit="B", unit_scale=True, desc=desc) if tqdm and total else None
    written = 0
    for chunk in response.iter_content(chunk_size=8192):
        f.write(chunk)
        written += len(chunk)
        if progress is not None:
            progress.update(len(chunk))
    if progress is not None:
        progress.close()
    return written


def _check_json_object(path: Path, url: str) -> None:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError("Downloaded dictionary from %s is not valid JSON: %s" % (url, e))
    if not isinstance(data, dict):
        raise RuntimeError(
            "Downloaded dictionary from %s is a JSON %s, not an object" % (url, type(data).__name__)
        )


def download_dictionary(url: str, dest: Path) -> Path:
    """Fetch ``url`` into ``dest``.

    The body goes to a temp file next to ``dest`` and is checked to be a
    JSON object before it replaces ``dest``, so an error page or a partial
    transfer never lands in the cache.

    Raises:
        RuntimeError: On a non-200 response or a body that is not a JSON object.
    """
    import requests

    logger.info("Downloading %s from %s ...", dest.name, url)
    response = requests.get(url, stream=True, timeout=120)
    if response.status_code != 200:
        raise RuntimeError(
            "Failed to download dictionary '%s' (HTTP %d). "
            "Check your internet connection or pass explicit dictionary paths.\n"
            "URL: %s" % (dest.name, response.status_code, url)
        )

    tmp_fd, tmp_name = tempfile.mkstemp(dir=dest.parent, suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(tmp_fd, "wb") as f:
            size = _stream(response, f, dest.name)
        _check_json_object(tmp_path, url)
        tmp_path.replace(dest)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Downloaded %s (%d bytes) to %s", dest.name, size, dest)
    return dest


def get_dictionary_path(filename: str, url: Optional[str] = None) -> Path:
    """Get path to a dictionary file, downloading it on first use.

    Args:
        filename: Name of the dictionary file (e.g. "us_gold.json").
        url: Explicit download URL. Defaults to get_dictionary_url(filename).

    Returns:
        Path to the local dictionary file.

    Raises:
        RuntimeError: If the file is not cached and cannot be downloaded.
    """
    local_path = get_dictionaries_cache_dir() / filename
    if local_path.exists():
        logger.debug("Using cached dictionary %s", local_path)
        return local_path
    return download_dictionary(url or get_dictionary_url(filename), local_path)

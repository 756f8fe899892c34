"""Dictionary registry with metadata for all bundled pronunciation dictionaries."""
from __future__ import annotations

from typing import Any, Dict, List

LOCALES = ["us", "gb"]
TIERS = ["gold", "silver"]

# Each entry: name -> metadata dict
_REGISTRY = {
    "us_gold": {
        "name": "us_gold",
        "locale": "us",
        "tier": "gold",
        "filename": "us_gold.json",
        "rating": 4,
        "validated": True,
        "description": "Hand-checked American English pronunciations.",
    },
    "us_silver": {
        "name": "us_silver",
        "locale": "us",
        "tier": "silver",
        "filename": "us_silver.json",
        "rating": 3,
        "validated": False,
        "description": "Lower-confidence American English pronunciations.",
    },
    "gb_gold": {
        "name": "gb_gold",
        "locale": "gb",
        "tier": "gold",
        "filename": "gb_gold.json",
        "rating": 4,
        "validated": True,
        "description": "Hand-checked British English pronunciations.",
    },
    "gb_silver": {
        "name": "gb_silver",
        "locale": "gb",
        "tier": "silver",
        "filename": "gb_silver.json",
        "rating": 3,
        "validated": False,
        "description": "Lower-confidence British English pronunciations.",
    },
}


def list_dictionaries() -> List[str]:
    """List all registered dictionary names.

    Returns:
        Sorted list of dictionary name strings.
    """
    return sorted(_REGISTRY.keys())


def dictionary_info(name: str) -> Dict[str, Any]:
    """Get metadata for a dictionary.

    Args:
        name: Dictionary name (e.g. 'us_gold').

    Returns:
        Dict with keys: name, locale, tier, filename, rating, validated, description.

    Raises:
        ValueError: If the dictionary name is not in the registry.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys()))
        raise ValueError(
            "Unknown dictionary '%s'. Available dictionaries: %s" % (name, available)
        )
    return dict(_REGISTRY[name])


def locale_for(british: bool) -> str:
    """Map the british flag to a locale code."""
    return "gb" if british else "us"


def validate_locale(locale: str) -> None:
    """Validate a locale code.

    Raises:
        ValueError: If the locale is not registered.
    """
    if locale not in LOCALES:
        raise ValueError(
            "Locale '%s' is not supported. Supported locales: %s"
            % (locale, ", ".join(LOCALES))
        )


def validate_tier(tier: str) -> None:
    """Validate a dictionary tier name.

    Raises:
        ValueError: If the tier is not 'gold' or 'silver'.
    """
    if tier not in TIERS:
        raise ValueError(
            "Tier '%s' is not valid. Valid tiers: %s" % (tier, ", ".join(TIERS))
        )


def get_dictionary_name(locale: str, tier: str) -> str:
    """Get the registered dictionary name for a locale/tier pair.

    Raises:
        ValueError: If the locale or tier is invalid.
    """
    validate_locale(locale)
    validate_tier(tier)
    return "%s_%s" % (locale, tier)

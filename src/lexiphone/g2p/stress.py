"""Stress-mark manipulation on phoneme strings."""
from __future__ import annotations

from typing import Optional

from lexiphone.utils.constants import (
    DIPHTHONGS,
    PRIMARY_STRESS,
    SECONDARY_STRESS,
    STRESSES,
    VOWELS,
)


def _has_vowel(ps: str) -> bool:
    return any(c in VOWELS for c in ps)


def _has_stress(ps: str) -> bool:
    return any(c in STRESSES for c in ps)


def _restress(ps: str, mark: str) -> str:
    """Insert ``mark`` immediately before the first vowel."""
    for i, c in enumerate(ps):
        if c in VOWELS:
            return ps[:i] + mark + ps[i:]
    return ps


def apply_stress(ps: Optional[str], stress: Optional[float]) -> Optional[str]:
    """Adjust the stress marks of a phoneme string.

    Directives, checked in order:

    - ``< -1``: strip all stress marks.
    - ``-1``, or ``0``/``-0.5`` on a string with primary stress: drop
      secondary marks and demote primary marks to secondary.
    - ``0``/``0.5``/``1`` on an unstressed string: add secondary stress
      before the first vowel.
    - ``>= 1`` with only secondary stress: promote it to primary.
    - ``> 1`` on an unstressed string: add primary stress before the
      first vowel.

    Strings without vowels are never given new marks.

    Args:
        ps: Phoneme string, or None.
        stress: Stress directive, or None for no change.

    Returns:
        The adjusted phoneme string (None if ``ps`` is None).

    Example:
        >>> apply_stress("kˈæt", -1)
        'kˌæt'
        >>> apply_stress("kæt", 2)
        'kˈæt'
    """
    if ps is None or stress is None:
        return ps
    if stress < -1:
        return ps.replace(PRIMARY_STRESS, "").replace(SECONDARY_STRESS, "")
    if stress == -1 or (stress in (0, -0.5) and PRIMARY_STRESS in ps):
        return ps.replace(SECONDARY_STRESS, "").replace(PRIMARY_STRESS, SECONDARY_STRESS)
    if stress in (0, 0.5, 1) and not _has_stress(ps):
        if not _has_vowel(ps):
            return ps
        return _restress(ps, SECONDARY_STRESS)
    if stress >= 1 and PRIMARY_STRESS not in ps and SECONDARY_STRESS in ps:
        return ps.replace(SECONDARY_STRESS, PRIMARY_STRESS, 1)
    if stress > 1 and not _has_stress(ps):
        if not _has_vowel(ps):
            return ps
        return _restress(ps, PRIMARY_STRESS)
    return ps


def stress_weight(ps: Optional[str]) -> int:
    """Weight of a phoneme string: 2 per diphthong, 1 per other character."""
    if not ps:
        return 0
    return sum(2 if c in DIPHTHONGS else 1 for c in ps)

"""Adapter for an external phoneme predictor used when no rule applies."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from lexiphone.g2p.tokens import MToken

logger = logging.getLogger(__name__)

Predictor = Callable[[str], Tuple[Optional[str], Optional[int]]]

FALLBACK_RATING = 1


class FallbackAdapter:
    """
    Wraps a predictor ``text -> (phonemes, rating)``.

    Failures of the predictor are logged and reported as unresolved, so a
    broken or slow model never aborts a conversion. Tokens already carrying
    an explicit override (rating 5) are returned unchanged.

    Args:
        predictor: Callable taking the token text.
        rating: Rating given to predictions that come without one (default 1).

    Example:
        >>> fallback = FallbackAdapter(lambda text: ("ɡˈɪbəɹɪʃ", None))
        >>> fallback(MToken("blorp", "NN", ""))
        ('ɡˈɪbəɹɪʃ', 1)
    """

    def __init__(self, predictor: Predictor, rating: int = FALLBACK_RATING):
        self.predictor = predictor
        self.rating = rating

    def __call__(self, tk: MToken) -> Tuple[Optional[str], Optional[int]]:
        if tk.meta.rating == 5:
            return tk.phonemes, 5
        text = tk.text if tk.meta.alias is None else tk.meta.alias
        try:
            ps, rating = self.predictor(text)
        except Exception as e:
            logger.warning("Fallback predictor failed on %r: %s", text, e)
            return None, None
        if ps is None:
            return None, None
        return ps, self.rating if rating is None else rating

    def __repr__(self) -> str:
        return f"FallbackAdapter(predictor={self.predictor!r}, rating={self.rating})"

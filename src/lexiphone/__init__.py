"""lexiphone - Rule-based English grapheme-to-phoneme conversion."""
__version__ = "0.1.0"

from lexiphone.data import Dictionaries, list_dictionaries, load_dictionaries
from lexiphone.g2p import G2P, FallbackAdapter, MToken, SpacyTokenizer

__all__ = [
    "G2P",
    "MToken",
    "SpacyTokenizer",
    "FallbackAdapter",
    "Dictionaries",
    "load_dictionaries",
    "list_dictionaries",
]

"""lexiphone grapheme-to-phoneme pipeline."""
from lexiphone.g2p.engine import G2P, resolve_tokens, subtokenize, token_context
from lexiphone.g2p.fallback import FallbackAdapter
from lexiphone.g2p.lexicon import Lexicon
from lexiphone.g2p.numbers import (
    Num2WordsVerbalizer,
    NumberVerbalizer,
    is_number,
)
from lexiphone.g2p.preprocess import (
    AlignmentMiss,
    NumFlags,
    PhonemeOverride,
    align_words,
    apply_features,
    preprocess,
)
from lexiphone.g2p.stress import apply_stress, stress_weight
from lexiphone.g2p.tokenizer import SpacyTokenizer, TaggedToken, Tokenizer
from lexiphone.g2p.tokens import Cluster, MToken, TokenContext, TokenMeta, merge_tokens

__all__ = [
    # Engine
    "G2P",
    "resolve_tokens",
    "subtokenize",
    "token_context",
    # Lexicon
    "Lexicon",
    "Num2WordsVerbalizer",
    "NumberVerbalizer",
    "is_number",
    # Stress
    "apply_stress",
    "stress_weight",
    # Markup
    "preprocess",
    "apply_features",
    "align_words",
    "AlignmentMiss",
    "PhonemeOverride",
    "NumFlags",
    # Tokens
    "MToken",
    "TokenMeta",
    "TokenContext",
    "Cluster",
    "merge_tokens",
    # Collaborators
    "Tokenizer",
    "TaggedToken",
    "SpacyTokenizer",
    "FallbackAdapter",
]

# ABOUTME: Linguistic primitives used by the category classifier
# ABOUTME: Plural stemming, noun group decomposition and name heuristics

from wikitaxon.linguistics.names import decode, is_abbreviation, normalize
from wikitaxon.linguistics.noun_group import NounGroup
from wikitaxon.linguistics.stemmer import is_plural, is_singular, stem

__all__ = [
    "NounGroup",
    "decode",
    "is_abbreviation",
    "is_plural",
    "is_singular",
    "normalize",
    "stem",
]

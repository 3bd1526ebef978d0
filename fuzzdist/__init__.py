"""String distance and similarity metrics: Levenshtein, Hamming and Jaro, with edit operations."""

__version__ = "0.1.0"

__all__ = [
    "bitops",
    "common",
    "editops",
    "hamming",
    "jaro",
    "levenshtein",
    "levenshtein_bitparallel",
    "levenshtein_block",
    "pattern_match",
]
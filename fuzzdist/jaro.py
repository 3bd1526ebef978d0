"""Jaro similarity between two sequences, with score cutoffs and a cached scorer."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator, Sequence

from fuzzdist.common import norm_sim_to_norm_dist

__all__ = [
    "CachedJaro",
    "jaro_distance",
    "jaro_normalized_distance",
    "jaro_normalized_similarity",
    "jaro_similarity",
]


def _normalize(s: Sequence) -> list[Hashable]:
    """Map single characters to their code points so str and bytes compare alike."""
    return [ord(ch) if isinstance(ch, str) and len(ch) == 1 else ch for ch in s]


def _pattern_masks(p: Sequence[Hashable]) -> dict[Hashable, int]:
    """Bit mask of the positions at which each element occurs in ``p``."""
    masks: dict[Hashable, int] = {}
    for pos, ch in enumerate(p):
        masks[ch] = masks.get(ch, 0) | (1 << pos)
    return masks


def _set_bits(x: int) -> Iterator[int]:
    """Positions of the set bits of ``x``, lowest first."""
    while x:
        low = x & -x
        yield low.bit_length() - 1
        x ^= low


def _length_filter(p_len: int, t_len: int, score_cutoff: float) -> bool:
    """Whether the lengths alone still allow a score of at least ``score_cutoff``."""
    if not p_len or not t_len:
        return False
    min_len = min(p_len, t_len)
    sim = (min_len / p_len + min_len / t_len + 1.0) / 3.0
    return sim >= score_cutoff


def _common_char_filter(p_len: int, t_len: int, common: int, score_cutoff: float) -> bool:
    """Whether the common characters still allow a score of at least ``score_cutoff``."""
    if not common:
        return False
    sim = (common / p_len + common / t_len + 1.0) / 3.0
    return sim >= score_cutoff


def _calculate_similarity(p_len: int, t_len: int, common: int, transpositions: int) -> float:
    transpositions //= 2
    sim = common / p_len + common / t_len + (common - transpositions) / common
    return sim / 3.0


def _jaro(
    masks: dict[Hashable, int],
    p: Sequence[Hashable],
    t: Sequence[Hashable],
    score_cutoff: float,
) -> float:
    p_len = len(p)
    t_len = len(t)

    if score_cutoff > 1.0:
        return 0.0
    if not p_len and not t_len:
        return 1.0
    if not _length_filter(p_len, t_len, score_cutoff):
        return 0.0
    if p_len == 1 and t_len == 1:
        return float(p[0] == t[0])

    bound = max(p_len, t_len) // 2 - 1

    p_flag = 0
    t_matched: list[Hashable] = []
    for j, ch in enumerate(t):
        lo = max(0, j - bound)
        hi = min(p_len, j + bound + 1)
        if lo >= hi:
            break
        window = ((1 << hi) - 1) ^ ((1 << lo) - 1)
        candidates = masks.get(ch, 0) & window & ~p_flag
        if candidates:
            p_flag |= candidates & -candidates
            t_matched.append(ch)

    common = len(t_matched)
    if not _common_char_filter(p_len, t_len, common, score_cutoff):
        return 0.0

    transpositions = sum(p[pos] != ch for pos, ch in zip(_set_bits(p_flag), t_matched))
    sim = _calculate_similarity(p_len, t_len, common, transpositions)
    return sim if sim >= score_cutoff else 0.0


def _distance_from(similarity: Callable[[float], float], score_cutoff: float) -> float:
    cutoff_similarity = 1.0 - score_cutoff if 1.0 >= score_cutoff else 0.0
    dist = 1.0 - similarity(cutoff_similarity)
    return dist if dist <= score_cutoff else 1.0


def _normalized_distance_from(similarity: Callable[[float], float], score_cutoff: float) -> float:
    dist = _distance_from(similarity, score_cutoff)
    return dist if dist <= score_cutoff else 1.0


def _normalized_similarity_from(similarity: Callable[[float], float], score_cutoff: float) -> float:
    norm_dist = _normalized_distance_from(similarity, norm_sim_to_norm_dist(score_cutoff))
    norm_sim = 1.0 - norm_dist
    return norm_sim if norm_sim >= score_cutoff else 0.0


def _similarity_of(s1: Sequence, s2: Sequence) -> Callable[[float], float]:
    p = _normalize(s1)
    t = _normalize(s2)
    masks = _pattern_masks(p)
    return lambda cutoff: _jaro(masks, p, t, cutoff)


def jaro_similarity(s1: Sequence, s2: Sequence, score_cutoff: float = 0.0) -> float:
    """Jaro similarity in [0, 1]; 0 when below ``score_cutoff``."""
    return _similarity_of(s1, s2)(score_cutoff)


def jaro_distance(s1: Sequence, s2: Sequence, score_cutoff: float = 1.0) -> float:
    """One minus the Jaro similarity; 1.0 when above ``score_cutoff``."""
    return _distance_from(_similarity_of(s1, s2), score_cutoff)


def jaro_normalized_similarity(s1: Sequence, s2: Sequence, score_cutoff: float = 0.0) -> float:
    """Normalized Jaro similarity, equal to the Jaro similarity."""
    return _normalized_similarity_from(_similarity_of(s1, s2), score_cutoff)


def jaro_normalized_distance(s1: Sequence, s2: Sequence, score_cutoff: float = 1.0) -> float:
    """Normalized Jaro distance, equal to the Jaro distance."""
    return _normalized_distance_from(_similarity_of(s1, s2), score_cutoff)


class CachedJaro:
    """Jaro scorer that prepares the first sequence once for many comparisons."""

    def __init__(self, s1: Sequence) -> None:
        self._s1 = _normalize(s1)
        self._masks = _pattern_masks(self._s1)

    def _scorer(self, s2: Sequence) -> Callable[[float], float]:
        t = _normalize(s2)
        return lambda cutoff: _jaro(self._masks, self._s1, t, cutoff)

    def similarity(self, s2: Sequence, score_cutoff: float = 0.0) -> float:
        return self._scorer(s2)(score_cutoff)

    def distance(self, s2: Sequence, score_cutoff: float = 1.0) -> float:
        return _distance_from(self._scorer(s2), score_cutoff)

    def normalized_similarity(self, s2: Sequence, score_cutoff: float = 0.0) -> float:
        return _normalized_similarity_from(self._scorer(s2), score_cutoff)

    def normalized_distance(self, s2: Sequence, score_cutoff: float = 1.0) -> float:
        return _normalized_distance_from(self._scorer(s2), score_cutoff)
"""Helpers shared by the string metrics: cutoffs, normalisation and affix removal."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

S1 = TypeVar("S1", bound=Sequence)
S2 = TypeVar("S2", bound=Sequence)


@dataclass(frozen=True)
class StringAffix:
    """Lengths of the common prefix and suffix removed from two sequences."""

    prefix_len: int = 0
    suffix_len: int = 0


class CharSet:
    """A set of characters with membership tests."""

    def __init__(self, chars: Iterable[Hashable] = ()) -> None:
        self._chars: set[Hashable] = set(chars)

    def insert(self, ch: Hashable) -> None:
        self._chars.add(ch)

    def find(self, ch: Hashable) -> bool:
        return ch in self._chars

    def __contains__(self, ch: object) -> bool:
        return ch in self._chars

    def __len__(self) -> int:
        return len(self._chars)


def norm_sim_to_norm_dist(score_cutoff: float, imprecision: float = 0.00001) -> float:
    """Convert a normalized similarity cutoff to a normalized distance cutoff."""
    return min(1.0, 1.0 - score_cutoff + imprecision)


def result_cutoff(result: float, score_cutoff: float) -> float:
    """Return ``result`` if it reaches ``score_cutoff``, else 0."""
    return result if result >= score_cutoff else 0


def norm_distance(dist: int, lensum: int, score_cutoff: float = 0.0) -> float:
    """Normalize a distance against ``lensum`` into a similarity in [0, 1]."""
    value = 1.0 - dist / lensum if lensum > 0 else 1.0
    return result_cutoff(value, score_cutoff)


def score_cutoff_to_distance(score_cutoff: float, lensum: int) -> int:
    """Largest distance that still meets a normalized similarity cutoff."""
    return math.ceil(lensum * (1.0 - score_cutoff))


def common_prefix_length(s1: Sequence, s2: Sequence) -> int:
    """Number of leading elements shared by both sequences."""
    length = 0
    for a, b in zip(s1, s2):
        if a != b:
            break
        length += 1
    return length


def common_suffix_length(s1: Sequence, s2: Sequence) -> int:
    """Number of trailing elements shared by both sequences."""
    return common_prefix_length(list(reversed(s1)), list(reversed(s2)))


def remove_common_affix(s1: S1, s2: S2) -> tuple[S1, S2, StringAffix]:
    """Strip the common prefix, then the common suffix, from both sequences."""
    prefix = common_prefix_length(s1, s2)
    s1 = s1[prefix:]
    s2 = s2[prefix:]
    suffix = common_suffix_length(s1, s2)
    s1 = s1[: len(s1) - suffix]
    s2 = s2[: len(s2) - suffix]
    return s1, s2, StringAffix(prefix, suffix)
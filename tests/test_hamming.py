import pytest
from hypothesis import given
from hypothesis import strategies as st

from fuzzdist.editops import editops_apply
from fuzzdist.hamming import (
    CachedHamming,
    hamming_distance,
    hamming_editops,
    hamming_normalized_distance,
    hamming_normalized_similarity,
    hamming_similarity,
)

TEST = "aaaa"
DIFF_A = "abaa"
DIFF_B = "aaba"
DIFF_LEN = "aaaaa"


def distance(s1, s2, cutoff=None):
    res1 = hamming_distance(s1, s2, cutoff)
    res2 = CachedHamming(s1).distance(s2, cutoff)
    res3 = CachedHamming(list(s1)).distance(list(s2), cutoff)
    assert res1 == res2 == res3
    return res1


def similarity(s1, s2, cutoff=0):
    res1 = hamming_similarity(s1, s2, cutoff)
    res2 = CachedHamming(s1).similarity(s2, cutoff)
    assert res1 == res2
    return res1


def normalized_distance(s1, s2, cutoff=1.0):
    res1 = hamming_normalized_distance(s1, s2, cutoff)
    res2 = CachedHamming(s1).normalized_distance(s2, cutoff)
    assert res1 == pytest.approx(res2, rel=0.0001)
    return res1


def normalized_similarity(s1, s2, cutoff=0.0):
    res1 = hamming_normalized_similarity(s1, s2, cutoff)
    res2 = CachedHamming(s1).normalized_similarity(s2, cutoff)
    assert res1 == pytest.approx(res2, rel=0.0001)
    return res1


def test_calculates_correct_distances():
    assert distance(TEST, TEST) == 0
    assert distance(TEST, DIFF_A) == 1
    assert distance(TEST, DIFF_B) == 1
    assert distance(DIFF_A, DIFF_B) == 2


def test_different_lengths_count_as_insertions_and_deletions():
    assert distance(TEST, DIFF_LEN) == 1
    assert distance(DIFF_LEN, TEST) == 1


def test_distance_cutoff_reports_cutoff_plus_one():
    assert distance(DIFF_A, DIFF_B, 1) == 2
    assert distance(DIFF_A, DIFF_B, 2) == 2


def test_similarity_and_normalized_scores():
    assert similarity(TEST, DIFF_A) == 3
    assert similarity(TEST, DIFF_A, 4) == 0
    assert normalized_distance(TEST, DIFF_A) == pytest.approx(0.25)
    assert normalized_distance(TEST, DIFF_A, 0.2) == 1.0
    assert normalized_similarity(TEST, DIFF_A) == pytest.approx(0.75)
    assert normalized_similarity(TEST, DIFF_A, 0.8) == 0.0


def test_empty_sequences_are_identical():
    assert normalized_distance("", "") == 0.0
    assert normalized_similarity("", "") == 1.0
    assert distance("", "") == 0


def test_bytes_input():
    assert distance(b"aaaa", b"abaa") == 1


def test_editops_lorem():
    s = "Lorem ipsum."
    d = "XYZLorem ABC iPsum"

    ops = hamming_editops(s, d)
    assert editops_apply(ops, s, d) == d
    assert ops.src_len == len(s)
    assert ops.dest_len == len(d)

    ops = hamming_editops(d, s)
    assert editops_apply(ops, d, s) == s
    assert ops.src_len == len(d)
    assert ops.dest_len == len(s)


@given(st.text(alphabet="abc", max_size=30), st.text(alphabet="abc", max_size=30))
def test_editops_round_trip(s1, s2):
    ops = hamming_editops(s1, s2)
    assert editops_apply(ops, s1, s2) == s2
    assert len(ops) == hamming_distance(s1, s2)


@given(st.text(alphabet="ab", max_size=20), st.text(alphabet="ab", max_size=20))
def test_similarity_complements_distance(s1, s2):
    assert hamming_similarity(s1, s2) + hamming_distance(s1, s2) == max(len(s1), len(s2))
    assert hamming_distance(s1, s2) == hamming_distance(s2, s1)
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fuzzdist.levenshtein_bitparallel import UNLIMITED, levenshtein_hyrroe2003
from fuzzdist.levenshtein_block import levenshtein_hyrroe2003_block, levenshtein_row
from fuzzdist.pattern_match import BlockPatternMatchVector, PatternMatchVector

short_text = st.text(alphabet="abcd", min_size=1, max_size=64)
long_text = st.text(alphabet="abcd", min_size=1, max_size=180)


def _block(s1, s2, max_dist=UNLIMITED):
    return levenshtein_hyrroe2003_block(BlockPatternMatchVector(s1), s1, s2, max_dist).dist


def _single(s1, s2):
    return levenshtein_hyrroe2003(PatternMatchVector(s1), s1, s2).dist


def test_identical_long_sequences_have_distance_zero():
    s = "abcdefgh" * 20
    assert _block(s, s) == 0


def test_empty_target_costs_pattern_length():
    s1 = "xyz" * 50
    assert _block(s1, "") == len(s1)


def test_completely_different_sequences():
    s1 = "a" * 130
    s2 = "b" * 130
    assert _block(s1, s2) == len(s1)


def test_length_difference_only():
    s1 = "a" * 100
    s2 = "a" * 170
    assert _block(s1, s2) == len(s2) - len(s1)


def test_single_insertion_in_long_sequence():
    s1 = "abcd" * 40
    s2 = s1[:77] + "z" + s1[77:]
    assert _block(s1, s2) == 1


def test_replacement_with_wide_characters():
    s1 = "αβγδ" * 30
    s2 = s1[:70] + "ω" + s1[71:]
    assert _block(s1, s2) == 1


def test_empty_pattern_is_rejected():
    with pytest.raises(ValueError):
        levenshtein_hyrroe2003_block(BlockPatternMatchVector(""), "", "abc")


def test_mismatched_pattern_vector_is_rejected():
    with pytest.raises(ValueError):
        levenshtein_hyrroe2003_block(BlockPatternMatchVector("abc"), "a" * 100, "abc")


def test_negative_maximum_is_rejected():
    with pytest.raises(ValueError):
        levenshtein_hyrroe2003_block(BlockPatternMatchVector("abc"), "abc", "abd", -1)


def test_recorded_matrix_keeps_distance():
    s1 = "abcde" * 30
    s2 = "abdce" * 29 + "xy"
    plain = _block(s1, s2)
    recorded = levenshtein_hyrroe2003_block(
        BlockPatternMatchVector(s1), s1, s2, len(s2), record_matrix=True
    )
    assert recorded.dist == plain
    assert len(recorded.vp) == len(s2)
    assert len(recorded.vn) == len(s2)


@settings(max_examples=80, deadline=None)
@given(short_text, st.text(alphabet="abcd", max_size=80))
def test_matches_single_word_kernel(s1, s2):
    assert _block(s1, s2) == _single(s1, s2)


@settings(max_examples=60, deadline=None)
@given(short_text, st.text(alphabet="abcd", max_size=64))
def test_common_prefix_does_not_change_distance(x, y):
    prefix = "q" * 100
    assert _block(prefix + x, prefix + y) == _single(x, y)


@settings(max_examples=50, deadline=None)
@given(long_text, long_text)
def test_distance_is_symmetric(s1, s2):
    assert _block(s1, s2) == _block(s2, s1)


@settings(max_examples=50, deadline=None)
@given(long_text, st.text(alphabet="abcd", max_size=180))
def test_distance_is_bounded_by_lengths(s1, s2):
    dist = _block(s1, s2)
    assert abs(len(s1) - len(s2)) <= dist <= max(len(s1), len(s2))


@settings(max_examples=50, deadline=None)
@given(long_text, long_text, st.integers(min_value=0, max_value=200))
def test_cutoff_caps_result(s1, s2, cutoff):
    full = _block(s1, s2)
    assert _block(s1, s2, cutoff) == min(full, cutoff + 1)


@settings(max_examples=40, deadline=None)
@given(long_text, long_text, long_text)
def test_triangle_inequality(a, b, c):
    assert _block(a, c) <= _block(a, b) + _block(b, c)


def test_row_beyond_target_gives_plain_distance():
    s1 = "abcab" * 30
    s2 = "bcaba" * 28
    res = levenshtein_row(s1, s2, UNLIMITED, len(s2))
    assert res.dist == _block(s1, s2)


@settings(max_examples=60, deadline=None)
@given(short_text, st.text(alphabet="abcd", min_size=1, max_size=64), st.data())
def test_single_word_row_walks_to_prefix_distance(s1, s2, data):
    stop_row = data.draw(st.integers(min_value=0, max_value=len(s2) - 1))
    res = levenshtein_row(s1, s2, UNLIMITED, stop_row)
    assert res.dist == 0
    assert res.first_block == 0
    assert res.last_block == 0
    assert res.prev_score == stop_row + 1

    score = res.prev_score
    vec = res.vecs[0]
    for col in range(len(s1)):
        bit = 1 << col
        score += int(bool(vec.vp & bit)) - int(bool(vec.vn & bit))
    assert score == _single(s1, s2[: stop_row + 1])


def test_multi_block_row_reports_valid_band():
    s1 = "abcd" * 50
    s2 = "abdc" * 45
    pm_len = len(BlockPatternMatchVector(s1))
    res = levenshtein_row(s1, s2, UNLIMITED, len(s2) // 2)
    assert res.dist == 0
    assert 0 <= res.first_block <= res.last_block < pm_len
    assert len(res.vecs) == pm_len
    assert res.prev_score >= 0
import pytest
from hypothesis import given
from hypothesis import strategies as st

from fuzzdist.pattern_match import (
    BitvectorHashmap,
    BlockPatternMatchVector,
    PatternMatchVector,
)


def _positions(pm, ch, blocks):
    found = []
    for block in range(blocks):
        mask = pm.get(block, ch)
        found.extend(block * 64 + bit for bit in range(64) if mask >> bit & 1)
    return found


def test_hashmap_set_and_get():
    hm = BitvectorHashmap()
    hm[1000] = 5
    assert hm.get(1000) == 5
    assert hm[1000] == 5
    assert hm.get(1001) == 0


def test_hashmap_colliding_keys_are_independent():
    hm = BitvectorHashmap()
    for key in (0, 128, 256, 384):
        hm[key] = key + 1
    for key in (0, 128, 256, 384):
        assert hm[key] == key + 1


def test_hashmap_accepts_characters():
    hm = BitvectorHashmap()
    hm["\u03b1"] = 7
    assert hm.get(ord("\u03b1")) == 7


def test_hashmap_overflow():
    hm = BitvectorHashmap()
    for key in range(1000, 1128):
        hm[key] = 1
    with pytest.raises(OverflowError):
        hm[5000] = 1
    assert hm.get(5000) == 0
    assert hm.get(1000) == 1


@given(st.text(alphabet="ab\u00e9\u4e2d\U0001f600", max_size=64))
def test_pattern_match_vector_positions(s):
    pm = PatternMatchVector(s)
    assert len(pm) == 1
    for ch in set(s):
        assert _positions(pm, ch, 1) == [i for i, c in enumerate(s) if c == ch]


def test_pattern_match_vector_absent_char():
    pm = PatternMatchVector("abc")
    assert pm.get(0, "z") == 0
    assert pm.get(0, "\u4e2d") == 0


def test_pattern_match_vector_bytes():
    data = b"hello"
    pm = PatternMatchVector(data)
    assert _positions(pm, ord("l"), 1) == [2, 3]


def test_pattern_match_vector_too_long():
    with pytest.raises(ValueError):
        PatternMatchVector("a" * 65)


def test_pattern_match_vector_bad_block():
    pm = PatternMatchVector("abc")
    with pytest.raises(IndexError):
        pm.get(1, "a")


def test_pattern_match_vector_insert_mask():
    pm = PatternMatchVector()
    pm.insert_mask("q", 1 << 10)
    pm.insert_mask("\u4e2d", 1 << 3)
    assert pm.get(0, "q") == 1 << 10
    assert pm.get(0, "\u4e2d") == 1 << 3


@given(st.text(alphabet="xy\u4e2d\u00ff", min_size=1, max_size=300))
def test_block_pattern_match_vector_positions(s):
    pm = BlockPatternMatchVector(s)
    blocks = len(pm)
    assert blocks * 64 >= len(s) > (blocks - 1) * 64
    for ch in set(s):
        assert _positions(pm, ch, blocks) == [i for i, c in enumerate(s) if c == ch]


def test_block_pattern_match_vector_missing_map():
    pm = BlockPatternMatchVector("a" * 100)
    assert pm.get(1, "\u4e2d") == 0
    assert pm.get(0, "b") == 0


def test_block_pattern_match_vector_bounds():
    pm = BlockPatternMatchVector("abc")
    with pytest.raises(IndexError):
        pm.get(1, "a")
    with pytest.raises(IndexError):
        pm.insert_mask(5, "a", 1)


def test_block_pattern_match_vector_sized():
    pm = BlockPatternMatchVector(size=130)
    assert len(pm) == 3
    pm.insert_mask(2, "k", 1 << 1)
    assert _positions(pm, "k", 3) == [2 * 64 + 1]
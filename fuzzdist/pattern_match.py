"""Bit vectors marking where each character occurs in a pattern."""

from __future__ import annotations

import operator
from collections.abc import Sequence

from fuzzdist.bitops import MASK64, WORD_BITS, ceil_div

_SLOTS = 128
_MAX_PROBES = 13 + _SLOTS + 64


def _char_code(ch: object) -> int:
    """Integer code of a character: code point for strings, the value for ints."""
    if isinstance(ch, str):
        return ord(ch)
    return operator.index(ch)


class BitvectorHashmap:
    """Small open-addressing map from character codes to 64-bit masks."""

    def __init__(self) -> None:
        self._keys = [0] * _SLOTS
        self._values = [0] * _SLOTS

    def _lookup(self, key: int) -> int | None:
        i = key % _SLOTS
        if not self._values[i] or self._keys[i] == key:
            return i
        perturb = key
        for _ in range(_MAX_PROBES):
            i = (i * 5 + perturb + 1) % _SLOTS
            if not self._values[i] or self._keys[i] == key:
                return i
            perturb >>= 5
        return None

    def get(self, key: object) -> int:
        slot = self._lookup(_char_code(key) & MASK64)
        return 0 if slot is None else self._values[slot]

    def __getitem__(self, key: object) -> int:
        return self.get(key)

    def __setitem__(self, key: object, value: int) -> None:
        code = _char_code(key) & MASK64
        slot = self._lookup(code)
        if slot is None:
            raise OverflowError("bit vector hashmap is full")
        self._keys[slot] = code
        self._values[slot] = value & MASK64


class PatternMatchVector:
    """Occurrence masks for a pattern of at most 64 characters."""

    def __init__(self, s: Sequence = ()) -> None:
        self._map = BitvectorHashmap()
        self._extended_ascii = [0] * 256
        if len(s):
            self.insert(s)

    def __len__(self) -> int:
        return 1

    def insert(self, s: Sequence) -> None:
        if len(s) > WORD_BITS:
            raise ValueError("pattern is longer than 64 characters")
        for pos, ch in enumerate(s):
            self.insert_mask(ch, 1 << pos)

    def insert_mask(self, key: object, mask: int) -> None:
        code = _char_code(key)
        if 0 <= code <= 255:
            self._extended_ascii[code] |= mask & MASK64
        else:
            self._map[code] = self._map[code] | mask

    def get(self, block: int, key: object) -> int:
        if block != 0:
            raise IndexError("pattern match vector has a single block")
        code = _char_code(key)
        if 0 <= code <= 255:
            return self._extended_ascii[code]
        return self._map.get(code)


class BlockPatternMatchVector:
    """Occurrence masks for a pattern of any length, split into 64-bit blocks."""

    def __init__(self, s: Sequence = (), *, size: int | None = None) -> None:
        length = len(s) if size is None else size
        self._block_count = ceil_div(length, WORD_BITS)
        self._extended_ascii = [[0] * self._block_count for _ in range(256)]
        self._maps: list[BitvectorHashmap] | None = None
        if len(s):
            self.insert(s)

    def __len__(self) -> int:
        return self._block_count

    def _check_block(self, block: int) -> None:
        if not 0 <= block < self._block_count:
            raise IndexError("block index out of range")

    def insert(self, s: Sequence) -> None:
        for pos, ch in enumerate(s):
            self.insert_mask(pos // WORD_BITS, ch, 1 << (pos % WORD_BITS))

    def insert_mask(self, block: int, key: object, mask: int) -> None:
        self._check_block(block)
        code = _char_code(key)
        if 0 <= code <= 255:
            self._extended_ascii[code][block] |= mask & MASK64
            return
        if self._maps is None:
            self._maps = [BitvectorHashmap() for _ in range(self._block_count)]
        hashmap = self._maps[block]
        hashmap[code] = hashmap[code] | mask

    def get(self, block: int, key: object) -> int:
        self._check_block(block)
        code = _char_code(key)
        if 0 <= code <= 255:
            return self._extended_ascii[code][block]
        if self._maps is None:
            return 0
        return self._maps[block].get(code)
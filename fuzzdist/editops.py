"""Edit operations, opcodes, and applying them to sequences."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any


class EditType(enum.Enum):
    """Kind of an edit operation."""

    NONE = "equal"
    REPLACE = "replace"
    INSERT = "insert"
    DELETE = "delete"


@dataclass
class EditOp:
    """A single edit at ``src_pos`` in the source and ``dest_pos`` in the target."""

    type: EditType
    src_pos: int
    dest_pos: int


@dataclass
class Editops:
    """An ordered list of edit operations plus the lengths of both sequences."""

    ops: list[EditOp] = field(default_factory=list)
    src_len: int = 0
    dest_len: int = 0

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[EditOp]:
        return iter(self.ops)

    def __getitem__(self, index: int) -> EditOp:
        return self.ops[index]

    def __setitem__(self, index: int, op: EditOp) -> None:
        self.ops[index] = op

    def append(self, op: EditOp) -> None:
        self.ops.append(op)


@dataclass
class Opcode:
    """Transforms ``s1[src_begin:src_end]`` into ``s2[dest_begin:dest_end]``."""

    type: EditType
    src_begin: int
    src_end: int
    dest_begin: int
    dest_end: int


@dataclass
class Opcodes:
    """An ordered list of opcodes plus the lengths of both sequences."""

    ops: list[Opcode] = field(default_factory=list)
    src_len: int = 0
    dest_len: int = 0

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[Opcode]:
        return iter(self.ops)

    def __getitem__(self, index: int) -> Opcode:
        return self.ops[index]

    def append(self, op: Opcode) -> None:
        self.ops.append(op)


def _assemble(parts: list, s1: Sequence, s2: Sequence) -> Any:
    if isinstance(s1, str) and isinstance(s2, str):
        return "".join(parts)
    if isinstance(s1, (bytes, bytearray)) and isinstance(s2, (bytes, bytearray)):
        return bytes(parts)
    return parts


def editops_apply(ops: Editops, s1: Sequence, s2: Sequence) -> Any:
    """Apply edit operations to ``s1``, taking new elements from ``s2``."""
    result: list = []
    src_pos = 0
    for op in ops:
        if src_pos < op.src_pos:
            result.extend(s1[src_pos : op.src_pos])
            src_pos = op.src_pos
        if op.type in (EditType.NONE, EditType.REPLACE):
            result.append(s2[op.dest_pos])
            src_pos += 1
        elif op.type is EditType.INSERT:
            result.append(s2[op.dest_pos])
        else:
            src_pos += 1
    result.extend(s1[src_pos:])
    return _assemble(result, s1, s2)


def opcodes_apply(ops: Opcodes, s1: Sequence, s2: Sequence) -> Any:
    """Apply opcodes to ``s1``, taking new elements from ``s2``."""
    result: list = []
    for op in ops:
        if op.type is EditType.NONE:
            result.extend(s1[op.src_begin : op.src_end])
        elif op.type in (EditType.REPLACE, EditType.INSERT):
            result.extend(s2[op.dest_begin : op.dest_end])
    return _assemble(result, s1, s2)
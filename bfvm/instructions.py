"""Instruction set definitions for bfvm.

A compiled program is a flat sequence of :class:`Instruction` values.
Jumps refer to other instructions by their index in that sequence, so no
tree or graph structure is needed. Every program ends with exactly one
``HALT`` instruction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class Opcode(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT_BYTE = '.'
    INPUT_BYTE = ','
    JUMP_IF_ZERO = '['
    LOOP_IF_NONZERO = ']'
    HALT = ''


@dataclass(frozen=True)
class Instruction:
    """One executable instruction.

    ``target`` is only set for ``JUMP_IF_ZERO`` (index just past the
    matching loop) and ``LOOP_IF_NONZERO`` (index of the matching jump).
    """
    op: Opcode
    target: Optional[int] = None

    def __repr__(self) -> str:
        if self.target is None:
            return self.op.name
        return f"{self.op.name}({self.target})"


@dataclass(frozen=True)
class Program:
    instructions: Tuple[Instruction, ...]

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

"""Compiler from source text to a bfvm `Program`.

Instructions are appended to a growing list. Each ``[`` pushes the index
it will occupy onto a stack of pending jumps; each ``]`` pops that stack
and patches the matching jump so it points just past the loop. The loop
instruction itself points back at the jump, which re-tests the cell.
"""

from __future__ import annotations

from typing import List, Tuple

from .errors import BFSyntaxError
from .instructions import Instruction, Opcode, Program
from .parser import Token, tokenize


def compile_source(source: str) -> Program:
    """Compile ``source`` into a `Program` terminated by a single HALT.

    Raises `BFSyntaxError` if a ``]`` has no matching ``[`` or a ``[`` is
    never closed.
    """
    instructions: List[Instruction] = []
    jumps: List[Tuple[int, Token]] = []
    for token in tokenize(source):
        if token.op is Opcode.JUMP_IF_ZERO:
            jumps.append((len(instructions), token))
            # target is patched once the matching loop is seen
            instructions.append(Instruction(Opcode.JUMP_IF_ZERO))
        elif token.op is Opcode.LOOP_IF_NONZERO:
            if not jumps:
                raise BFSyntaxError(token.line, token.column)
            open_index, _ = jumps.pop()
            loop_index = len(instructions)
            instructions[open_index] = Instruction(Opcode.JUMP_IF_ZERO, loop_index + 1)
            instructions.append(Instruction(Opcode.LOOP_IF_NONZERO, open_index))
        else:
            instructions.append(Instruction(token.op))

    if jumps:
        # innermost unclosed bracket
        _, unclosed = jumps[-1]
        raise BFSyntaxError(unclosed.line, unclosed.column)

    instructions.append(Instruction(Opcode.HALT))
    return Program(tuple(instructions))

"""Virtual machine for compiled bfvm programs.

The machine owns a `Program`, an instruction pointer, a data pointer and
a tape of 8-bit cells. The tape starts as a single zero cell and grows by
one cell at whichever end the data pointer walks off. All runtime
operations are total: arithmetic wraps modulo 256, the tape grows on
demand and reading past the end of input yields zero. The only failure
mode is a syntax error at compile time.

`Interpreter.step` executes a single instruction so that callers can
impose their own step or time limits between calls; `Interpreter.run`
simply loops until the machine halts.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, MutableSequence

from .compiler import compile_source
from .instructions import Opcode, Program


###############################################################################
# Interpreter implementation
###############################################################################


class Interpreter:
    """Executes a compiled `Program` against a growable byte tape."""
    def __init__(self, program: Program, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.program = program
        self._ip = 0
        self._dp = 0
        self._tape: Deque[int] = deque([0])
        self.steps = 0
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.debug(f"loaded program of {len(program)} instructions")

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                print(msg)
            elif not self.debug_fp.closed:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()

    def close(self):
        """Close the debug file, if one was opened."""
        if self.debug_fp:
            self.debug_fp.close()

    def __enter__(self) -> Interpreter:
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def ip(self) -> int:
        return self._ip

    @property
    def dp(self) -> int:
        return self._dp

    @property
    def tape(self) -> List[int]:
        return list(self._tape)

    @property
    def halted(self) -> bool:
        return self.program[self._ip].op is Opcode.HALT

    # Public API
    def step(self, input_queue: Deque[int], output: MutableSequence[int]) -> bool:
        """Execute one instruction.

        Returns True if the instruction now under the instruction pointer
        is HALT. Once halted, further calls change nothing and keep
        returning True.
        """
        instr = self.program[self._ip]
        op = instr.op
        if op is Opcode.HALT:
            return True
        if self.debug_level >= 3:
            self.debug(f"ip={self._ip} {instr!r} dp={self._dp} cell={self._tape[self._dp]}")

        next_ip = self._ip + 1
        if op is Opcode.MOVE_RIGHT:
            self._dp += 1
            if self._dp == len(self._tape):
                self._tape.append(0)
        elif op is Opcode.MOVE_LEFT:
            if self._dp > 0:
                self._dp -= 1
            else:
                self._tape.appendleft(0)
        elif op is Opcode.INCREMENT:
            self._tape[self._dp] = (self._tape[self._dp] + 1) & 0xFF
        elif op is Opcode.DECREMENT:
            self._tape[self._dp] = (self._tape[self._dp] - 1) & 0xFF
        elif op is Opcode.OUTPUT_BYTE:
            output.append(self._tape[self._dp])
        elif op is Opcode.INPUT_BYTE:
            self._tape[self._dp] = input_queue.popleft() if input_queue else 0
        elif op is Opcode.JUMP_IF_ZERO:
            if self._tape[self._dp] == 0:
                next_ip = instr.target
                if self.debug_level >= 2:
                    self.debug(f"jump {self._ip} -> {next_ip}")
        elif op is Opcode.LOOP_IF_NONZERO:
            if self._tape[self._dp] != 0:
                next_ip = instr.target
                if self.debug_level >= 2:
                    self.debug(f"loop {self._ip} -> {next_ip}")
        else:
            raise ValueError(f'Instruction not handled: {instr!r}')

        self._ip = next_ip
        self.steps += 1
        return self.program[self._ip].op is Opcode.HALT

    def run(self, input_queue: Deque[int], output: MutableSequence[int]) -> None:
        """Step the machine until it halts."""
        try:
            while not self.step(input_queue, output):
                pass
            self.debug(f"halted after {self.steps} steps, tape size {len(self._tape)}, "
                       f"{len(output)} bytes of output")
        finally:
            self.close()


def run_source(source: str, input_data: bytes = b'', debug_level: int = 0,
               debug_file: str = 'debug.txt') -> bytes:
    """Convenience function to compile and run a program from source string."""
    program = compile_source(source)
    interpreter = Interpreter(program, debug_level=debug_level, debug_file=debug_file)
    output = bytearray()
    interpreter.run(deque(input_data), output)
    return bytes(output)

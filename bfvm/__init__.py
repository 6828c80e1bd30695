# bfvm package
# This package provides a compiler and virtual machine for the eight-symbol
# tape language (> < + - . , [ ]).
from .compiler import compile_source
from .errors import BFError, BFSyntaxError
from .instructions import Instruction, Opcode, Program
from .interpreter import Interpreter, run_source

__all__ = [
    'compile_source',
    'run_source',
    'Interpreter',
    'Instruction',
    'Opcode',
    'Program',
    'BFError',
    'BFSyntaxError',
]

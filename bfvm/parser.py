"""Tokenizer for bfvm source text.

The source is fed into a Lark parser configured with a grammar that has
one terminal per instruction symbol. Every other character is matched by
the ``COMMENT`` terminal and ignored, so the grammar accepts any string.
Bracket pairing is checked later by the compiler, which needs the
instruction indices to patch jump targets anyway.

The `tokenize` function is the public entry point and returns the
recognised symbols as a list of `Token` values in source order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from lark import Lark, Transformer

from .instructions import Opcode


BF_GRAMMAR = r"""
    start: _instr*
    _instr: RIGHT | LEFT | INC | DEC | OUT | IN | OPEN | CLOSE

    RIGHT: ">"
    LEFT: "<"
    INC: "+"
    DEC: "-"
    OUT: "."
    IN: ","
    OPEN: "["
    CLOSE: "]"

    // Anything else is inert text
    COMMENT: /[^<>+\-.,\[\]]+/
    %ignore COMMENT
"""


BF_PARSER = Lark(
    BF_GRAMMAR,
    parser='lalr',
)


@dataclass
class Token:
    op: Opcode
    line: int
    column: int


class TokenTransformer(Transformer):
    """Turns the flat parse tree into a list of opcode tokens."""

    def start(self, items):
        return list(items)

    def __default_token__(self, token):
        return Token(Opcode(token.value), token.line, token.column)


def tokenize(source: str) -> List[Token]:
    """Return the instruction symbols found in ``source``, in order."""
    tree = BF_PARSER.parse(source)
    return TokenTransformer().transform(tree)

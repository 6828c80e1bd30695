"""CLI entry point for the bfvm interpreter.

Usage:
    python -m bfvm [-v|-vv|-vvv] <program_file> [-o FILE] [-i FILE] [-s TEXT] [-p]

Options:
  -v               Increase debug verbosity (can be repeated)
  -o, --output     Write the raw output bytes to FILE
  -i, --input      Append the bytes of FILE to the program's input
  -s, --stream     Place TEXT on the program's input, before any input file
  -p, --print      Print the output to the screen

At least one of --output or --print is required. Debug information is
written to `debug.txt` in the current directory when verbosity is greater
than zero.
"""

import argparse
import sys
from collections import deque
from pathlib import Path
from typing import Deque, Optional

from .compiler import compile_source
from .errors import BFSyntaxError
from .interpreter import Interpreter


def load_source(program_file: Path) -> str:
    """Read program text in any ASCII-compatible encoding.

    Only the eight ASCII instruction symbols matter, so bytes are decoded
    as latin-1, which never fails and leaves every other byte inert.
    """
    return program_file.read_bytes().decode('latin-1')


def fetch_input(stream: Optional[str], input_file: Optional[str]) -> Deque[int]:
    """Build the input queue: the stream text first, then the input file bytes."""
    queue: Deque[int] = deque()
    if stream is not None:
        # one byte per character, keeping the low eight bits of the code point
        queue.extend(ord(c) & 0xFF for c in stream)
    if input_file is not None:
        queue.extend(Path(input_file).read_bytes())
    return queue


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(prog='bfvm', description="bfvm tape language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-o', '--output', metavar='FILE', help='write output bytes to FILE')
    parser.add_argument('-i', '--input', metavar='FILE', help='read input bytes from FILE')
    parser.add_argument('-s', '--stream', metavar='TEXT', help='input text, consumed before any input file')
    parser.add_argument('-p', '--print', dest='print_screen', action='store_true', help='print output to the screen')
    parser.add_argument('program', help='program source file to execute')
    args = parser.parse_args(argv)

    if not args.print_screen and args.output is None:
        parser.error('no output file or print flag')

    program_file = Path(args.program)
    if not program_file.is_file():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        return 1
    try:
        source = load_source(program_file)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        program = compile_source(source)
    except BFSyntaxError as e:
        print("Syntax error.", file=sys.stderr)
        if args.v:
            print(str(e), file=sys.stderr)
        return 1

    try:
        input_queue = fetch_input(args.stream, args.input)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = bytearray()
    interpreter = Interpreter(program, debug_level=args.v)
    interpreter.run(input_queue, output)

    if args.print_screen:
        print(output.decode('latin-1'))

    if args.output is not None:
        try:
            Path(args.output).write_bytes(bytes(output))
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

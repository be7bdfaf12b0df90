"""CLI entry point for the Basil interpreter.

Usage:
    python -m basil [-v|-vv|-vvv|-vvvv] [--seed N] <program_file>
    python -m basil --tokens <program_file>
    python -m basil --emit-ast <program_file>
    python -m basil [-v...] [--seed N] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --seed N      Seed the random number generator used by RND
  --tokens      Print the token stream of the program and exit
  --emit-ast    Parse the given program and write an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Each phase reports its first error as a single line and the process exits
with a status that identifies the phase:

    0  success             10  usage error
    1  unexpected failure  11  tokenization error
    9  input file failure  12  parsing error
                           13  interpreter error

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .errors import BasilRuntimeError, LexError, ParseError
from .interpreter import Interpreter
from .lexer import TokenType, tokenize
from .parser import parse

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_FILE_ERROR = 9
EXIT_USAGE = 10
EXIT_LEX_ERROR = 11
EXIT_PARSE_ERROR = 12
EXIT_RUNTIME_ERROR = 13

USAGE = "Usage: basil <input_file>"


class UsageError(Exception):
    pass


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports bad arguments as a usage error."""
    def error(self, message):
        raise UsageError(message)


def build_arg_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='basil', description="Basil language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--seed', type=int, help='seed for the RND random number generator')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', action='store_true', help='print the token stream and exit')
    group.add_argument('--emit-ast', action='store_true', help='write the AST of the program as JSON')
    group.add_argument('--ast', action='store_true', help='treat the input file as an AST JSON file')
    parser.add_argument('program', nargs='?', help='Basil program file to execute')
    return parser


def format_lex_error(err: LexError) -> str:
    return f"[line {err.line}] Tokenization error: {err.message}"


def format_parse_error(err: ParseError) -> str:
    if err.token.type is TokenType.EOF:
        return f"[line {err.line} (at end of file)] Parsing error: {err.message}"
    return f"[line {err.line}] (at '{err.token.lexeme}') Parsing error: {err.message}"


def format_runtime_error(err: BasilRuntimeError) -> str:
    return f"[line {err.line}] Interpreter error: {err.message}"


def read_source(path: Path) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run(args: argparse.Namespace) -> int:
    try:
        source = read_source(Path(args.program))
    except (OSError, UnicodeDecodeError):
        print("Error: Failed to open input file.", file=sys.stderr)
        return EXIT_FILE_ERROR

    rng = random.Random(args.seed) if args.seed is not None else None

    # Execute from AST JSON
    if args.ast:
        try:
            program = program_from_obj(json.loads(source))
        except (ValueError, TypeError, KeyError) as e:
            print(f"Error: Invalid AST file: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        interpreter = Interpreter(debug_level=args.v, rng=rng)
        interpreter.debug(f"loaded {len(program)} statements from {args.program}")
        return execute(interpreter, program)

    try:
        tokens = tokenize(source)
    except LexError as e:
        print(format_lex_error(e))
        return EXIT_LEX_ERROR

    if args.tokens:
        for token in tokens:
            print(token)
        return EXIT_OK

    try:
        program = parse(tokens)
    except ParseError as e:
        print(format_parse_error(e))
        return EXIT_PARSE_ERROR

    if args.emit_ast:
        program_file = Path(args.program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return EXIT_OK

    interpreter = Interpreter(debug_level=args.v, rng=rng)
    interpreter.debug(f"tokenized {args.program}: {len(tokens)} tokens")
    interpreter.debug(f"parsed {args.program}: {len(program)} statements")
    return execute(interpreter, program)


def execute(interpreter: Interpreter, program) -> int:
    try:
        interpreter.run(program)
    except BasilRuntimeError as e:
        print(format_runtime_error(e))
        return EXIT_RUNTIME_ERROR
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    try:
        args = parser.parse_args(argv)
        if not args.program:
            raise UsageError('missing program file')
    except UsageError:
        print(USAGE)
        return EXIT_USAGE

    try:
        return run(args)
    except Exception as e:
        print(f"Unexpected exception: {e}", file=sys.stderr)
        return EXIT_UNEXPECTED


if __name__ == '__main__':
    sys.exit(main())

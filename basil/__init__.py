# Basil language package
# This package provides a tokenizer, parser and tree-walking interpreter for Basil.
from .errors import BasilError, BasilRuntimeError, LexError, ParseError
from .interpreter import Interpreter, run_program
from .lexer import tokenize
from .parser import parse, parse_program

__all__ = [
    'tokenize',
    'parse',
    'parse_program',
    'run_program',
    'Interpreter',
    'BasilError',
    'LexError',
    'ParseError',
    'BasilRuntimeError',
]

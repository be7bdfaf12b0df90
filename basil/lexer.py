"""Tokenizer for the Basil language.

The lexer makes a single forward pass over the source. It keeps a window
of three characters (previous, current and next) which is enough to
recognise the two character operators ``==``, ``<=``, ``>=`` and ``<>``
without backtracking.

Keywords and the boolean literals are matched case-insensitively, while
identifiers keep the exact text they were written with. ``REM`` starts a
comment that runs to the end of the line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .errors import LexError
from .values import Value


class TokenType(Enum):
    # Punctuation and operators
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    COMMA = ','
    MINUS = '-'
    PLUS = '+'
    STAR = '*'
    SLASH = '/'
    EQUAL = '='
    EQUAL_EQUAL = '=='
    NOT_EQUAL = '<>'
    LESS = '<'
    LESS_EQUAL = '<='
    GREATER = '>'
    GREATER_EQUAL = '>='

    # Literals
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'

    # Keywords
    LET = 'let'
    INPUT = 'input'
    PRINT = 'print'
    TONUM = 'tonum'
    TOSTR = 'tostr'
    RND = 'rnd'
    IF = 'if'
    THEN = 'then'
    ELSE = 'else'
    END = 'end'
    WHILE = 'while'
    DO = 'do'
    BREAK = 'break'
    CONTINUE = 'continue'
    NOT = 'not'
    AND = 'and'
    OR = 'or'

    EOF = 'eof'


KEYWORDS: Dict[str, TokenType] = {
    'let': TokenType.LET,
    'input': TokenType.INPUT,
    'print': TokenType.PRINT,
    'tonum': TokenType.TONUM,
    'tostr': TokenType.TOSTR,
    'rnd': TokenType.RND,
    'if': TokenType.IF,
    'then': TokenType.THEN,
    'else': TokenType.ELSE,
    'end': TokenType.END,
    'while': TokenType.WHILE,
    'do': TokenType.DO,
    'break': TokenType.BREAK,
    'continue': TokenType.CONTINUE,
    'not': TokenType.NOT,
    'and': TokenType.AND,
    'or': TokenType.OR,
}

COMMENT_KEYWORD = 'rem'

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    ',': TokenType.COMMA,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Optional[Value]
    line: int

    def __str__(self) -> str:
        return f"{self.line}: {self.type.name} {self.lexeme!r}"


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_alnum(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Lexer:
    """Converts Basil source text into a list of tokens."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        # Three character window; '' marks "no character"
        self.prev_char = ''
        self.cur_char = ''
        self.next_char = source[0] if source else ''
        self.tokens: List[Token] = []

    # Character window -------------------------------------------------

    def at_end(self) -> bool:
        return self.next_char == ''

    def advance(self) -> str:
        self.prev_char = self.cur_char
        self.cur_char = self.next_char
        self.pos += 1
        self.next_char = self.source[self.pos] if self.pos < len(self.source) else ''
        return self.cur_char

    def peek(self) -> str:
        return self.next_char

    def match_next(self, expected: str) -> bool:
        if self.at_end() or self.next_char != expected:
            return False
        self.advance()
        return True

    # Token production -------------------------------------------------

    def add_token(self, type_: TokenType, lexeme: str, literal: Optional[Value] = None):
        self.tokens.append(Token(type_, lexeme, literal, self.line))

    def error(self, message: str):
        raise LexError(message, self.line)

    def scan_tokens(self) -> List[Token]:
        while not self.at_end():
            self.scan_token()
        self.add_token(TokenType.EOF, '')
        return self.tokens

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c], c)
            return
        if c == '=':
            if self.match_next('='):
                self.add_token(TokenType.EQUAL_EQUAL, '==')
            else:
                self.add_token(TokenType.EQUAL, '=')
            return
        if c == '<':
            if self.match_next('='):
                self.add_token(TokenType.LESS_EQUAL, '<=')
            elif self.match_next('>'):
                self.add_token(TokenType.NOT_EQUAL, '<>')
            else:
                self.add_token(TokenType.LESS, '<')
            return
        if c == '>':
            if self.match_next('='):
                self.add_token(TokenType.GREATER_EQUAL, '>=')
            else:
                self.add_token(TokenType.GREATER, '>')
            return
        if c in ' \r\t':
            return
        if c == '\n':
            self.line += 1
            return
        if c == '"':
            self.scan_string()
            return
        if is_digit(c):
            self.scan_number()
            return
        if is_alpha(c):
            self.scan_word()
            return
        self.error(f"Unexpected character {c!r}.")

    def scan_string(self):
        chars: List[str] = []
        while self.peek() != '"' and not self.at_end():
            if self.peek() == '\n':
                self.line += 1
            chars.append(self.advance())
        if self.at_end():
            self.error("Unterminated string.")
        self.advance()  # closing quote
        text = ''.join(chars)
        self.add_token(TokenType.STRING, f'"{text}"', text)

    def scan_number(self):
        chars = [self.cur_char]
        while is_digit(self.peek()) or self.peek() == '.':
            chars.append(self.advance())
        text = ''.join(chars)
        if text.count('.') > 1:
            self.error(f"Invalid number literal '{text}'.")
        self.add_token(TokenType.NUMBER, text, float(text))

    def scan_word(self):
        chars = [self.cur_char]
        while is_alnum(self.peek()):
            chars.append(self.advance())
        word = ''.join(chars)
        lowered = word.lower()
        if lowered == COMMENT_KEYWORD:
            self.skip_comment()
            return
        if lowered in KEYWORDS:
            self.add_token(KEYWORDS[lowered], word)
        elif lowered == 'true':
            self.add_token(TokenType.BOOLEAN, word, True)
        elif lowered == 'false':
            self.add_token(TokenType.BOOLEAN, word, False)
        else:
            self.add_token(TokenType.IDENTIFIER, word, word)

    def skip_comment(self):
        while not self.at_end() and self.advance() != '\n':
            pass
        self.line += 1


def tokenize(source: str) -> List[Token]:
    """Scan ``source`` and return its tokens, terminated by one EOF token."""
    return Lexer(source).scan_tokens()

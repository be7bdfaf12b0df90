"""Recursive-descent parser for the Basil language.

The parser consumes the token list produced by :mod:`basil.lexer` with a
single token of lookahead and builds the statement list defined in
:mod:`basil.ast`. Expression precedence, loosest to tightest::

    or -> and -> not -> comparison -> + - -> * / -> unary - -> primary

Parsing stops at the first error, which is raised as a
:class:`~basil.errors.ParseError` pointing at the offending token.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Binary, Block, Break, Continue, Expr, Grouping, If, Input, Let, Literal,
    Print, Program, Rnd, Stmt, ToNum, ToStr, Unary, Variable, While,
)
from .errors import ParseError
from .lexer import Token, TokenType, tokenize

COMPARISON_OPS = (
    TokenType.GREATER, TokenType.GREATER_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL,
    TokenType.NOT_EQUAL, TokenType.EQUAL_EQUAL,
)


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.pos = 0

    # Token helpers ------------------------------------------------------

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self) -> Token:
        """Token after the current one (the EOF token once past the end)."""
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        # Parsing ends only once the current and the following token are both
        # EOF; peek() is clamped to the EOF token.
        return self.current().type is TokenType.EOF and self.peek().type is TokenType.EOF

    def check(self, type_: TokenType) -> bool:
        return self.current().type is type_

    def advance(self) -> Token:
        if self.current().type is not TokenType.EOF:
            self.pos += 1
        return self.previous()

    def match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def consume(self, type_: TokenType, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        self.error(message)

    def error(self, message: str):
        raise ParseError(message, self.current(), self.pos)

    # Program --------------------------------------------------------------

    def parse(self) -> Program:
        statements: Program = []
        while not self.is_at_end():
            statements.append(self.declaration())
        return statements

    # Statements -----------------------------------------------------------

    def declaration(self) -> Stmt:
        if self.match(TokenType.LET):
            return self.let_declaration()
        return self.statement()

    def statement(self) -> Stmt:
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.INPUT):
            return self.input_statement()
        if self.match(TokenType.TONUM):
            return self.tonum_statement()
        if self.match(TokenType.TOSTR):
            return self.tostr_statement()
        if self.match(TokenType.RND):
            return self.rnd_statement()
        if self.match(TokenType.BREAK):
            return Break(line=self.previous().line)
        if self.match(TokenType.CONTINUE):
            return Continue(line=self.previous().line)
        self.error("Statement expected.")

    def block(self) -> Block:
        statements: List[Stmt] = []
        while not self.check(TokenType.END) and not self.check(TokenType.ELSE):
            statements.append(self.declaration())
        return Block(line=self.previous().line, statements=tuple(statements))

    def let_declaration(self) -> Let:
        name = self.consume(TokenType.IDENTIFIER, "Variable name expected after LET.")
        self.consume(TokenType.EQUAL, "Equal sign expected after variable identifier.")
        value = self.expression()
        return Let(line=self.previous().line, expr=value, target=name.lexeme)

    def print_statement(self) -> Print:
        value = self.expression()
        return Print(line=self.previous().line, expr=value)

    def input_statement(self) -> Input:
        prompt = self.expression()
        self.consume(TokenType.COMMA, "INPUT expects two parameters separated by comma.")
        target = self.consume(TokenType.IDENTIFIER, "INPUT second parameter must be variable identifier.")
        return Input(line=self.previous().line, prompt=prompt, target=target.lexeme)

    def conversion_operands(self, keyword: str):
        source = self.consume(TokenType.IDENTIFIER, f"{keyword} first parameter must be variable identifier.")
        dest: Optional[str] = None
        if self.match(TokenType.COMMA):
            dest = self.consume(TokenType.IDENTIFIER, f"{keyword} second parameter must be variable identifier.").lexeme
        return source.lexeme, dest

    def tonum_statement(self) -> ToNum:
        source, dest = self.conversion_operands('TONUM')
        return ToNum(line=self.previous().line, source=source, dest=dest)

    def tostr_statement(self) -> ToStr:
        source, dest = self.conversion_operands('TOSTR')
        return ToStr(line=self.previous().line, source=source, dest=dest)

    def rnd_statement(self) -> Rnd:
        dest = self.consume(TokenType.IDENTIFIER, "RND first parameter must be variable identifier.")
        self.consume(TokenType.COMMA, "RND expects three parameters separated by comma.")
        low = self.expression()
        self.consume(TokenType.COMMA, "RND expects three parameters separated by comma.")
        high = self.expression()
        return Rnd(line=self.previous().line, dest=dest.lexeme, low=low, high=high)

    def if_statement(self) -> If:
        condition = self.expression()
        self.consume(TokenType.THEN, "THEN keyword expected after IF condition.")
        then_branch = self.block()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.block()
        self.consume(TokenType.END, "END keyword expected at the end of IF block.")
        return If(line=self.previous().line, condition=condition,
                  then_branch=then_branch, else_branch=else_branch)

    def while_statement(self) -> While:
        condition = self.expression()
        self.consume(TokenType.DO, "DO keyword expected after WHILE condition.")
        body = self.block()
        self.consume(TokenType.END, "END keyword expected at the end of WHILE block.")
        return While(line=self.previous().line, condition=condition, body=body)

    # Expressions ----------------------------------------------------------

    def expression(self) -> Expr:
        return self.or_expr()

    def or_expr(self) -> Expr:
        expr = self.and_expr()
        while self.match(TokenType.OR):
            right = self.and_expr()
            expr = Binary(line=self.previous().line, left=expr, op='or', right=right)
        return expr

    def and_expr(self) -> Expr:
        expr = self.not_expr()
        while self.match(TokenType.AND):
            right = self.not_expr()
            expr = Binary(line=self.previous().line, left=expr, op='and', right=right)
        return expr

    def not_expr(self) -> Expr:
        if self.match(TokenType.NOT):
            operand = self.not_expr()
            return Unary(line=self.previous().line, op='not', operand=operand)
        return self.comparison()

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(*COMPARISON_OPS):
            op = self.previous().type.value
            right = self.term()
            expr = Binary(line=self.previous().line, left=expr, op=op, right=right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            op = self.previous().type.value
            right = self.factor()
            expr = Binary(line=self.previous().line, left=expr, op=op, right=right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            op = self.previous().type.value
            right = self.unary()
            expr = Binary(line=self.previous().line, left=expr, op=op, right=right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.MINUS):
            operand = self.unary()
            return Unary(line=self.previous().line, op='-', operand=operand)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.NUMBER, TokenType.STRING, TokenType.BOOLEAN):
            token = self.previous()
            return Literal(line=token.line, value=token.literal)
        if self.match(TokenType.LEFT_PAREN):
            inner = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(line=self.previous().line, inner=inner)
        if self.match(TokenType.IDENTIFIER):
            token = self.previous()
            return Variable(line=token.line, name=token.lexeme)
        self.error("Expression expected.")


def parse(tokens: List[Token]) -> Program:
    """Parse a token list into a list of top-level statements."""
    parser = Parser(tokens)
    try:
        return parser.parse()
    except RecursionError:
        raise ParseError("Expression nested too deeply.", parser.current(), parser.pos) from None


def parse_program(source: str) -> Program:
    """Tokenize and parse Basil source code."""
    return parse(tokenize(source))

import pytest

from basil.ast import (
    Binary, Block, Break, Continue, Grouping, If, Input, Let, Literal, Print,
    Rnd, ToNum, ToStr, Unary, Variable, While,
)
from basil.errors import ParseError
from basil.lexer import TokenType, tokenize
from basil.parser import Parser, parse, parse_program


def parse_expr(text):
    [stmt] = parse_program(f'PRINT {text}')
    return stmt.expr


def test_multiplication_binds_tighter_than_addition():
    expr = parse_expr('1 + 2 * 3')
    assert isinstance(expr, Binary) and expr.op == '+'
    assert isinstance(expr.right, Binary) and expr.right.op == '*'


def test_grouping_overrides_precedence():
    expr = parse_expr('(1 + 2) * 3')
    assert expr.op == '*'
    assert isinstance(expr.left, Grouping)
    assert expr.left.inner.op == '+'


def test_binary_operators_are_left_associative():
    expr = parse_expr('8 - 4 - 2')
    assert expr.op == '-'
    assert isinstance(expr.left, Binary)
    assert expr.right == Literal(line=1, value=2.0)


def test_logical_precedence_ladder():
    # or -> and -> not -> comparison
    expr = parse_expr('a OR NOT b < 3 AND c')
    assert expr.op == 'or'
    assert isinstance(expr.left, Variable)
    conj = expr.right
    assert conj.op == 'and'
    assert isinstance(conj.left, Unary) and conj.left.op == 'not'
    assert conj.left.operand.op == '<'


def test_unary_minus_binds_tighter_than_multiplication():
    expr = parse_expr('-a * b')
    assert expr.op == '*'
    assert isinstance(expr.left, Unary) and expr.left.op == '-'


def test_comparison_operators():
    for op in ('<', '<=', '>', '>=', '==', '<>'):
        assert parse_expr(f'a {op} b').op == op


def test_let_and_simple_statements():
    program = parse_program(
        'LET x = 5\n'
        'INPUT "Name? ", name\n'
        'TONUM x\n'
        'TONUM x, y\n'
        'TOSTR y, s\n'
        'RND r, 1, 6\n'
    )
    assert program[0] == Let(line=1, expr=Literal(line=1, value=5.0), target='x')
    assert isinstance(program[1], Input) and program[1].target == 'name'
    assert program[2] == ToNum(line=3, source='x', dest=None)
    assert program[3] == ToNum(line=4, source='x', dest='y')
    assert program[4] == ToStr(line=5, source='y', dest='s')
    assert isinstance(program[5], Rnd)
    assert program[5].dest == 'r'
    assert program[5].low.value == 1.0 and program[5].high.value == 6.0


def test_if_with_else_and_while():
    program = parse_program(
        'IF a THEN\n'
        '  PRINT 1\n'
        'ELSE\n'
        '  PRINT 2\n'
        '  PRINT 3\n'
        'END\n'
        'WHILE b DO BREAK CONTINUE END\n'
    )
    if_stmt, while_stmt = program
    assert isinstance(if_stmt, If)
    assert isinstance(if_stmt.then_branch, Block)
    assert len(if_stmt.then_branch.statements) == 1
    assert len(if_stmt.else_branch.statements) == 2
    assert if_stmt.line == 6
    assert isinstance(while_stmt, While)
    assert [type(s) for s in while_stmt.body.statements] == [Break, Continue]


def test_if_without_else_and_empty_block():
    [stmt] = parse_program('IF a THEN END\nPRINT 1')[:1]
    assert stmt.else_branch is None
    assert stmt.then_branch.statements == ()


def test_nodes_carry_line_numbers():
    program = parse_program('LET a = 1\n\nPRINT a + 2')
    assert program[1].line == 3
    assert program[1].expr.line == 3
    assert program[1].expr.left == Variable(line=3, name='a')


def test_missing_closing_paren():
    with pytest.raises(ParseError) as excinfo:
        parse_program('PRINT (1 + 2\nPRINT 3')
    assert excinfo.value.message == "Expect ')' after expression."
    assert excinfo.value.token.lexeme == 'PRINT'
    assert excinfo.value.line == 2


def test_statement_expected():
    with pytest.raises(ParseError) as excinfo:
        parse_program('LET a = 1\na = 2')
    assert excinfo.value.message == 'Statement expected.'
    assert excinfo.value.token.lexeme == 'a'
    assert excinfo.value.token_index == 4


def test_error_at_end_of_file():
    with pytest.raises(ParseError) as excinfo:
        parse_program('IF a THEN PRINT 1')
    assert excinfo.value.token.type is TokenType.EOF


def test_input_requires_comma_and_identifier():
    with pytest.raises(ParseError) as excinfo:
        parse_program('INPUT "x" name')
    assert excinfo.value.message == 'INPUT expects two parameters separated by comma.'
    with pytest.raises(ParseError) as excinfo:
        parse_program('INPUT "x", 5')
    assert excinfo.value.message == 'INPUT second parameter must be variable identifier.'


def test_tostr_requires_identifier():
    with pytest.raises(ParseError) as excinfo:
        parse_program('TOSTR 5\nPRINT 1')
    assert excinfo.value.message == 'TOSTR first parameter must be variable identifier.'


def test_end_of_stream_checks_two_tokens():
    assert parse_program('BREAK') == [Break(line=1)]
    assert parse_program('') == []
    parser = Parser(tokenize('PRINT 1'))
    assert not parser.is_at_end()
    parser.advance()
    assert not parser.is_at_end()
    parser.advance()
    assert parser.is_at_end()


def test_unfinished_last_statement_is_an_error():
    with pytest.raises(ParseError) as excinfo:
        parse_program('PRINT 1\nPRINT')
    assert excinfo.value.token.type is TokenType.EOF
    assert excinfo.value.line == 2


def test_stray_trailing_token_is_an_error():
    with pytest.raises(ParseError) as excinfo:
        parse_program('PRINT 1 )')
    assert excinfo.value.token.lexeme == ')'


def test_deeply_nested_expression_is_a_parse_error():
    depth = 5000
    with pytest.raises(ParseError) as excinfo:
        parse_program('PRINT ' + '(' * depth + '1' + ')' * depth)
    assert excinfo.value.message == 'Expression nested too deeply.'


def test_parser_requires_eof_terminated_tokens():
    with pytest.raises(ValueError):
        parse(tokenize('PRINT 1')[:-1])

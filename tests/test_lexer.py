import pytest

from basil.errors import LexError
from basil.lexer import TokenType, tokenize


def types_of(source):
    return [t.type for t in tokenize(source)]


def test_tokenize_two_character_operators():
    assert types_of('== <= >= <> = < >') == [
        TokenType.EQUAL_EQUAL,
        TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL,
        TokenType.NOT_EQUAL,
        TokenType.EQUAL,
        TokenType.LESS,
        TokenType.GREATER,
        TokenType.EOF,
    ]


def test_tokenize_operator_at_end_of_input():
    tokens = tokenize('a <')
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.LESS, TokenType.EOF]


def test_keywords_are_case_insensitive_identifiers_are_not():
    tokens = tokenize('Print pRiNt Name')
    assert tokens[0].type is TokenType.PRINT
    assert tokens[1].type is TokenType.PRINT
    assert tokens[1].lexeme == 'pRiNt'
    assert tokens[2].type is TokenType.IDENTIFIER
    assert tokens[2].lexeme == 'Name'
    assert tokens[2].literal == 'Name'


def test_boolean_literals():
    tokens = tokenize('TRUE false')
    assert [(t.type, t.literal) for t in tokens[:2]] == [
        (TokenType.BOOLEAN, True),
        (TokenType.BOOLEAN, False),
    ]


def test_number_literals_are_floats():
    tokens = tokenize('42 3.25 7.')
    assert [t.literal for t in tokens[:3]] == [42.0, 3.25, 7.0]
    assert all(isinstance(t.literal, float) for t in tokens[:3])
    assert tokens[1].lexeme == '3.25'


def test_number_with_two_decimal_points_is_rejected():
    with pytest.raises(LexError) as excinfo:
        tokenize('PRINT 1.2.3')
    assert '1.2.3' in excinfo.value.message


def test_string_literal_keeps_text_verbatim():
    tokens = tokenize('"Hello, \\n World"')
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].literal == 'Hello, \\n World'
    assert tokens[0].lexeme == '"Hello, \\n World"'


def test_unterminated_string():
    with pytest.raises(LexError) as excinfo:
        tokenize('PRINT 1\nPRINT "oops')
    assert excinfo.value.message == 'Unterminated string.'
    assert excinfo.value.line == 2


def test_unexpected_character_reports_line():
    with pytest.raises(LexError) as excinfo:
        tokenize('LET a = 1\n\nLET b = a % 2')
    assert excinfo.value.line == 3


def test_line_numbers_follow_newlines_and_comments():
    source = 'REM header\nLET a = 1\n\nPRINT a REM done\nPRINT "x"'
    tokens = tokenize(source)
    lines = {t.lexeme: t.line for t in tokens if t.type is not TokenType.EOF}
    assert lines['LET'] == 2
    assert tokens[4].type is TokenType.PRINT
    assert tokens[4].line == 4
    assert tokens[6].type is TokenType.PRINT
    assert tokens[6].line == 5


def test_rem_must_be_a_whole_word():
    tokens = tokenize('LET remainder = 1')
    assert tokens[1].type is TokenType.IDENTIFIER
    assert tokens[1].lexeme == 'remainder'


def test_exactly_one_eof_token():
    tokens = tokenize('')
    assert [t.type for t in tokens] == [TokenType.EOF]
    tokens = tokenize('PRINT 1   \n\n')
    assert [t.type for t in tokens].count(TokenType.EOF) == 1
    assert tokens[-1].type is TokenType.EOF

import pytest

from sprig.errors import LexError
from sprig.lexer import (
    Token, tokenize,
    NUMBER, STRING, IDENTIFIER, KEYWORD, OPERATOR, EQUALS, ASSIGN,
    LPAREN, RPAREN, LBRACE, RBRACE, LBRACKET, RBRACKET, POWER,
    COMMA, SEMICOLON, DOT, RETURN, END,
)


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_assignment_tokens():
    assert tokenize('x = 10') == [
        Token(IDENTIFIER, 'x'),
        Token(ASSIGN, '='),
        Token(NUMBER, 10.0),
        Token(END, None),
    ]


def test_empty_source_is_just_end():
    assert tokenize('') == [Token(END, None)]
    assert tokenize('   \n\t ') == [Token(END, None)]


def test_numbers_are_floats():
    tokens = tokenize('7 3.25')
    assert tokens[0].literal == 7.0
    assert isinstance(tokens[0].literal, float)
    assert tokens[1].literal == 3.25


def test_string_has_no_escapes():
    tokens = tokenize('"a\\n b" "c"')
    assert tokens[0] == Token(STRING, 'a\\n b')
    assert tokens[1] == Token(STRING, 'c')


def test_unterminated_string():
    with pytest.raises(LexError) as excinfo:
        tokenize('x = "never closed')
    assert 'unterminated string' in str(excinfo.value)
    assert excinfo.value.line == 1
    assert excinfo.value.column == 5


def test_keywords_identifiers_and_return():
    tokens = tokenize('print while function push pop length join true false if else return returned _x1')
    assert [t.kind for t in tokens[:11]] == [KEYWORD] * 11
    assert tokens[11] == Token(RETURN, 'return')
    assert tokens[12] == Token(IDENTIFIER, 'returned')
    assert tokens[13] == Token(IDENTIFIER, '_x1')


def test_two_character_comparisons():
    tokens = tokenize('a == b != c <= d >= e < f > g = h')
    ops = [(t.kind, t.literal) for t in tokens if t.kind not in (IDENTIFIER, END)]
    assert ops == [
        (EQUALS, '=='), (EQUALS, '!='), (EQUALS, '<='), (EQUALS, '>='),
        (OPERATOR, '<'), (OPERATOR, '>'), (ASSIGN, '='),
    ]


def test_punctuation():
    assert kinds('f(a, b){ arr[0]; arr.push(1) ^ 2 }') == [
        IDENTIFIER, LPAREN, IDENTIFIER, COMMA, IDENTIFIER, RPAREN, LBRACE,
        IDENTIFIER, LBRACKET, NUMBER, RBRACKET, SEMICOLON,
        IDENTIFIER, DOT, KEYWORD, LPAREN, NUMBER, RPAREN, POWER, NUMBER,
        RBRACE, END,
    ]


def test_unknown_characters_are_skipped():
    assert tokenize('x @= 1 # ! $') == tokenize('x = 1')


def test_positions():
    tokens = tokenize('x = 1\n  print(x)')
    assert (tokens[3].line, tokens[3].column) == (2, 3)
    assert tokens[-1].kind == END


def test_single_end_token():
    tokens = tokenize('a b c')
    assert [t.kind for t in tokens].count(END) == 1
    assert tokens[-1].literal is None

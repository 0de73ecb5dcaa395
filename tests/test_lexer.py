import pytest

from nscript.ast import Position, Number, String, Identifier, NoneValue, Operator, Eof, Bad
from nscript.errors import NScriptError
from nscript.lexer import Lexer, tokenize


def test_tokens_and_positions():
    tokens = tokenize("x = 12.5 + 'a\\'b'")
    assert tokens == [
        Identifier('x', Position(0, 1)),
        Operator('=', Position(2, 3)),
        Number(12.5, Position(4, 8)),
        Operator('+', Position(9, 10)),
        String("a'b", Position(11, 17)),
        Eof(Position(17, 17)),
    ]


def test_operators():
    kinds = [t.text for t in tokenize('+-*/(),=')[:-1]]
    assert kinds == ['+', '-', '*', '/', '(', ')', ',', '=']


def test_eof_is_repeated_forever():
    lexer = Lexer('  ')
    assert lexer.next_token() == Eof(Position(2, 2))
    assert lexer.next_token() == Eof(Position(2, 2))


def test_none_keyword_is_exact():
    assert tokenize('none nonex None') == [
        NoneValue(Position(0, 4)),
        Identifier('nonex', Position(5, 10)),
        Identifier('None', Position(11, 15)),
        Eof(Position(15, 15)),
    ]


def test_identifiers_with_digits_and_underscores():
    assert tokenize('_a1b2')[0] == Identifier('_a1b2', Position(0, 5))


def test_bad_character():
    assert tokenize('$') == [Bad('$', Position(0, 1)), Eof(Position(1, 1))]


def test_leading_dot_number():
    assert tokenize('.5')[0] == Number(0.5, Position(0, 2))


def test_lone_dot_is_bad():
    assert tokenize('.')[0] == Bad('.', Position(0, 1))


def test_number_with_two_dots():
    with pytest.raises(NScriptError) as exc:
        tokenize('1.2.3')
    assert exc.value.name == 'NumberFormatError'
    assert exc.value.pos == Position(0, 5)


def test_number_glued_to_identifier():
    with pytest.raises(NScriptError) as exc:
        tokenize('123abc')
    assert exc.value.name == 'NumberFormatError'
    assert exc.value.pos == Position(0, 4)
    assert 'part of identifier' in exc.value.message


def test_number_with_trailing_dot_suggests_correction():
    with pytest.raises(NScriptError) as exc:
        tokenize('2.')
    assert exc.value.name == 'NumberFormatError'
    assert exc.value.message == 'number cannot end with a dot (correction: `2`)'


def test_number_too_large_for_a_float():
    with pytest.raises(NScriptError) as exc:
        tokenize('x = ' + '9' * 400)
    assert exc.value.name == 'NumberFormatError'
    assert exc.value.message == 'number is too large'
    assert exc.value.pos == Position(4, 404)


def test_largest_literals_stay_finite():
    token = tokenize('9' * 300)[0]
    assert isinstance(token, Number)
    assert token.value == float('9' * 300)


def test_unclosed_string():
    with pytest.raises(NScriptError) as exc:
        tokenize("'abc")
    assert exc.value.name == 'LexError'
    assert exc.value.message == 'unclosed string'


def test_even_backslashes_close_the_string():
    # source text: 'a\\'
    assert tokenize("'a\\\\'")[0] == String('a\\', Position(0, 5))


def test_odd_backslashes_escape_the_quote():
    # source text: 'a\\\'
    with pytest.raises(NScriptError) as exc:
        tokenize("'a\\\\\\'")
    assert exc.value.message == 'unclosed string'


def test_unknown_escape_is_positioned():
    with pytest.raises(NScriptError) as exc:
        tokenize("'x\\q'")
    assert exc.value.name == 'LexError'
    assert exc.value.pos == Position(2, 4)


def test_lexer_is_lazy():
    lexer = Lexer('1 + 2.')
    assert lexer.next_token() == Number(1.0, Position(0, 1))
    assert lexer.next_token() == Operator('+', Position(2, 3))
    with pytest.raises(NScriptError):
        lexer.next_token()

import pytest

from nscript.ast import Position, Number, String, Identifier, NoneValue, Operator, Eof, Bad
from nscript.errors import NScriptError
from nscript.escapes import decode_escapes, encode_escapes
from nscript.parser import parse
from nscript.types import ErrorVal, format_number, to_string, type_name

P = Position(0, 0)


def test_decode_escapes():
    assert decode_escapes("a\\nb\\tc\\\\d\\'e\\r\\0") == "a\nb\tc\\d'e\r\0"


def test_encode_is_inverse_of_decode():
    for text in ["a\\nb", "\\\\\\'", "plain", "", "\\t\\r\\0"]:
        assert encode_escapes(decode_escapes(text)) == text
    for value in ["it's", "back\\slash", "line\nbreak\ttab", "\0"]:
        assert decode_escapes(encode_escapes(value)) == value


def test_unknown_escape():
    with pytest.raises(NScriptError) as exc:
        decode_escapes('ab\\x', offset=10)
    assert exc.value.name == 'LexError'
    assert exc.value.pos == Position(12, 14)


def test_format_number_strips_zeros():
    assert format_number(3.0) == '3'
    assert format_number(3.5) == '3.5'
    assert format_number(-0.25) == '-0.25'
    assert format_number(1e20) == '100000000000000000000'
    assert format_number(1e-7) == '0.0000001'
    assert format_number(float('inf')) == 'inf'


def test_number_rendering_is_idempotent():
    for value in [3.0, 3.5, 0.1, 2 / 3, 1e20, 1e-7, 123456789.125]:
        text = format_number(value)
        reparsed = parse(text)
        assert reparsed.value == value
        assert format_number(reparsed.value) == text


def test_to_string_of_tokens():
    assert to_string(Number(2.5, P)) == '2.5'
    assert to_string(String("it's", P)) == "'it\\'s'"
    assert to_string(Identifier('abc', P)) == 'abc'
    assert to_string(NoneValue(P)) == 'none'
    assert to_string(Operator('=', P)) == '='
    assert to_string(Bad('#', P)) == '#'
    assert to_string(Eof(P)) == '<eof>'


def test_to_string_of_tree():
    assert to_string(parse("x = floor(-1.50, 'a') * 2")) == "x = floor(-1.5, 'a') * 2"


def test_type_names():
    assert type_name(Number(1.0, P)) == 'Number'
    assert type_name(NoneValue(P)) == 'None'
    assert type_name(Operator('+', P)) == '+'


def test_error_message_fragments():
    err = ErrorVal.of('ArgCountError', P, 'expected args ', 1, ' (found ', 2, ')')
    assert err.message == 'expected args 1 (found 2)'


def test_error_render_underlines_span():
    err = NScriptError(ErrorVal('RuntimeError', 'dividing by 0', Position(4, 5)))
    assert err.render('1 / 0') == 'RuntimeError: dividing by 0\n1 / 0\n    ^'
    assert str(err) == 'RuntimeError: dividing by 0'


def test_error_render_at_end_of_input():
    err = NScriptError(ErrorVal('ParseError', 'unexpected token (found `<eof>`)', Position(3, 3)))
    assert err.render('1 +') == 'ParseError: unexpected token (found `<eof>`)\n1 +\n   ^'

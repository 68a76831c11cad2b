"""
Error message, location and diagnostic rendering tests.
"""

import pytest

import rawjson
from rawjson import ValueKind


def test_messages() -> None:
    assert (
        str(rawjson.UnexpectedEndOfInput(None, 0))
        == "Unexpected end of input at position 0"
    )
    assert (
        str(rawjson.UnexpectedEndOfInput(ValueKind.NULL, 3))
        == "Unexpected end of input while parsing null at position 3"
    )
    assert (
        str(rawjson.UnexpectedCharacter(ValueKind.STRING, 5))
        == "Unexpected character while parsing string at position 5"
    )
    assert (
        str(rawjson.UnexpectedTrailingCharacter(ValueKind.ARRAY, 5))
        == "Unexpected trailing character after array at position 5"
    )


def test_invalid_value_message_and_cause() -> None:
    value = rawjson.parse('{"a": "x"}').value().to_member("a").required()
    error = value.invalid("bad value")

    assert isinstance(error.cause, ValueError)
    assert str(error) == "Invalid value (string): bad value at position 6"
    assert error.kind is ValueKind.STRING
    assert error.position == 6

    wrapped = value.invalid(OverflowError("too big"))
    assert isinstance(wrapped.cause, OverflowError)


def test_hierarchy() -> None:
    for error_type in (
        rawjson.UnexpectedEndOfInput,
        rawjson.UnexpectedCharacter,
        rawjson.UnexpectedTrailingCharacter,
        rawjson.InvalidValue,
    ):
        assert issubclass(error_type, rawjson.JsonParseError)
    assert issubclass(rawjson.JsonParseError, ValueError)


def test_negative_position_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        rawjson.UnexpectedCharacter(None, -1)


def test_conversion_errors_are_chained() -> None:
    with pytest.raises(rawjson.InvalidValue) as exc_info:
        rawjson.loads("300", rawjson.UInt8)
    assert isinstance(exc_info.value.__cause__, OverflowError)
    assert exc_info.value.cause is exc_info.value.__cause__


def test_render() -> None:
    text = '{\n  "a": [1, 2,, 3]\n}'
    with pytest.raises(rawjson.UnexpectedCharacter) as exc_info:
        rawjson.parse(text)

    err = exc_info.value
    assert err.line_and_column(text) == (2, 14)
    assert err.line_text(text) == '  "a": [1, 2,, 3]'
    assert err.render(text).splitlines() == [
        "Unexpected character while parsing array at position 15",
        "  --> line 2, column 14",
        '   |   "a": [1, 2,, 3]',
        "   | " + " " * 13 + "^",
    ]


def test_render_at_end_of_input() -> None:
    text = "[1,\n"
    with pytest.raises(rawjson.UnexpectedEndOfInput) as exc_info:
        rawjson.parse(text)
    err = exc_info.value
    assert err.line_and_column(text) == (2, 1)
    assert err.render(text).splitlines()[-1] == "   | ^"


def test_render_with_other_text() -> None:
    err = rawjson.UnexpectedCharacter(None, 10)
    assert err.line_and_column("short") is None
    assert err.render("short") == str(err)


def test_byte_position() -> None:
    text = '["日本", x]'
    with pytest.raises(rawjson.UnexpectedCharacter) as exc_info:
        rawjson.parse(text)
    err = exc_info.value
    assert err.position == 7
    assert err.byte_position(text) == text.encode("utf-8").index(b"x")

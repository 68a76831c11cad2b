"""
Syntactic categories of JSON values.

The kind of a value is decided by its leading character alone; numbers are
split into integers and floats purely by lexical shape.
"""

from enum import Enum


class ValueKind(Enum):
    """
    Closed set of the seven JSON value kinds.

    Member values double as the display names used in error messages.
    """

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def from_leading_char(cls, char: str) -> "ValueKind | None":
        """Returns the kind a value starting with `char` must have."""
        return _LEADING_CHARS.get(char)

    def is_null(self) -> bool:
        return self is ValueKind.NULL

    def is_boolean(self) -> bool:
        return self is ValueKind.BOOLEAN

    def is_integer(self) -> bool:
        return self is ValueKind.INTEGER

    def is_float(self) -> bool:
        return self is ValueKind.FLOAT

    def is_number(self) -> bool:
        return self is ValueKind.INTEGER or self is ValueKind.FLOAT

    def is_string(self) -> bool:
        return self is ValueKind.STRING

    def is_array(self) -> bool:
        return self is ValueKind.ARRAY

    def is_object(self) -> bool:
        return self is ValueKind.OBJECT

    def is_container(self) -> bool:
        return self is ValueKind.ARRAY or self is ValueKind.OBJECT


# Minus and digits dispatch to INTEGER; the scanner upgrades to FLOAT once a
# fraction or exponent shows up.
_LEADING_CHARS: dict[str, ValueKind] = {
    "n": ValueKind.NULL,
    "t": ValueKind.BOOLEAN,
    "f": ValueKind.BOOLEAN,
    '"': ValueKind.STRING,
    "[": ValueKind.ARRAY,
    "{": ValueKind.OBJECT,
    "-": ValueKind.INTEGER,
    **{digit: ValueKind.INTEGER for digit in "0123456789"},
}

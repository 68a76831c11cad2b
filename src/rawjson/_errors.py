"""
Positioned parse and conversion errors.

Every error carries the offset of the first offending character and, where
known, the kind of value being parsed. Line and column information is
derived on demand from the original text rather than stored, so an error
never pins the text it came from.
"""

from typing import TYPE_CHECKING
from typing import TypeAlias

from ._kind import ValueKind
from ._utf8_mapper import utf8_length

if TYPE_CHECKING:
    from ._document import ValueHandle

Position: TypeAlias = int


def line_and_column(text: str, position: Position) -> tuple[int, int] | None:
    """
    Returns the 1-based (line, column) of `position` within `text`.

    Columns count characters, not display cells. A position equal to the
    text length addresses the end of the last line; anything beyond it has
    no line and yields None.
    """
    if position < 0 or position > len(text):
        return None
    line = text.count("\n", 0, position) + 1
    column = position - text.rfind("\n", 0, position)
    return line, column


def line_text(text: str, position: Position) -> str | None:
    """Returns the full source line containing `position`, without newline."""
    if position < 0 or position > len(text):
        return None
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    if end == -1:
        end = len(text)
    return text[start:end]


class JsonParseError(ValueError):
    """
    Base class for every failure reported by the parser or by conversions.

    Structural errors (end of input, stray characters) abort a parse;
    value errors are raised by conversions on an already parsed document.
    """

    description = "JSON parse error"

    def __init__(self, kind: ValueKind | None, position: Position) -> None:
        if not isinstance(position, int) or position < 0:
            raise ValueError("position must be a non-negative integer")
        self.kind = kind
        self.position = position
        super().__init__(f"{self.describe()} at position {position}")

    def describe(self) -> str:
        if self.kind is None:
            return self.description
        return f"{self.description} while parsing {self.kind.value}"

    def line_and_column(self, text: str) -> tuple[int, int] | None:
        return line_and_column(text, self.position)

    def line_text(self, text: str) -> str | None:
        return line_text(text, self.position)

    def byte_position(self, text: str) -> int:
        """Returns the UTF-8 byte offset of this error within `text`."""
        return utf8_length(text[: self.position])

    def render(self, text: str) -> str:
        """
        Formats a diagnostic pointing at the offending character.

        The result holds the message, the line and column, the source line
        and a caret under the reported column.
        """
        location = self.line_and_column(text)
        source_line = self.line_text(text)
        if location is None or source_line is None:
            return str(self)
        line, column = location
        return "\n".join(
            [
                str(self),
                f"  --> line {line}, column {column}",
                f"   | {source_line}",
                f"   | {' ' * (column - 1)}^",
            ]
        )

    def __reduce__(self) -> tuple[type, tuple[ValueKind | None, int]]:
        return type(self), (self.kind, self.position)


class UnexpectedEndOfInput(JsonParseError):
    """The text ended before the current value was complete."""

    description = "Unexpected end of input"


class UnexpectedTrailingCharacter(JsonParseError):
    """Non-whitespace content follows the complete root value."""

    description = "Unexpected trailing character"

    def __init__(self, kind: ValueKind, position: Position) -> None:
        super().__init__(kind, position)

    def describe(self) -> str:
        assert self.kind is not None
        return f"{self.description} after {self.kind.value}"


class UnexpectedCharacter(JsonParseError):
    """A character that the grammar does not allow at this point."""

    description = "Unexpected character"


class InvalidValue(JsonParseError):
    """
    Syntactically valid JSON that fails an application expectation.

    Raised by kind checks, arity checks, missing required members and
    numeric or string payloads the target type refuses. `cause` is the
    underlying exception; plain messages are wrapped in ValueError.
    """

    description = "Invalid value"

    def __init__(
        self,
        kind: ValueKind,
        position: Position,
        cause: BaseException | str,
    ) -> None:
        if isinstance(cause, str):
            cause = ValueError(cause)
        self.cause = cause
        super().__init__(kind, position)

    @classmethod
    def at(
        cls, value: "ValueHandle", cause: BaseException | str
    ) -> "InvalidValue":
        """Builds an error positioned at `value`."""
        return cls(value.kind, value.position, cause)

    def describe(self) -> str:
        assert self.kind is not None
        return f"{self.description} ({self.kind.value}): {self.cause}"

    def __reduce__(  # type: ignore[override]
        self,
    ) -> tuple[type, tuple[ValueKind, int, BaseException]]:
        assert self.kind is not None
        return type(self), (self.kind, self.position, self.cause)

"""
Strategies for skipping insignificant input between tokens.

The scanner calls `skip` at every point where whitespace may appear. The
strict policy accepts whitespace only; the JSONC policy also consumes
comments, records where they were, and lets a single trailing comma close a
container.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from typing import Protocol
from typing import TypeAlias

from ._profile import profiled


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open `[start, end)` span of the source text."""

    start: int
    end: int

    def __contains__(self, position: object) -> bool:
        return isinstance(position, int) and self.start <= position < self.end

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


CommentRange: TypeAlias = TextRange

WHITESPACE = re.compile(r"[ \t\r\n]*")


def skip_whitespace(text: str, position: int) -> int:
    match = WHITESPACE.match(text, position)
    assert match is not None
    return match.end()


class CommentPolicy(Protocol):
    """Skips whitespace (and possibly comments) between tokens."""

    allows_trailing_separator: bool

    @property
    def comments(self) -> Sequence[TextRange]:
        """Comment ranges skipped so far, in source order."""
        ...

    def skip(self, text: str, position: int) -> int | None:
        """
        Returns the next significant position at or after `position`.

        None means the input ended inside something that had to be closed,
        such as a block comment.
        """
        ...


class StrictPolicy:
    """Plain JSON: whitespace only, no trailing commas."""

    allows_trailing_separator = False

    @property
    def comments(self) -> Sequence[TextRange]:
        return ()

    def skip(self, text: str, position: int) -> int | None:
        return skip_whitespace(text, position)


@dataclass
class JsoncPolicy:
    """
    JSON with comments.

    Accepts `// ...` line comments and `/* ... */` block comments wherever
    whitespace is allowed. Comment ranges are appended to `comments` in the
    order they are found.
    """

    allows_trailing_separator: bool = True
    allow_comments: bool = True
    comments: list[TextRange] = field(default_factory=list)

    @profiled
    def skip(self, text: str, position: int) -> int | None:
        position = skip_whitespace(text, position)
        if not self.allow_comments:
            return position

        while text.startswith("/", position):
            start = position
            if text.startswith("//", position):
                newline = text.find("\n", position + 2)
                position = len(text) if newline == -1 else newline
            elif text.startswith("/*", position):
                close = text.find("*/", position + 2)
                if close == -1:
                    return None
                position = close + 2
            else:
                break
            self.comments.append(TextRange(start, position))
            position = skip_whitespace(text, position)
        return position

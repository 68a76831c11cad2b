"""
Single-pass JSON indexer.

Walks the text once, left to right, and records one `ValueEntry` per value
in pre-order. Containers get a placeholder entry before their children are
scanned; once the closing bracket is found the placeholder's end offset and
`subtree_end` are patched. No value is decoded here: numbers and strings are
only validated and classified, leaving conversion to the extraction layer.
"""

import logging
import re
from dataclasses import dataclass

from ._comments import CommentPolicy
from ._comments import JsoncPolicy
from ._comments import StrictPolicy
from ._comments import TextRange
from ._document import ParsedDocument
from ._errors import JsonParseError
from ._errors import UnexpectedCharacter
from ._errors import UnexpectedEndOfInput
from ._errors import UnexpectedTrailingCharacter
from ._kind import ValueKind
from ._profile import ProfileContext
from ._profile import profiled
from ._strings import HEX_DIGITS
from ._strings import UNESCAPES
from ._strings import is_scalar_code_point

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]*")
# Runs of characters that need no attention inside a string.
_STRING_CHUNK = re.compile(r'[^"\\\x00-\x1f]*')

_CLOSERS = {ValueKind.ARRAY: "]", ValueKind.OBJECT: "}"}


@dataclass(slots=True)
class ValueEntry:
    """
    Index record of one parsed value.

    `start`/`end` delimit the value in the source text, quotes and brackets
    included. `subtree_end` is the index one past the value's last
    descendant, so a cursor can skip the whole subtree in one step.
    """

    kind: ValueKind
    escaped: bool
    start: int
    end: int
    subtree_end: int

    @property
    def text_range(self) -> TextRange:
        return TextRange(self.start, self.end)


@dataclass(frozen=True)
class ParseConfig:
    """
    Selects the dialect accepted by the indexer.

    The default is strict JSON. Enabling either flag switches to the JSONC
    policy, configured per flag.
    """

    allow_comments: bool = False
    allow_trailing_commas: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.allow_comments, bool):
            raise TypeError("allow_comments must be a boolean")
        if not isinstance(self.allow_trailing_commas, bool):
            raise TypeError("allow_trailing_commas must be a boolean")

    @classmethod
    def jsonc(cls) -> "ParseConfig":
        return cls(allow_comments=True, allow_trailing_commas=True)

    def make_policy(self) -> CommentPolicy:
        """Returns a fresh policy; JSONC policies collect comment ranges."""
        if self.allow_comments or self.allow_trailing_commas:
            return JsoncPolicy(
                allows_trailing_separator=self.allow_trailing_commas,
                allow_comments=self.allow_comments,
            )
        return StrictPolicy()


class JsonIndexer:
    """
    Scans one text into a flat list of value entries.

    Nesting is tracked with an explicit stack of open container indices
    rather than recursion, so depth is bounded by memory alone. `kind`
    always names the innermost construct being scanned and is attached to
    any error raised.
    """

    def __init__(self, text: str, policy: CommentPolicy) -> None:
        self.text = text
        self.length = len(text)
        self.policy = policy
        self.entries: list[ValueEntry] = []
        self.kind: ValueKind | None = None
        self.trailing_separators = 0

    def parse(self) -> list[ValueEntry]:
        """Indexes the whole text or raises the first error found."""
        with ProfileContext("JsonIndexer.parse", self.length):
            position = self._scan_document()
            position = self._skip(position)
            if position < self.length:
                raise UnexpectedTrailingCharacter(
                    self.entries[0].kind, position
                )
        return self.entries

    def _scan_document(self) -> int:
        text = self.text
        open_containers: list[int] = []
        position = 0

        while True:
            # A value must start here.
            position = self._skip(position)
            char = text[position : position + 1]
            if char == "[" or char == "{":
                position, opened = self._open_container(
                    position, char, open_containers
                )
                if opened:
                    continue
            else:
                position = self._scan_scalar(position, char)

            # The value is complete; close containers until another value
            # is due or the root is done.
            while open_containers:
                index = open_containers[-1]
                kind = self.entries[index].kind
                closer = _CLOSERS[kind]
                self.kind = kind

                comment_count = len(self.policy.comments)
                position = self._skip(position)
                commented = len(self.policy.comments) > comment_count
                if text.startswith(closer, position):
                    position += 1
                    self._finish_container(index, position)
                    open_containers.pop()
                    continue

                separator = position
                position = self._expect(position, ",")
                position = self._skip(position)
                if self.policy.allows_trailing_separator and text.startswith(
                    closer, position
                ):
                    # No comment between the last value and a trailing comma.
                    if commented:
                        raise UnexpectedCharacter(kind, separator)
                    self.trailing_separators += 1
                    position += 1
                    self._finish_container(index, position)
                    open_containers.pop()
                    continue

                if kind is ValueKind.OBJECT:
                    position = self._scan_member_name(position)
                break
            else:
                return position

    def _open_container(
        self, position: int, char: str, open_containers: list[int]
    ) -> tuple[int, bool]:
        kind = ValueKind.ARRAY if char == "[" else ValueKind.OBJECT
        self.kind = kind

        inner = self._skip(position + 1)
        if self.text.startswith(_CLOSERS[kind], inner):
            self._push_entry(kind, position, inner + 1)
            return inner + 1, False

        # Placeholder; end offsets are patched by _finish_container.
        open_containers.append(self._push_entry(kind, position, inner))
        if kind is ValueKind.OBJECT:
            return self._scan_member_name(inner), True
        return inner, True

    def _scan_member_name(self, position: int) -> int:
        if not self.text.startswith('"', position):
            raise self._unexpected(position)
        position = self._scan_string(position)
        self.kind = ValueKind.OBJECT
        position = self._skip(position)
        return self._expect(position, ":")

    def _scan_scalar(self, position: int, char: str) -> int:
        if char == '"':
            return self._scan_string(position)
        if char == "n":
            return self._scan_literal(position, ValueKind.NULL, "null")
        if char == "t":
            return self._scan_literal(position, ValueKind.BOOLEAN, "true")
        if char == "f":
            return self._scan_literal(position, ValueKind.BOOLEAN, "false")
        if ValueKind.from_leading_char(char) is ValueKind.INTEGER:
            return self._scan_number(position)
        raise self._unexpected(position)

    def _scan_literal(
        self, position: int, kind: ValueKind, literal: str
    ) -> int:
        self.kind = kind
        end = position + len(literal)
        if self.text.startswith(literal, position):
            self._push_entry(kind, position, end)
            return end

        for offset in range(1, len(literal)):
            current = position + offset
            if current >= self.length:
                break
            if self.text[current] != literal[offset]:
                raise UnexpectedCharacter(kind, current)
        raise self._end_of_input()

    @profiled
    def _scan_number(self, position: int) -> int:
        """number = ["-"] int ["." 1*DIGIT] [("e"|"E") ["-"|"+"] 1*DIGIT]"""
        text = self.text
        self.kind = ValueKind.INTEGER
        start = position

        if text.startswith("-", position):
            position += 1
        if text.startswith("0", position):
            position += 1
        else:
            position = self._scan_digits(position)

        if text.startswith(".", position):
            self.kind = ValueKind.FLOAT
            position = self._scan_digits(position + 1)

        if text[position : position + 1] in ("e", "E"):
            self.kind = ValueKind.FLOAT
            position += 1
            if text[position : position + 1] in ("-", "+"):
                position += 1
            position = self._scan_digits(position)

        self._push_entry(self.kind, start, position)
        return position

    def _scan_digits(self, position: int) -> int:
        match = _DIGITS.match(self.text, position)
        assert match is not None
        end = match.end()
        if end == position:
            raise self._unexpected(position)
        return end

    @profiled
    def _scan_string(self, position: int) -> int:
        text = self.text
        self.kind = ValueKind.STRING
        start = position
        escaped = False
        position += 1

        while True:
            chunk = _STRING_CHUNK.match(text, position)
            assert chunk is not None
            position = chunk.end()
            if position >= self.length:
                raise self._end_of_input()
            char = text[position]
            if char == '"':
                break
            if char != "\\":
                # Unescaped control character.
                raise UnexpectedCharacter(ValueKind.STRING, position)

            escaped = True
            position += 1
            if position >= self.length:
                raise self._end_of_input()
            letter = text[position]
            if letter in UNESCAPES:
                position += 1
                continue
            if letter != "u":
                raise UnexpectedCharacter(ValueKind.STRING, position)

            position += 1
            code = text[position : position + 4]
            if len(code) < 4:
                raise self._end_of_input()
            if not (
                all(digit in HEX_DIGITS for digit in code)
                and is_scalar_code_point(int(code, 16))
            ):
                raise UnexpectedCharacter(ValueKind.STRING, position)
            position += 4

        end = position + 1
        self._push_entry(ValueKind.STRING, start, end, escaped)
        return end

    def _skip(self, position: int) -> int:
        skipped = self.policy.skip(self.text, position)
        if skipped is None:
            raise self._end_of_input()
        return skipped

    def _expect(self, position: int, char: str) -> int:
        if self.text.startswith(char, position):
            return position + 1
        raise self._unexpected(position)

    def _push_entry(
        self, kind: ValueKind, start: int, end: int, escaped: bool = False
    ) -> int:
        index = len(self.entries)
        self.entries.append(ValueEntry(kind, escaped, start, end, index + 1))
        return index

    def _finish_container(self, index: int, end: int) -> None:
        entry = self.entries[index]
        entry.end = end
        entry.subtree_end = len(self.entries)

    def _unexpected(self, position: int) -> JsonParseError:
        if position >= self.length:
            return self._end_of_input()
        return UnexpectedCharacter(self.kind, position)

    def _end_of_input(self) -> UnexpectedEndOfInput:
        return UnexpectedEndOfInput(self.kind, self.length)


def _check_text(text: object) -> None:
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON text must be str, not {type(text).__name__}"
        )


def parse_with(
    text: str, config: ParseConfig
) -> tuple[ParsedDocument, list[TextRange]]:
    """
    Indexes `text` in the dialect described by `config`.

    Returns the document and the comment ranges found, in order. Any syntax
    error aborts the whole parse.
    """
    _check_text(text)
    policy = config.make_policy()
    indexer = JsonIndexer(text, policy)
    entries = indexer.parse()
    comments = list(policy.comments)
    strict = not comments and not indexer.trailing_separators
    logger.debug(
        "indexed %d values and %d comments from %d characters",
        len(entries),
        len(comments),
        len(text),
    )
    return ParsedDocument(text, entries, strict=strict), comments


def parse(text: str) -> ParsedDocument:
    """Validates and indexes strict JSON text."""
    document, _ = parse_with(text, ParseConfig())
    return document


def parse_jsonc(text: str) -> tuple[ParsedDocument, list[TextRange]]:
    """Validates and indexes JSON with comments and trailing commas."""
    return parse_with(text, ParseConfig.jsonc())

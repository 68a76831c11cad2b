"""
Parsed documents and lightweight handles onto their values.

A `ParsedDocument` owns the text and the flat, pre-order list of value
entries produced by the indexer. A `ValueHandle` is just the document plus
an entry index; every navigation step is an index computation, and text is
only sliced out when a caller asks for it.
"""

from collections.abc import Iterator
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property
from functools import total_ordering
from typing import TYPE_CHECKING
from typing import Any

from ._comments import TextRange
from ._errors import InvalidValue
from ._extract import convert
from ._kind import ValueKind
from ._strings import Borrowed
from ._strings import Owned
from ._strings import Unquoted
from ._strings import unescape
from ._utf8_mapper import Utf8OffsetMapper

if TYPE_CHECKING:
    from ._parser import ValueEntry


@total_ordering
class ParsedDocument:
    """
    A validated JSON text together with its value index.

    Entry 0 is the root value. Documents compare, order and hash by their
    text alone. `strict` marks text that is plain JSON, with no comments
    and no trailing commas.
    """

    def __init__(
        self,
        text: str,
        entries: Sequence["ValueEntry"],
        *,
        strict: bool = False,
    ) -> None:
        if not entries:
            raise ValueError("a parsed document holds at least one value")
        self._text = text
        self._entries = tuple(entries)
        self._strict = strict

    @property
    def text(self) -> str:
        return self._text

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def entries(self) -> tuple["ValueEntry", ...]:
        return self._entries

    @property
    def kind(self) -> ValueKind:
        return self._entries[0].kind

    def entry(self, index: int) -> "ValueEntry":
        return self._entries[index]

    def handle(self, index: int) -> "ValueHandle":
        if not 0 <= index < len(self._entries):
            raise IndexError(f"no value with index {index}")
        return ValueHandle(self, index)

    def value(self) -> "ValueHandle":
        """Returns a handle to the root value."""
        return ValueHandle(self, 0)

    def get_value_by_position(self, position: int) -> "ValueHandle | None":
        """
        Returns the innermost value whose text range contains `position`.

        `position` is an offset into `text`, counted in characters. Callers
        holding a UTF-8 byte offset should use `get_value_by_byte_offset`.

        Object keys are values too, so a position inside a key yields the
        key's string handle. Positions in whitespace between children
        resolve to the enclosing container; positions outside the root's
        range yield None.
        """
        value = self.value()
        if position not in value.text_range:
            return None
        while True:
            for child in value.children():
                if position in child.text_range:
                    value = child
                    break
            else:
                return value

    @cached_property
    def _offset_mapper(self) -> Utf8OffsetMapper:
        return Utf8OffsetMapper(self._text)

    def to_byte_offset(self, position: int) -> int:
        """Converts a text position to a UTF-8 byte offset."""
        return self._offset_mapper.char_to_byte(position)

    def from_byte_offset(self, offset: int) -> int:
        """Converts a UTF-8 byte offset to a text position."""
        return self._offset_mapper.byte_to_char(offset)

    def get_value_by_byte_offset(self, offset: int) -> "ValueHandle | None":
        if not 0 <= offset < self._offset_mapper.byte_length:
            return None
        return self.get_value_by_position(self.from_byte_offset(offset))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedDocument):
            return NotImplemented
        return self._text == other._text

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ParsedDocument):
            return NotImplemented
        return self._text < other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"ParsedDocument({_abbreviate(self._text)!r})"


def _abbreviate(text: str, limit: int = 40) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


@dataclass(frozen=True, slots=True, repr=False)
class ValueHandle:
    """
    Reference to one value of a parsed document.

    Handles are cheap to create and copy. Two handles are equal when they
    point at the same index of equal documents.
    """

    document: ParsedDocument
    index: int

    @property
    def _entry(self) -> "ValueEntry":
        return self.document.entry(self.index)

    @property
    def kind(self) -> ValueKind:
        return self._entry.kind

    @property
    def position(self) -> int:
        return self._entry.start

    @property
    def text_range(self) -> TextRange:
        return self._entry.text_range

    @property
    def escaped(self) -> bool:
        """True for strings containing at least one backslash escape."""
        return self._entry.escaped

    @property
    def raw_text(self) -> str:
        entry = self._entry
        return self.document.text[entry.start : entry.end]

    def __str__(self) -> str:
        return self.raw_text

    def __repr__(self) -> str:
        return (
            f"ValueHandle({self.kind.value} at {self.position}: "
            f"{_abbreviate(self.raw_text)!r})"
        )

    def invalid(self, cause: BaseException | str) -> InvalidValue:
        """Builds an InvalidValue positioned at this value."""
        return InvalidValue.at(self, cause)

    def expect(self, *kinds: ValueKind) -> "ValueHandle":
        """Returns self if this value has one of `kinds`, else raises."""
        if self.kind in kinds:
            return self
        expected = " or ".join(kind.value for kind in kinds)
        raise self.invalid(f"expected {expected}, but found {self.kind.value}")

    # Navigation

    def children(self) -> Iterator["ValueHandle"]:
        """
        Iterates over the direct children in source order.

        Object keys and values alternate. Scalars have no children.
        """
        return _Children(self)

    def members(self) -> Iterator[tuple["ValueHandle", "ValueHandle"]]:
        """Iterates over the (key, value) pairs of an object."""
        return _Members(self.expect(ValueKind.OBJECT))

    def to_array(self) -> Iterator["ValueHandle"]:
        return _Children(self.expect(ValueKind.ARRAY))

    def to_object(self) -> Iterator[tuple["ValueHandle", "ValueHandle"]]:
        return _Members(self.expect(ValueKind.OBJECT))

    def to_fixed_array(self, length: int) -> tuple["ValueHandle", ...]:
        """Returns the elements of an array that must hold exactly `length`."""
        elements = self.to_array()
        fixed = []
        for count in range(length):
            element = next(elements, None)
            if element is None:
                raise self.invalid(
                    f"expected an array with {length} elements, "
                    f"but got only {count} elements"
                )
            fixed.append(element)

        extra = sum(1 for _ in elements)
        if extra:
            raise self.invalid(
                f"expected an array with {length} elements, "
                f"but got {length + extra} elements"
            )
        return tuple(fixed)

    def to_fixed_object(
        self, required: Sequence[str], optional: Sequence[str] = ()
    ) -> tuple[
        tuple["ValueHandle", ...], tuple["ValueHandle | None", ...]
    ]:
        """
        Picks named members out of an object.

        Returns the values of `required` and `optional`, each in the order
        the names were given; absent optional members are None. Other
        members are ignored, and a repeated name resolves to its last
        occurrence. Raises InvalidValue listing every missing required name.
        """
        # A name listed twice is matched through its first slot.
        required_slots: dict[str, int] = {}
        for slot, name in enumerate(required):
            required_slots.setdefault(name, slot)
        optional_slots: dict[str, int] = {}
        for slot, name in enumerate(optional):
            optional_slots.setdefault(name, slot)
        required_values: list[ValueHandle | None] = [None] * len(required)
        optional_values: list[ValueHandle | None] = [None] * len(optional)

        for key, value in self.to_object():
            name = key.to_unquoted_string_str()
            if name in required_slots:
                required_values[required_slots[name]] = value
            elif name in optional_slots:
                optional_values[optional_slots[name]] = value

        missing = [
            name
            for name, slot in required_slots.items()
            if required_values[slot] is None
        ]
        if missing:
            raise self.invalid(
                f"missing required object members: {missing!r}"
            )
        present = tuple(
            required_values[required_slots[name]] for name in required
        )
        return present, tuple(  # type: ignore[return-value]
            optional_values[optional_slots[name]] for name in optional
        )

    def to_member(self, name: str) -> "MemberLookup":
        found = None
        for key, value in self.to_object():
            if key.to_unquoted_string_str() == name:
                found = value
        return MemberLookup(self, name, found)

    def parent(self) -> "ValueHandle | None":
        """Returns the enclosing container, or None for the root."""
        if self.index == 0:
            return None
        current = self.document.value()
        while True:
            for child in current.children():
                if child.index == self.index:
                    return current
                if child.index < self.index < child._entry.subtree_end:
                    current = child
                    break
            else:
                raise AssertionError(f"index {self.index} has no parent")

    def ancestors(self) -> Iterator["ValueHandle"]:
        """Yields the parent, its parent and so on up to the root."""
        current = self.parent()
        while current is not None:
            yield current
            current = current.parent()

    # Text

    def as_raw_str(self) -> str:
        return self.raw_text

    def as_bool_str(self) -> str:
        return self.expect(ValueKind.BOOLEAN).raw_text

    def as_integer_str(self) -> str:
        return self.expect(ValueKind.INTEGER).raw_text

    def as_float_str(self) -> str:
        return self.expect(ValueKind.FLOAT).raw_text

    def as_number_str(self) -> str:
        return self.expect(ValueKind.INTEGER, ValueKind.FLOAT).raw_text

    def unquote(self) -> Unquoted:
        """
        Returns the content of a string without its quotes.

        Content without escapes is a slice of the source text (`Borrowed`);
        escaped content is decoded into a new string (`Owned`).
        """
        entry = self.expect(ValueKind.STRING)._entry
        content = self.document.text[entry.start + 1 : entry.end - 1]
        if entry.escaped:
            return Owned(unescape(content))
        return Borrowed(content)

    def to_unquoted_string_str(self) -> str:
        return self.unquote().text

    # Conversion

    def try_to(self, target: Any) -> Any:
        """
        Converts this value to `target`.

        `target` is a type or type annotation, such as `int`,
        `list[str] | None` or a dataclass. Raises InvalidValue when the
        value does not fit.
        """
        return convert(self, target)


class _Children:
    """Iterator over the direct children of one value."""

    __slots__ = ("_document", "_end", "_next")

    def __init__(self, parent: ValueHandle) -> None:
        entry = parent.document.entry(parent.index)
        self._document = parent.document
        self._next = parent.index + 1
        self._end = entry.subtree_end

    def __iter__(self) -> "_Children":
        return self

    def __next__(self) -> ValueHandle:
        index = self._next
        if index >= self._end:
            raise StopIteration
        self._next = self._document.entry(index).subtree_end
        return ValueHandle(self._document, index)


class _Members:
    """Iterator over the (key, value) pairs of one object."""

    __slots__ = ("_children",)

    def __init__(self, parent: ValueHandle) -> None:
        self._children = _Children(parent)

    def __iter__(self) -> "_Members":
        return self

    def __next__(self) -> tuple[ValueHandle, ValueHandle]:
        key = next(self._children)
        value = next(self._children, None)
        assert value is not None, "object members come in pairs"
        return key, value


@dataclass(frozen=True, slots=True)
class MemberLookup:
    """Result of looking up one member of an object by name."""

    owner: ValueHandle
    name: str
    value: ValueHandle | None

    def required(self) -> ValueHandle:
        if self.value is None:
            raise self.owner.invalid(
                f"missing required object member: {self.name!r}"
            )
        return self.value

    def optional(self) -> ValueHandle | None:
        return self.value

    def try_to(self, target: Any) -> Any:
        return self.required().try_to(target)

    def try_to_optional(self, target: Any) -> Any:
        if self.value is None:
            return None
        return self.value.try_to(target)

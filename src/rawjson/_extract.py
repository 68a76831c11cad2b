"""
Conversion of parsed values into Python objects.

`convert` maps a value handle onto a target type or annotation. Classes
that implement `from_json_value` take precedence over every built-in rule,
which is how the numeric types in `_numbers` plug in and how applications
add their own targets.
"""

import collections
import collections.abc
import dataclasses
import decimal
import ipaddress
import math
import pathlib
import types
import typing
import uuid
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol
from typing import Self
from typing import runtime_checkable

from ._errors import JsonParseError
from ._kind import ValueKind

if TYPE_CHECKING:
    from ._document import ValueHandle


@runtime_checkable
class FromJsonValue(Protocol):
    """A type that can be built from a parsed JSON value."""

    @classmethod
    def from_json_value(cls, value: "ValueHandle") -> Self: ...


# Types built by calling them with the unquoted string content.
_STRING_ENCODED_TYPES: tuple[type, ...] = (
    pathlib.PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
    uuid.UUID,
)

_SEQUENCE_ORIGINS = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    collections.deque: collections.deque,
    set: set,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
}

_MAPPING_ORIGINS = {
    dict: dict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.OrderedDict: collections.OrderedDict,
}

_ANY_TYPES = (Any, object)


def convert(value: "ValueHandle", target: Any) -> Any:
    """
    Converts `value` to `target`.

    Raises InvalidValue when the value does not fit the target and
    TypeError when the target itself is not supported.
    """
    if target in _ANY_TYPES:
        return to_python(value)
    if target is None or target is types.NoneType:
        return _convert_null(value)

    origin = typing.get_origin(target)
    if origin is None:
        return _convert_plain(value, target)

    args = typing.get_args(target)
    if origin is typing.Union or origin is types.UnionType:
        return _convert_union(value, args)
    if origin is typing.Annotated:
        return convert(value, args[0])
    if origin is tuple:
        return _convert_tuple(value, args)
    if origin in _SEQUENCE_ORIGINS:
        (item_type,) = args
        factory = _SEQUENCE_ORIGINS[origin]
        return factory(convert(item, item_type) for item in value.to_array())
    if origin in _MAPPING_ORIGINS:
        key_type, value_type = args
        factory = _MAPPING_ORIGINS[origin]
        return factory(
            (_convert_key(key, key_type), convert(member, value_type))
            for key, member in value.to_object()
        )
    raise TypeError(f"cannot convert JSON values to {target!r}")


def _convert_plain(value: "ValueHandle", target: Any) -> Any:
    if isinstance(target, FromJsonValue):
        return target.from_json_value(value)
    if target is bool:
        return _convert_bool(value)
    if target is int:
        return _parse_number(value, value.as_integer_str(), int)
    if target is float:
        return _convert_float(value)
    if target is decimal.Decimal:
        return _parse_number(value, value.as_number_str(), decimal.Decimal)
    if target is str:
        return value.to_unquoted_string_str()
    if isinstance(target, type):
        if issubclass(target, _STRING_ENCODED_TYPES):
            return _parse_string(value, target)
        if dataclasses.is_dataclass(target):
            return _convert_dataclass(value, target)
        if target in _SEQUENCE_ORIGINS:
            factory = _SEQUENCE_ORIGINS[target]
            return factory(to_python(item) for item in value.to_array())
        if target is tuple:
            return tuple(to_python(item) for item in value.to_array())
        if target in _MAPPING_ORIGINS:
            tree = to_python(value.expect(ValueKind.OBJECT))
            return _MAPPING_ORIGINS[target](tree)
    raise TypeError(f"cannot convert JSON values to {target!r}")


def _convert_null(value: "ValueHandle") -> None:
    value.expect(ValueKind.NULL)
    return None


def _convert_bool(value: "ValueHandle") -> bool:
    return value.as_bool_str() == "true"


def _convert_float(value: "ValueHandle") -> float:
    text = value.as_number_str()
    number = float(text)
    if not math.isfinite(number):
        error = OverflowError(f"{text} does not fit in a float")
        raise value.invalid(error) from error
    return number


def _parse_number(value: "ValueHandle", text: str, parse: Any) -> Any:
    try:
        return parse(text)
    except (ValueError, OverflowError, decimal.InvalidOperation) as e:
        # int() refuses very long digit strings.
        raise value.invalid(e) from e


def _parse_string(value: "ValueHandle", target: type) -> Any:
    text = value.to_unquoted_string_str()
    try:
        return target(text)
    except ValueError as e:
        raise value.invalid(e) from e


def _convert_union(value: "ValueHandle", args: tuple[Any, ...]) -> Any:
    if types.NoneType in args:
        if value.kind is ValueKind.NULL:
            return None
        args = tuple(arg for arg in args if arg is not types.NoneType)

    error: JsonParseError | None = None
    for arg in args:
        try:
            return convert(value, arg)
        except JsonParseError as e:
            error = e
    assert error is not None
    raise error


def _convert_tuple(value: "ValueHandle", args: tuple[Any, ...]) -> tuple:
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(convert(item, args[0]) for item in value.to_array())
    items = value.to_fixed_array(len(args))
    return tuple(
        convert(item, item_type)
        for item, item_type in zip(items, args, strict=True)
    )


def _convert_key(key: "ValueHandle", key_type: Any) -> Any:
    """Re-parses an object key, which is always a string, as `key_type`."""
    text = key.to_unquoted_string_str()
    if key_type is str or key_type in _ANY_TYPES:
        return text
    if key_type is bool:
        if text not in ("true", "false"):
            raise key.invalid(f"expected true or false, but found {text!r}")
        return text == "true"
    try:
        return key_type(text)
    except (ValueError, ArithmeticError, TypeError) as e:
        raise key.invalid(e) from e


def _convert_dataclass(value: "ValueHandle", target: type) -> Any:
    hints = typing.get_type_hints(target)
    fields = [field for field in dataclasses.fields(target) if field.init]
    required = [
        field.name
        for field in fields
        if field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING
    ]
    optional = [field.name for field in fields if field.name not in required]

    required_values, optional_values = value.to_fixed_object(
        required, optional
    )
    arguments = {
        name: convert(member, hints[name])
        for name, member in zip(required, required_values, strict=True)
    }
    for name, member in zip(optional, optional_values, strict=True):
        if member is not None:
            arguments[name] = convert(member, hints[name])
    return target(**arguments)


def _scalar_to_python(value: "ValueHandle") -> Any:
    kind = value.kind
    if kind is ValueKind.NULL:
        return None
    if kind is ValueKind.BOOLEAN:
        return _convert_bool(value)
    if kind is ValueKind.INTEGER:
        return _parse_number(value, value.raw_text, int)
    if kind is ValueKind.FLOAT:
        return _convert_float(value)
    return value.to_unquoted_string_str()


class _OpenContainer:
    __slots__ = ("container", "end", "key")

    def __init__(self, container: list | dict, end: int) -> None:
        self.container = container
        self.end = end
        self.key: str | None = None


def to_python(value: "ValueHandle") -> Any:
    """
    Builds an owned tree of dict, list, str, int, float, bool and None.

    Walks the flat index in order with an explicit stack, so arbitrarily
    deep documents convert without recursion.
    """
    document = value.document
    end = document.entry(value.index).subtree_end
    stack: list[_OpenContainer] = []
    root: Any = None

    for index in range(value.index, end):
        while stack and index >= stack[-1].end:
            stack.pop()
        handle = document.handle(index)
        parent = stack[-1] if stack else None

        if (
            parent is not None
            and isinstance(parent.container, dict)
            and parent.key is None
        ):
            parent.key = handle.to_unquoted_string_str()
            continue

        kind = handle.kind
        item: Any
        if kind is ValueKind.ARRAY:
            item = []
        elif kind is ValueKind.OBJECT:
            item = {}
        else:
            item = _scalar_to_python(handle)

        if parent is None:
            root = item
        elif isinstance(parent.container, list):
            parent.container.append(item)
        else:
            assert parent.key is not None
            parent.container[parent.key] = item
            parent.key = None

        if kind.is_container():
            subtree_end = document.entry(index).subtree_end
            stack.append(_OpenContainer(item, subtree_end))

    return root

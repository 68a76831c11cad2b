"""
Serialization of Python values to JSON text.

Output always parses back with the strict parser, and converting the
parsed value to the original type gives back an equal value.
"""

import collections
import dataclasses
import decimal
import ipaddress
import math
import pathlib
import uuid
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO
from typing import Any

from ._document import ParsedDocument
from ._document import ValueHandle
from ._kind import ValueKind
from ._strings import escape

_ARRAY_TYPES = (list, tuple, set, frozenset, collections.deque)

# Written as their string form.
_STRING_ENCODED_TYPES = (
    pathlib.PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
    uuid.UUID,
)


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding with immutable settings.

    Output is compact unless `spacing` adds a space after separators or
    `indent` puts each element on its own line.
    """

    indent: int = 0
    spacing: bool = False
    sort_keys: bool = False
    skipkeys: bool = False
    default: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise TypeError("indent must be an integer")
        if self.indent < 0:
            raise ValueError("indent cannot be negative")
        if not isinstance(self.spacing, bool):
            raise TypeError("spacing must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if not isinstance(self.skipkeys, bool):
            raise TypeError("skipkeys must be a boolean")

    @property
    def item_separator(self) -> str:
        return ", " if self.spacing else ","

    @property
    def key_separator(self) -> str:
        return ": " if self.spacing else ":"


def _encode_float(number: float) -> str:
    if not math.isfinite(number):
        raise ValueError("Out of range float values are not JSON compliant")
    return float.__repr__(number)


def _encode_decimal(number: decimal.Decimal) -> str:
    if not number.is_finite():
        raise ValueError("Out of range decimal values are not JSON compliant")
    return str(number)


def _encode_key(key: Any) -> str | None:
    """Returns the string form of a mapping key, or None to skip it."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int):
        return int.__repr__(key)
    if isinstance(key, float):
        return _encode_float(key)
    return None


def _encode_array(items: Any, config: EncodeConfig, level: int) -> str:
    encoded = [_encode_value(item, config, level + 1) for item in items]
    if not encoded:
        return "[]"
    if config.indent:
        return _format_indented("[", "]", encoded, config, level)
    return "[" + config.item_separator.join(encoded) + "]"


def _encode_mapping(
    mapping: Mapping[Any, Any], config: EncodeConfig, level: int
) -> str:
    items = []
    for key, value in mapping.items():
        string_key = _encode_key(key)
        if string_key is None:
            if config.skipkeys:
                continue
            raise TypeError(
                "keys must be str, int, float or bool, "
                f"not {type(key).__name__}"
            )
        items.append((key, string_key, value))

    if config.sort_keys:
        items.sort(key=lambda item: item[0])  # by original key

    return _encode_members(
        [(escape(string_key), value) for _, string_key, value in items],
        config,
        level,
    )


def _encode_members(
    members: list[tuple[str, Any]], config: EncodeConfig, level: int
) -> str:
    """Joins (quoted key, value) pairs into an object."""
    if not members:
        return "{}"
    encoded = [
        f"{key}{config.key_separator}{_encode_value(value, config, level + 1)}"
        for key, value in members
    ]
    if config.indent:
        return _format_indented("{", "}", encoded, config, level)
    return "{" + config.item_separator.join(encoded) + "}"


def _encode_handle(
    handle: ValueHandle, config: EncodeConfig, level: int
) -> str:
    """
    Writes a parsed value back out.

    Plain JSON is copied verbatim. Containers from a JSONC text are rebuilt
    from their children, which drops comments and trailing commas; scalars
    keep their source spelling either way.
    """
    if handle.document.strict or not handle.kind.is_container():
        return handle.raw_text
    if handle.kind is ValueKind.ARRAY:
        return _encode_array(list(handle.to_array()), config, level)

    members = list(handle.to_object())
    if config.sort_keys:
        members.sort(key=lambda member: member[0].to_unquoted_string_str())
    return _encode_members(
        [(key.raw_text, value) for key, value in members], config, level
    )


def _format_indented(
    opener: str,
    closer: str,
    items: list[str],
    config: EncodeConfig,
    level: int,
) -> str:
    inner_indent = " " * (config.indent * (level + 1))
    outer_indent = " " * (config.indent * level)
    body = ",\n".join(f"{inner_indent}{item}" for item in items)
    return f"{opener}\n{body}\n{outer_indent}{closer}"


def _encode_value(  # noqa: PLR0911
    obj: Any, config: EncodeConfig, level: int
) -> str:
    if obj is None:
        return "null"
    elif obj is True:
        return "true"
    elif obj is False:
        return "false"
    elif isinstance(obj, str):
        return escape(obj)
    elif isinstance(obj, int):
        return int.__repr__(obj)
    elif isinstance(obj, float):
        return _encode_float(obj)
    elif isinstance(obj, decimal.Decimal):
        return _encode_decimal(obj)
    elif isinstance(obj, ParsedDocument):
        return _encode_handle(obj.value(), config, level)
    elif isinstance(obj, ValueHandle):
        return _encode_handle(obj, config, level)
    elif isinstance(obj, Mapping):
        return _encode_mapping(obj, config, level)
    elif isinstance(obj, _ARRAY_TYPES):
        return _encode_array(obj, config, level)
    elif isinstance(obj, _STRING_ENCODED_TYPES):
        return escape(str(obj))
    elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        fields = {
            field.name: getattr(obj, field.name)
            for field in dataclasses.fields(obj)
        }
        return _encode_mapping(fields, config, level)
    elif config.default is not None:
        return _encode_value(config.default(obj), config, level)
    else:
        raise TypeError(
            f"Object of type {type(obj).__name__} is not JSON serializable"
        )


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Serializes `obj` to a JSON string.

    Keyword arguments are the fields of EncodeConfig.
    """
    config = EncodeConfig(**kwargs)
    return _encode_value(obj, config, 0)


def dump(obj: Any, fp: IO[str], **kwargs: Any) -> None:
    """Serializes `obj` to a text file object."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))

"""
Lazy, position-preserving JSON parsing.

Parsing validates the whole text in one pass and builds a flat index of
value locations. Values stay as slices of the original text until they are
converted on demand, so every value and every error knows exactly where it
came from.
"""

import logging
from typing import IO
from typing import Any

from ._comments import CommentPolicy
from ._comments import CommentRange
from ._comments import JsoncPolicy
from ._comments import StrictPolicy
from ._comments import TextRange
from ._document import MemberLookup
from ._document import ParsedDocument
from ._document import ValueHandle
from ._encoder import EncodeConfig
from ._encoder import dump
from ._encoder import dumps
from ._errors import InvalidValue
from ._errors import JsonParseError
from ._errors import Position
from ._errors import UnexpectedCharacter
from ._errors import UnexpectedEndOfInput
from ._errors import UnexpectedTrailingCharacter
from ._extract import FromJsonValue
from ._extract import to_python
from ._kind import ValueKind
from ._numbers import BoundedInt
from ._numbers import FiniteFloat
from ._numbers import Float32
from ._numbers import Int8
from ._numbers import Int16
from ._numbers import Int32
from ._numbers import Int64
from ._numbers import Int128
from ._numbers import NonZeroInt
from ._numbers import NonZeroInt8
from ._numbers import NonZeroInt16
from ._numbers import NonZeroInt32
from ._numbers import NonZeroInt64
from ._numbers import NonZeroInt128
from ._numbers import NonZeroUInt8
from ._numbers import NonZeroUInt16
from ._numbers import NonZeroUInt32
from ._numbers import NonZeroUInt64
from ._numbers import NonZeroUInt128
from ._numbers import UInt8
from ._numbers import UInt16
from ._numbers import UInt32
from ._numbers import UInt64
from ._numbers import UInt128
from ._parser import JsonIndexer
from ._parser import ParseConfig
from ._parser import ValueEntry
from ._parser import parse
from ._parser import parse_jsonc
from ._parser import parse_with
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import format_hot_path_report
from ._profile import get_hot_path_stats
from ._strings import Borrowed
from ._strings import Owned
from ._strings import Unquoted
from ._utf8_mapper import Utf8OffsetMapper

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def loads(s: str, into: Any = Any, *, jsonc: bool = False) -> Any:
    """
    Parses `s` and converts the root value to `into` in one step.

    `into` defaults to a plain tree of dict, list, str, int, float, bool
    and None. `jsonc` accepts comments and trailing commas.
    """
    config = ParseConfig.jsonc() if jsonc else ParseConfig()
    document, _ = parse_with(s, config)
    return document.value().try_to(into)


def load(fp: IO[str], into: Any = Any, *, jsonc: bool = False) -> Any:
    """Reads a text file object and parses it like `loads`."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), into, jsonc=jsonc)


__all__ = [
    "Borrowed",
    "BoundedInt",
    "CommentPolicy",
    "CommentRange",
    "EncodeConfig",
    "FiniteFloat",
    "Float32",
    "FromJsonValue",
    "HotPathStats",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Int128",
    "InvalidValue",
    "JsonIndexer",
    "JsonParseError",
    "JsoncPolicy",
    "MemberLookup",
    "NonZeroInt",
    "NonZeroInt8",
    "NonZeroInt16",
    "NonZeroInt32",
    "NonZeroInt64",
    "NonZeroInt128",
    "NonZeroUInt8",
    "NonZeroUInt16",
    "NonZeroUInt32",
    "NonZeroUInt64",
    "NonZeroUInt128",
    "Owned",
    "ParseConfig",
    "ParsedDocument",
    "Position",
    "StrictPolicy",
    "TextRange",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UInt128",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "UnexpectedTrailingCharacter",
    "Unquoted",
    "Utf8OffsetMapper",
    "ValueEntry",
    "ValueHandle",
    "ValueKind",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "format_hot_path_report",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
    "parse_jsonc",
    "parse_with",
    "to_python",
]

"""
String escaping shared by the scanner, the navigation layer and the encoder.

There is one escape table and one unescape routine; the scanner validates
escapes with the same table the encoder writes, so encoder output always
parses back.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import TypeAlias

# Escape letter -> character, for every single-character escape accepted.
UNESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Character -> escape written by the encoder. "/" is accepted on input but
# never escaped on output.
ESCAPES: dict[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
}

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_ESCAPE_SEQUENCE = re.compile(r"\\(?:u([0-9a-fA-F]{4})|(.))", re.DOTALL)


def is_scalar_code_point(code: int) -> bool:
    """Surrogates cannot stand alone as characters."""
    return not 0xD800 <= code <= 0xDFFF


def _replace_escape(match: re.Match[str]) -> str:
    hex_code, letter = match.groups()
    if hex_code is not None:
        return chr(int(hex_code, 16))
    return UNESCAPES[letter]


def unescape(content: str) -> str:
    """
    Resolves the escapes of string content already validated by the scanner.

    `content` excludes the surrounding quotes.
    """
    if "\\" not in content:
        return content
    return _ESCAPE_SEQUENCE.sub(_replace_escape, content)


def _needs_unicode_escape(char: str) -> bool:
    return unicodedata.category(char) == "Cc"


def escape(s: str) -> str:
    """Quotes `s` as a JSON string using the shared escape table."""
    result = ['"']
    for char in s:
        escaped = ESCAPES.get(char)
        if escaped is not None:
            result.append(escaped)
        elif _needs_unicode_escape(char):
            result.append(f"\\u{ord(char):04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


@dataclass(frozen=True, slots=True)
class Borrowed:
    """Unquoted string content taken as-is from the source text."""

    text: str

    def __str__(self) -> str:
        return self.text

    def into_owned(self) -> "Owned":
        return Owned(self.text)


@dataclass(frozen=True, slots=True)
class Owned:
    """Unquoted string content rebuilt because it contained escapes."""

    text: str

    def __str__(self) -> str:
        return self.text

    def into_owned(self) -> "Owned":
        return self


Unquoted: TypeAlias = Borrowed | Owned

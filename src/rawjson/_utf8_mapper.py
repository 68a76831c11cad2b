"""Mapping between str positions and UTF-8 byte offsets."""

from bisect import bisect_right
from typing import Final


def utf8_width(char: str) -> int:
    """Number of UTF-8 bytes used to encode one character."""
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def utf8_length(text: str) -> int:
    """Encoded length of `text`; lone surrogates count as three bytes."""
    if text.isascii():
        return len(text)
    return len(text.encode("utf-8", "surrogatepass"))


class Utf8OffsetMapper:
    """
    Converts positions in a text to and from UTF-8 byte offsets.

    A checkpoint records the byte offset of every `checkpoint_interval`-th
    character, so each lookup encodes at most one interval of text. ASCII
    text maps one to one and keeps no checkpoints at all.

    Args:
        text: The text positions refer to
        checkpoint_interval: Characters between checkpoints
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        if checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")
        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self.is_ascii: Final = text.isascii()
        self._char_checkpoints: list[int] = []
        self._byte_checkpoints: list[int] = []
        self.byte_length = len(text)
        if not self.is_ascii:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_offset = 0
        interval = self.checkpoint_interval
        for position in range(0, len(self.text), interval):
            self._char_checkpoints.append(position)
            self._byte_checkpoints.append(byte_offset)
            chunk = self.text[position : position + interval]
            byte_offset += utf8_length(chunk)
        self.byte_length = byte_offset

    def char_to_byte(self, position: int) -> int:
        """
        Returns the byte offset at which the character at `position` starts.

        `position` may equal the text length, which maps to the byte length.
        """
        if not 0 <= position <= len(self.text):
            raise IndexError(f"position {position} is outside the text")
        if self.is_ascii:
            return position

        checkpoint = bisect_right(self._char_checkpoints, position) - 1
        start = self._char_checkpoints[checkpoint]
        return self._byte_checkpoints[checkpoint] + utf8_length(
            self.text[start:position]
        )

    def byte_to_char(self, offset: int) -> int:
        """
        Returns the position of the character containing byte `offset`.

        An offset in the middle of a multi-byte sequence maps to the
        character that sequence encodes.
        """
        if not 0 <= offset <= self.byte_length:
            raise IndexError(f"byte offset {offset} is outside the text")
        if self.is_ascii:
            return offset
        if offset == self.byte_length:
            return len(self.text)

        checkpoint = bisect_right(self._byte_checkpoints, offset) - 1
        position = self._char_checkpoints[checkpoint]
        byte_offset = self._byte_checkpoints[checkpoint]
        while True:
            width = utf8_width(self.text[position])
            if byte_offset + width > offset:
                return position
            byte_offset += width
            position += 1

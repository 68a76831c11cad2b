"""
Range-checked numeric types.

Each type is a plain `int` or `float` subclass, so values behave like
ordinary numbers once constructed; only construction is checked. All of
them know how to build themselves from a JSON value.
"""

import math
import struct
from typing import TYPE_CHECKING
from typing import ClassVar
from typing import Self

if TYPE_CHECKING:
    from ._document import ValueHandle


class BoundedInt(int):
    """
    An integer confined to `[MIN, MAX]`, optionally excluding zero.

    Out-of-range values raise OverflowError and zero raises ValueError
    where it is excluded. A bound of None leaves that side open.
    """

    MIN: ClassVar[int | None] = None
    MAX: ClassVar[int | None] = None
    NONZERO: ClassVar[bool] = False

    def __new__(cls, value: object = 0, /) -> Self:
        number = super().__new__(cls, value)  # type: ignore[call-overload]
        if cls.NONZERO and number == 0:
            raise ValueError(f"{cls.__name__} cannot be zero")
        if (cls.MIN is not None and number < cls.MIN) or (
            cls.MAX is not None and number > cls.MAX
        ):
            raise OverflowError(
                f"{int(number)} is out of range for {cls.__name__}"
                f" [{cls.MIN}, {cls.MAX}]"
            )
        return number

    @classmethod
    def from_json_value(cls, value: "ValueHandle") -> Self:
        text = value.as_integer_str()
        try:
            return cls(text)
        except (ValueError, OverflowError) as e:
            raise value.invalid(e) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


def _signed(bits: int) -> tuple[int, int]:
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _unsigned(bits: int) -> tuple[int, int]:
    return 0, (1 << bits) - 1


class Int8(BoundedInt):
    MIN, MAX = _signed(8)


class Int16(BoundedInt):
    MIN, MAX = _signed(16)


class Int32(BoundedInt):
    MIN, MAX = _signed(32)


class Int64(BoundedInt):
    MIN, MAX = _signed(64)


class Int128(BoundedInt):
    MIN, MAX = _signed(128)


class UInt8(BoundedInt):
    MIN, MAX = _unsigned(8)


class UInt16(BoundedInt):
    MIN, MAX = _unsigned(16)


class UInt32(BoundedInt):
    MIN, MAX = _unsigned(32)


class UInt64(BoundedInt):
    MIN, MAX = _unsigned(64)


class UInt128(BoundedInt):
    MIN, MAX = _unsigned(128)


class NonZeroInt(BoundedInt):
    NONZERO = True


class NonZeroInt8(Int8):
    NONZERO = True


class NonZeroInt16(Int16):
    NONZERO = True


class NonZeroInt32(Int32):
    NONZERO = True


class NonZeroInt64(Int64):
    NONZERO = True


class NonZeroInt128(Int128):
    NONZERO = True


class NonZeroUInt8(UInt8):
    NONZERO = True


class NonZeroUInt16(UInt16):
    NONZERO = True


class NonZeroUInt32(UInt32):
    NONZERO = True


class NonZeroUInt64(UInt64):
    NONZERO = True


class NonZeroUInt128(UInt128):
    NONZERO = True


class Float32(float):
    """
    A float rounded to IEEE 754 single precision.

    Values beyond the single precision range, and non-finite values, raise
    OverflowError instead of becoming infinite.
    """

    def __new__(cls, value: object = 0.0, /) -> Self:
        number = float(value)  # type: ignore[arg-type]
        if not math.isfinite(number):
            raise OverflowError(f"{number} is not a finite Float32")
        (rounded,) = struct.unpack("<f", struct.pack("<f", number))
        return super().__new__(cls, rounded)

    @classmethod
    def from_json_value(cls, value: "ValueHandle") -> Self:
        text = value.as_number_str()
        try:
            return cls(text)
        except (ValueError, OverflowError) as e:
            raise value.invalid(e) from e

    def __repr__(self) -> str:
        return f"Float32({float(self)!r})"


class FiniteFloat(float):
    """A float that is never NaN or infinite; -0.0 becomes 0.0."""

    def __new__(cls, value: object = 0.0, /) -> Self:
        number = float(value)  # type: ignore[arg-type]
        if not math.isfinite(number):
            raise ValueError(f"{number} is not finite")
        return super().__new__(cls, number + 0.0)

    @classmethod
    def from_json_value(cls, value: "ValueHandle") -> Self:
        text = value.as_number_str()
        try:
            return cls(text)
        except ValueError as e:
            raise value.invalid(e) from e

    def __repr__(self) -> str:
        return f"FiniteFloat({float(self)!r})"

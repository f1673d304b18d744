"""
Conversions between Number128 and the native integer widths.

Into Number128 the source value lands in `low` as its 64-bit pattern and
`high` is always zero, so negative signed sources are NOT sign-extended
into the high word. Out of Number128 only the low-order bits of `low` are
kept: these conversions truncate silently and lose anything stored in
`high`. Use Number128.from_int / to_signed_int for value-preserving
conversions. Platform widths follow LP64.
"""
from dataclasses import dataclass
from typing import Dict

from wideword.logic import Number128, wrap64


@dataclass(frozen=True)
class NativeType:
    name: str
    bits: int
    signed: bool

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    def reduce(self, v: int) -> int:
        """Wraps a Python int into this type's value range."""
        v &= self.mask
        if self.signed and v >> (self.bits - 1):
            v -= 1 << self.bits
        return v


NATIVE_TYPES: Dict[str, NativeType] = {t.name: t for t in [
    NativeType('char', 8, True),
    NativeType('uchar', 8, False),
    NativeType('short', 16, True),
    NativeType('ushort', 16, False),
    NativeType('int', 32, True),
    NativeType('uint', 32, False),
    NativeType('long', 64, True),
    NativeType('ulong', 64, False),
    NativeType('longlong', 64, True),
    NativeType('ulonglong', 64, False),
    NativeType('int8', 8, True),
    NativeType('uint8', 8, False),
    NativeType('int16', 16, True),
    NativeType('uint16', 16, False),
    NativeType('int32', 32, True),
    NativeType('uint32', 32, False),
    NativeType('int64', 64, True),
    NativeType('uint64', 64, False),
]}


def from_native(v: int, type_name: str) -> Number128:
    native = NATIVE_TYPES[type_name]
    return Number128(wrap64(native.reduce(v)), 0)


def to_native(value: Number128, type_name: str) -> int:
    return NATIVE_TYPES[type_name].reduce(value.low)


def from_bool(v: bool) -> Number128:
    return Number128(1 if v else 0, 0)


def to_bool(value: Number128) -> bool:
    return bool(value)


def from_char(v: int) -> Number128:
    return from_native(v, 'char')


def from_uchar(v: int) -> Number128:
    return from_native(v, 'uchar')


def from_short(v: int) -> Number128:
    return from_native(v, 'short')


def from_ushort(v: int) -> Number128:
    return from_native(v, 'ushort')


def from_int(v: int) -> Number128:
    return from_native(v, 'int')


def from_uint(v: int) -> Number128:
    return from_native(v, 'uint')


def from_long(v: int) -> Number128:
    return from_native(v, 'long')


def from_ulong(v: int) -> Number128:
    return from_native(v, 'ulong')


def from_longlong(v: int) -> Number128:
    return from_native(v, 'longlong')


def from_ulonglong(v: int) -> Number128:
    return from_native(v, 'ulonglong')


def from_int8(v: int) -> Number128:
    return from_native(v, 'int8')


def from_uint8(v: int) -> Number128:
    return from_native(v, 'uint8')


def from_int16(v: int) -> Number128:
    return from_native(v, 'int16')


def from_uint16(v: int) -> Number128:
    return from_native(v, 'uint16')


def from_int32(v: int) -> Number128:
    return from_native(v, 'int32')


def from_uint32(v: int) -> Number128:
    return from_native(v, 'uint32')


def from_int64(v: int) -> Number128:
    return from_native(v, 'int64')


def from_uint64(v: int) -> Number128:
    return from_native(v, 'uint64')


def to_char(value: Number128) -> int:
    return to_native(value, 'char')


def to_uchar(value: Number128) -> int:
    return to_native(value, 'uchar')


def to_short(value: Number128) -> int:
    return to_native(value, 'short')


def to_ushort(value: Number128) -> int:
    return to_native(value, 'ushort')


def to_int(value: Number128) -> int:
    return to_native(value, 'int')


def to_uint(value: Number128) -> int:
    return to_native(value, 'uint')


def to_long(value: Number128) -> int:
    return to_native(value, 'long')


def to_ulong(value: Number128) -> int:
    return to_native(value, 'ulong')


def to_longlong(value: Number128) -> int:
    return to_native(value, 'longlong')


def to_ulonglong(value: Number128) -> int:
    return to_native(value, 'ulonglong')


def to_int8(value: Number128) -> int:
    return to_native(value, 'int8')


def to_uint8(value: Number128) -> int:
    return to_native(value, 'uint8')


def to_int16(value: Number128) -> int:
    return to_native(value, 'int16')


def to_uint16(value: Number128) -> int:
    return to_native(value, 'uint16')


def to_int32(value: Number128) -> int:
    return to_native(value, 'int32')


def to_uint32(value: Number128) -> int:
    return to_native(value, 'uint32')


def to_int64(value: Number128) -> int:
    return to_native(value, 'int64')


def to_uint64(value: Number128) -> int:
    return to_native(value, 'uint64')

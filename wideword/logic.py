import sys
from typing import Optional, Tuple, Union

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1
MASK128 = (1 << 128) - 1
HALF_BITS = 64
WORD_BITS = 128
TOP_BIT64 = 1 << 63


def wrap64(v: int) -> int:
    """Reduces a Python int to an unsigned 64-bit half-word, as native wraparound would."""
    return v & MASK64


class Number128:
    """
    A 128-bit integer made of two unsigned 64-bit half-words.

    value = low + high * 2**64 (mod 2**128). Sign is not stored; signed
    readings are requested explicitly (see Formatter and to_signed_int).
    Binary operators return new instances, in-place operators and the
    *_assign / increment / decrement methods overwrite the instance.
    Mutating one instance from several threads needs external locking.
    """

    __slots__ = ('low', 'high', '_frozen')

    def __init__(self, low: int = 0, high: int = 0, frozen: bool = False):
        object.__setattr__(self, 'low', wrap64(low))
        object.__setattr__(self, 'high', wrap64(high))
        object.__setattr__(self, '_frozen', frozen)

    def __setattr__(self, name, value):
        self._ensure_mutable()
        if name in ('low', 'high'):
            value = wrap64(value)
        object.__setattr__(self, name, value)

    def _ensure_mutable(self):
        if self._frozen:
            raise TypeError(f"cannot modify constant {self!r}")

    def _overwrite(self, other: 'Number128') -> 'Number128':
        # Constants are rebound by in-place operators instead of being modified.
        if self._frozen:
            return other
        object.__setattr__(self, 'low', other.low)
        object.__setattr__(self, 'high', other.high)
        return self

    @classmethod
    def from_int(cls, v: int) -> 'Number128':
        v &= MASK128
        return cls(v & MASK64, v >> HALF_BITS)

    def to_int(self) -> int:
        return (self.high << HALF_BITS) | self.low

    def to_signed_int(self) -> int:
        res = self.to_int()
        if self.is_negative():
            res -= 1 << WORD_BITS
        return res

    def copy(self) -> 'Number128':
        return Number128(self.low, self.high)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def is_negative(self) -> bool:
        return bool(self.high & TOP_BIT64)

    def bit_length(self) -> int:
        # Zero reports a single bit.
        if self.high:
            return HALF_BITS + self.high.bit_length()
        return max(self.low.bit_length(), 1)

    # Comparison

    def comp(self, other: 'Number128') -> int:
        if self.high != other.high:
            return -1 if self.high < other.high else 1
        if self.low != other.low:
            return -1 if self.low < other.low else 1
        return 0

    def __eq__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.low == other.low and self.high == other.high

    def __ne__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.low != other.low or self.high != other.high

    def __lt__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.comp(other) < 0

    def __le__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.comp(other) <= 0

    def __gt__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.comp(other) > 0

    def __ge__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.comp(other) >= 0

    __hash__ = None

    def __bool__(self):
        return self.low != 0 or self.high != 0

    # Arithmetic

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return add(self, other)

    def __radd__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return add(other, self)

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return subtract(other, self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return multiply(other, self)

    def __floordiv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return divide(self, other)

    # Integer division, as the native type does.
    __truediv__ = __floordiv__

    def __mod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return modulus(self, other)

    def __divmod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return divide(self, other, want_remainder=True)

    def __rfloordiv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return divide(other, self)

    __rtruediv__ = __rfloordiv__

    def __rmod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return modulus(other, self)

    def __rdivmod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return divide(other, self, want_remainder=True)

    def __neg__(self):
        return add(bitwise_not(self), ONE)

    def __pos__(self):
        return self.copy()

    # Bitwise

    def __and__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return bitwise_and(self, other)

    __rand__ = __and__

    def __or__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return bitwise_or(self, other)

    __ror__ = __or__

    def __xor__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return bitwise_xor(self, other)

    __rxor__ = __xor__

    def __invert__(self):
        return bitwise_not(self)

    def __lshift__(self, amount):
        amount = shift_count(amount)
        if amount is None:
            return NotImplemented
        return left_shift(self, amount)

    def __rlshift__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return left_shift(other, shift_count(self))

    def __rshift__(self, amount):
        amount = shift_count(amount)
        if amount is None:
            return NotImplemented
        return right_shift(self, amount)

    def __rrshift__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return right_shift(other, shift_count(self))

    # Compound assignment

    def __iadd__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(add(self, other))

    def __isub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(subtract(self, other))

    def __imul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(multiply(self, other))

    def __ifloordiv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(divide(self, other))

    __itruediv__ = __ifloordiv__

    def __imod__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(modulus(self, other))

    def __iand__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(bitwise_and(self, other))

    def __ior__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(bitwise_or(self, other))

    def __ixor__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._overwrite(bitwise_xor(self, other))

    def __ilshift__(self, amount):
        amount = shift_count(amount)
        if amount is None:
            return NotImplemented
        return self._overwrite(left_shift(self, amount))

    def __irshift__(self, amount):
        amount = shift_count(amount)
        if amount is None:
            return NotImplemented
        return self._overwrite(right_shift(self, amount))

    def add_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(add(self, other))

    def subtract_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(subtract(self, other))

    def multiply_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(multiply(self, other))

    def divide_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(divide(self, other))

    def modulus_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(modulus(self, other))

    def bitwise_and_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(bitwise_and(self, other))

    def bitwise_or_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(bitwise_or(self, other))

    def bitwise_xor_assign(self, other: 'Number128'):
        self._ensure_mutable()
        self._overwrite(bitwise_xor(self, other))

    def left_shift_assign(self, amount: int):
        self._ensure_mutable()
        self._overwrite(left_shift(self, amount))

    def right_shift_assign(self, amount: int):
        self._ensure_mutable()
        self._overwrite(right_shift(self, amount))

    # Increment and decrement

    def _increment(self):
        self._ensure_mutable()
        low = wrap64(self.low + 1)
        high = self.high
        if low == 0:
            high = wrap64(high + 1)
        object.__setattr__(self, 'low', low)
        object.__setattr__(self, 'high', high)

    def _decrement(self):
        self._ensure_mutable()
        low = wrap64(self.low - 1)
        high = self.high
        if low == MASK64:
            high = wrap64(high - 1)
        object.__setattr__(self, 'low', low)
        object.__setattr__(self, 'high', high)

    def pre_increment(self) -> 'Number128':
        self._increment()
        return self

    def post_increment(self) -> 'Number128':
        old = self.copy()
        self._increment()
        return old

    def pre_decrement(self) -> 'Number128':
        self._decrement()
        return self

    def post_decrement(self) -> 'Number128':
        old = self.copy()
        self._decrement()
        return old

    def __str__(self):
        from wideword.formatter import Formatter
        return Formatter().format(self)

    def __repr__(self):
        return f"Number128(low=0x{self.low:016x}, high=0x{self.high:016x})"


def _coerce(v) -> Optional[Number128]:
    if isinstance(v, Number128):
        return v
    if isinstance(v, int):
        return Number128.from_int(v)
    return None


def shift_count(amount) -> Optional[int]:
    """Shift amount as a plain int; a Number128 past 128 is capped at 128."""
    if isinstance(amount, Number128):
        if amount.high or amount.low >= WORD_BITS:
            return WORD_BITS
        return amount.low
    if isinstance(amount, int):
        return amount
    return None


ZERO = Number128(0, 0, frozen=True)
ONE = Number128(1, 0, frozen=True)
TEN = Number128(10, 0, frozen=True)
UNSIGNED_MAX = Number128(MASK64, MASK64, frozen=True)
SIGNED_MAX = Number128(MASK64, TOP_BIT64 - 1, frozen=True)
SIGNED_MIN = Number128(0, TOP_BIT64, frozen=True)


def add(a: Number128, b: Number128) -> Number128:
    low = wrap64(a.low + b.low)
    carry = 1 if low < a.low else 0
    high = wrap64(a.high + b.high + carry)
    return Number128(low, high)


def subtract(a: Number128, b: Number128) -> Number128:
    low = wrap64(a.low - b.low)
    borrow = 1 if low > a.low else 0
    high = wrap64(a.high - b.high - borrow)
    return Number128(low, high)


def multiply(a: Number128, b: Number128) -> Number128:
    """
    Truncated 128-bit product.

    The low half-words are multiplied as 64x64->128 from four 32x32->64
    partial products, then both cross terms (each cut to 64 bits) are
    folded into the high word. Everything above bit 127 is dropped.
    """
    a_lo = a.low & MASK32
    a_hi = a.low >> 32
    b_lo = b.low & MASK32
    b_hi = b.low >> 32

    p_ll = a_lo * b_lo
    p_lh = a_lo * b_hi
    p_hl = a_hi * b_lo
    p_hh = a_hi * b_hi

    # Middle column sums, neither exceeds 64 bits.
    first = (p_ll >> 32) + p_hl
    second = (first & MASK32) + p_lh

    low = wrap64((p_ll & MASK32) + (second << 32))
    high = wrap64(p_hh + (first >> 32) + (second >> 32))
    high = wrap64(high + wrap64(a.low * b.high) + wrap64(a.high * b.low))
    return Number128(low, high)


def _fatal_division_by_zero():
    print("Division by zero.", file=sys.stderr)
    sys.exit(1)


def divide(dividend: Number128, divisor: Number128,
           want_remainder: bool = False) -> Union[Number128, Tuple[Number128, Number128]]:
    """
    Unsigned restoring long division, one quotient bit per step.

    Returns the quotient, or (quotient, remainder) when want_remainder is set.
    A zero divisor ends the process with a diagnostic on stderr; callers that
    need to recover must check the divisor first.
    """
    if not divisor:
        _fatal_division_by_zero()
    quot = Number128()
    rem = Number128()
    for bit in range(dividend.bit_length() - 1, -1, -1):
        rem <<= 1
        rem |= right_shift(dividend, bit) & ONE
        if rem >= divisor:
            quot |= left_shift(ONE, bit)
            rem -= divisor
    if want_remainder:
        return quot, rem
    return quot


def modulus(dividend: Number128, divisor: Number128) -> Number128:
    _, rem = divide(dividend, divisor, want_remainder=True)
    return rem


def bitwise_and(a: Number128, b: Number128) -> Number128:
    return Number128(a.low & b.low, a.high & b.high)


def bitwise_or(a: Number128, b: Number128) -> Number128:
    return Number128(a.low | b.low, a.high | b.high)


def bitwise_xor(a: Number128, b: Number128) -> Number128:
    return Number128(a.low ^ b.low, a.high ^ b.high)


def bitwise_not(a: Number128) -> Number128:
    return Number128(~a.low, ~a.high)


def left_shift(value: Number128, amount: int) -> Number128:
    # Out of range amounts give zero instead of being reduced modulo 128.
    if amount == 0:
        return value.copy()
    if amount < 0 or amount >= WORD_BITS:
        return Number128()
    if amount >= HALF_BITS:
        return Number128(0, value.low << (amount - HALF_BITS))
    return Number128(value.low << amount,
                     (value.high << amount) | (value.low >> (HALF_BITS - amount)))


def right_shift(value: Number128, amount: int) -> Number128:
    if amount == 0:
        return value.copy()
    if amount < 0 or amount >= WORD_BITS:
        return Number128()
    if amount >= HALF_BITS:
        return Number128(value.high >> (amount - HALF_BITS), 0)
    return Number128((value.low >> amount) | (value.high << (HALF_BITS - amount)),
                     value.high >> amount)


def equal(a: Number128, b: Number128) -> bool:
    return a == b


def not_equal(a: Number128, b: Number128) -> bool:
    return a != b


def less_than(a: Number128, b: Number128) -> bool:
    return a < b


def less_than_equal(a: Number128, b: Number128) -> bool:
    return a <= b


def greater_than(a: Number128, b: Number128) -> bool:
    return a > b


def greater_than_equal(a: Number128, b: Number128) -> bool:
    return a >= b


def logical_and(a: Number128, b: Number128) -> bool:
    return bool(a) and bool(b)


def logical_or(a: Number128, b: Number128) -> bool:
    return bool(a) or bool(b)


def logical_not(a: Number128) -> bool:
    return not a

import sys
from typing import List, Optional, TextIO

from wideword.logic import Number128, ONE, TEN, add, bitwise_not, divide

# Enough for 2**128 - 1, which has 39 decimal digits.
MAX_DIGITS = 39


class Formatter:
    def __init__(self, sink: Optional[TextIO] = None):
        self.sink = sink

    def format_digits(self, value: Number128) -> str:
        """Renders a nonzero value in decimal by repeated division by ten."""
        digits: List[int] = [0] * MAX_DIGITS
        count = 0
        while value:
            value, digit = divide(value, TEN, want_remainder=True)
            digits[count] = digit.low
            count += 1
        return ''.join(str(d) for d in reversed(digits[:count]))

    def format(self, value: Number128, signed: bool = False) -> str:
        """
        Decimal text of a value.

        With signed set, a value whose top bit is on is printed as a negative
        two's-complement number. A value that fits in the low half-word is
        always printed as that unsigned half-word.
        """
        if value.high == 0:
            return str(value.low)
        prefix = ""
        if signed and value.is_negative():
            prefix = "-"
            value = add(bitwise_not(value), ONE)
        return prefix + self.format_digits(value)

    def write(self, value: Number128, signed: bool = False, sink: Optional[TextIO] = None):
        out = sink or self.sink or sys.stdout
        out.write(self.format(value, signed))

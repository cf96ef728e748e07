"""
SIM2D encoding for BFV.

The n balanced digits of r * b**(n/2) cover the powers b**min_pow ..
b**max_pow. BFV has no slot for negative powers, so the lower half of the
expansion is negated and moved behind the upper half ("inflated").
"""

import math
from fractions import Fraction

from .errors import InvalidPowerRangeError
from .polynomial import as_poly, expand, scaled_numerator, to_float


class SIM2DCodec:
    """Encode rationals into BFV plaintexts and decode them back."""

    def __init__(self, params):
        self.params = params
        self.base = params.expansion_base
        self.degree = params.degree
        self.min_pow = -(self.degree // 2)
        self.max_pow = self.degree // 2 - 1
        self._validate()
        self._powers = [Fraction(self.base) ** p for p in range(self.min_pow, self.max_pow + 1)]

    def _validate(self):
        if self.min_pow >= self.max_pow:
            raise InvalidPowerRangeError("the lower power should be less than the higher power")
        if self.min_pow >= 0:
            raise InvalidPowerRangeError("the lower power should be less than 0")
        if self.max_pow <= 0:
            raise InvalidPowerRangeError("the higher power should be greater than 0")

    @property
    def poly_len(self):
        return self.max_pow - self.min_pow + 1

    def enc(self, r):
        numerator = scaled_numerator(r, self.base, self.degree // 2)
        return self.inflate(expand(numerator, self.poly_len, self.base))

    def inflate(self, expansion):
        half = self.degree // 2
        return as_poly(list(expansion[half:]) + [-d for d in expansion[:half]])

    def deflate(self, code):
        """Undo inflate: digits ordered from b**min_pow to b**max_pow."""
        half = -self.min_pow
        start = len(code) + self.min_pow
        negative = [-int(code[start + i]) for i in range(half)]
        positive = [int(code[i]) for i in range(self.max_pow + 1)]
        return negative + positive

    def dec(self, code):
        value = sum(
            (digit * power for digit, power in zip(self.deflate(code), self._powers)),
            Fraction(0),
        )
        r = to_float(value)
        if math.isfinite(r) and Fraction(r) != value:
            r = self._round_up(value, r)
        return r

    def _round_up(self, value, r):
        """Round up at the smallest represented digit, b**min_pow."""
        try:
            scale = float(self.base) ** -self.min_pow
            return math.ceil(scale * r) / scale
        except OverflowError:
            # The scale does not fit in a double; round the exact value instead.
            scale = Fraction(self.base) ** -self.min_pow
            return to_float(Fraction(math.ceil(value * scale)) / scale)

"""
Laurent encoding for HERatio.

A rational r is stored as balanced base-b digits of r * b**n, so position i
of the size-2n code carries the power b**(i - n).
"""

from fractions import Fraction

from .polynomial import expand, scaled_numerator, to_float


class LaurentCodec:
    def __init__(self, params):
        self.params = params
        self.base = params.expansion_base
        self.degree = params.degree
        self.size = params.size

    def enc(self, r):
        numerator = scaled_numerator(r, self.base, self.degree)
        return expand(numerator, self.size, self.base)

    def dec(self, code):
        total = Fraction(0)
        for i in range(self.size):
            total += int(code[i]) * Fraction(self.base) ** (i - self.degree)
        return to_float(total)

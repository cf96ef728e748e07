"""
Polynomial Ring Operations
Big-integer coefficient vectors and the two ring multiplications:
BFV reduces modulo X^N + 1, HERatio folds a 2N-length Laurent ring.

Coefficients are Python ints held in numpy object arrays, so products never
overflow and no modulus is applied unless a caller asks for one.
"""

import math
from fractions import Fraction

import numpy as np

from .errors import InvalidSchemeError
from .params import Scheme


def as_poly(values):
    """Copy any integer sequence into an object array of Python ints."""
    return np.array([int(v) for v in values], dtype=object)


def zeros(n):
    return np.zeros(n, dtype=object)


def sym_mod(x, m):
    """Symmetric modulo: the representative of x mod m in [-m/2, m/2)."""
    r = x % m
    # A remainder of exactly m/2 goes to the negative side.
    if 2 * r >= m:
        r -= m
    return r


def vec_sym_mod(v, m):
    r = as_poly(v) % m
    return np.where(2 * r >= m, r - m, r).astype(object)


def div_round(num, den):
    """Integer division rounded to nearest, ties away from zero."""
    quo = abs(num) // abs(den)
    if (num < 0) != (den < 0):
        quo = -quo
    rem = num - quo * den
    if rem != 0 and abs(rem) >= abs(den // 2):
        quo += 1 if rem > 0 else -1
    return quo


_vec_div_round = np.frompyfunc(div_round, 2, 1)


def vec_div_round(v, den):
    return as_poly(_vec_div_round(as_poly(v), den))


def sum_zip(x, y, params):
    size = params.size
    return as_poly(x[:size]) + as_poly(y[:size])


def convolution(f, g):
    """Schoolbook product of two coefficient vectors, length len(f) + len(g) - 1."""
    return np.convolve(as_poly(f), as_poly(g)).astype(object)


def bfv_poly_mult(x, y, params):
    n = params.size
    conv = convolution(x, y)
    # X^n = -1: the upper n - 1 coefficients fold back with a sign flip.
    head = conv[:n]
    tail = np.concatenate([conv[n:], zeros(1)])
    return head - tail


def heratio_poly_mult(x, y, params):
    n = params.degree
    conv = convolution(x, y)
    p1 = np.concatenate([conv[3 * n:], zeros(n + 1)])
    p2 = conv[n:3 * n]
    p3 = np.concatenate([zeros(n), conv[:n]])
    return p2 - p1 - p3


def poly_mult(x, y, params):
    if params.scheme == Scheme.BFV:
        return bfv_poly_mult(x, y, params)
    if params.scheme == Scheme.HERATIO:
        return heratio_poly_mult(x, y, params)
    raise InvalidSchemeError(params.scheme)


def expand(value, length, base):
    """Balanced base-`base` digits of `value`, least significant first.

    Each digit is sym_mod(floor(running / base**i), base); a negative digit
    borrows base**(i + 1) into the running value.
    """
    running = int(value)
    digits = []
    power = 1
    for _ in range(length):
        digit = sym_mod(running // power, base)
        digits.append(digit)
        power *= base
        if digit < 0:
            running += power
    return as_poly(digits)


def _round_to_precision(value, bits=53):
    # Round a Fraction to `bits` significant bits, ties to even.
    if value == 0:
        return value
    magnitude = abs(value)
    exponent = magnitude.numerator.bit_length() - magnitude.denominator.bit_length()
    if magnitude < Fraction(2) ** exponent:
        exponent -= 1
    ulp = Fraction(2) ** (exponent - bits + 1)
    return round(value / ulp) * ulp


def scaled_numerator(r, base, exponent):
    """Integer numerator of r * base**exponent.

    The product is formed at double precision and truncated toward zero.
    """
    product = Fraction(r) * Fraction(base) ** exponent
    return int(_round_to_precision(product))


def to_float(value):
    """Convert an exact rational to float, saturating to +-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


class PolynomialRing:
    """Ring arithmetic bound to one parameter set."""

    def __init__(self, params):
        self.params = params
        self.q = params.coefficient_modulus
        self.t = params.decryption_modulus

    def mul(self, a, b):
        return poly_mult(a, b, self.params)

    def add(self, a, b):
        return sum_zip(a, b, self.params)

    def neg(self, a):
        return -as_poly(a)

    def mul_scalar(self, a, scalar):
        return as_poly(a) * int(scalar)

    def mod_center(self, a):
        return vec_sym_mod(a, self.q)

    def rescale(self, a):
        """round(t * a / q), re-centred modulo q."""
        return vec_sym_mod(vec_div_round(as_poly(a) * self.t, self.q), self.q)

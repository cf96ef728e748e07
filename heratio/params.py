"""
Scheme parameters.

A Parameters instance is validated once, when it is built, and is frozen
afterwards. Everything downstream (keys, cipher, evaluator, codecs) assumes
the invariants checked here.
"""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, model_validator

INT64_MAX = (1 << 63) - 1


class Scheme(IntEnum):
    BFV = 0
    HERATIO = 1


class Parameters(BaseModel):
    """Literal values for one scheme instance."""

    model_config = ConfigDict(frozen=True)

    degree: int
    expansion_base: int
    coefficient_modulus: int
    decryption_modulus: int
    relinearization_base: int
    standard_deviation: float
    bound: int
    factor: int
    scheme: Scheme

    @model_validator(mode="after")
    def _validate(self):
        if self.degree <= 0:
            raise ValueError("degree should be a positive integer")
        if self.degree & (self.degree - 1) != 0:
            raise ValueError("degree should be a power of 2")
        if self.expansion_base < 2:
            raise ValueError("expansion base should be equal or greater than 2")
        if self.coefficient_modulus <= 0:
            raise ValueError("coefficient modulus should be positive")
        if self.decryption_modulus <= 0:
            raise ValueError("decryption modulus should be positive")
        if self.relinearization_base <= 2:
            raise ValueError("expansion base for relinearization should be greater than 2")
        for name in ("expansion_base", "coefficient_modulus",
                     "decryption_modulus", "relinearization_base"):
            if getattr(self, name) > INT64_MAX:
                raise ValueError(f"{name.replace('_', ' ')} should fit in 64 bits")
        if self.standard_deviation <= 0.0:
            raise ValueError("standard deviation should be positive")
        if self.bound <= 0:
            raise ValueError("bound should be a positive integer")
        if self.factor <= 0:
            raise ValueError("factor should be a positive integer")
        return self

    @property
    def size(self):
        """Ring dimension: factor * degree."""
        return self.factor * self.degree

    @property
    def delta(self):
        """Scale factor floor(q / t)."""
        return self.coefficient_modulus // self.decryption_modulus

    @property
    def coeff_exp_len(self):
        """Number of base-w digits used by relinearization: floor(log_w(q)) + 1."""
        length, power = 0, 1
        while power <= self.coefficient_modulus:
            power *= self.relinearization_base
            length += 1
        return length


# Shared literal values.
EXPANSION_BASE = 10
COEFFICIENT_MODULUS = 9_876_523_525
DECRYPTION_MODULUS = 2_131
RELINEARIZATION_BASE = 128
SIGMA = 3.19
BOUND = 10

# Messages used by the examples and tests.
M0 = 12345.678
M1 = 947.1273
M2 = 351.179
M3 = 198.26
MS = 4
AS = 42.122


def _preset(degree, factor, scheme, **overrides):
    values = dict(
        degree=degree,
        expansion_base=EXPANSION_BASE,
        coefficient_modulus=COEFFICIENT_MODULUS,
        decryption_modulus=DECRYPTION_MODULUS,
        relinearization_base=RELINEARIZATION_BASE,
        standard_deviation=SIGMA,
        bound=BOUND,
        factor=factor,
        scheme=scheme,
    )
    values.update(overrides)
    return Parameters(**values)


PL_HERATIO_16 = _preset(1 << 4, 2, Scheme.HERATIO)
PL_HERATIO_512 = _preset(1 << 9, 2, Scheme.HERATIO)
PL_BFV_32 = _preset(1 << 5, 1, Scheme.BFV)
PL_BFV_512 = _preset(1 << 9, 1, Scheme.BFV)
PL_BFV_1024 = _preset(1 << 10, 1, Scheme.BFV)
# Secure BFV parameters.
PL_BFV_2048 = _preset(
    1 << 11, 1, Scheme.BFV,
    expansion_base=2,
    coefficient_modulus=18_014_398_509_481_983,
)

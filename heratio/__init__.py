"""
heratio: BFV and HERatio homomorphic encryption over encoded rationals.
"""

from .cipher import Cipher
from .ciphertext import Ciphertext
from .errors import (
    CodecError,
    HERatioError,
    InvalidPowerRangeError,
    InvalidRangeError,
    InvalidSchemeError,
    OutOfSamplesError,
    RandomnessError,
)
from .evaluator import Evaluator
from .keys import Keychain, KeyStorage, setup
from .laurent import LaurentCodec
from .params import Parameters, Scheme
from .polynomial import PolynomialRing, poly_mult
from .randomness import Oracle, OracleDouble, Randomizer
from .scheme import RationalScheme
from .sim2d import SIM2DCodec

__version__ = "0.1.0"

__all__ = [
    "Cipher",
    "Ciphertext",
    "CodecError",
    "Evaluator",
    "HERatioError",
    "InvalidPowerRangeError",
    "InvalidRangeError",
    "InvalidSchemeError",
    "KeyStorage",
    "Keychain",
    "LaurentCodec",
    "Oracle",
    "OracleDouble",
    "OutOfSamplesError",
    "Parameters",
    "PolynomialRing",
    "RandomnessError",
    "Randomizer",
    "RationalScheme",
    "SIM2DCodec",
    "Scheme",
    "poly_mult",
    "setup",
]

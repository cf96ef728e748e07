"""
RationalScheme: one object bundling codec, keys, cipher and evaluator.

HERatio parameters use the Laurent codec, BFV parameters the SIM2D codec.
"""

import logging

from .cipher import Cipher
from .errors import InvalidSchemeError
from .evaluator import Evaluator
from .keys import Keychain
from .laurent import LaurentCodec
from .params import Scheme
from .randomness import Oracle
from .sim2d import SIM2DCodec

logger = logging.getLogger(__name__)


def codec_for(params):
    if params.scheme == Scheme.HERATIO:
        return LaurentCodec(params)
    if params.scheme == Scheme.BFV:
        return SIM2DCodec(params)
    raise InvalidSchemeError(params.scheme)


class RationalScheme:
    def __init__(self, params, oracle=None, keychain=None):
        self.params = params
        self.oracle = oracle if oracle is not None else Oracle.from_params(params)
        self.codec = codec_for(params)

        self.keychain = None
        self.cipher = None
        self.evaluator = None
        if keychain is not None:
            self._adopt(keychain)

        logger.debug(
            "%s parameters: n=%d, size=%d, q=%d, t=%d",
            params.scheme.name, params.degree, params.size,
            params.coefficient_modulus, params.decryption_modulus,
        )

    def _adopt(self, keychain):
        self.keychain = keychain
        self.cipher = Cipher(keychain)
        self.evaluator = Evaluator(keychain)

    def key_generation(self):
        self._adopt(Keychain(self.oracle, self.params))
        return self.keychain

    def _require_keys(self):
        if self.keychain is None:
            raise ValueError("Keys not generated")

    def encode(self, value):
        return self.codec.enc(value)

    def decode(self, code):
        return self.codec.dec(code)

    def encrypt(self, value):
        self._require_keys()
        return self.cipher.enc(self.encode(value))

    def decrypt(self, ciphertext):
        self._require_keys()
        return self.decode(self.cipher.dec(ciphertext))

    def add(self, ct0, ct1):
        self._require_keys()
        return self.evaluator.add(ct0, ct1)

    def add_scalar(self, ciphertext, value):
        self._require_keys()
        return self.evaluator.sadd(ciphertext, self.encode(value))

    def multiply_scalar(self, ciphertext, scalar):
        self._require_keys()
        return self.evaluator.smult(ciphertext, scalar)

    def multiply(self, ct0, ct1):
        self._require_keys()
        return self.evaluator.mult(ct0, ct1)

"""
Key generation and storage.

A Keychain holds the secret key, the public key, the evaluation
(relinearization) key, the parameters and the randomness source used to
produce them. Key vectors are read-only once generated.
"""

import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel

from .params import Parameters
from .polynomial import PolynomialRing, as_poly

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY = "keys"


def _frozen(values):
    poly = as_poly(values)
    poly.setflags(write=False)
    return poly


class Keychain:
    def __init__(self, oracle, params, secret_key=None, public_key=None, evaluation_key=None):
        """Generate any key that is not given, in the order sk, pk, ek."""
        self.oracle = oracle
        self.params = params
        self.ring = PolynomialRing(params)

        if secret_key is None:
            secret_key = self.gen_sk()
        self.sk = _frozen(secret_key)

        if public_key is None:
            public_key = self.gen_pk()
        self.pk = tuple(_frozen(c) for c in public_key)

        if evaluation_key is None:
            evaluation_key = self.gen_ek()
        self.ek = tuple(tuple(_frozen(c) for c in level) for level in evaluation_key)

    @classmethod
    def from_keys(cls, params, secret_key, public_key, evaluation_key, oracle=None):
        return cls(oracle, params, secret_key, public_key, evaluation_key)

    def _uniform_bounds(self):
        # [-ceil((q-1)/2), floor((q-1)/2))
        q = self.params.coefficient_modulus
        return -(q // 2), (q - 1) // 2

    def gen_sk(self):
        return self.oracle.rand_int(-1, 2, self.params.size)

    def gen_pk(self):
        n = self.params.size
        lower, upper = self._uniform_bounds()
        a = self.oracle.rand_int(lower, upper, n)
        e = self.oracle.norm_dist(n)

        # b = -(a*s) + e  (mod q)
        minus_as = self.ring.neg(self.ring.mul(a, self.sk))
        b = self.ring.mod_center(self.ring.add(minus_as, e))
        return b, a

    def gen_ek(self):
        n = self.params.size
        w = self.params.relinearization_base
        levels = self.params.coeff_exp_len
        lower, upper = self._uniform_bounds()
        s_squared = self.ring.mul(self.sk, self.sk)

        evaluation_key = []
        for i in range(levels):
            a = self.oracle.rand_int(lower, upper + 1, n)
            e = self.oracle.norm_dist(n)
            # ek_i = -(a_i*s) + e_i + w^i * s^2  (mod q)
            minus_as = self.ring.neg(self.ring.mul(a, self.sk))
            scaled = self.ring.mul_scalar(s_squared, w ** i)
            ek = self.ring.add(self.ring.add(minus_as, e), scaled)
            evaluation_key.append((self.ring.mod_center(ek), a))
        logger.debug("Generated evaluation key with %d levels", levels)
        return evaluation_key

    def to_storage(self):
        return KeyStorage(
            secret_key=[int(v) for v in self.sk],
            public_key=[[int(v) for v in c] for c in self.pk],
            evaluation_key=[[[int(v) for v in c] for c in level] for level in self.ek],
            parameters=self.params,
        )

    @classmethod
    def from_storage(cls, storage, oracle=None):
        return cls.from_keys(
            storage.parameters,
            storage.secret_key,
            storage.public_key,
            storage.evaluation_key,
            oracle=oracle,
        )

    def save(self, path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_storage().model_dump_json())
        logger.info("Stored keychain at %s", path)

    @classmethod
    def load(cls, path, oracle=None):
        storage = KeyStorage.model_validate_json(Path(path).read_text())
        return cls.from_storage(storage, oracle=oracle)


class KeyStorage(BaseModel):
    """Serialized keychain: keys plus the literal parameters they belong to."""

    secret_key: List[int]
    public_key: List[List[int]]
    evaluation_key: List[List[List[int]]]
    parameters: Parameters


def setup(filename, oracle, params, directory=DEFAULT_DIRECTORY):
    """Return the keychain stored under directory/filename or create one.

    A missing, unreadable or invalid file, or one written for other
    parameters, is replaced by a freshly generated keychain.
    """
    path = Path(directory) / filename
    try:
        keychain = Keychain.load(path, oracle=oracle)
    except (OSError, ValueError) as exc:
        logger.warning("Could not restore keychain from %s (%s); generating new keys", path, exc)
    else:
        if keychain.params == params:
            logger.info("Restored keychain from %s", path)
            return keychain
        logger.warning("Keychain at %s was generated for other parameters; generating new keys", path)

    keychain = Keychain(oracle, params)
    keychain.save(path)
    return keychain

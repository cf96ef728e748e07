"""
Homomorphic evaluation on ciphertexts.

The evaluator only reads the keychain; every method returns new vectors.
"""

import numpy as np

from .ciphertext import Ciphertext
from .polynomial import as_poly, expand, zeros


class Evaluator:
    def __init__(self, keychain):
        self.keychain = keychain
        self.params = keychain.params
        self.ring = keychain.ring

    def sadd(self, ct, scalar):
        """Add an encoded plaintext scalar.

        The first component is not re-centred modulo q.
        """
        c0 = as_poly(ct[0]) + self.ring.mul_scalar(scalar, self.params.delta)
        return Ciphertext([c0, ct[1]])

    def add(self, ct0, ct1):
        c0 = self.ring.add(ct0[0], ct1[0])
        c1 = self.ring.add(ct0[1], ct1[1])
        return Ciphertext([self.ring.mod_center(c0), self.ring.mod_center(c1)])

    def smult(self, ct, scalar):
        """Multiply both components by an integer scalar."""
        c0 = self.ring.mul_scalar(ct[0], scalar)
        c1 = self.ring.mul_scalar(ct[1], scalar)
        return Ciphertext([self.ring.mod_center(c0), self.ring.mod_center(c1)])

    def mult(self, ct0, ct1):
        """Multiply two ciphertexts and relinearize the result."""
        return self.relinearize(self.mult_prime(ct0, ct1))

    def mult_prime(self, ct0, ct1):
        """Tensor product rescaled by t/q: the degree-2 triple (d0, d1, d2)."""
        c00 = self.ring.mul(ct0[0], ct1[0])
        c01 = self.ring.mul(ct0[0], ct1[1])
        c10 = self.ring.mul(ct0[1], ct1[0])
        c11 = self.ring.mul(ct0[1], ct1[1])

        d0 = self.ring.rescale(c00)
        d1 = self.ring.rescale(self.ring.add(c01, c10))
        d2 = self.ring.rescale(c11)
        return d0, d1, d2

    def decompose(self, d2):
        """Gadget decomposition: one row of base-w digits per coefficient."""
        levels = self.params.coeff_exp_len
        w = self.params.relinearization_base
        return np.array([expand(v, levels, w) for v in d2], dtype=object)

    def key_switch(self, digits, index):
        """Products of every digit column with component `index` of the evaluation key."""
        return [
            self.ring.mul(self.keychain.ek[level][index], digits[:, level])
            for level in range(digits.shape[1])
        ]

    def relinearize(self, triple):
        d0, d1, d2 = triple
        digits = self.decompose(d2)

        components = []
        for index, base in enumerate((d0, d1)):
            total = zeros(self.params.size)
            for product in self.key_switch(digits, index):
                total = total + product
            components.append(total + as_poly(base))
        return Ciphertext(components)

"""
Encryption of encoded messages and decryption back into codes.
"""

from .ciphertext import Ciphertext
from .errors import RandomnessError
from .polynomial import as_poly, vec_div_round, vec_sym_mod


class Cipher:
    def __init__(self, keychain):
        self.keychain = keychain
        self.params = keychain.params
        self.ring = keychain.ring

    def enc(self, m):
        """Encrypt a plaintext vector of `size` integers."""
        n = self.params.size
        oracle = self.keychain.oracle
        if oracle is None:
            raise RandomnessError("encryption needs a keychain with a randomness source")
        pk0, pk1 = self.keychain.pk

        u = oracle.rand_int(-1, 2, n)
        e0 = oracle.norm_dist(n)
        e1 = oracle.norm_dist(n)

        # c0 = delta*m + pk0*u + e0
        delta_m = self.ring.mul_scalar(as_poly(m), self.params.delta)
        c0 = self.ring.add(delta_m, self.ring.add(self.ring.mul(pk0, u), e0))
        # c1 = pk1*u + e1
        c1 = self.ring.add(self.ring.mul(pk1, u), e1)

        return Ciphertext([self.ring.mod_center(c0), self.ring.mod_center(c1)])

    def dec(self, ciphertext):
        """Decrypt into the plaintext vector, centred modulo t."""
        c0, c1 = ciphertext[0], ciphertext[1]
        q = self.params.coefficient_modulus
        t = self.params.decryption_modulus

        # noisy = c0 + c1*s
        noisy = self.ring.mod_center(self.ring.add(c0, self.ring.mul(c1, self.keychain.sk)))
        scaled = vec_div_round(noisy * t, q)
        return vec_sym_mod(scaled, t)

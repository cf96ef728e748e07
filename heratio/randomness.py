"""
Randomness sources for key generation and encryption.

Oracle draws fresh samples from numpy's Generator. OracleDouble replays
preloaded batches so that keys and ciphertexts can be reproduced in tests.
"""

import threading
from abc import ABC, abstractmethod

import numpy as np

from .errors import InvalidRangeError, OutOfSamplesError
from .polynomial import as_poly


class Randomizer(ABC):
    @abstractmethod
    def rand_int(self, lower, upper, n):
        """n uniform integers in [lower, upper)."""

    @abstractmethod
    def norm_dist(self, n):
        """n rounded samples from a bounded normal distribution."""


class DiscreteGaussian:
    """Rounded normal samples, rejecting anything outside +-bound*sigma."""

    def __init__(self, sigma, bound, rng):
        self.sigma = sigma
        self.limit = bound * sigma
        self.rng = rng

    def sample(self, n):
        accepted = np.empty(0)
        while accepted.size < n:
            draws = self.rng.normal(0.0, self.sigma, n - accepted.size)
            valid = draws[np.abs(draws) <= self.limit]
            accepted = np.concatenate([accepted, valid])
        return as_poly(np.round(accepted).astype(np.int64))


class Oracle(Randomizer):
    """Samples from numpy's PCG64 Generator.

    PCG64 is not a cryptographic generator, so keys drawn here are suited to
    experiments and tests, not to protecting real data.
    """

    def __init__(self, sigma, bound, seed=None):
        self.rng = np.random.default_rng(seed)
        self.gaussian = DiscreteGaussian(sigma, bound, self.rng)
        self._lock = threading.Lock()

    @classmethod
    def from_params(cls, params, seed=None):
        return cls(params.standard_deviation, params.bound, seed=seed)

    def rand_int(self, lower, upper, n):
        if lower >= upper:
            raise InvalidRangeError(lower, upper)
        with self._lock:
            samples = self.rng.integers(lower, upper, size=n, dtype=np.int64)
        return as_poly(samples)

    def norm_dist(self, n):
        with self._lock:
            return self.gaussian.sample(n)


class OracleDouble(Randomizer):
    """Replays preloaded sample batches in FIFO order.

    Bounds and counts passed to the sampling methods are ignored: each call
    returns the next stored batch as-is.
    """

    def __init__(self, random_integers, normal_distribution):
        self._random_integers = [as_poly(batch) for batch in random_integers]
        self._normal_distribution = [as_poly(batch) for batch in normal_distribution]
        self._random_integers_index = 0
        self._normal_distribution_index = 0

    def rand_int(self, lower, upper, n):
        if self._random_integers_index >= len(self._random_integers):
            raise OutOfSamplesError("integer")
        batch = self._random_integers[self._random_integers_index]
        self._random_integers_index += 1
        return batch.copy()

    def norm_dist(self, n):
        if self._normal_distribution_index >= len(self._normal_distribution):
            raise OutOfSamplesError("normal distribution")
        batch = self._normal_distribution[self._normal_distribution_index]
        self._normal_distribution_index += 1
        return batch.copy()

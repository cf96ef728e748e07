"""
Exceptions raised by the heratio package.
"""


class HERatioError(Exception):
    """Base class for every error raised by heratio."""


class InvalidSchemeError(HERatioError):
    """The parameters carry a scheme tag that no ring multiplication handles."""

    def __init__(self, scheme):
        super().__init__(f"a valid scheme must be chosen, got {scheme!r}")
        self.scheme = scheme


class RandomnessError(HERatioError):
    pass


class InvalidRangeError(RandomnessError):
    def __init__(self, lower, upper):
        super().__init__(
            f"lower bound is greater than or equal to upper bound: [{lower}, {upper})"
        )
        self.lower = lower
        self.upper = upper


class OutOfSamplesError(RandomnessError):
    def __init__(self, kind):
        super().__init__(f"end of pseudo-random {kind} samples")
        self.kind = kind


class CodecError(HERatioError):
    pass


class InvalidPowerRangeError(CodecError):
    """SIM2D power range is empty for the given degree."""

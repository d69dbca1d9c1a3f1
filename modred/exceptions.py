"""
Error taxonomy for modular reduction

Both errors describe a problem with the modulus, never with the operands,
and both are deterministic: retrying with the same modulus fails the same way.
"""


class ReductionError(ValueError):
    """Base class for modulus-related failures"""


class InvalidModulus(ReductionError):
    """The modulus cannot be decomposed or is unusable by an engine"""

    def __init__(self, modulus, reason):
        self.modulus = modulus
        self.reason = reason
        super().__init__(f"Invalid modulus {modulus}: {reason}")


class InverseNotFound(ReductionError):
    """No Montgomery inverse exists for the modulus and base"""

    def __init__(self, modulus, base):
        self.modulus = modulus
        self.base = base
        super().__init__(
            f"Montgomery inverse not found for q = {modulus}, R = {base}"
        )

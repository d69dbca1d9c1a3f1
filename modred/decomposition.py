"""
Structural decomposition of a modulus

Lattice-friendly primes have the near-power-of-two form

    Q = 2^p - k * 2^q + 1

Knowing (p, k, q) lets the reduction engines replace division by Q with
shifts, additions and small multiplications.
"""

import functools
import logging
import operator
from dataclasses import dataclass

from .exceptions import InvalidModulus
from .params import MAX_BASE, MAX_MODULUS

logger = logging.getLogger(__name__)

MIN_MODULUS = 2


@dataclass(frozen=True)
class ModulusDecomposition:
    """
    Decomposition parameters of a modulus

    Only instances returned by decompose() are valid; a default-constructed
    instance is rejected by every engine.
    """

    exponent_p: int = 0
    coefficient_k: int = 0
    shift_q: int = 0
    base_R: int = 0
    valid: bool = False

    @property
    def is_fermat_form(self):
        """True for moduli 2^m + 1, whose base is 2^(p+1)"""
        return self.valid and self.base_R == 1 << (self.exponent_p + 1)

    @property
    def base_exponent(self):
        """log2 of base_R"""
        return self.base_R.bit_length() - 1

    @property
    def modulus(self):
        """Modulus described by these parameters"""
        if self.is_fermat_form:
            return (1 << self.exponent_p) + 1
        return (1 << self.exponent_p) - (self.coefficient_k << self.shift_q) + 1


def is_power_of_two(num):
    return num > 0 and num & (num - 1) == 0


def as_modulus(x):
    """
    Coerce x to a Python int modulus in [2, 2^32)

    Integer-like values such as numpy integers are accepted; bool is not.
    """
    if isinstance(x, bool):
        raise InvalidModulus(x, "modulus must be an integer")
    try:
        value = operator.index(x)
    except TypeError:
        raise InvalidModulus(x, "modulus must be an integer") from None
    if value < MIN_MODULUS:
        raise InvalidModulus(value, f"modulus must be at least {MIN_MODULUS}")
    if value > MAX_MODULUS:
        raise InvalidModulus(value, f"modulus must fit in {MAX_MODULUS.bit_length()} bits")
    return value


@functools.lru_cache(maxsize=256, typed=True)
def decompose(x):
    """
    Decompose a modulus into the form 2^p - k*2^q + 1

    Args:
        x: Modulus, 2 <= x < 2^32

    Returns:
        ModulusDecomposition with valid=True

    Raises:
        InvalidModulus: x is out of range, or its base does not fit in 32 bits
    """
    x = as_modulus(x)

    if x == MIN_MODULUS:
        # 2 = 2^1 - 1*2^0 + 1
        result = ModulusDecomposition(1, 1, 0, 2, True)
    elif is_power_of_two(x - 1):
        # Fermat-like 2^m + 1; shift_q is a placeholder since k = 0
        m = (x - 1).bit_length() - 1
        result = ModulusDecomposition(m, 0, 1, 1 << (m + 1), True)
    else:
        t = x - 1
        q = (t & -t).bit_length() - 1       # Trailing zero bits
        s = t >> q                          # Odd part
        r = 1 << (s - 1).bit_length()       # Smallest power of two >= s
        p = q + r.bit_length() - 1
        result = ModulusDecomposition(p, r - s, q, 1 << p, True)

    if result.base_R > MAX_BASE:
        raise InvalidModulus(
            x, f"base 2^{result.base_exponent} does not fit in {MAX_BASE.bit_length()} bits"
        )

    logger.debug(
        "q = %d: p = %d, k = %d, q_shift = %d, R = %d",
        x, result.exponent_p, result.coefficient_k, result.shift_q, result.base_R,
    )
    return result


def try_decompose(x):
    """Like decompose(), but returns None for moduli it cannot handle"""
    try:
        return decompose(x)
    except InvalidModulus as exc:
        logger.debug("Skipping modulus: %s", exc)
        return None


def require_valid(decomposition, modulus):
    """Raise InvalidModulus unless the decomposition is usable for modulus"""
    if not decomposition.valid:
        raise InvalidModulus(modulus, "decomposition is not valid")
    if decomposition.base_R == 0:
        raise InvalidModulus(modulus, "decomposition base is zero")
    return decomposition


def check_operands(a, b, q):
    """Operands must be residues modulo q"""
    for name, value in (("a", a), ("b", b)):
        if not 0 <= value < q:
            raise ValueError(f"Operand {name} = {value} must be in [0, {q})")

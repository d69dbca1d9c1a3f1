"""
Barrett reduction

For modulus q and base R = 2^k >= q:
    mu = floor(R^2 / q)

Barrett algorithm:
    product = a * b
    quotient = (product * mu) >> 2k
    r = product - quotient * q
    while r >= q: r = r - q

mu and the shift 2k come from the same base, which keeps the quotient
estimate at most two below the true quotient for product < R^2.
"""

import logging
from dataclasses import dataclass

from .decomposition import as_modulus, check_operands, decompose, is_power_of_two, require_valid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BarrettParameter:
    mu: int
    shift: int


def compute_barrett_parameter(q, R):
    """
    Compute Barrett reduction constants for modulus q and base R

    Args:
        q: Modulus
        R: Power-of-two base, R >= q

    Returns:
        BarrettParameter(mu=floor(R^2 / q), shift=2*log2(R))
    """
    if not is_power_of_two(R):
        raise ValueError(f"Barrett base must be a power of two, got {R}")
    if R < q:
        raise ValueError(f"Barrett base {R} must not be below the modulus {q}")

    k = R.bit_length() - 1
    parameter = BarrettParameter(mu=(R * R) // q, shift=2 * k)
    logger.debug("Barrett constants for q = %d: mu = %d, shift = %d", q, parameter.mu, parameter.shift)
    return parameter


def barrett_parameter_for(q):
    """Barrett constants derived from the decomposition base of q"""
    q = as_modulus(q)
    params = require_valid(decompose(q), q)
    return compute_barrett_parameter(q, params.base_R)


def barrett_reduce(a, b, q, parameter):
    """
    Compute (a * b) mod q with Barrett reduction

    Args:
        a, b: Operands in [0, q)
        q: Modulus
        parameter: BarrettParameter, or a bare mu computed for R = 2^bitlen(q)

    Returns:
        (a * b) mod q
    """
    q = as_modulus(q)
    if isinstance(parameter, BarrettParameter):
        mu, shift = parameter.mu, parameter.shift
    else:
        mu, shift = parameter, 2 * q.bit_length()
    check_operands(a, b, q)

    product = a * b
    quotient = (product * mu) >> shift
    result = product - quotient * q

    # Final adjustment
    while result >= q:
        result -= q
    return result

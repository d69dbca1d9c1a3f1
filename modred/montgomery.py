"""
Montgomery multiplication

With R = 2^k coprime to q and q' = -q^-1 mod R, REDC computes T * R^-1 mod q
for T < q * R using only a mask, a multiply and a shift:

    m = (T mod R) * q' mod R
    t = (T + m * q) >> k
    if t >= q: t = t - q

To convert to Montgomery domain: a_M = (a * R) mod q
To convert from Montgomery domain: a = REDC(a_M)
"""

import functools
import logging
from dataclasses import dataclass

from .decomposition import as_modulus, check_operands, decompose, require_valid
from .exceptions import InverseNotFound

logger = logging.getLogger(__name__)


def extended_gcd(a, b):
    """Bezout coefficients: returns (g, x, y) with a*x + b*y == g == gcd(a, b)"""
    x, last_x = 0, 1
    y, last_y = 1, 0
    while b:
        quotient = a // b
        a, b = b, a - quotient * b
        last_x, x = x, last_x - quotient * x
        last_y, y = y, last_y - quotient * y
    return a, last_x, last_y


def mod_inverse(a, m):
    """Compute modular multiplicative inverse of a modulo m"""
    gcd, x, _ = extended_gcd(a % m, m)
    if gcd != 1:
        raise ValueError(f"Modular inverse does not exist for {a} mod {m}")
    return x % m


def montgomery_inverse(q, R):
    """
    Compute q' = -q^-1 mod R

    The result is the unique value in [0, R) with (q' * q) mod R == R - 1.

    Raises:
        InverseNotFound: q and R are not coprime
    """
    try:
        q_inv = mod_inverse(q, R)
    except ValueError:
        raise InverseNotFound(q, R) from None
    return (-q_inv) % R


@dataclass(frozen=True)
class MontgomeryContext:
    """Montgomery constants for one modulus"""

    modulus: int
    base_R: int
    shift: int
    inverse: int    # q' = -q^-1 mod R
    r_mod_q: int    # R mod q, the Montgomery form of 1
    r_inv: int      # R^-1 mod q


@functools.lru_cache(maxsize=256, typed=True)
def montgomery_context(q):
    """
    Derive Montgomery constants from the decomposition of q

    The base is R = 2^p. For q = 2 no power of two above 1 is coprime to q,
    so R = 1 and REDC reduces to a conditional subtraction.

    Raises:
        InvalidModulus: q cannot be decomposed
        InverseNotFound: q is even and larger than 2
    """
    q = as_modulus(q)
    params = require_valid(decompose(q), q)
    shift = 0 if q == 2 else params.exponent_p
    R = 1 << shift

    inverse = montgomery_inverse(q, R)
    context = MontgomeryContext(
        modulus=q,
        base_R=R,
        shift=shift,
        inverse=inverse,
        r_mod_q=R % q,
        r_inv=mod_inverse(R, q),
    )
    logger.debug(
        "Montgomery constants for q = %d: R = 2^%d, q' = %d, R^-1 = %d",
        q, shift, inverse, context.r_inv,
    )
    return context


def montgomery_reduce(value, q, inv, shift):
    """
    Montgomery REDC: value * R^-1 mod q for R = 2^shift

    Args:
        value: Input, value < q * R for a fully reduced result
        q: Modulus
        inv: -q^-1 mod R
        shift: log2(R)

    Returns:
        y with y == value * R^-1 (mod q)
    """
    mask = (1 << shift) - 1
    m = ((value & mask) * inv) & mask
    y = (value + m * q) >> shift
    return y - q if y >= q else y


def to_montgomery(x, context):
    """Convert x to Montgomery form: x * R mod q"""
    return (x * context.base_R) % context.modulus


def from_montgomery(x_mont, context):
    """Convert from Montgomery form back to standard form"""
    return montgomery_reduce(x_mont, context.modulus, context.inverse, context.shift) % context.modulus


def montgomery_multiply(a, b, q):
    """
    Compute (a * b) mod q with Montgomery multiplication

    Both operands are converted to Montgomery form, multiplied and reduced
    once (giving a*b*R mod q), then reduced a second time to leave the
    Montgomery domain.

    Raises:
        InvalidModulus: q cannot be decomposed
        InverseNotFound: q has no inverse modulo its base
    """
    q = as_modulus(q)
    context = montgomery_context(q)
    check_operands(a, b, q)

    a_m = to_montgomery(a, context)
    b_m = to_montgomery(b, context)

    product = a_m * b_m
    res = montgomery_reduce(product, q, context.inverse, context.shift)
    res = montgomery_reduce(res, q, context.inverse, context.shift)
    return res % q

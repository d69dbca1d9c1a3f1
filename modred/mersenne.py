"""
Generalized Mersenne reduction

For Q = 2^p - k*2^q + 1 the quotient of a value x by Q is approximated as

    x / Q ~ (x >> p) + k * (x >> (2p - q))

and the multiple of Q is rebuilt from shifts, since (Q >> q) << q == Q - 1.
Each step keeps x mod Q unchanged and shrinks x until it is below 2Q.
"""

import logging

from .decomposition import as_modulus, check_operands, decompose, require_valid
from .exceptions import InvalidModulus

logger = logging.getLogger(__name__)


def mersenne_reduction_steps(a, b, q):
    """
    Compute (a * b) mod q with the generalized Mersenne reduction

    Args:
        a, b: Operands in [0, q)
        q: Modulus

    Returns:
        (residue, iterations) where iterations counts approximation steps

    Raises:
        InvalidModulus: q cannot be decomposed, or is even and larger than 2
    """
    q = as_modulus(q)
    params = require_valid(decompose(q), q)
    if q % 2 == 0 and q != 2:
        raise InvalidModulus(q, "even modulus has no shift structure to reduce with")
    check_operands(a, b, q)

    p = params.exponent_p
    shift1 = p
    shift2 = 2 * p - params.shift_q
    folded_q = q >> params.shift_q

    residual = a * b
    iterations = 0
    while residual > 2 * q:
        if q > (1 << p):
            # Fermat form 2^p + 1
            correction = (residual >> shift1) - (residual >> shift2)
        else:
            correction = (residual >> shift1) + params.coefficient_k * (residual >> shift2)

        step1 = correction
        step2 = (step1 * folded_q) << params.shift_q
        residual -= step2 + step1
        iterations += 1

    # residual is congruent to a*b and above -4q; an over-estimated
    # correction can leave it negative
    while residual < 0:
        residual += q
    while residual >= q:
        residual -= q

    logger.debug("%d * %d mod %d = %d after %d steps", a, b, q, residual, iterations)
    return residual, iterations


def reduce_mersenne_form(a, b, q):
    """(a * b) mod q using only the shift/add structure of q"""
    residue, _ = mersenne_reduction_steps(a, b, q)
    return residue

#!/usr/bin/env python3
"""
Exhaustive check of the generalized Mersenne reduction

Kyber q = 2^12 - 3*2^8 + 1 by default: every product a * b with
a, b in [1, q) is reduced and compared with (a * b) mod q.
"""

import logging
import sys
import time

from modred import decompose, exhaustive_sweep
from modred.params import KNOWN_MODULI, log_level


def main(argv):
    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")

    q = int(argv[1]) if len(argv) > 1 else KNOWN_MODULI["Kyber"]
    limit = int(argv[2]) if len(argv) > 2 else None

    params = decompose(q)
    if params.is_fermat_form:
        print(f"q = {q} = 2^{params.exponent_p} + 1")
    else:
        print(f"q = {q} = 2^{params.exponent_p} - {params.coefficient_k}*2^{params.shift_q} + 1")

    start = time.perf_counter()
    result = exhaustive_sweep(q, limit)
    elapsed = time.perf_counter() - start

    print(f"Checked {result.checked} products in {elapsed:.2f}s")
    print(f"Maximum loop count: {result.max_iterations}")
    if result.passed:
        print("✓ All test cases verified successfully!")
        return 0

    a, b = result.failures[0]
    print(f"✗ {len(result.failures)} failures, first at a={a} b={b}")
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))

#!/usr/bin/env python3
"""
Precompute constants for generalized Mersenne, Barrett and Montgomery reduction

Prints the decomposition Q = 2^p - k*2^q + 1 together with the derived
Montgomery and Barrett constants, and spot-checks each engine.
"""

import logging
import random
import sys

from modred import (
    InvalidModulus,
    ReductionError,
    barrett_parameter_for,
    barrett_reduce,
    decompose,
    montgomery_context,
    montgomery_multiply,
    reduce_mersenne_form,
)
from modred.params import KNOWN_MODULI, log_level


def print_decomposition(q):
    """Print the decomposition parameters of q"""
    params = decompose(q)

    print(f"Decomposition for q = {q}")
    if params.is_fermat_form:
        print(f"  form:              2^{params.exponent_p} + 1")
    else:
        print(f"  form:              2^{params.exponent_p} - {params.coefficient_k}*2^{params.shift_q} + 1")
    print(f"  p (exponent):      {params.exponent_p}")
    print(f"  k (coefficient):   {params.coefficient_k}")
    print(f"  q (shift):         {params.shift_q}")
    print(f"  R (base):          {params.base_R} (0x{params.base_R:X})")
    print()
    return params


def print_montgomery_constants(q):
    """Print the Montgomery constants of q"""
    ctx = montgomery_context(q)

    print(f"Montgomery Reduction Constants for q = {q}")
    print(f"  k (shift):         {ctx.shift}")
    print(f"  R = 2^k:           {ctx.base_R} (0x{ctx.base_R:X})")
    print(f"  R mod q:           {ctx.r_mod_q}")
    print(f"  R^-1 mod q:        {ctx.r_inv}")
    print(f"  q' = -q^-1 mod R:  {ctx.inverse} (0x{ctx.inverse:X})")
    print()
    print(f"  Verification: (q * q') mod R = {(q * ctx.inverse) % ctx.base_R} (should be {ctx.base_R - 1})")
    print()
    return ctx


def print_barrett_constants(q):
    """Print the Barrett constants of q"""
    parameter = barrett_parameter_for(q)

    print(f"Barrett Reduction Constants for q = {q}")
    print(f"  shift (2k):        {parameter.shift}")
    print(f"  mu:                {parameter.mu} (0x{parameter.mu:X})")
    print()
    return parameter


def spot_check(q, test_cases=5):
    """Compare every engine against (a * b) mod q on random operands"""
    print("=" * 70)
    print(f"Testing reductions for q = {q}")
    print("=" * 70)

    rng = random.Random(42)
    parameter = barrett_parameter_for(q)
    engines = {
        "Mersenne": reduce_mersenne_form,
        "Montgomery": montgomery_multiply,
        "Barrett": lambda a, b, q: barrett_reduce(a, b, q, parameter),
    }
    passed = True

    for _ in range(test_cases):
        a = rng.randint(0, q - 1)
        b = rng.randint(0, q - 1)
        expected = (a * b) % q

        for name, engine in engines.items():
            try:
                value = engine(a, b, q)
            except ReductionError as exc:
                print(f"  - {name} unavailable: {exc}")
                continue
            match = "✓" if value == expected else "✗"
            passed = passed and value == expected
            print(f"  {match} {name}: {a} * {b} mod {q} = {expected}, got {value}")

    print()
    return passed


def main(argv):
    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")

    if len(argv) == 2:
        moduli = [("User", int(argv[1]))]
    else:
        moduli = list(KNOWN_MODULI.items())

    failed = False
    for name, q in moduli:
        print("=" * 70)
        print(f"{name}: q = {q}")
        print("=" * 70)
        print()
        try:
            print_decomposition(q)
        except InvalidModulus as exc:
            print(f"✗ {exc}")
            failed = True
            continue
        try:
            print_montgomery_constants(q)
        except ReductionError as exc:
            print(f"✗ {exc}")
            print()
        print_barrett_constants(q)
        failed = not spot_check(q) or failed

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

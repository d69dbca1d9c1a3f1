#!/usr/bin/env python3
"""
Modular reduction validation

Runs the generalized Mersenne, Montgomery and Barrett engines on the same
operands and compares them with the golden reference (a * b) mod q.

Usage:
    verify_reductions.py                 # default vectors and boundary cases
    verify_reductions.py A B Q           # a single triple
"""

import logging
import sys

from modred import run_verification
from modred.params import TEST_Q, TEST_X, TEST_Y, log_level


def print_report(report):
    print(f"Golden reference: {report.reference}")
    for r in report.results:
        if not r.ok:
            print(f"{r.name}: error ({r.error})")
            continue
        match = "√" if r.value == report.reference else "×"
        print(f"{r.name}: {r.value} {match}")
    print()


def main(argv):
    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")

    if len(argv) == 4:
        cases = [("User", int(argv[1]), int(argv[2]), int(argv[3]))]
    else:
        cases = [
            ("Modular Reduction Validation", TEST_X, TEST_Y, TEST_Q),
            ("Boundary Case: maximum input", TEST_Q - 1, TEST_Q - 1, TEST_Q),
            ("Boundary Case: zero input", 0, 12345, TEST_Q),
            ("Smallest modulus", 1, 1, 2),
        ]

    passed = True
    for title, a, b, q in cases:
        print(f"=== {title} ===")
        print(f"a = {a}, b = {b}, q = {q}")
        report = run_verification(a, b, q)
        print_report(report)
        passed = passed and report.passed

    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))

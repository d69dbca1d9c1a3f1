"""
Cross-check of the reduction engines against a reference product-mod

Each engine runs independently; a modulus an engine cannot handle, or an
operand outside [0, q), is recorded as an error on that engine's result
instead of aborting the run.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .barrett import barrett_parameter_for, barrett_reduce
from .mersenne import mersenne_reduction_steps, reduce_mersenne_form
from .montgomery import montgomery_multiply

logger = logging.getLogger(__name__)

ENGINES = ("Generalized Mersenne", "Montgomery", "Barrett")


def reference_residue(a, b, q):
    """Golden reference: (a * b) mod q"""
    return (a * b) % q


def reference_residues(a, b, q):
    """
    Reference residues for arrays of operands

    Operands below 2^32 keep the product below 2^64, so uint64 is exact.
    """
    a = np.asarray(a, dtype=np.uint64)
    b = np.asarray(b, dtype=np.uint64)
    return (a * b) % np.uint64(q)


@dataclass
class EngineResult:
    name: str
    value: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


@dataclass
class VerificationReport:
    a: int
    b: int
    modulus: int
    reference: int
    results: List[EngineResult] = field(default_factory=list)

    @property
    def passed(self):
        return all(r.ok and r.value == self.reference for r in self.results)

    def result(self, name):
        for r in self.results:
            if r.name == name:
                return r
        raise KeyError(name)


def _run_engine(name, func, *args):
    # Modulus errors and out-of-range operands are both recorded per engine
    try:
        return EngineResult(name, value=func(*args))
    except ValueError as exc:
        logger.info("%s unavailable: %s", name, exc)
        return EngineResult(name, error=f"{type(exc).__name__}: {exc}")


def _barrett(a, b, q):
    return barrett_reduce(a, b, q, barrett_parameter_for(q))


def run_verification(a, b, q, reference=None):
    """
    Run all three engines on (a, b, q) and compare against the reference

    Args:
        a, b: Operands in [0, q)
        q: Modulus
        reference: Precomputed reference residue (computed if omitted)

    Returns:
        VerificationReport
    """
    if reference is None:
        reference = reference_residue(a, b, q)
    report = VerificationReport(a, b, q, int(reference))
    report.results = [
        _run_engine(ENGINES[0], reduce_mersenne_form, a, b, q),
        _run_engine(ENGINES[1], montgomery_multiply, a, b, q),
        _run_engine(ENGINES[2], _barrett, a, b, q),
    ]

    for r in report.results:
        if r.ok and r.value != report.reference:
            logger.warning(
                "%s mismatch: %d * %d mod %d = %d, got %d",
                r.name, a, b, q, report.reference, r.value,
            )
    return report


def verify_many(q, pairs):
    """Run run_verification over (a, b) pairs sharing one modulus"""
    pairs = list(pairs)
    if not pairs:
        return []
    a, b = zip(*pairs)
    references = reference_residues(a, b, q)
    return [
        run_verification(int(x), int(y), q, reference=int(ref))
        for x, y, ref in zip(a, b, references)
    ]


def random_pairs(q, count, seed=42):
    """Reproducible random operand pairs in [0, q)"""
    rng = np.random.default_rng(seed)
    values = rng.integers(0, q, size=(count, 2), dtype=np.uint64)
    return [(int(x), int(y)) for x, y in values]


@dataclass
class SweepResult:
    modulus: int
    checked: int = 0
    max_iterations: int = 0
    failures: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def passed(self):
        return not self.failures


def exhaustive_sweep(q, limit=None):
    """
    Check the generalized Mersenne reduction for every a, b in [1, limit)

    Tracks the largest number of approximation steps any product needed.

    Args:
        q: Modulus
        limit: Upper bound for the operands (defaults to q)

    Returns:
        SweepResult
    """
    limit = q if limit is None else min(limit, q)
    result = SweepResult(q)

    operands = np.arange(1, limit, dtype=np.uint64)
    for a in range(1, limit):
        references = reference_residues(a, operands, q)
        for b, expected in zip(range(1, limit), references):
            residue, iterations = mersenne_reduction_steps(a, b, q)
            result.checked += 1
            if iterations > result.max_iterations:
                result.max_iterations = iterations
            if residue != expected:
                result.failures.append((a, b))

    logger.info(
        "Swept q = %d: %d products, max %d steps, %d failures",
        q, result.checked, result.max_iterations, len(result.failures),
    )
    return result

"""Generalized Mersenne, Montgomery and Barrett modular multiplication."""

from .barrett import BarrettParameter, barrett_parameter_for, barrett_reduce, compute_barrett_parameter
from .decomposition import ModulusDecomposition, decompose, try_decompose
from .exceptions import InvalidModulus, InverseNotFound, ReductionError
from .mersenne import mersenne_reduction_steps, reduce_mersenne_form
from .montgomery import (
    MontgomeryContext,
    from_montgomery,
    montgomery_context,
    montgomery_inverse,
    montgomery_multiply,
    montgomery_reduce,
    to_montgomery,
)
from .verify import (
    EngineResult,
    SweepResult,
    VerificationReport,
    exhaustive_sweep,
    reference_residue,
    run_verification,
    verify_many,
)

__all__ = [
    "BarrettParameter",
    "EngineResult",
    "InvalidModulus",
    "InverseNotFound",
    "ModulusDecomposition",
    "MontgomeryContext",
    "ReductionError",
    "SweepResult",
    "VerificationReport",
    "barrett_parameter_for",
    "barrett_reduce",
    "compute_barrett_parameter",
    "decompose",
    "exhaustive_sweep",
    "from_montgomery",
    "mersenne_reduction_steps",
    "montgomery_context",
    "montgomery_inverse",
    "montgomery_multiply",
    "montgomery_reduce",
    "reduce_mersenne_form",
    "reference_residue",
    "run_verification",
    "to_montgomery",
    "try_decompose",
    "verify_many",
]

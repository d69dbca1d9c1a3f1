"""Reference models for reduction tests."""

from .reduction_reference import (
    FERMAT_MODULI,
    LATTICE_MODULI,
    brute_force_montgomery_inverse,
    golden_mod_mult,
    random_odd_moduli,
)

__all__ = [
    "FERMAT_MODULI",
    "LATTICE_MODULI",
    "brute_force_montgomery_inverse",
    "golden_mod_mult",
    "random_odd_moduli",
]

"""
Tests for Montgomery multiplication and the REDC step
"""

import logging
import math
import random

import pytest

from modred import (
    InvalidModulus,
    InverseNotFound,
    from_montgomery,
    montgomery_context,
    montgomery_inverse,
    montgomery_multiply,
    montgomery_reduce,
    to_montgomery,
)
from modred.montgomery import extended_gcd, mod_inverse
from modred.params import TEST_Q, TEST_X, TEST_Y

from refs import FERMAT_MODULI, LATTICE_MODULI, brute_force_montgomery_inverse, golden_mod_mult, random_odd_moduli

log = logging.getLogger(__name__)


def test_extended_gcd():
    gcd, x, y = extended_gcd(240, 46)
    assert gcd == 2
    assert 240 * x + 46 * y == 2


def test_mod_inverse():
    assert mod_inverse(3, 7) == 5
    with pytest.raises(ValueError):
        mod_inverse(4, 8)


@pytest.mark.parametrize("q", [3, 5, 7, 97, 257, 3329, 7681, 12289])
def test_inverse_matches_linear_search(q):
    """Extended Euclid agrees with the brute-force search"""
    ctx = montgomery_context(q)
    expected = brute_force_montgomery_inverse(q, ctx.base_R)
    assert ctx.inverse == expected, \
        f"q' for q = {q}, R = {ctx.base_R}: got {ctx.inverse}, expected {expected}"


@pytest.mark.parametrize("q", LATTICE_MODULI + FERMAT_MODULI + random_odd_moduli(100))
def test_inverse_property(q):
    """(q' * q) mod R == R - 1"""
    ctx = montgomery_context(q)
    assert 0 <= ctx.inverse < ctx.base_R
    assert (ctx.inverse * q) % ctx.base_R == ctx.base_R - 1
    assert (ctx.r_inv * ctx.base_R) % q == 1
    assert ctx.r_mod_q == ctx.base_R % q


def test_base_follows_decomposition():
    ctx = montgomery_context(3329)
    assert ctx.base_R == 4096
    assert ctx.shift == 12


def test_smallest_modulus_context():
    """q = 2 falls back to R = 1"""
    ctx = montgomery_context(2)
    assert ctx.base_R == 1
    assert ctx.shift == 0
    assert ctx.inverse == 0


@pytest.mark.parametrize("q, R", [(4, 8), (3328, 4096), (6, 2)])
def test_inverse_not_found(q, R):
    with pytest.raises(InverseNotFound) as excinfo:
        montgomery_inverse(q, R)
    assert excinfo.value.modulus == q
    assert excinfo.value.base == R


def test_redc_removes_one_factor_of_r():
    """REDC(x * R) == x"""
    q = 3329
    ctx = montgomery_context(q)
    for x in [0, 1, 2, 1000, q - 1]:
        result = montgomery_reduce(x * ctx.base_R, q, ctx.inverse, ctx.shift)
        assert result == x, f"REDC({x} * R) = {result}, expected {x}"


def test_redc_congruence():
    """REDC(T) * R == T (mod q) for T < q * R"""
    q = 8380417
    ctx = montgomery_context(q)
    rng = random.Random(42)
    for _ in range(200):
        t = rng.randrange(0, q * ctx.base_R)
        y = montgomery_reduce(t, q, ctx.inverse, ctx.shift)
        assert 0 <= y < q
        assert (y * ctx.base_R) % q == t % q


def test_montgomery_domain_conversion():
    ctx = montgomery_context(3329)
    assert to_montgomery(1, ctx) == ctx.r_mod_q
    for x in [0, 1, 17, 3328]:
        assert from_montgomery(to_montgomery(x, ctx), ctx) == x


def test_validation_vector():
    result = montgomery_multiply(TEST_X, TEST_Y, TEST_Q)
    assert result == 280499838, f"got {result}, expected 280499838"


@pytest.mark.parametrize("q", LATTICE_MODULI + FERMAT_MODULI)
def test_boundary_operands(q):
    test_cases = [
        (0, 12345 % q, 0),
        (q - 1, 0, 0),
        (1, 1, 1),
        (q - 1, q - 1, 1),
    ]
    for a, b, expected in test_cases:
        result = montgomery_multiply(a, b, q)
        assert result == expected, \
            f"Montgomery failed: {a} * {b} mod {q} = {result}, expected {expected}"


@pytest.mark.parametrize("q", LATTICE_MODULI + FERMAT_MODULI + random_odd_moduli(50, seed=3))
def test_random_values(q):
    rng = random.Random(42)
    for i in range(200):
        a = rng.randint(0, q - 1)
        b = rng.randint(0, q - 1)
        result = montgomery_multiply(a, b, q)
        expected = golden_mod_mult(a, b, q)
        assert result == expected, \
            f"Random test {i} failed: {a} * {b} mod {q} = {result}, expected {expected}"
    log.info(f"✓ Montgomery q = {q}")


def test_smallest_modulus():
    assert montgomery_multiply(1, 1, 2) == 1
    assert montgomery_multiply(1, 0, 2) == 0


@pytest.mark.parametrize("q", [4, 3328, 1 << 31])
def test_even_moduli_have_no_inverse(q):
    with pytest.raises(InverseNotFound):
        montgomery_multiply(1, 1, q)


@pytest.mark.parametrize("q", [0, 1, 1 << 32])
def test_rejects_undecomposable_moduli(q):
    with pytest.raises(InvalidModulus):
        montgomery_multiply(0, 0, q)


def test_extended_gcd_bezout():
    """a*x + b*y == gcd(a, b) on random pairs"""
    rng = random.Random(42)
    for _ in range(200):
        a = rng.randint(0, 1 << 32)
        b = rng.randint(1, 1 << 32)
        gcd, x, y = extended_gcd(a, b)
        assert gcd == math.gcd(a, b)
        assert a * x + b * y == gcd, f"extended_gcd({a}, {b}) = {(gcd, x, y)}"


def test_mod_inverse_edge_cases():
    """Inverse modulo 1 is 0; 1 is its own inverse"""
    assert mod_inverse(2, 1) == 0
    assert mod_inverse(1, 2) == 1
    assert mod_inverse(3328, 3329) == 3328

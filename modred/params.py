"""
Default parameters for modular reduction

Typical security primes used in lattice-based cryptography, plus the
validation vectors of the reference driver.
"""

import logging
import os

# Word parameters
WIDTH = 32
MAX_MODULUS = (1 << WIDTH) - 1
MAX_BASE = 1 << (WIDTH - 1)     # Largest power-of-two base representable in WIDTH bits

# Well-known moduli (name -> q)
KNOWN_MODULI = {
    "Kyber": 3329,              # 2^12 - 3*2^8 + 1
    "Kyber (round 1)": 7681,    # 2^13 - 2^9 + 1
    "NewHope": 12289,           # 2^14 - 2^12 + 1
    "NTRU": 65537,              # 2^16 + 1
    "Dilithium": 8380417,       # 2^23 - 2^13 + 1
    "qTESLA v2.0": 8404993,     # 2^24 - 511*2^14 + 1
    "HPS": 1073479681,          # 2^30 - 2^18 + 1
}

# Validation vectors
TEST_Q = 1073479681
TEST_X = 412223
TEST_Y = 412132

LOG_LEVEL_ENV = "MODRED_LOG_LEVEL"


def log_level(default="WARNING"):
    """Logging level selected through the MODRED_LOG_LEVEL environment variable"""
    name = os.environ.get(LOG_LEVEL_ENV, default).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {name!r} in {LOG_LEVEL_ENV}")
    return level

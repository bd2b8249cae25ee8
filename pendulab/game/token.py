"""
Short verification code for a successful run.

Deterministic, non-cryptographic: a 32-bit string hash rendered in base 36.
It lets a result be copied into an external form; it is not a credential.
"""

from decimal import ROUND_HALF_UP, Decimal

import numpy as np

FAILED_CODE = "FAILED"
_PREFIX = "PM-"


def _fixed(value: float, digits: int) -> str:
    """Fixed-point text with exact binary ties rounded away from zero: 1.125 -> '1.13'."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _format_number(value: float) -> str:
    """Shortest decimal form: 45.0 -> '45', 22.5 -> '22.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def string_hash32(s: str) -> int:
    """h = h * 31 + ord(c) over the string, wrapped to a signed 32-bit integer."""
    h = 0
    for ch in s:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def verification_code(
    length: float,
    initial_angle_deg: float,
    damping: float,
    elapsed: float,
    oscillations: int,
) -> str:
    """
    Code derived from the run's parameters and result, e.g. 'PM-IP2O6Q'.

    Args:
        length: rod length L (m).
        initial_angle_deg: release angle (degrees).
        damping: damping coefficient b.
        elapsed: simulated time at the end of the run (s).
        oscillations: full oscillations counted.
    """
    payload = "|".join(
        [
            _fixed(length, 2),
            _format_number(initial_angle_deg),
            _fixed(damping, 3),
            _fixed(elapsed, 2),
            str(int(oscillations)),
        ]
    )
    digits = np.base_repr(abs(string_hash32(payload)), base=36)
    return _PREFIX + digits[:8]

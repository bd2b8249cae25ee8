"""Tests for the run verification code."""

from pendulab.game import verification_code
from pendulab.game.token import string_hash32


def test_known_codes() -> None:
    assert verification_code(1.0, 45, 0.05, 9.92, 5) == "PM-IP2O6Q"
    assert verification_code(1.5, 30.0, 0.1, 12.5, 7) == "PM-JQR7TT"
    assert verification_code(2.25, 22.5, 0.0, 3.2, 1) == "PM-4ZZQCW"


def test_code_depends_on_every_field() -> None:
    base = verification_code(1.0, 45, 0.05, 9.92, 5)
    assert verification_code(1.1, 45, 0.05, 9.92, 5) != base
    assert verification_code(1.0, 46, 0.05, 9.92, 5) != base
    assert verification_code(1.0, 45, 0.06, 9.92, 5) != base
    assert verification_code(1.0, 45, 0.05, 9.93, 5) != base
    assert verification_code(1.0, 45, 0.05, 9.92, 6) != base


def test_hash_wraps_to_signed_32_bit() -> None:
    assert string_hash32("") == 0
    assert string_hash32("a") == 97
    h = string_hash32("x" * 64)
    assert -2 ** 31 <= h < 2 ** 31


def test_binary_ties_round_half_up() -> None:
    # 1.125, 0.0625, 8.375 are exact in binary: '1.13|30|0.063|8.38|5'
    assert verification_code(1.125, 30, 0.0625, 8.375, 5) == "PM-9FLDV"
    assert verification_code(1.625, 20, 0.1875, 4.125, 3) == "PM-RXLL48"

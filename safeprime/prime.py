# safeprime/prime.py
# Generates cryptographically secure prime numbers.

from __future__ import annotations
from typing import Optional

from .common import gen_prime as from_rng
from .common import is_prime as check
from .common import is_prime_baillie_psw as strong_check
from .config import MIN_BIT_LENGTH
from .error import BitLength, Result
from .rand import os_rng

__all__ = ["new", "from_rng", "check", "strong_check"]

def new(bit_length: int, limbs: Optional[int] = None) -> Result:
    """Constructs a new prime number with a size of `bit_length` bits (at least 128)."""
    if bit_length < MIN_BIT_LENGTH:
        raise BitLength(bit_length)
    return from_rng(bit_length, os_rng(), limbs)

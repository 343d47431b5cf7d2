# safeprime/safe_prime.py
# Generates cryptographically secure safe prime numbers.

from __future__ import annotations
from typing import Optional

from .common import gen_safe_prime as from_rng
from .common import is_safe_prime as check
from .common import is_safe_prime_baillie_psw as strong_check
from .config import MIN_BIT_LENGTH
from .error import BitLength, Result
from .rand import os_rng

__all__ = ["new", "from_rng", "check", "strong_check"]

def new(bit_length: int, limbs: Optional[int] = None) -> Result:
    """
    Constructs a new safe prime number with a size of `bit_length` bits.

    This will initialize an OS random number generator and call
    `from_rng()`. The bit length is checked first, so a rejected request
    never touches the OS rng.

    Note: the `bit_length` MUST be at least 128-bits.
    """
    if bit_length < MIN_BIT_LENGTH:
        raise BitLength(bit_length)
    rng = os_rng()
    return from_rng(bit_length, rng, limbs)

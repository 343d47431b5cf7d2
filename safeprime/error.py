# safeprime/error.py
# Errors surfaced by the public constructors.

from __future__ import annotations

from .config import MIN_BIT_LENGTH
from .uint import UInt

# Success type of prime.new / safe_prime.new; failures raise Error.
Result = UInt

class Error(Exception):
    """Base class for recoverable safeprime errors."""

class OsRngInitialization(Error):
    """The OS random number generator could not be initialized."""

    def __init__(self, err: BaseException):
        self.err = err
        super().__init__(f"Error initializing OS random number generator: {err}")

class BitLength(Error):
    """The requested bit length is below MIN_BIT_LENGTH."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"The given bit length is too small; must be at least {MIN_BIT_LENGTH}: {length}"
        )

# safeprime/rand.py
# Random sources and the bounded witness stream

from __future__ import annotations
import logging
import os
import random
from typing import Optional

from .compat import gen_biguint_range
from .error import OsRngInitialization
from .uint import UInt

log = logging.getLogger(__name__)

def os_rng() -> random.SystemRandom:
    """
    OS-backed CSPRNG. Draws one byte up front so a missing entropy source
    is reported here as OsRngInitialization instead of mid-search.
    """
    try:
        os.urandom(1)
        rng = random.SystemRandom()
    except (NotImplementedError, OSError) as e:
        raise OsRngInitialization(e) from e
    log.debug("OS random number generator ready")
    return rng

class Randoms:
    """
    Iterator yielding `amount` random numbers in [lower_limit, upper_limit).
    For convenience of use with Miller-Rabin tests, a given number can stand
    in for the last generated one (see with_appended).
    """

    def __init__(self, lower_limit: UInt, upper_limit: UInt, amount: int, rng):
        self.appended: Optional[UInt] = None
        self.lower_limit = lower_limit
        self.upper_limit = upper_limit
        self.amount = amount
        self.rng = rng

    def with_appended(self, x: UInt) -> Randoms:
        """
        Make `x` the last item of the stream, as if it was generated. This
        doesn't affect stream length. Only one number can be appended,
        subsequent calls replace the previously appended number.
        """
        self.appended = x
        return self

    def _gen_biguint(self) -> UInt:
        return gen_biguint_range(self.rng, self.lower_limit, self.upper_limit)

    def __iter__(self):
        return self

    def __next__(self) -> UInt:
        if self.amount <= 0:
            raise StopIteration
        if self.amount == 1 and self.appended is not None:
            r, self.appended = self.appended, None
        else:
            r = self._gen_biguint()
        self.amount -= 1
        return r

# safeprime/common.py
# Primality predicates and prime search over fixed-width UInt
# - small-prime trial division
# - Fermat base 2
# - Miller-Rabin with random witnesses (Randoms), optionally forcing base 2
# - Baillie-PSW: MR base 2 + strong Lucas (Selfridge parameters)
# - prime / safe-prime search

from __future__ import annotations
import logging
import math
from functools import lru_cache
from typing import Optional, Tuple

from .compat import add_mod, gen_biguint_bits, is_bit_set, is_one, modpow, mul_mod, sub_mod
from .config import EXTRA_CHECKS, MIN_BIT_LENGTH
from .error import BitLength
from .rand import Randoms, os_rng
from .uint import LIMB_BITS, NonZero, UInt

log = logging.getLogger(__name__)

# ---------- small primes ----------

def _small_primes(limit: int = 2000):
    sieve = [True] * (limit + 1)
    sieve[0] = sieve[1] = False
    for p in range(2, int(limit ** 0.5) + 1):
        if sieve[p]:
            sieve[p*p:limit+1:p] = [False] * (((limit - p*p) // p) + 1)
    return [p for p in range(2, limit + 1) if sieve[p]]

SMALL_PRIMES = _small_primes()
# anything below this with no small factor is prime
_TRIAL_BOUND = 2003 * 2003

@lru_cache(maxsize=None)
def _small_divisors(limbs: int) -> Tuple[Tuple[UInt, NonZero], ...]:
    return tuple((UInt(p, limbs), NonZero(UInt(p, limbs))) for p in SMALL_PRIMES)

def limbs_for(bit_length: int) -> int:
    """Fewest 64-bit limbs that hold `bit_length` bits."""
    return max(1, (bit_length + LIMB_BITS - 1) // LIMB_BITS)

def required_checks(bits: int) -> int:
    """Miller-Rabin rounds for a candidate of `bits` bits."""
    return int(math.log2(max(bits, 2))) + 5 + EXTRA_CHECKS

# ---------- utilities ----------

def is_square(n: int) -> bool:
    if n < 0: return False
    r = math.isqrt(n)
    return r*r == n

def jacobi(a: int, n: int) -> int:
    """Jacobi symbol (a/n), n odd positive."""
    if n <= 0 or n % 2 == 0:
        raise ValueError("n must be odd positive")
    a %= n
    result = 1
    while a:
        # factor out powers of two from a
        v2 = (a & -a).bit_length() - 1
        if v2:
            if v2 % 2 and n % 8 in (3, 5):
                result = -result
            a >>= v2
        # quadratic reciprocity
        if a % 4 == 3 and n % 4 == 3:
            result = -result
        a, n = n % a, a
    return result if n == 1 else 0

def _trial_division(n: UInt) -> Optional[bool]:
    """True/False when small primes settle it, None when undecided."""
    if n < UInt(2, n.limbs):
        return False
    for p, nz in _small_divisors(n.limbs):
        if n == p:
            return True
        if (n % nz).is_zero():
            return False
    if int(n) < _TRIAL_BOUND:
        return True
    return None

# ---------- probable-prime tests ----------

def fermat(n: UInt) -> bool:
    """Fermat test to base 2."""
    m = NonZero(n)
    one = UInt.one(n.limbs)
    return is_one(modpow(UInt(2, n.limbs), n - one, m))

def miller_rabin(n: UInt, limit: int, force2: bool, rng) -> bool:
    """
    `limit` strong MR rounds on odd n > 3. Witnesses are drawn from [2, n-1);
    with force2 the last witness is 2.
    """
    m = NonZero(n)
    one = UInt.one(n.limbs)
    two = UInt(2, n.limbs)
    n_minus_one = n - one
    d, s = n_minus_one, 0
    while not d.is_odd():
        d >>= 1
        s += 1

    witnesses = Randoms(two, n_minus_one, limit, rng)
    if force2:
        witnesses = witnesses.with_appended(two)

    for a in witnesses:
        x = modpow(a, d, m)
        if is_one(x) or x == n_minus_one:
            continue
        for _ in range(s - 1):
            x = mul_mod(x, x, m)
            if x == n_minus_one:
                break
        else:
            return False
    return True

def _lucas_selfridge_params(n: int) -> Optional[Tuple[int, int, int]]:
    """
    Selfridge method: find D with Jacobi(D|n) = -1; P=1, Q=(1-D)/4.
    None when a D reveals a factor of n.
    """
    D = 5
    while True:
        j = jacobi(D, n)
        if j == -1:
            return (D, 1, (1 - D) // 4)
        if j == 0 and abs(D) != n:
            return None
        # next candidate: 5, -7, 9, -11, 13, ...
        D = -D - 2 if D > 0 else -D + 2

def _half_mod(x: UInt, m: NonZero) -> UInt:
    """x / 2 mod m for odd m and x < m."""
    if not x.is_odd():
        return x >> 1
    zero = UInt.zero(x.limbs)
    wide = zero.concat(x) + zero.concat(m.get())
    _hi, lo = (wide >> 1).split()
    return lo

def lucas_prp(n: UInt) -> bool:
    """
    Strong Lucas probable-prime test with Selfridge parameters.
    Sequence arithmetic goes through mul_mod/add_mod/sub_mod.
    """
    ni = int(n)
    if ni < 2: return False
    if ni % 2 == 0: return ni == 2
    if is_square(ni): return False

    params = _lucas_selfridge_params(ni)
    if params is None:
        return False
    D, P, Q = params
    limbs = n.limbs
    m = NonZero(n)
    zero = UInt.zero(limbs)
    d_mod = UInt(D % ni, limbs)
    q_mod = UInt(Q % ni, limbs)

    # write n+1 = d*2^s, at double width since n+1 may not fit
    wide = UInt.zero(limbs).concat(n) + UInt.one(limbs * 2)
    s = 0
    while not wide.is_odd():
        wide >>= 1
        s += 1
    _hi, d = wide.split()

    # U_d, V_d, Q^d by left-to-right binary method
    U, V, Qk = zero, UInt(2 % ni, limbs), UInt.one(limbs)
    for i in reversed(range(d.bits())):
        # double
        U = mul_mod(U, V, m)
        V = sub_mod(mul_mod(V, V, m), add_mod(Qk, Qk, m), m)
        Qk = mul_mod(Qk, Qk, m)
        if is_bit_set(d, i):
            # add one (P = 1)
            U, V = (_half_mod(add_mod(U, V, m), m),
                    _half_mod(add_mod(mul_mod(d_mod, U, m), V, m), m))
            Qk = mul_mod(Qk, q_mod, m)

    if U.is_zero() or V.is_zero():
        return True
    for _ in range(s - 1):
        V = sub_mod(mul_mod(V, V, m), add_mod(Qk, Qk, m), m)
        Qk = mul_mod(Qk, Qk, m)
        if V.is_zero():
            return True
    return False

# ---------- predicates ----------

def _is_prime(n: UInt, checks: int, force2: bool, rng) -> bool:
    t = _trial_division(n)
    if t is not None:
        return t
    if not fermat(n):
        return False
    return miller_rabin(n, checks, force2, rng)

def _rng(rng):
    return os_rng() if rng is None else rng

def is_prime(n: UInt, rng=None) -> bool:
    """Probabilistic primality: trial division, Fermat, Miller-Rabin."""
    return _is_prime(n, required_checks(n.bits()), False, _rng(rng))

def is_prime_baillie_psw(n: UInt) -> bool:
    """
    Baillie-PSW: trial by small primes, one strong MR base-2 + Lucas PRP.
    No known counterexample.
    """
    t = _trial_division(n)
    if t is not None:
        return t
    # the only witness is the appended 2, so the rng is never drawn from
    if not miller_rabin(n, 1, True, None):
        return False
    return lucas_prp(n)

def _safe_shape(n: UInt) -> Optional[bool]:
    """Safe primes above 7 are 11 mod 12."""
    if int(n) <= 7:
        return int(n) in (5, 7)
    twelve = NonZero(UInt(12, n.limbs))
    if int(n % twelve) != 11:
        return False
    return None

def is_safe_prime(n: UInt, rng=None) -> bool:
    """n and (n-1)/2 are both prime (Miller-Rabin)."""
    shape = _safe_shape(n)
    if shape is not None:
        return shape
    rng = _rng(rng)
    checks = required_checks(n.bits())
    return _is_prime(n >> 1, checks, False, rng) and _is_prime(n, checks, True, rng)

def is_safe_prime_baillie_psw(n: UInt) -> bool:
    """n and (n-1)/2 are both prime (Baillie-PSW)."""
    shape = _safe_shape(n)
    if shape is not None:
        return shape
    return is_prime_baillie_psw(n >> 1) and is_prime_baillie_psw(n)

# ---------- search ----------

def gen_prime(bit_length: int, rng, limbs: Optional[int] = None) -> UInt:
    """Random prime with exactly `bit_length` bits."""
    if bit_length < MIN_BIT_LENGTH:
        raise BitLength(bit_length)
    if limbs is None:
        limbs = limbs_for(bit_length)
    if bit_length > limbs * LIMB_BITS:
        raise ValueError("too many bits for type")
    one = UInt.one(limbs)
    checks = required_checks(bit_length)
    tries = 0
    while True:
        tries += 1
        candidate = gen_biguint_bits(rng, bit_length, limbs) | one
        if _is_prime(candidate, checks, False, rng):
            log.debug("prime of %d bits after %d candidates", bit_length, tries)
            return candidate

def gen_safe_prime(bit_length: int, rng, limbs: Optional[int] = None) -> UInt:
    """
    Random safe prime p = 2q + 1 with exactly `bit_length` bits: draw an
    odd q of bit_length - 1 bits and test both.
    """
    if bit_length < MIN_BIT_LENGTH:
        raise BitLength(bit_length)
    if limbs is None:
        limbs = limbs_for(bit_length)
    if bit_length > limbs * LIMB_BITS:
        raise ValueError("too many bits for type")
    one = UInt.one(limbs)
    checks = required_checks(bit_length)
    tries = 0
    while True:
        tries += 1
        q = gen_biguint_bits(rng, bit_length - 1, limbs) | one
        p = (q << 1) | one
        if _trial_division(q) is False or _trial_division(p) is False:
            continue
        if (fermat(q) and fermat(p)
                and miller_rabin(q, checks, False, rng)
                and miller_rabin(p, checks, True, rng)):
            log.debug("safe prime of %d bits after %d candidates", bit_length, tries)
            return p

"""
Primality predicates and prime search, cross-checked against sympy.
"""

import random

import pytest
from sympy import isprime
from sympy.functions.combinatorial.numbers import jacobi_symbol

from safeprime import common
from safeprime.config import EXTRA_CHECKS
from safeprime.error import BitLength
from safeprime.uint import UInt

# strong Lucas pseudoprimes (Selfridge parameters)
LUCAS_PSP = {5459, 5777, 10877}
# strong pseudoprime to bases 2..23
SPSP_2_TO_23 = 3825123056546413051


def test_required_checks():
    assert common.required_checks(128) == 12 + EXTRA_CHECKS
    assert common.required_checks(1024) == 15 + EXTRA_CHECKS


def test_limbs_for():
    assert common.limbs_for(1) == 1
    assert common.limbs_for(64) == 1
    assert common.limbs_for(65) == 2
    assert common.limbs_for(128) == 2


def test_jacobi_matches_sympy():
    for n in range(3, 200, 2):
        for a in range(-30, 60):
            assert common.jacobi(a, n) == jacobi_symbol(a % n, n)


def test_jacobi_rejects_even():
    with pytest.raises(ValueError):
        common.jacobi(3, 10)


def test_is_prime_small_range():
    rng = random.Random(1)
    for n in range(0, 3000):
        assert common.is_prime(UInt(n, 1), rng) == isprime(n), n


def test_is_prime_random_64_bit():
    rng = random.Random(2)
    for _ in range(200):
        n = rng.randrange(2**40, 2**64) | 1
        assert common.is_prime(UInt(n, 1), rng) == isprime(n), n


def test_is_prime_known_large():
    rng = random.Random(3)
    m127 = UInt(2**127 - 1, 2)
    assert common.is_prime(m127, rng)
    assert common.is_prime_baillie_psw(m127)
    assert not common.is_prime(UInt((2**127 - 1) * 3, 3), rng)


def test_spsp_rejected():
    n = UInt(SPSP_2_TO_23, 1)
    assert common.fermat(n)
    assert not common.is_prime(n, random.Random(4))
    assert not common.is_prime_baillie_psw(n)


def test_miller_rabin_appended_base_two_only():
    # 2047 = 23 * 89 is a strong pseudoprime to base 2
    n = UInt(2047, 1)
    assert common.miller_rabin(n, 1, True, None)
    assert not common.is_prime_baillie_psw(n)


def test_lucas_prp_against_sympy():
    for n in range(3, 11000, 2):
        expected = isprime(n) or n in LUCAS_PSP
        assert common.lucas_prp(UInt(n, 1)) == expected, n


def test_bpsw_small_range():
    for n in range(0, 3000):
        assert common.is_prime_baillie_psw(UInt(n, 1)) == isprime(n), n


def test_bpsw_catches_lucas_pseudoprimes():
    for n in LUCAS_PSP:
        assert not common.is_prime_baillie_psw(UInt(n, 1))


def _is_safe(n):
    return isprime(n) and isprime((n - 1) // 2)


def test_safe_prime_predicates_small_range():
    rng = random.Random(5)
    for n in range(0, 3000):
        expected = _is_safe(n)
        assert common.is_safe_prime(UInt(n, 1), rng) == expected, n
        assert common.is_safe_prime_baillie_psw(UInt(n, 1)) == expected, n


def test_gen_prime():
    rng = random.Random(6)
    p = common.gen_prime(128, rng)
    assert p.limbs == 2
    assert p.bits() == 128
    assert isprime(int(p))


def test_gen_safe_prime():
    rng = random.Random(7)
    p = common.gen_safe_prime(128, rng)
    assert p.bits() == 128
    assert _is_safe(int(p))
    assert common.is_safe_prime(p, rng)
    assert common.is_safe_prime_baillie_psw(p)


def test_gen_safe_prime_wider_storage():
    p = common.gen_safe_prime(130, random.Random(8), limbs=4)
    assert p.limbs == 4
    assert p.bits() == 130
    assert _is_safe(int(p))


def test_search_policy_and_width():
    rng = random.Random(9)
    with pytest.raises(BitLength):
        common.gen_prime(127, rng)
    with pytest.raises(BitLength):
        common.gen_safe_prime(64, rng)
    with pytest.raises(ValueError):
        common.gen_safe_prime(256, rng, limbs=2)
    with pytest.raises(ValueError):
        common.gen_prime(128, rng, limbs=0)
    with pytest.raises(ValueError):
        common.gen_safe_prime(128, rng, limbs=0)


def test_gen_safe_prime_trial_divides_each_candidate_once(monkeypatch):
    seen = []
    trial_division = common._trial_division

    def counting(n):
        seen.append(int(n))
        return trial_division(n)

    monkeypatch.setattr(common, "_trial_division", counting)
    p = common.gen_safe_prime(128, random.Random(10))
    assert seen.count(int(p)) == 1
    assert seen.count(int(p) >> 1) == 1

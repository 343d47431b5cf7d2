import random

import pytest

from safeprime.uint import LIMB_BITS, NonZero, UInt


def test_construction_checks_width():
    assert int(UInt.max(1)) == 2**64 - 1
    with pytest.raises(OverflowError):
        UInt(2**64, 1)
    with pytest.raises(OverflowError):
        UInt(-1, 1)
    with pytest.raises(TypeError):
        UInt(2.9, 1)
    with pytest.raises(TypeError):
        UInt(2**200 * 1.0, 4)
    assert UInt(UInt(7, 1), 2) == UInt(7, 2)


def test_checked_add_sub_never_wrap():
    with pytest.raises(OverflowError):
        UInt.max(1) + UInt.one(1)
    with pytest.raises(OverflowError):
        UInt.zero(1) - UInt.one(1)
    assert UInt.max(1).saturating_add(UInt.one(1)) == UInt.max(1)
    assert UInt.zero(1).saturating_sub(UInt.one(1)) == UInt.zero(1)
    assert UInt.max(1).wrapping_add(UInt(2, 1)) == UInt.one(1)


def test_mixed_widths_rejected():
    with pytest.raises(ValueError):
        UInt(1, 1) + UInt(1, 2)
    with pytest.raises(ValueError):
        UInt(1, 1) < UInt(2, 2)
    with pytest.raises(ValueError):
        UInt(1, 1) == UInt(1, 2)
    assert UInt(1, 1) != 1


def test_shifts_truncate_to_width():
    one = UInt.one(1)
    assert int(one << 63) == 2**63
    assert (one << 64).is_zero()
    assert ((one << 63) << 1).is_zero()
    assert int(UInt(0b1100, 1) >> 2) == 0b11


def test_mul_wide_is_exact():
    x = UInt.max(1)
    lo, hi = x.mul_wide(x)
    assert (int(hi) << LIMB_BITS) | int(lo) == (2**64 - 1) ** 2


def test_concat_split_roundtrip():
    rnd = random.Random(3)
    for _ in range(50):
        x = UInt(rnd.getrandbits(128), 2)
        zero = UInt.zero(2)
        wide = zero.concat(x)
        assert wide.limbs == 4
        assert wide.split() == (zero, x)


def test_split_odd_limbs():
    with pytest.raises(ValueError):
        UInt.one(3).split()


def test_nonzero():
    with pytest.raises(ValueError):
        NonZero(UInt.zero(2))
    assert NonZero.new(UInt.zero(2)) is None
    assert NonZero.new(UInt(5, 2)).get() == UInt(5, 2)
    assert int(UInt(17, 2) % NonZero(UInt(5, 2))) == 2


def test_from_str_radix():
    assert int(UInt.from_str_radix("ff", 16, 1)) == 255
    assert int(UInt.from_str_radix("FF", 16, 1)) == 255
    assert int(UInt.from_str_radix("1234567890", 10, 1)) == 1234567890
    assert UInt.from_str_radix("12-3", 10, 1) is None


def test_random_mod_stays_below_modulus():
    rnd = random.Random(11)
    m = NonZero(UInt(1000, 1))
    draws = [int(UInt.random_mod(rnd, m)) for _ in range(2000)]
    assert all(0 <= d < 1000 for d in draws)
    assert max(draws) > 900

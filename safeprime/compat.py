# safeprime/compat.py
# Modular arithmetic and random sampling over fixed-width UInt
# - mul_mod: multiply at double width, reduce, truncate
# - modpow: LSB-first square-and-multiply
# - gen_biguint_range / gen_biguint_bits: uniform sampling from an injected rng
#
# NOTE: nothing in here is constant-time. Reduction cost depends on operand
# bit lengths and modpow branches on every exponent bit, so do not feed it
# secret exponents where timing is observable.

from __future__ import annotations

from .uint import NonZero, UInt

def is_one(x: UInt) -> bool:
    return x == UInt.one(x.limbs)

def promote_nz(x: NonZero) -> NonZero:
    """Zero-extend a NonZero to double width."""
    zero = UInt.zero(x.limbs)
    return NonZero(zero.concat(x.get()))

# ---------- modular arithmetic ----------

def mul_mod(x: UInt, y: UInt, m: NonZero) -> UInt:
    """Modular multiplication by widening. Not constant-time."""
    lo, hi = x.mul_wide(y)
    wide = hi.concat(lo)
    r = wide % promote_nz(m)
    _hi, lo = r.split()
    return lo

def add_mod(x: UInt, y: UInt, m: NonZero) -> UInt:
    """(x + y) mod m; the sum is formed at double width so it cannot wrap."""
    zero = UInt.zero(x.limbs)
    wide = zero.concat(x) + zero.concat(y)
    _hi, lo = (wide % promote_nz(m)).split()
    return lo

def sub_mod(x: UInt, y: UInt, m: NonZero) -> UInt:
    """(x - y) mod m for x, y already reduced below m."""
    if x >= y:
        return x - y
    return m.get() - (y - x)

def modpow(x: UInt, e: UInt, m: NonZero) -> UInt:
    """
    x^e mod m by squaring, textbook implementation. Not constant-time.
    A zero base gives zero for every exponent, including 0^0.
    """
    if x.is_zero():
        return x
    if e.is_zero():
        return UInt.one(x.limbs)
    this_power = x % m
    result = UInt.one(x.limbs)
    for bit_index in range(e.bits()):
        if is_bit_set(e, bit_index):
            result = mul_mod(result, this_power, m)
        this_power = mul_mod(this_power, this_power, m)
    return result

def is_bit_set(x: UInt, i: int) -> bool:
    """Checks if the i-th bit is set"""
    if i >= x.bits():
        return False
    return (x >> i).is_odd()

# ---------- random sampling ----------

def gen_biguint_range(rng, low: UInt, high: UInt) -> UInt:
    """Uniform value in [low, high). Raises ValueError on an empty range."""
    m = NonZero.new(high.saturating_sub(low))
    if m is None:
        raise ValueError("Zero range")
    return UInt.random_mod(rng, m).saturating_add(low)

def gen_biguint_bits(rng, bit_size: int, limbs: int) -> UInt:
    """Uniform value with exactly `bit_size` significant bits."""
    if bit_size < 1:
        raise ValueError("bit_size must be >= 1")
    mask = UInt.one(limbs) << (bit_size - 1)
    if mask.is_zero():
        raise ValueError("too many bits for type")
    modulo = NonZero.new(mask << 1)
    if modulo is None:
        modulo = NonZero.max(limbs)
    return UInt.random_mod(rng, modulo) | mask

# safeprime/uint.py
# Fixed-width unsigned integers on top of gmpy2
# - UInt: value stored in a fixed number of 64-bit limbs, never grows
# - NonZero: UInt that is guaranteed not to be zero (safe divisor)
# - widening helpers: mul_wide / concat / split

from __future__ import annotations
from typing import Optional, Tuple

import gmpy2
from gmpy2 import mpz

LIMB_BITS = 64
_MPZ = type(mpz(0))

class UInt:
    """Unsigned integer of exactly `limbs * 64` bits of storage."""

    __slots__ = ("_value", "limbs")

    def __init__(self, value=0, limbs: int = 4):
        if limbs < 1:
            raise ValueError("limbs must be >= 1")
        if isinstance(value, UInt):
            value = value._value
        elif not isinstance(value, (int, _MPZ)):
            raise TypeError(f"UInt needs an integer, got {type(value).__name__}")
        v = mpz(value)
        if v < 0:
            raise OverflowError("UInt cannot hold a negative value")
        if v.bit_length() > limbs * LIMB_BITS:
            raise OverflowError(f"value needs {v.bit_length()} bits, UInt has {limbs * LIMB_BITS}")
        self._value = v
        self.limbs = limbs

    # ---------- constructors ----------

    @classmethod
    def zero(cls, limbs: int) -> UInt:
        return cls(0, limbs)

    @classmethod
    def one(cls, limbs: int) -> UInt:
        return cls(1, limbs)

    @classmethod
    def max(cls, limbs: int) -> UInt:
        return cls((mpz(1) << (limbs * LIMB_BITS)) - 1, limbs)

    @classmethod
    def from_str_radix(cls, s: str, radix: int, limbs: int) -> Optional[UInt]:
        """Parse digits in `radix` with wrapping arithmetic; None on a bad digit."""
        r = cls.zero(limbs)
        base = cls(radix, limbs)
        for ch in s:
            if "0" <= ch <= "9":
                d = ord(ch) - ord("0")
            elif "a" <= ch <= "z":
                d = ord(ch) - ord("a") + 10
            elif "A" <= ch <= "Z":
                d = ord(ch) - ord("A") + 10
            else:
                return None
            r = r.wrapping_mul(base).wrapping_add(cls(d, limbs))
        return r

    @classmethod
    def random_mod(cls, rng, modulus: NonZero) -> UInt:
        """
        Uniform draw from [0, modulus) by rejection sampling.
        `rng` needs a `getrandbits(k)` method (random.SystemRandom in production).
        """
        m = modulus.get()
        n_bits = m.bits()
        while True:
            r = mpz(rng.getrandbits(n_bits))
            if r < m._value:
                return cls(r, m.limbs)

    # ---------- properties ----------

    @property
    def width(self) -> int:
        return self.limbs * LIMB_BITS

    @property
    def _mask(self):
        return (mpz(1) << self.width) - 1

    def bits(self) -> int:
        """Bit length: index of the highest set bit plus one (0 for zero)."""
        return int(self._value.bit_length())

    def is_odd(self) -> bool:
        return bool(gmpy2.is_odd(self._value))

    def is_zero(self) -> bool:
        return self._value == 0

    def _same(self, other: UInt) -> UInt:
        if not isinstance(other, UInt):
            raise TypeError(f"expected UInt, got {type(other).__name__}")
        if other.limbs != self.limbs:
            raise ValueError(f"width mismatch: {self.limbs} vs {other.limbs} limbs")
        return other

    # ---------- arithmetic ----------

    def __add__(self, other: UInt) -> UInt:
        return UInt(self._value + self._same(other)._value, self.limbs)

    def __sub__(self, other: UInt) -> UInt:
        return UInt(self._value - self._same(other)._value, self.limbs)

    def wrapping_add(self, other: UInt) -> UInt:
        return UInt((self._value + self._same(other)._value) & self._mask, self.limbs)

    def wrapping_mul(self, other: UInt) -> UInt:
        return UInt((self._value * self._same(other)._value) & self._mask, self.limbs)

    def saturating_add(self, other: UInt) -> UInt:
        return UInt(min(self._value + self._same(other)._value, self._mask), self.limbs)

    def saturating_sub(self, other: UInt) -> UInt:
        return UInt(max(self._value - self._same(other)._value, 0), self.limbs)

    def mul_wide(self, other: UInt) -> Tuple[UInt, UInt]:
        """Full product as (lo, hi) halves of the same width."""
        p = self._value * self._same(other)._value
        return UInt(p & self._mask, self.limbs), UInt(p >> self.width, self.limbs)

    def rem(self, modulus: NonZero) -> UInt:
        m = modulus.get()
        self._same(m)
        return UInt(self._value % m._value, self.limbs)

    def __mod__(self, modulus: NonZero) -> UInt:
        if not isinstance(modulus, NonZero):
            return NotImplemented
        return self.rem(modulus)

    # ---------- widening ----------

    def concat(self, lo: UInt) -> UInt:
        """Double-width value with `self` as the high half."""
        self._same(lo)
        return UInt((self._value << self.width) | lo._value, self.limbs * 2)

    def split(self) -> Tuple[UInt, UInt]:
        """Inverse of concat: (hi, lo) halves."""
        if self.limbs % 2:
            raise ValueError("cannot split an odd number of limbs")
        half = self.limbs // 2
        w = half * LIMB_BITS
        lo = self._value & ((mpz(1) << w) - 1)
        return UInt(self._value >> w, half), UInt(lo, half)

    # ---------- bit operations (truncate to width) ----------

    def __lshift__(self, n: int) -> UInt:
        if n >= self.width:
            return UInt.zero(self.limbs)
        return UInt((self._value << n) & self._mask, self.limbs)

    def __rshift__(self, n: int) -> UInt:
        return UInt(self._value >> n, self.limbs)

    def __or__(self, other: UInt) -> UInt:
        return UInt(self._value | self._same(other)._value, self.limbs)

    # ---------- comparison / conversion ----------

    def __eq__(self, other) -> bool:
        if not isinstance(other, UInt):
            return NotImplemented
        return self._value == self._same(other)._value

    def __lt__(self, other: UInt) -> bool:
        return self._value < self._same(other)._value

    def __le__(self, other: UInt) -> bool:
        return self._value <= self._same(other)._value

    def __gt__(self, other: UInt) -> bool:
        return self._value > self._same(other)._value

    def __ge__(self, other: UInt) -> bool:
        return self._value >= self._same(other)._value

    def __hash__(self) -> int:
        return hash((self.limbs, int(self._value)))

    def __int__(self) -> int:
        return int(self._value)

    __index__ = __int__

    def __repr__(self) -> str:
        return f"UInt(0x{int(self._value):x}, limbs={self.limbs})"

class NonZero:
    """A UInt that is known not to be zero; division by it cannot fail."""

    __slots__ = ("_inner",)

    def __init__(self, value: UInt):
        if not isinstance(value, UInt):
            raise TypeError(f"expected UInt, got {type(value).__name__}")
        if value.is_zero():
            raise ValueError("NonZero cannot wrap zero")
        self._inner = value

    @classmethod
    def new(cls, value: UInt) -> Optional[NonZero]:
        """Like the constructor but returns None for zero."""
        if value.is_zero():
            return None
        return cls(value)

    @classmethod
    def max(cls, limbs: int) -> NonZero:
        return cls(UInt.max(limbs))

    def get(self) -> UInt:
        return self._inner

    @property
    def limbs(self) -> int:
        return self._inner.limbs

    def __eq__(self, other) -> bool:
        if not isinstance(other, NonZero):
            return NotImplemented
        return self._inner == other._inner

    def __hash__(self) -> int:
        return hash(self._inner)

    def __int__(self) -> int:
        return int(self._inner)

    def __repr__(self) -> str:
        return f"NonZero({self._inner!r})"

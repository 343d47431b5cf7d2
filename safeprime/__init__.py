from . import prime, safe_prime
from .compat import gen_biguint_bits, gen_biguint_range, is_bit_set, modpow, mul_mod
from .config import MIN_BIT_LENGTH
from .error import BitLength, Error, OsRngInitialization, Result
from .rand import Randoms
from .uint import NonZero, UInt
__all__ = [
    "prime", "safe_prime",
    "gen_biguint_bits", "gen_biguint_range", "is_bit_set", "modpow", "mul_mod",
    "MIN_BIT_LENGTH", "BitLength", "Error", "OsRngInitialization", "Result",
    "Randoms", "NonZero", "UInt",
]

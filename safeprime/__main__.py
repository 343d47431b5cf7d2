# safeprime/__main__.py
# Tiny CLI: generate primes / safe primes, or check given integers.
#   python -m safeprime --safe 128 256
#   python -m safeprime --check 23 24

import sys, argparse, logging

from . import prime, safe_prime
from .common import limbs_for
from .config import LOG_LEVEL
from .error import Error
from .uint import UInt

def generate(bits: int, safe: bool, limbs: int|None) -> int:
    kind = "safe" if safe else "prime"
    gen = safe_prime.new if safe else prime.new
    try:
        p = gen(bits, limbs)
    except (Error, ValueError) as e:
        print(f"{bits}\terror\t{e}", file=sys.stderr)
        return 1
    print(f"{bits}\t{kind}\t{int(p)}")
    return 0

def check(n: int, safe: bool, strong: bool, limbs: int|None) -> int:
    mod = safe_prime if safe else prime
    pred = mod.strong_check if strong else mod.check
    if limbs is None:
        limbs = limbs_for(n.bit_length())
    try:
        x = UInt(n, limbs)
    except (OverflowError, ValueError) as e:
        print(f"{n}\terror\t{e}", file=sys.stderr)
        return 1
    print(f"{n}\t{'yes' if pred(x) else 'no'}")
    return 0

def main(argv=None):
    ap = argparse.ArgumentParser(prog="safeprime")
    ap.add_argument("--safe", action="store_true", help="safe primes instead of plain primes")
    ap.add_argument("--strong", action="store_true", help="use Baillie-PSW when checking")
    ap.add_argument("--check", action="store_true", help="treat arguments as integers to test")
    ap.add_argument("--limbs", type=int, default=None, help="64-bit limbs per integer (default: just enough)")
    ap.add_argument("N", nargs="+", type=int, help="bit lengths, or integers with --check")
    args = ap.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    rc = 0
    for n in args.N:
        if args.check:
            rc |= check(n, args.safe, args.strong, args.limbs)
        else:
            rc |= generate(n, args.safe, args.limbs)
    return rc

if __name__ == "__main__":
    raise SystemExit(main())

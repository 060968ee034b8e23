import random
import secrets
from typing import Callable, Optional
import gmpy2

# Stateless: every draw goes to os.urandom, so one instance can be shared
# between threads.
_SYSTEM_RNG = secrets.SystemRandom()


def resolve_rng(rng: Optional[random.Random] = None) -> random.Random:
    """Returns `rng`, or the operating system CSPRNG when none is given."""
    return _SYSTEM_RNG if rng is None else rng


def randfunc_from(rng: random.Random) -> Callable[[int], bytes]:
    """
    Adapts a `random.Random`-style generator to the `randfunc(n) -> bytes`
    interface expected by pycryptodome's prime generation.
    """

    def randfunc(n: int) -> bytes:
        return rng.getrandbits(8 * n).to_bytes(n, "big")

    return randfunc


def random_in_range(rng: random.Random, low: int, high: int) -> gmpy2.mpz:
    """Returns a uniform integer in [low, high)."""
    return gmpy2.mpz(rng.randrange(int(low), int(high)))


def is_quadratic_residue(x: int, q: int) -> bool:
    """Checks if x is a non-zero square modulo the odd prime q."""
    return gmpy2.legendre(x, q) == 1


def sqrt_mod_3_4(x: int, q: int) -> gmpy2.mpz:
    """
    Square root of a quadratic residue x modulo a prime q = 3 (mod 4),
    computed as x^((q+1)/4).
    """
    if q % 4 != 3:
        raise ValueError("Modulus must be a prime congruent to 3 mod 4")
    return gmpy2.powmod(x, (gmpy2.mpz(q) + 1) // 4, q)

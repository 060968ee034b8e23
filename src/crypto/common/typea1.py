"""
Type A1 pairing groups: composite-order subgroups of the supersingular curve
E: y^2 = x^3 + x over F_q, with q = l*N - 1 prime and N = p_1 * ... * p_k.

For q = 3 (mod 4) the curve has q + 1 = l*N points, so E(F_q) contains a
subgroup G1 of composite order N, and the distortion map
psi(x, y) = (-x, i*y) turns the reduced Tate pairing into a symmetric,
non-degenerate pairing G1 x G1 -> GT, with GT the order-N subgroup of
F_q^2*. Subgroups of coprime order are orthogonal: e(P, Q) = 1 whenever P and
Q lie in subgroups of orders p_i and p_j with i != j.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple
from Crypto.Util.number import getPrime
import gmpy2

from crypto.common.ec import Curve, ECOperations, Point, point_add, scalar_mult, slope
from crypto.common.fields import Fq2
from crypto.common.numbers import randfunc_from, resolve_rng

logger = logging.getLogger(__name__)

# Bound on prime draws and on cofactor candidates l = 4, 8, 12, ...
MAX_COFACTOR_ATTEMPTS = 100_000


# --- Custom Exceptions ---


class PairingError(Exception):
    """Base exception for pairing group errors."""

    pass


class ParameterGenerationError(PairingError):
    """Raised when no valid Type A1 parameters can be found."""

    pass


# --- Parameters ---


@dataclass(frozen=True)
class TypeA1Params:
    """
    Type A1 curve parameters. `primes` is the secret factorization of `n`;
    whoever publishes the group should keep it to themselves.
    """

    q: int  # Field characteristic, q = l*n - 1.
    n: int  # Order of G1.
    l: int  # Cofactor, #E(F_q) = l*n.
    primes: Tuple[int, ...]


def generate_type_a1_params(
    num_primes: int,
    bits: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_COFACTOR_ATTEMPTS,
) -> TypeA1Params:
    """
    Generates Type A1 parameters with `num_primes` distinct primes of `bits`
    bits each.

    Raises:
        ParameterGenerationError: If the sizes are invalid or no parameters
            are found within `max_attempts` tries.
    """
    if num_primes < 1:
        raise ParameterGenerationError("At least one prime factor is required")
    if bits < 2:
        raise ParameterGenerationError("Prime factors need at least 2 bits")

    rng = resolve_rng(rng)
    randfunc = randfunc_from(rng)

    primes: List[int] = []
    for _ in range(max_attempts):
        if len(primes) == num_primes:
            break
        p = int(getPrime(bits, randfunc=randfunc))
        if p not in primes:
            primes.append(p)
    if len(primes) < num_primes:
        raise ParameterGenerationError(
            f"Could not find {num_primes} distinct {bits}-bit primes"
        )

    n = gmpy2.mpz(math.prod(primes))

    # l is a multiple of 4, so q = l*n - 1 = 3 (mod 4).
    l = 4
    for _ in range(max_attempts):
        q = l * n - 1
        if gmpy2.gcd(l, n) == 1 and gmpy2.is_prime(q):
            logger.debug(
                "Type A1 parameters: %d primes of %d bits, q has %d bits, l=%d",
                num_primes,
                bits,
                q.bit_length(),
                l,
            )
            return TypeA1Params(q=int(q), n=int(n), l=l, primes=tuple(primes))
        l += 4

    raise ParameterGenerationError(
        f"No prime q = l*n - 1 found after {max_attempts} cofactor candidates"
    )


def get_generator(params: TypeA1Params, g: Point, index: int) -> Point:
    """
    Projects `g` onto the subgroup of order `params.primes[index]` by
    multiplying it with the product of all the other primes. If `g`
    generates G1, the result generates that subgroup.
    """
    if not 0 <= index < len(params.primes):
        raise PairingError(
            f"Subgroup index {index} out of range for {len(params.primes)} primes"
        )
    cofactor = params.n // params.primes[index]
    return scalar_mult(cofactor, g)


# --- Pairing ---


class TypeA1Pairing:
    """
    The group G1 of order n on E: y^2 = x^3 + x over F_q and the reduced
    Tate pairing e(P, Q) = f_{n,P}(psi(Q))^((q^2 - 1)/n).
    """

    def __init__(self, q: int, n: int, l: int):
        if q % 4 != 3:
            raise PairingError("Type A1 curves require q = 3 (mod 4)")
        if (q + 1) != l * n:
            raise PairingError("Curve order q + 1 must equal l*n")
        self.q = gmpy2.mpz(q)
        self.n = gmpy2.mpz(n)
        self.l = gmpy2.mpz(l)
        self.curve = Curve(q, 1, 0)
        self.G1 = ECOperations(self.curve, n, l)

    @classmethod
    def from_params(cls, params: TypeA1Params) -> "TypeA1Pairing":
        return cls(params.q, params.n, params.l)

    def gt_identity(self) -> Fq2:
        return Fq2.one(self.q)

    def pairing(self, P: Point, Q: Point) -> Fq2:
        if P.is_infinity or Q.is_infinity:
            return self.gt_identity()

        f = self._miller(P, Q)

        # (q^2 - 1)/n = (q - 1) * l, and f^(q - 1) = conj(f) / f.
        f = f.conjugate() / f
        return f ** self.l

    def _miller(self, P: Point, Q: Point) -> Fq2:
        """Evaluates f_{n,P} at psi(Q) = (-Q.x, i*Q.y)."""
        xq = (-Q.x) % self.q
        yq = Q.y

        f = Fq2.one(self.q)
        T = P
        for bit in bin(int(self.n))[3:]:
            f = f.square() * self._line(T, T, xq, yq)
            T = point_add(T, T)
            if bit == "1":
                f = f * self._line(T, P, xq, yq)
                T = point_add(T, P)
        return f

    def _line(self, T: Point, S: Point, xq: gmpy2.mpz, yq: gmpy2.mpz) -> Fq2:
        """
        Line through T and S evaluated at (xq, i*yq). Vertical lines and the
        denominators of the Miller function take values in F_q, which the
        final exponentiation sends to 1, so they are dropped.
        """
        if T.is_infinity or S.is_infinity:
            return Fq2.one(self.q)
        if T.x == S.x and (T.y + S.y) % self.q == 0:
            return Fq2.one(self.q)
        lam = slope(T, S)
        # y - T.y - lam*(x - T.x)
        return Fq2(-T.y - lam * (xq - T.x), yq, self.q)

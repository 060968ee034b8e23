"""
Affine arithmetic on short Weierstrass curves y^2 = x^3 + a*x + b over a
prime field F_q, using gmpy2 for all field operations.
"""

import random
from typing import Optional, Union
import gmpy2

from crypto.common.numbers import (
    is_quadratic_residue,
    random_in_range,
    resolve_rng,
    sqrt_mod_3_4,
)


class Curve:
    """The curve y^2 = x^3 + a*x + b over F_q. Immutable."""

    __slots__ = ("q", "a", "b")

    def __init__(
        self,
        q: Union[int, gmpy2.mpz],
        a: Union[int, gmpy2.mpz],
        b: Union[int, gmpy2.mpz],
    ):
        q = gmpy2.mpz(q)
        object.__setattr__(self, "q", q)
        object.__setattr__(self, "a", gmpy2.mpz(a) % q)
        object.__setattr__(self, "b", gmpy2.mpz(b) % q)

    def __setattr__(self, name, value):
        raise AttributeError(f"Curve is immutable, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Curve is immutable, cannot delete {name!r}")

    def rhs(self, x: gmpy2.mpz) -> gmpy2.mpz:
        """Evaluates x^3 + a*x + b mod q."""
        return (x * x * x + self.a * x + self.b) % self.q

    def contains(self, x: int, y: int) -> bool:
        if not (0 <= x < self.q and 0 <= y < self.q):
            return False
        x, y = gmpy2.mpz(x), gmpy2.mpz(y)
        return (y * y - self.rhs(x)) % self.q == 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return self.q == other.q and self.a == other.a and self.b == other.b

    def __hash__(self) -> int:
        return hash((int(self.q), int(self.a), int(self.b)))

    def __repr__(self) -> str:
        return f"Curve(q={int(self.q)}, a={int(self.a)}, b={int(self.b)})"


class Point:
    """
    An affine point of a `Curve`, or the point at infinity.

    Group operations are available both as functions of this module and as
    operators: `P + Q`, `-P`, `P - Q` and `k * P`.

    Points are immutable, so generators and keys built from them can be
    shared between threads.
    """

    __slots__ = ("x", "y", "curve", "is_infinity")

    def __init__(self, x: int, y: int, curve: Curve):
        if not curve.contains(x, y):
            raise ValueError(f"Point ({x}, {y}) is not on {curve!r}")
        self._init(gmpy2.mpz(x), gmpy2.mpz(y), curve, False)

    def _init(self, x: gmpy2.mpz, y: gmpy2.mpz, curve: Curve, is_infinity: bool):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "curve", curve)
        object.__setattr__(self, "is_infinity", is_infinity)

    def __setattr__(self, name, value):
        raise AttributeError(f"Point is immutable, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Point is immutable, cannot delete {name!r}")

    @classmethod
    def _unchecked(cls, x: gmpy2.mpz, y: gmpy2.mpz, curve: Curve) -> "Point":
        point = cls.__new__(cls)
        point._init(x, y, curve, False)
        return point

    @classmethod
    def infinity(cls, curve: Curve) -> "Point":
        point = cls.__new__(cls)
        point._init(gmpy2.mpz(0), gmpy2.mpz(0), curve, True)
        return point

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return point_add(self, other)

    def __neg__(self) -> "Point":
        return point_neg(self)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return point_add(self, point_neg(other))

    def __mul__(self, k: Union[int, gmpy2.mpz]) -> "Point":
        if not isinstance(k, (int, gmpy2.mpz)):
            return NotImplemented
        return scalar_mult(k, self)

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        if self.is_infinity or other.is_infinity:
            return self.is_infinity == other.is_infinity and self.curve == other.curve
        return self.x == other.x and self.y == other.y and self.curve == other.curve

    def __hash__(self) -> int:
        if self.is_infinity:
            return hash(("inf", self.curve))
        return hash((int(self.x), int(self.y), self.curve))

    def __repr__(self) -> str:
        if self.is_infinity:
            return "Point(infinity)"
        return f"Point(x={int(self.x)}, y={int(self.y)})"

    def __str__(self) -> str:
        if self.is_infinity:
            return "O"
        return f"{{x={int(self.x)},y={int(self.y)}}}"


def point_neg(P: Point) -> Point:
    if P.is_infinity:
        return P
    return Point._unchecked(P.x, (-P.y) % P.curve.q, P.curve)


def slope(P: Point, Q: Point) -> gmpy2.mpz:
    """
    Slope of the chord through P and Q, or of the tangent at P when P == Q.
    The caller must rule out infinity and the vertical case P == -Q.
    """
    q = P.curve.q
    if P.x == Q.x:
        return (3 * P.x * P.x + P.curve.a) * gmpy2.invert(2 * P.y, q) % q
    return (Q.y - P.y) * gmpy2.invert(Q.x - P.x, q) % q


def point_add(P: Point, Q: Point) -> Point:
    if P.is_infinity:
        return Q
    if Q.is_infinity:
        return P
    q = P.curve.q
    if P.x == Q.x and (P.y + Q.y) % q == 0:
        return Point.infinity(P.curve)

    lam = slope(P, Q)
    x3 = (lam * lam - P.x - Q.x) % q
    y3 = (lam * (P.x - x3) - P.y) % q
    return Point._unchecked(x3, y3, P.curve)


def scalar_mult(k: Union[int, gmpy2.mpz], P: Point) -> Point:
    """Computes k*P by left-to-right double-and-add."""
    k = int(k)
    if k < 0:
        return scalar_mult(-k, point_neg(P))
    result = Point.infinity(P.curve)
    if k == 0 or P.is_infinity:
        return result
    for bit in bin(k)[2:]:
        result = point_add(result, result)
        if bit == "1":
            result = point_add(result, P)
    return result


class ECOperations:
    """
    Operations in the subgroup of order `n` of E(F_q), where
    #E(F_q) = cofactor * n. Scalars of this group are the integers mod n.
    """

    def __init__(
        self,
        curve: Curve,
        n: Union[int, gmpy2.mpz],
        cofactor: Union[int, gmpy2.mpz],
    ):
        self.curve = curve
        self.n: gmpy2.mpz = gmpy2.mpz(n)
        self.cofactor: gmpy2.mpz = gmpy2.mpz(cofactor)

    @property
    def identity(self) -> Point:
        return Point.infinity(self.curve)

    def random_scalar(self, rng: Optional[random.Random] = None) -> int:
        """Returns a uniform scalar in [1, n)."""
        rng = resolve_rng(rng)
        return int(random_in_range(rng, 1, self.n))

    def random_point(self, rng: Optional[random.Random] = None) -> Point:
        """
        Samples a random non-identity element of the order-n subgroup: a
        random curve point multiplied by the cofactor.
        """
        rng = resolve_rng(rng)
        q = self.curve.q
        while True:
            x = random_in_range(rng, 0, q)
            rhs = self.curve.rhs(x)
            if rhs == 0:
                y = gmpy2.mpz(0)
            elif is_quadratic_residue(rhs, q):
                y = sqrt_mod_3_4(rhs, q)
                if rng.getrandbits(1):
                    y = q - y
            else:
                continue
            P = scalar_mult(self.cofactor, Point(x, y, self.curve))
            if not P.is_infinity:
                return P

    def point_add(self, P: Point, Q: Point) -> Point:
        return point_add(P, Q)

    def point_neg(self, P: Point) -> Point:
        return point_neg(P)

    def scalar_mult(self, k: Union[int, gmpy2.mpz], P: Point) -> Point:
        return scalar_mult(k, P)

    def is_in_group(self, P: Point) -> bool:
        """Checks that P lies on this curve and in the order-n subgroup."""
        if not isinstance(P, Point) or P.curve != self.curve:
            return False
        return scalar_mult(self.n, P).is_infinity

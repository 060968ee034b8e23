"""
Arithmetic in the quadratic extension F_q^2 = F_q[i] / (i^2 + 1), which is
the target group of the Type A1 pairing. All operations use gmpy2.

The construction requires q = 3 (mod 4), so that -1 is not a square in F_q
and i^2 + 1 is irreducible.
"""

from typing import Union
import gmpy2


class Fq2:
    """An element a + b*i of F_q^2."""

    __slots__ = ("a", "b", "q")

    def __init__(
        self,
        a: Union[int, gmpy2.mpz],
        b: Union[int, gmpy2.mpz],
        q: Union[int, gmpy2.mpz],
    ):
        self.q: gmpy2.mpz = gmpy2.mpz(q)
        self.a: gmpy2.mpz = gmpy2.mpz(a) % self.q
        self.b: gmpy2.mpz = gmpy2.mpz(b) % self.q

    @classmethod
    def one(cls, q: Union[int, gmpy2.mpz]) -> "Fq2":
        return cls(1, 0, q)

    @classmethod
    def zero(cls, q: Union[int, gmpy2.mpz]) -> "Fq2":
        return cls(0, 0, q)

    def is_one(self) -> bool:
        return self.a == 1 and self.b == 0

    def is_zero(self) -> bool:
        return self.a == 0 and self.b == 0

    def _coerce(self, other) -> "Fq2":
        if isinstance(other, Fq2):
            if other.q != self.q:
                raise ValueError("Cannot combine elements of different fields")
            return other
        if isinstance(other, (int, gmpy2.mpz)):
            return Fq2(other, 0, self.q)
        return None

    def __add__(self, other) -> "Fq2":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return Fq2(self.a + other.a, self.b + other.b, self.q)

    __radd__ = __add__

    def __neg__(self) -> "Fq2":
        return Fq2(-self.a, -self.b, self.q)

    def __sub__(self, other) -> "Fq2":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return Fq2(self.a - other.a, self.b - other.b, self.q)

    def __mul__(self, other) -> "Fq2":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        ac = self.a * other.a
        bd = self.b * other.b
        cross = (self.a + self.b) * (other.a + other.b) - ac - bd
        return Fq2(ac - bd, cross, self.q)

    __rmul__ = __mul__

    def square(self) -> "Fq2":
        """(a + bi)^2 = (a + b)(a - b) + 2ab*i"""
        return Fq2((self.a + self.b) * (self.a - self.b), 2 * self.a * self.b, self.q)

    def conjugate(self) -> "Fq2":
        """Returns a - bi, which is also the Frobenius image x^q."""
        return Fq2(self.a, -self.b, self.q)

    def norm(self) -> gmpy2.mpz:
        return (self.a * self.a + self.b * self.b) % self.q

    def inverse(self) -> "Fq2":
        """Computes 1/x = conj(x) / N(x); raises ZeroDivisionError for zero."""
        norm = self.norm()
        if norm == 0:
            raise ZeroDivisionError("Zero has no inverse in F_q^2")
        norm_inv = gmpy2.invert(norm, self.q)
        return Fq2(self.a * norm_inv, -self.b * norm_inv, self.q)

    def __truediv__(self, other) -> "Fq2":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self * other.inverse()

    def __pow__(self, e: int) -> "Fq2":
        e = int(e)
        if e < 0:
            return self.inverse() ** (-e)
        result = Fq2.one(self.q)
        base = self
        while e > 0:
            if e & 1:
                result = result * base
            base = base.square()
            e >>= 1
        return result

    def __eq__(self, other) -> bool:
        # Integers are not field elements here; equal objects must hash alike.
        if not isinstance(other, Fq2):
            return NotImplemented
        return self.q == other.q and self.a == other.a and self.b == other.b

    def __hash__(self) -> int:
        return hash((int(self.a), int(self.b), int(self.q)))

    def __repr__(self) -> str:
        return f"Fq2({int(self.a)}, {int(self.b)})"

    def __str__(self) -> str:
        return f"{{x={int(self.a)},y={int(self.b)}}}"

"""
Key pairs, encryption, homomorphic operations and decryption for the
Castagnos-Laguillaumie linearly homomorphic encryption scheme
(G. Castagnos and F. Laguillaumie, "Linearly homomorphic encryption from
DDH", CT-RSA 2015, https://eprint.iacr.org/2015/047).

The scheme is written multiplicatively; the underlying group is an elliptic
curve group written additively, so

    gq^r           is  r * gq
    f^m * pk^r     is  m * f + r * pk
    c2 * (c1^sk)^-1  is  c2 - sk * c1

Exponents (plaintexts, randomizers, scalars, secret keys) are integers modulo
the group order N.
"""

import logging
import random
from typing import Optional, Tuple, Union
import gmpy2

from crypto.common.ec import Point
from clenc.ciphertext import Ciphertext, check_ciphertext
from clenc.errors import RandomnessFailure, WrongRandomnessError
from clenc.setup import GroupContext

logger = logging.getLogger(__name__)


# --- Helper Functions ---


def to_exponent(value: Union[int, gmpy2.mpz], n: int) -> int:
    """Reduces an integer into the exponent domain Z_N."""
    if not isinstance(value, (int, gmpy2.mpz)):
        raise TypeError(f"Exponent must be an integer, got {type(value).__name__}")
    return int(value) % n


def sample_exponent(ctx: GroupContext, rng: Optional[random.Random] = None) -> int:
    """
    Draws a uniform exponent from [1, N). Reduced mod p2 this is uniform over
    the exponents of Gq, even though p2 itself is unknown.
    """
    try:
        return ctx.ec.random_scalar(rng)
    except (OSError, NotImplementedError) as e:
        raise RandomnessFailure("Randomness source is unavailable") from e


# --- Core Classes ---


class PublicKey:
    """
    A CL public key pk = gq^sk together with the group context it belongs
    to. Anyone holding it can encrypt and combine ciphertexts.
    """

    def __init__(self, ctx: GroupContext, h: Point):
        self._ctx = ctx
        self._h = h

    @property
    def ctx(self) -> GroupContext:
        return self._ctx

    @property
    def h(self) -> Point:
        """The public element pk = gq^sk."""
        return self._h

    def encrypt_and_return_randomness(
        self, m: int, rng: Optional[random.Random] = None
    ) -> Tuple[Ciphertext, int]:
        """Encrypts a plaintext exponent and returns the ciphertext and r."""
        r = sample_exponent(self.ctx, rng)
        return self.encrypt_with_randomness(m, r), r

    def encrypt(self, m: int, rng: Optional[random.Random] = None) -> Ciphertext:
        """Encrypts m under a fresh randomizer, discarding the randomizer."""
        c, _ = self.encrypt_and_return_randomness(m, rng)
        return c

    def encrypt_with_randomness(self, m: int, r: int) -> Ciphertext:
        """
        Computes (gq^r, f^m * pk^r) for a caller-chosen r. Reusing r across
        plaintexts breaks confidentiality; this exists for tests and proofs.
        """
        n = self.ctx.n
        m = to_exponent(m, n)
        r = to_exponent(r, n)
        if r == 0:
            raise WrongRandomnessError("Randomizer must be non-zero modulo N")

        ec = self.ctx.ec
        c1 = ec.scalar_mult(r, self.ctx.gq)
        c2 = ec.point_add(ec.scalar_mult(m, self.ctx.f), ec.scalar_mult(r, self.h))
        return Ciphertext(c1=c1, c2=c2)

    def homo_add(self, enc_a: Ciphertext, enc_b: Ciphertext) -> Ciphertext:
        """
        Homomorphically adds two ciphertexts. Both must come from this key;
        anything else gives a meaningless ciphertext, not an error.
        """
        enc_a = check_ciphertext(enc_a)
        enc_b = check_ciphertext(enc_b)
        ec = self.ctx.ec
        # gq^r1 * gq^r2 = gq^(r1+r2)
        c1 = ec.point_add(enc_a.c1, enc_b.c1)
        # f^a * pk^r1 * f^b * pk^r2 = f^(a+b) * pk^(r1+r2)
        c2 = ec.point_add(enc_a.c2, enc_b.c2)
        return Ciphertext(c1=c1, c2=c2)

    def homo_mult(self, a: int, enc_b: Ciphertext) -> Ciphertext:
        """
        Homomorphically multiplies a ciphertext by a plaintext scalar,
        producing (gq^(a*r), f^(a*b) * pk^(a*r)).
        """
        enc_b = check_ciphertext(enc_b)
        a = to_exponent(a, self.ctx.n)
        ec = self.ctx.ec
        return Ciphertext(c1=ec.scalar_mult(a, enc_b.c1), c2=ec.scalar_mult(a, enc_b.c2))

    def rerandomize(
        self, enc: Ciphertext, rng: Optional[random.Random] = None
    ) -> Tuple[Ciphertext, int]:
        """
        Adds a fresh encryption of zero, so that the result is unlinkable to
        `enc` but decrypts to the same element. Returns the added randomness.
        """
        enc = check_ciphertext(enc)
        zero, r = self.encrypt_and_return_randomness(0, rng)
        return self.homo_add(enc, zero), r

    def homo_mult_obfuscate(
        self, a: int, enc_b: Ciphertext, rng: Optional[random.Random] = None
    ) -> Tuple[Ciphertext, int]:
        """
        Homomorphically multiplies a ciphertext by a plaintext scalar and then
        re-randomizes the result, hiding which ciphertext was scaled.
        """
        return self.rerandomize(self.homo_mult(a, enc_b), rng)

    def __repr__(self) -> str:
        return f"PublicKey(h={self.h!r})"


class PrivateKey(PublicKey):
    """
    A CL secret key. The public part is derived from sk on construction, so
    pk == gq^sk always holds.
    """

    def __init__(self, ctx: GroupContext, sk: Union[int, gmpy2.mpz]):
        sk = to_exponent(sk, ctx.n)
        if sk == 0:
            raise ValueError("Secret key must be non-zero modulo N")
        super().__init__(ctx, ctx.ec.scalar_mult(sk, ctx.gq))
        self._sk = sk

    @property
    def sk(self) -> int:
        return self._sk

    def public_key(self) -> PublicKey:
        return PublicKey(self.ctx, self.h)

    def decrypt(self, enc: Ciphertext) -> Point:
        """
        Recovers f^m from a ciphertext. Turning f^m back into the integer m
        is a bounded discrete logarithm and is left to the caller.
        """
        enc = check_ciphertext(enc)
        ec = self.ctx.ec
        temp = ec.scalar_mult(self.sk, enc.c1)
        return ec.point_add(enc.c2, ec.point_neg(temp))

    def __repr__(self) -> str:
        return f"PrivateKey(h={self.h!r})"


# --- Key Generation ---


def generate_key_pair(
    ctx: GroupContext, rng: Optional[random.Random] = None
) -> Tuple[PrivateKey, PublicKey]:
    """
    Generates a CL key pair with sk uniform in [1, N).

    Raises:
        RandomnessFailure: If the randomness source fails.
    """
    sk = sample_exponent(ctx, rng)
    private_key = PrivateKey(ctx, sk)
    logger.debug("Generated CL key pair")
    return private_key, private_key.public_key()

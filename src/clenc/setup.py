"""
Group setup for the Castagnos-Laguillaumie scheme.

A Type A1 group G of composite order N = p1*p2 is generated, and a random
element g of full order is projected onto its two prime-order subgroups:

    f  = g^(N/p1)   generates F,  order p1, plaintexts live in its exponent
    gq = g^(N/p2)   generates Gq, order p2, carries the DDH assumption

The factorization of N is dropped once the generators exist. Anybody holding
N and either prime also knows the other, so neither is kept on the context.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from crypto.common.ec import Curve, ECOperations, Point
from crypto.common.numbers import resolve_rng
from crypto.common.typea1 import (
    PairingError,
    TypeA1Pairing,
    generate_type_a1_params,
    get_generator,
)
from clenc.errors import RandomnessFailure, SetupFailure

logger = logging.getLogger(__name__)

DEFAULT_NUM_PRIMES = 2
DEFAULT_PRIME_BITS = 128
MIN_PRIME_BITS = 8

# Position of each subgroup's prime in the generated parameters.
F_SUBGROUP_INDEX = 0
GQ_SUBGROUP_INDEX = 1


@dataclass(frozen=True)
class GroupContext:
    """Public, immutable group parameters shared by every party and operation."""

    pairing: TypeA1Pairing
    g: Point  # Random element of full order N.
    f: Point  # Generator of F.
    gq: Point  # Generator of Gq.

    @property
    def n(self) -> int:
        """The composite group order N, which is also the exponent modulus."""
        return int(self.pairing.n)

    @property
    def ec(self) -> ECOperations:
        return self.pairing.G1

    @property
    def curve(self) -> Curve:
        return self.pairing.curve


def setup(
    num_primes: int = DEFAULT_NUM_PRIMES,
    bits: int = DEFAULT_PRIME_BITS,
    rng: Optional[random.Random] = None,
) -> GroupContext:
    """
    Builds the composite-order group and derives g, f and gq.

    Args:
        num_primes: Number of prime factors of N. The scheme needs exactly 2.
        bits: Bit length of each prime factor.
        rng: Randomness source, the operating system CSPRNG by default.
            Seeded generators are only suitable for tests.

    Raises:
        SetupFailure: If the sizes are unsupported or the group generator
            cannot produce parameters for them.
        RandomnessFailure: If the randomness source fails.
    """
    if num_primes != DEFAULT_NUM_PRIMES:
        raise SetupFailure(
            f"The CL scheme needs exactly {DEFAULT_NUM_PRIMES} prime factors, got {num_primes}"
        )
    if bits < MIN_PRIME_BITS:
        raise SetupFailure(
            f"Prime factors need at least {MIN_PRIME_BITS} bits, got {bits}"
        )

    rng = resolve_rng(rng)
    try:
        params = generate_type_a1_params(num_primes, bits, rng)
        pairing = TypeA1Pairing.from_params(params)

        # A random g may miss one of the subgroups; both projections must
        # be non-trivial for f and gq to be generators.
        while True:
            g = pairing.G1.random_point(rng)
            f = get_generator(params, g, F_SUBGROUP_INDEX)
            gq = get_generator(params, g, GQ_SUBGROUP_INDEX)
            if not f.is_infinity and not gq.is_infinity:
                break
            logger.debug("Sampled element is not of full order, resampling")
    except PairingError as e:
        raise SetupFailure(f"Group generation failed: {e}") from e
    except (OSError, NotImplementedError) as e:
        raise RandomnessFailure("Randomness source failed during group setup") from e

    logger.debug(
        "Group setup complete: N has %d bits, q has %d bits",
        pairing.n.bit_length(),
        pairing.q.bit_length(),
    )
    return GroupContext(pairing=pairing, g=g, f=f, gq=gq)

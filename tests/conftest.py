from __future__ import annotations

import random

import pytest

from clenc.keys import generate_key_pair
from clenc.setup import setup
from crypto.common.typea1 import TypeA1Pairing, generate_type_a1_params

# Toy sizes keep the pure-Python curve arithmetic fast.
TOY_BITS = 20


class BrokenRandom:
    """A randomness source whose entropy pool is gone."""

    def randrange(self, *args, **kwargs):
        raise OSError("entropy source unavailable")

    def getrandbits(self, k):
        raise OSError("entropy source unavailable")


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def broken_rng():
    return BrokenRandom()


@pytest.fixture(scope="session")
def params():
    return generate_type_a1_params(2, TOY_BITS, random.Random(99))


@pytest.fixture(scope="session")
def pairing(params):
    return TypeA1Pairing.from_params(params)


@pytest.fixture(scope="session")
def ctx():
    return setup(bits=TOY_BITS, rng=random.Random(7))


@pytest.fixture(scope="session")
def keys(ctx):
    return generate_key_pair(ctx, random.Random(11))


@pytest.fixture
def private_key(keys):
    return keys[0]


@pytest.fixture
def public_key(keys):
    return keys[1]

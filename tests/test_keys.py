from __future__ import annotations

import random

import pytest

from clenc.errors import RandomnessFailure
from clenc.keys import PrivateKey, PublicKey, generate_key_pair
from crypto.common.ec import scalar_mult


def test_public_key_matches_secret_key(ctx, private_key, public_key):
    assert 1 <= private_key.sk < ctx.n
    assert private_key.h == scalar_mult(private_key.sk, ctx.gq)
    assert public_key.h == private_key.h
    assert isinstance(public_key, PublicKey)
    assert not isinstance(public_key, PrivateKey)


def test_private_key_derives_its_public_part(ctx):
    key = PrivateKey(ctx, 987654321)
    assert key.sk == 987654321 % ctx.n
    assert key.h == scalar_mult(987654321, ctx.gq)
    assert key.public_key().h == key.h


def test_secret_key_is_reduced_modulo_n(ctx):
    assert PrivateKey(ctx, ctx.n + 5).h == PrivateKey(ctx, 5).h


def test_zero_secret_key_is_rejected(ctx):
    with pytest.raises(ValueError):
        PrivateKey(ctx, 0)
    with pytest.raises(ValueError):
        PrivateKey(ctx, ctx.n)


def test_independent_key_pairs_differ(ctx, rng):
    sk_a, _ = generate_key_pair(ctx, rng)
    sk_b, _ = generate_key_pair(ctx, rng)
    assert sk_a.sk != sk_b.sk
    assert sk_a.h != sk_b.h


def test_seeded_key_generation_is_reproducible(ctx):
    sk_a, _ = generate_key_pair(ctx, random.Random(3))
    sk_b, _ = generate_key_pair(ctx, random.Random(3))
    assert sk_a.sk == sk_b.sk


def test_default_rng_is_the_system_csprng(ctx):
    private_key, public_key = generate_key_pair(ctx)
    assert public_key.h == scalar_mult(private_key.sk, ctx.gq)


def test_key_generation_reports_randomness_failure(ctx, broken_rng):
    with pytest.raises(RandomnessFailure) as excinfo:
        generate_key_pair(ctx, broken_rng)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_public_element_cannot_be_modified_in_place(ctx, public_key):
    with pytest.raises(AttributeError):
        public_key.h.y = 0
    assert public_key.h.curve == ctx.curve


def test_secret_key_is_not_in_repr(private_key):
    assert str(private_key.sk) not in repr(private_key)

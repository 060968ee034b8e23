from __future__ import annotations

import dataclasses
import json

import pytest

from clenc.ciphertext import Ciphertext, check_ciphertext
from clenc.errors import CLError, InvalidCiphertextShape


def test_json_encoding_preserves_the_ciphertext(ctx, private_key, public_key, rng):
    enc = public_key.encrypt(12, rng)
    decoded = Ciphertext.from_json(enc.to_json(), ctx.curve)

    assert decoded == enc
    assert private_key.decrypt(decoded) == private_key.decrypt(enc)


def test_dict_encoding_uses_hex_coordinates(public_key, rng):
    enc = public_key.encrypt(1, rng)
    data = enc.to_dict()

    assert set(data) == {"c1", "c2"}
    assert data["c1"]["x"] == hex(enc.c1.x)
    assert data["c2"]["is_infinity"] is False


def test_identity_components_survive_encoding(ctx):
    identity = ctx.ec.identity
    enc = Ciphertext(c1=identity, c2=ctx.f)
    assert Ciphertext.from_dict(enc.to_dict(), ctx.curve) == enc


def test_missing_component_is_reported(ctx, public_key, rng):
    data = public_key.encrypt(1, rng).to_dict()
    del data["c2"]
    with pytest.raises(InvalidCiphertextShape, match="c2"):
        Ciphertext.from_dict(data, ctx.curve)
    with pytest.raises(InvalidCiphertextShape):
        Ciphertext.from_json(json.dumps({"c1": None, "c2": None}), ctx.curve)


@pytest.mark.parametrize("coordinate", ["x", "y"])
def test_component_missing_a_coordinate_is_reported(ctx, public_key, rng, coordinate):
    data = public_key.encrypt(1, rng).to_dict()
    del data["c1"][coordinate]
    with pytest.raises(InvalidCiphertextShape, match="c1"):
        Ciphertext.from_dict(data, ctx.curve)


def test_non_string_coordinate_is_reported(ctx, public_key, rng):
    data = public_key.encrypt(1, rng).to_dict()
    data["c2"]["y"] = 12
    with pytest.raises(InvalidCiphertextShape, match="c2"):
        Ciphertext.from_dict(data, ctx.curve)


@pytest.mark.parametrize(
    "encoded",
    ["[1, 2]", '"c1"', "42", '{"c1": [1, 2], "c2": {"x": "0x1", "y": "0x1"}}'],
)
def test_json_that_is_not_a_ciphertext_object_is_reported(ctx, encoded):
    with pytest.raises(InvalidCiphertextShape):
        Ciphertext.from_json(encoded, ctx.curve)


def test_tampered_coordinates_are_rejected(ctx, public_key, rng):
    data = public_key.encrypt(1, rng).to_dict()
    data["c1"]["y"] = hex((int(data["c1"]["y"], 16) + 1) % ctx.pairing.q)
    with pytest.raises(ValueError):
        Ciphertext.from_dict(data, ctx.curve)


def test_components_must_be_points(ctx):
    with pytest.raises(InvalidCiphertextShape):
        Ciphertext(c1=None, c2=ctx.f)
    with pytest.raises(InvalidCiphertextShape):
        Ciphertext(c1=ctx.f, c2=(1, 2))


def test_shape_error_is_a_programming_error(ctx):
    with pytest.raises(ValueError):
        check_ciphertext((ctx.f, ctx.gq))
    with pytest.raises(CLError):
        check_ciphertext(None)


def test_ciphertext_is_immutable(ctx):
    enc = Ciphertext(c1=ctx.f, c2=ctx.gq)
    with pytest.raises(dataclasses.FrozenInstanceError):
        enc.c1 = ctx.gq

from __future__ import annotations

import pytest

from crypto.common.fields import Fq2

Q = 103  # 103 = 3 (mod 4)


def test_i_squares_to_minus_one():
    i = Fq2(0, 1, Q)
    assert i.square() == Fq2(-1, 0, Q)
    assert i * i == -Fq2.one(Q)


def test_multiplication_matches_schoolbook():
    x = Fq2(5, 7, Q)
    y = Fq2(11, 13, Q)
    # (5 + 7i)(11 + 13i) = 55 - 91 + (65 + 77)i
    assert x * y == Fq2(55 - 91, 65 + 77, Q)
    assert x.square() == x * x


def test_inverse_and_division():
    x = Fq2(17, 42, Q)
    assert (x * x.inverse()).is_one()
    assert (x / x).is_one()
    with pytest.raises(ZeroDivisionError):
        Fq2.zero(Q).inverse()


def test_conjugate_is_frobenius():
    x = Fq2(9, 31, Q)
    assert x ** Q == x.conjugate()


def test_multiplicative_group_order():
    x = Fq2(3, 4, Q)
    assert (x ** (Q * Q - 1)).is_one()
    assert x ** -1 == x.inverse()
    assert (x ** 0).is_one()


def test_integer_coercion():
    x = Fq2(2, 3, Q)
    assert x * 2 == Fq2(4, 6, Q)
    assert x + 1 == Fq2(3, 3, Q)
    assert Fq2.one(Q).is_one()
    with pytest.raises(ValueError):
        x * Fq2(1, 1, 107)


def test_equality_agrees_with_hashing():
    assert Fq2.one(Q) != 1
    assert Fq2(5, 7, Q) == Fq2(5 + Q, 7 - Q, Q)
    assert hash(Fq2(5, 7, Q)) == hash(Fq2(5 + Q, 7 - Q, Q))
    assert len({Fq2(1, 0, Q), Fq2.one(Q), Fq2(1, 0, 107)}) == 2

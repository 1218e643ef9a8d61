#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Prime field arithmetic.

Field elements are plain python int in [0, p), p being a prime:
all operands are assumed to be already reduced mod p
and every result is reduced mod p.

The modular inverse is based on the Extended Euclidean Algorithm, see
https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
"""

from typing import Tuple

from ecdhlib.exceptions import NoModularInverse
from ecdhlib.utils import int_repr


def add(a: int, b: int, p: int) -> int:
    "Return a + b (mod p)."

    r = a + b
    return r - p if r >= p else r


def sub(a: int, b: int, p: int) -> int:
    "Return a - b (mod p)."

    r = a - b
    return r + p if r < 0 else r


def mul(a: int, b: int, p: int) -> int:
    "Return a * b (mod p)."
    return a * b % p


def square(a: int, p: int) -> int:
    "Return a * a (mod p)."
    return mul(a, a, p)


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    based on Extended Euclidean Algorithm, see
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a (mod m).

    m does not have to be a prime: the inverse exists
    if and only if gcd(a, m) == 1.
    """

    a %= m
    g, x, _ = xgcd(a, m)
    if g == 1:
        return x % m
    raise NoModularInverse(f"No inverse for {int_repr(a)} mod {int_repr(m)}")


def div(a: int, b: int, p: int) -> int:
    """Return a / b (mod p).

    The inverse of b is computed first, then multiplied by a.
    """

    return mul(a, mod_inv(b, p), p)

#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve class and named curves.

Named curves are the SEC 2 prime field curves,
http://www.secg.org/sec2-v2.pdf
(secp160r1 is from SEC 2 v.1, http://www.secg.org/SEC2-Ver-1.0.pdf).
Their domain parameters are loaded from the package data
and validated once, at import time.
"""

import json
import logging
from math import sqrt
from os import path
from typing import Dict, Optional, Sequence

from ecdhlib.alias import Integer
from ecdhlib.ecc.curve_group import CurveGroup, int_param, mult_aff
from ecdhlib.ecc.point import INF, AffinePoint, Point
from ecdhlib.exceptions import CurveConstructionError, ECDHlibValueError
from ecdhlib.utils import int_repr

logger = logging.getLogger(__name__)


class Curve(CurveGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Sequence[Integer],
        n: Integer,
        h: Integer,
        weakness_check: bool = True,
        key_size: Optional[int] = None,
        name: str = "",
    ) -> None:

        super().__init__(p, a, b)

        # 2. check that xG and yG are integers in the interval [0, p−1]
        # 4. Check that yG^2 = xG^3 + a*xG + b (mod p)
        if G is INF:
            raise CurveConstructionError("INF point cannot be a generator")
        try:
            G_len = len(G)
        except TypeError as e:
            raise CurveConstructionError(f"invalid generator: {G!r}") from e
        if G_len != 2:
            raise CurveConstructionError("generator must a be a sequence[int, int]")
        self.G = AffinePoint(int_param("x_G", G[0]), int_param("y_G", G[1]))
        try:
            on_curve = self.is_on_curve(self.G)
        except ECDHlibValueError as e:
            raise CurveConstructionError(f"invalid generator: {e}") from e
        if not on_curve:
            raise CurveConstructionError("generator is not on the curve")

        n = int_param("n", n)
        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8

        # 5. Check that n is prime.
        if n < 2 or n % 2 == 0 or pow(2, n - 1, n) != 1:
            raise CurveConstructionError(f"n is not prime: {int_repr(n)}")
        h = int_param("h", h)
        delta = int(2 * sqrt(self.p))
        # also check n with Hasse Theorem
        if h < 2 and not self.p + 1 - delta <= n <= self.p + 1 + delta:
            raise CurveConstructionError(f"n not in p+1-delta..p+1+delta: {int_repr(n)}")

        # 7. Check that nG = INF
        if mult_aff(n, self.G, self) is not INF:
            raise CurveConstructionError(f"n is not the group order: {int_repr(n)}")

        # 6. Check cofactor
        exp_h = int(1 / n + delta / n + self.p / n)
        if h != exp_h:
            raise CurveConstructionError(f"invalid h: {h}, expected {exp_h}")
        self.h = h

        # 8. Check that n ≠ p
        if n == self.p:
            raise CurveConstructionError(f"n=p weak curve: {int_repr(n)}")

        if weakness_check:
            # 8. Check that p^i % n ≠ 1 for all 1≤i<100
            for i in range(1, 100):
                if pow(self.p, i, n) == 1:
                    raise CurveConstructionError("weak curve")

        # private key size in bits, as read from the entropy source
        if key_size is None:
            key_size = self.n_size * 8
        if not isinstance(key_size, int) or key_size <= 0 or key_size % 8 != 0:
            raise CurveConstructionError(f"invalid key size: {key_size!r}")
        self.key_size = key_size

        self.name = name

    def __str__(self) -> str:
        result = super().__str__()
        result += f"\n x_G = {int_repr(self.G.x)}"
        result += f"\n y_G = {int_repr(self.G.y)}"
        result += f"\n n   = {int_repr(self.n)}"
        result += f"\n h   = {self.h}"
        return result

    def __repr__(self) -> str:
        if self.name:
            return f"Curve('{self.name}')"
        result = f"Curve({int_repr(self.p)}, {int_repr(self._a)}, {int_repr(self._b)}"
        result += f", ({int_repr(self.G.x)}, {int_repr(self.G.y)})"
        result += f", {int_repr(self.n)}, {self.h})"
        return result


_DATA_DIR = path.join(path.dirname(__file__), "data")


def _curves_from_file(filename: str) -> Dict[str, Curve]:
    with open(path.join(_DATA_DIR, filename), "r", encoding="ascii") as file_:
        params = json.load(file_)
    curves: Dict[str, Curve] = {}
    for ec_name, ec_params in params.items():
        curves[ec_name] = Curve(*ec_params, name=ec_name)
    logger.debug("loaded %d curves from %s", len(curves), filename)
    return curves


CURVES = _curves_from_file("ec_SEC2.json")

secp192k1 = CURVES["secp192k1"]
secp192r1 = CURVES["secp192r1"]


def get_curve(name: str) -> Curve:
    "Return the named curve from the registry."

    try:
        return CURVES[name.strip().lower()]
    except KeyError as e:
        raise ECDHlibValueError(f"unknown curve: {name!r}") from e


def mult(m: int, Q: Optional[Point] = None, ec: Curve = secp192k1) -> Point:
    """Elliptic curve scalar multiplication.

    The scalar is reduced mod n before use;
    Q defaults to the curve generator and must be on the curve.
    """
    if Q is None:
        Q = ec.G
    else:
        ec.require_on_curve(Q)
    m %= ec.n
    return mult_aff(m, Q, ec)

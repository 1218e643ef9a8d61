#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Note that CurveGroup does not have to be a cyclic subgroup.
For the cyclic subgroup of prime order Curve,
see the ecdhlib.ecc.curve module.

Group law formulas are the affine ones, see
https://www.johannes-bauer.com/compsci/ecc/
"""

from math import ceil

from ecdhlib.alias import Integer
from ecdhlib.ecc import prime_field as fp
from ecdhlib.ecc.point import INF, AffinePoint, Point
from ecdhlib.exceptions import CurveConstructionError, ECDHlibTypeError, ECDHlibValueError
from ecdhlib.utils import int_from_integer, int_repr


def int_param(name: str, i: Integer) -> int:
    "Return the int value of a curve parameter literal."

    try:
        return int_from_integer(i)
    except (ValueError, TypeError) as e:
        raise CurveConstructionError(f"invalid {name}: {i!r}") from e


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_param("p", p)
        a = int_param("a", a)
        b = int_param("b", b)

        # 1) check that p is a prime
        # Fermat test will do as _probabilistic_ primality test...
        if p < 3 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise CurveConstructionError(f"p is not prime: {int_repr(p)}")

        plen = p.bit_length()
        # byte-length
        self.p_size = ceil(plen / 8)
        self.p = p

        # 2. check that a and b are integers in the interval [0, p−1]
        if a < 0:
            raise CurveConstructionError(f"negative a: {a}")
        if p <= a:
            raise CurveConstructionError(f"p <= a: {int_repr(p)} <= {int_repr(a)}")
        if b < 0:
            raise CurveConstructionError(f"negative b: {b}")
        if p <= b:
            raise CurveConstructionError(f"p <= b: {int_repr(p)} <= {int_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise CurveConstructionError("zero discriminant")
        self._a = a
        self._b = b

    @property
    def a(self) -> int:
        return self._a

    @property
    def b(self) -> int:
        return self._b

    def __str__(self) -> str:
        result = "Curve"
        result += f"\n p   = {int_repr(self.p)}"
        result += f"\n a   = {int_repr(self._a)}"
        result += f"\n b   = {int_repr(self._b)}"
        return result

    def __repr__(self) -> str:
        return f"CurveGroup({int_repr(self.p)}, {int_repr(self._a)}, {int_repr(self._b)})"

    # methods using p: they could become functions

    def negate(self, Q: Point) -> Point:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """
        if Q is INF:
            return INF
        if isinstance(Q, AffinePoint):
            return AffinePoint(Q.x, (self.p - Q.y) % self.p)
        raise ECDHlibTypeError("not a point")

    # methods using _a, _b, p

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        return self.add_aff(Q1, Q2)

    def double(self, Q: Point) -> Point:
        """Return the double of a point.

        The input point must be on the curve.
        """

        self.require_on_curve(Q)
        return self.double_aff(Q)

    def add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve
        p = self.p

        if Q is INF:
            return R
        if R is INF:
            return Q

        if Q.x == R.x:
            if Q.y == R.y:  # point doubling
                return self.double_aff(Q)
            if fp.add(Q.y, R.y, p) == 0:  # opposite points
                return INF
            raise ECDHlibValueError("same x-coordinate, unrelated y: not on curve")

        lam = fp.div(fp.sub(Q.y, R.y, p), fp.sub(Q.x, R.x, p), p)
        x = fp.sub(fp.square(lam, p), fp.add(Q.x, R.x, p), p)
        y = fp.sub(fp.mul(lam, fp.sub(Q.x, x, p), p), Q.y, p)
        return AffinePoint(x, y)

    def double_aff(self, Q: Point) -> Point:
        # point is assumed to be on curve
        p = self.p

        if Q is INF:
            return INF
        # vertical tangent
        if Q.y % p == 0:
            return INF

        num = fp.add(fp.mul(3, fp.square(Q.x, p), p), self._a, p)
        lam = fp.div(num, fp.mul(2, Q.y, p), p)
        x = fp.sub(fp.square(lam, p), fp.mul(2, Q.x, p), p)
        y = fp.sub(fp.mul(lam, fp.sub(Q.x, x, p), p), Q.y, p)
        return AffinePoint(x, y)

    def _y2(self, x: int) -> int:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return ((x * x + self._a) * x + self._b) % self.p

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise ECDHlibValueError("point not on curve")

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve."""
        if Q is INF:
            return True
        if not isinstance(Q, AffinePoint):
            raise ECDHlibTypeError("not a point")
        if not 0 <= Q.x < self.p:
            raise ECDHlibValueError(f"x-coordinate not in 0..p-1: {int_repr(Q.x)}")
        if not 0 <= Q.y < self.p:
            raise ECDHlibValueError(f"y-coordinate not in 0..p-1: {int_repr(Q.y)}")
        return self._y2(Q.x) == (Q.y * Q.y % self.p)


def mult_aff(m: int, Q: Point, ec: CurveGroup) -> Point:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses 'double & add' algorithm,
    binary decomposition of m,
    affine coordinates.
    It is not constant-time.

    The input point is assumed to be on curve,
    m is assumed to have been reduced mod n if appropriate
    (e.g. cyclic groups of order n).
    """

    if m < 0:
        raise ECDHlibValueError(f"negative m: {hex(m)}")

    R = INF  # initialize as infinity point
    while m > 0:  # use binary representation of m
        if m & 1:  # if least significant bit is 1
            R = ec.add_aff(R, Q)  # then add current Q
        m >>= 1  # remove the bit just accounted for
        Q = ec.double_aff(Q)  # double Q for next step
    return R

#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve points.

A point is either the point at infinity INF (the group identity)
or an AffinePoint(x, y).

INF is a tag of its own: no coordinate pair is used to represent it,
so AffinePoint(0, 0) is just an ordinary point
(e.g. on any curve with b = 0).
"""

from enum import Enum
from typing import Iterator, Union


class Infinity(Enum):
    "The point at infinity, identity element of the group."

    INF = 0

    def __repr__(self) -> str:
        return "INF"

    __str__ = __repr__


INF = Infinity.INF


class AffinePoint:
    """Elliptic curve point in affine coordinates.

    Instances are immutable and hashable.
    The point is not checked to be on any curve.
    """

    __slots__ = ("_x", "_y")

    def __init__(self, x: int, y: int) -> None:
        if not isinstance(x, int) or not isinstance(y, int):
            raise TypeError("coordinates must be int")
        object.__setattr__(self, "_x", x)
        object.__setattr__(self, "_y", y)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("AffinePoint is immutable")

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def __iter__(self) -> Iterator[int]:
        yield self._x
        yield self._y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffinePoint):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __repr__(self) -> str:
        return f"AffinePoint({hex(self._x)}, {hex(self._y)})"

    def __reduce__(self):
        return (AffinePoint, (self._x, self._y))


Point = Union[AffinePoint, Infinity]

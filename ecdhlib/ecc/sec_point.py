#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC uncompressed point representation.

SEC 1 v.2, sections 2.3.3 and 2.3.4, http://www.secg.org/sec1-v2.pdf

Only the uncompressed form (0x04 marker) is supported:
each coordinate is padded to the byte-length of the field prime.
"""

import re

from ecdhlib.alias import Octets
from ecdhlib.ecc.curve import Curve, secp192k1
from ecdhlib.ecc.point import INF, AffinePoint, Point
from ecdhlib.exceptions import ECDHlibValueError, InvalidEncoding
from ecdhlib.utils import bytes_from_octets

_UNCOMPRESSED_MARKER = 0x04
_HEX_DIGITS = re.compile("[0-9a-fA-F]*")


def bytes_from_point(Q: Point, ec: Curve = secp192k1) -> bytes:
    """Return a point as uncompressed octet sequence.

    Return a point as uncompressed (0x04) octet sequence,
    according to SEC 1 v.2, section 2.3.3.
    """

    if Q is INF:
        raise InvalidEncoding("no uncompressed representation for infinity point")

    # check that Q is a point and that is on curve
    ec.require_on_curve(Q)

    x_bytes = Q.x.to_bytes(ec.p_size, byteorder="big", signed=False)
    y_bytes = Q.y.to_bytes(ec.p_size, byteorder="big", signed=False)
    return bytes([_UNCOMPRESSED_MARKER]) + x_bytes + y_bytes


def hex_from_point(Q: Point, ec: Curve = secp192k1) -> str:
    "Return a point as uncompressed hex-string."
    return bytes_from_point(Q, ec).hex()


def point_from_octets(pub_key: Octets, ec: Curve = secp192k1) -> AffinePoint:
    """Return an AffinePoint that belongs to the curve.

    Return an AffinePoint that belongs to the curve according to
    SEC 1 v.2, section 2.3.4, uncompressed representation only.
    """

    # plain hex digits only: no spaces, no line breaks
    if isinstance(pub_key, str) and not _HEX_DIGITS.fullmatch(pub_key):
        raise InvalidEncoding(f"not an hex-string: {pub_key!r}")
    try:
        pub_key = bytes_from_octets(pub_key)
    except ValueError as e:
        raise InvalidEncoding(f"not an hex-string: {pub_key!r}") from e

    if not pub_key:
        raise InvalidEncoding("empty point representation")
    if pub_key[0] != _UNCOMPRESSED_MARKER:
        raise InvalidEncoding(f"not an uncompressed point: {pub_key[:1].hex()} prefix")

    bsize, odd = divmod(len(pub_key) - 1, 2)
    if odd:
        raise InvalidEncoding("coordinates do not split in equal halves")
    if bsize != ec.p_size:
        err_msg = "invalid size for uncompressed point: "
        err_msg += f"{len(pub_key)} instead of {2 * ec.p_size + 1}"
        raise InvalidEncoding(err_msg)

    x_Q = int.from_bytes(pub_key[1 : bsize + 1], byteorder="big", signed=False)
    y_Q = int.from_bytes(pub_key[bsize + 1 :], byteorder="big", signed=False)
    Q = AffinePoint(x_Q, y_Q)
    try:
        on_curve = ec.is_on_curve(Q)
    except ECDHlibValueError as e:
        raise InvalidEncoding(f"invalid point: {e}") from e
    if not on_curve:
        raise InvalidEncoding(f"point not on curve: {Q}")
    return Q

#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Diffie-Hellman elliptic curve key agreement scheme.

Implementation of the Diffie-Hellman key agreement scheme using
elliptic curve cryptography. A key agreement scheme is used
by two entities to establish shared keying data, which will be
later utilized e.g. in symmetric cryptographic scheme.

The two entities must agree on the elliptic curve to use.

Each entity generates a KeyPair and publishes the
SEC 1 uncompressed hex-string of its public key:
shared_secret combines own private key and peer public key
into the hex-string of the shared point.

diffie_hellman instead follows SEC 1 v.2 section 6.1:
the x-coordinate of the shared point is fed into
the ANSI-X9.63 key derivation function.
"""

import logging
import secrets
from dataclasses import InitVar, dataclass, field
from hashlib import sha256
from math import ceil
from typing import Optional, Type, TypeVar

from dataclasses_json import DataClassJsonMixin, config

from ecdhlib.alias import EntropySource, HashF, Octets
from ecdhlib.ecc.curve import Curve, get_curve, mult, secp192k1
from ecdhlib.ecc.point import INF, AffinePoint
from ecdhlib.ecc.sec_point import hex_from_point, point_from_octets
from ecdhlib.exceptions import (
    ECDHlibRuntimeError,
    ECDHlibValueError,
    EntropyUnavailable,
)
from ecdhlib.utils import int_from_integer, int_repr

logger = logging.getLogger(__name__)

# upper bound to the rejection sampling of private keys
_MAX_DRAWS = 128

_KeyPair = TypeVar("_KeyPair", bound="KeyPair")


def random_bytes(size: int, entropy_source: Optional[EntropySource] = None) -> bytes:
    """Return size bytes from the entropy source.

    The default source is secrets.token_bytes,
    i.e. the operating system randomness.
    A failing source or a short read raises EntropyUnavailable.
    """

    source = secrets.token_bytes if entropy_source is None else entropy_source
    try:
        data = source(size)
    except (OSError, NotImplementedError) as e:
        raise EntropyUnavailable(f"entropy source failure: {e}") from e
    if not isinstance(data, bytes):
        raise EntropyUnavailable(f"entropy source returned {type(data).__name__}")
    if len(data) != size:
        raise EntropyUnavailable(f"entropy source returned {len(data)} bytes instead of {size}")
    return data


def gen_prv_key(ec: Curve = secp192k1, entropy_source: Optional[EntropySource] = None) -> int:
    """Return a private key uniformly distributed in [1, n-1].

    ec.key_size bits are read from the entropy source
    as big-endian integer, truncated to the bit length of n,
    and rejected until valid.
    """

    size = ec.key_size // 8
    # excess bits beyond n bit length
    shift = max(0, ec.key_size - ec.nlen)
    for _ in range(_MAX_DRAWS):
        q = int.from_bytes(random_bytes(size, entropy_source), byteorder="big", signed=False)
        q >>= shift
        if 0 < q < ec.n:
            return q
        logger.debug("private key draw out of range for %s, retrying", ec.name)
    raise EntropyUnavailable(f"no valid private key in {_MAX_DRAWS} draws")


@dataclass(frozen=True)
class KeyPair(DataClassJsonMixin):
    """ECDH private/public key pair.

    - prv_key is a scalar, 0 < prv_key < ec.n
    - pub_key is the point prv_key * ec.G
    """

    prv_key: int = field(
        repr=False, metadata=config(encoder=hex, decoder=int_from_integer)
    )
    pub_key: AffinePoint = field(
        metadata=config(
            encoder=lambda Q: {"x": hex(Q.x), "y": hex(Q.y)},
            decoder=lambda d: AffinePoint(int(d["x"], 16), int(d["y"], 16)),
        )
    )
    ec: Curve = field(
        default=secp192k1,
        metadata=config(encoder=lambda ec: ec.name, decoder=get_curve),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        # prv_key is a scalar, fail if not in [1, n-1]
        if not 0 < self.prv_key < self.ec.n:
            raise ECDHlibValueError(f"private key not in 1..n-1: {int_repr(self.prv_key)}")
        if self.pub_key is INF or not isinstance(self.pub_key, AffinePoint):
            raise ECDHlibValueError("public key must be an affine point")
        self.ec.require_on_curve(self.pub_key)
        if mult(self.prv_key, self.ec.G, self.ec) != self.pub_key:
            raise ECDHlibValueError("public key does not match private key")

    @property
    def pub_key_hex(self) -> str:
        "Return the public key as SEC 1 uncompressed hex-string."
        return hex_from_point(self.pub_key, self.ec)

    @classmethod
    def from_prv_key(
        cls: Type[_KeyPair], prv_key: int, ec: Curve = secp192k1
    ) -> _KeyPair:
        "Return the KeyPair for a given private key."

        if not 0 < prv_key < ec.n:
            raise ECDHlibValueError(f"private key not in 1..n-1: {int_repr(prv_key)}")
        pub_key = mult(prv_key, ec.G, ec)
        return cls(prv_key, pub_key, ec, check_validity=False)

    @classmethod
    def generate(
        cls: Type[_KeyPair],
        ec: Curve = secp192k1,
        entropy_source: Optional[EntropySource] = None,
    ) -> _KeyPair:
        "Return a new random KeyPair on the given curve."

        prv_key = gen_prv_key(ec, entropy_source)
        logger.debug("generated key pair on %s", ec.name)
        return cls.from_prv_key(prv_key, ec)


def gen_key_pair(
    ec: Curve = secp192k1, entropy_source: Optional[EntropySource] = None
) -> KeyPair:
    "Return a new random KeyPair on the given curve."
    return KeyPair.generate(ec, entropy_source)


def _shared_point(key_pair: KeyPair, peer_pub_key: Octets) -> AffinePoint:
    "Return prv_key * peer_pub_key, peer_pub_key being SEC 1 encoded."

    ec = key_pair.ec
    Q = point_from_octets(peer_pub_key, ec)
    S = mult(key_pair.prv_key, Q, ec)
    # only a private key reduced to zero mod n gets here
    if S is INF:
        raise ECDHlibRuntimeError("invalid (INF) shared secret")
    return S


def shared_secret(key_pair: KeyPair, peer_pub_key: Octets) -> str:
    """Return the shared secret as SEC 1 uncompressed hex-string.

    The shared secret is the whole point prv_key * peer_pub_key,
    peer_pub_key being the SEC 1 uncompressed representation
    of the peer public key.
    """

    return hex_from_point(_shared_point(key_pair, peer_pub_key), key_pair.ec)


def ansi_x9_63_kdf(
    z: bytes, size: int, hf: HashF, shared_info: Optional[bytes]
) -> bytes:
    """Return keying data according to ANSI-X9.63-KDF.

    The keying data is the concatenation of hf(z || counter || shared_info)
    for counter = 1, 2, ... as 4 bytes big-endian,
    truncated to size bytes.

    http://www.secg.org/sec1-v2.pdf, section 3.6.1
    """

    hf_size = hf().digest_size
    max_size = hf_size * (2 ** 32 - 1)
    if size > max_size:
        raise ECDHlibValueError(f"cannot derive a key larger than {max_size} bytes")
    suffix = b"" if shared_info is None else shared_info
    blocks = (
        hf(z + counter.to_bytes(4, byteorder="big", signed=False) + suffix).digest()
        for counter in range(1, ceil(size / hf_size) + 1)
    )
    return b"".join(blocks)[:size]


def diffie_hellman(
    key_pair: KeyPair,
    peer_pub_key: Octets,
    size: int,
    shared_info: Optional[bytes] = None,
    hf: HashF = sha256,
) -> bytes:
    """Return size bytes of keying data shared with the peer.

    SEC 1 v.2 section 6.1 key agreement:
    the x-coordinate of the shared point, padded to the field size,
    is fed into ANSI-X9.63-KDF.

    http://www.secg.org/sec1-v2.pdf, section 6.1
    """

    ec = key_pair.ec
    S = _shared_point(key_pair, peer_pub_key)
    z = S.x.to_bytes(ec.p_size, byteorder="big", signed=False)
    return ansi_x9_63_kdf(z, size, hf, shared_info)

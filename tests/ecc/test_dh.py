#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ecdhlib.ecc.dh` module."

import json
import logging
from hashlib import sha1, sha256

import pytest

from ecdhlib.ecc.curve import CURVES, mult, secp192k1, secp192r1
from ecdhlib.ecc.dh import (
    KeyPair,
    ansi_x9_63_kdf,
    diffie_hellman,
    gen_key_pair,
    gen_prv_key,
    random_bytes,
    shared_secret,
)
from ecdhlib.ecc.point import INF, AffinePoint
from ecdhlib.ecc.sec_point import hex_from_point
from ecdhlib.exceptions import (
    ECDHlibRuntimeError,
    ECDHlibValueError,
    EntropyUnavailable,
    InvalidEncoding,
)
from tests.ecc.test_curve import low_card_curves

G_HEX = (
    "04"
    "188da80eb03090f67cbf20eb43a18800f4ff0afd82ff1012"
    "07192b95ffc8da78631011ed6b24cdd573f977a11e794811"
)


def test_random_bytes() -> None:
    assert len(random_bytes(32)) == 32
    assert random_bytes(4, lambda size: b"\xab" * size) == b"\xab\xab\xab\xab"

    def failing_source(size: int) -> bytes:
        raise OSError("no entropy")

    with pytest.raises(EntropyUnavailable, match="entropy source failure: "):
        random_bytes(32, failing_source)

    err_msg = "entropy source returned 31 bytes instead of 32"
    with pytest.raises(EntropyUnavailable, match=err_msg):
        random_bytes(32, lambda size: b"\x01" * (size - 1))

    with pytest.raises(EntropyUnavailable, match="entropy source returned str"):
        random_bytes(32, lambda size: "01" * size)  # type: ignore

    # EntropyUnavailable is a RuntimeError
    with pytest.raises(RuntimeError):
        random_bytes(32, failing_source)
    with pytest.raises(ECDHlibRuntimeError):
        random_bytes(32, failing_source)


def test_gen_prv_key() -> None:
    for ec in CURVES.values():
        q = gen_prv_key(ec)
        assert 0 < q < ec.n

    ec = low_card_curves["ec13_19"]
    # n = 19 has 5 bits out of the 8 bits drawn
    assert ec.key_size == 8
    assert gen_prv_key(ec, lambda size: bytes([5 << 3])) == 5
    assert gen_prv_key(ec, lambda size: bytes([(18 << 3) + 7])) == 18

    with pytest.raises(EntropyUnavailable, match="no valid private key in 128 draws"):
        gen_prv_key(secp192r1, lambda size: b"\x00" * size)
    with pytest.raises(EntropyUnavailable, match="no valid private key in 128 draws"):
        gen_prv_key(ec, lambda size: bytes([19 << 3]))


def test_gen_prv_key_rejection(caplog: pytest.LogCaptureFixture) -> None:
    ec = secp192r1
    draws = [b"\xff" * 24, b"\x00" * 24, b"\x00" * 23 + b"\x07"]
    sizes = []

    def source(size: int) -> bytes:
        sizes.append(size)
        return draws.pop(0)

    caplog.set_level(logging.DEBUG, logger="ecdhlib.ecc.dh")
    assert gen_prv_key(ec, source) == 7
    assert sizes == [24, 24, 24]
    assert not draws
    assert "private key draw out of range" in caplog.text


def test_gen_prv_key_failure() -> None:
    def failing_source(size: int) -> bytes:
        raise NotImplementedError("no os randomness")

    with pytest.raises(EntropyUnavailable, match="entropy source failure: "):
        gen_prv_key(secp192k1, failing_source)
    with pytest.raises(EntropyUnavailable, match="entropy source failure: "):
        gen_key_pair(secp192k1, failing_source)
    with pytest.raises(EntropyUnavailable, match="instead of"):
        KeyPair.generate(secp192k1, lambda size: b"\x01")


def test_key_pair() -> None:
    ec = secp192r1
    kp = KeyPair.from_prv_key(1, ec)
    assert kp.prv_key == 1
    assert kp.pub_key == ec.G
    assert kp.ec is ec
    assert kp.pub_key_hex == G_HEX
    assert KeyPair(1, ec.G, ec) == kp
    assert "prv_key" not in repr(kp)

    for ec in CURVES.values():
        kp = gen_key_pair(ec)
        assert 0 < kp.prv_key < ec.n
        assert kp.pub_key == mult(kp.prv_key, ec.G, ec)
        assert kp.ec is ec
        assert len(kp.pub_key_hex) == 2 * (2 * ec.p_size + 1)
        kp.assert_valid()

    kp = KeyPair.generate()
    assert kp.ec is secp192k1

    ec = low_card_curves["ec23_31"]
    kp = KeyPair.generate(ec, lambda size: bytes([3 << 3]))
    assert kp.prv_key == 3
    assert kp.pub_key == mult(3, ec.G, ec)

    with pytest.raises(AttributeError):
        kp.prv_key = 2  # type: ignore


def test_key_pair_exceptions() -> None:
    ec = secp192r1

    err_msg = "private key not in 1..n-1: "
    with pytest.raises(ECDHlibValueError, match=err_msg):
        KeyPair.from_prv_key(0, ec)
    with pytest.raises(ECDHlibValueError, match=err_msg):
        KeyPair.from_prv_key(ec.n, ec)
    with pytest.raises(ECDHlibValueError, match=err_msg):
        KeyPair(0, ec.G, ec)

    with pytest.raises(ECDHlibValueError, match="public key must be an affine point"):
        KeyPair(1, INF, ec)  # type: ignore

    Q = AffinePoint(ec.G.x, ec.G.y + 1)
    with pytest.raises(ECDHlibValueError, match="point not on curve"):
        KeyPair(1, Q, ec)

    err_msg = "public key does not match private key"
    with pytest.raises(ECDHlibValueError, match=err_msg):
        KeyPair(2, ec.G, ec)

    kp = KeyPair(2, ec.G, ec, check_validity=False)
    with pytest.raises(ECDHlibValueError, match=err_msg):
        kp.assert_valid()


def test_dataclasses_json_dict() -> None:
    kp = KeyPair.from_prv_key(1, secp192r1)

    kp_dict = kp.to_dict()
    assert isinstance(kp_dict, dict)
    assert kp_dict == {
        "prv_key": "0x1",
        "pub_key": {"x": hex(secp192r1.G.x), "y": hex(secp192r1.G.y)},
        "ec": "secp192r1",
    }
    kp2 = KeyPair.from_dict(kp_dict)
    assert isinstance(kp2, KeyPair)
    assert kp2 == kp
    assert kp2.ec is secp192r1

    kp_json = kp.to_json()
    assert isinstance(kp_json, str)
    assert json.loads(kp_json) == kp_dict
    assert KeyPair.from_json(kp_json) == kp

    for ec in CURVES.values():
        kp = gen_key_pair(ec)
        assert KeyPair.from_dict(kp.to_dict()) == kp

    kp_dict["prv_key"] = "0x2"
    err_msg = "public key does not match private key"
    with pytest.raises(ECDHlibValueError, match=err_msg):
        KeyPair.from_dict(kp_dict)

    kp_dict["ec"] = "secp192q1"
    with pytest.raises(ECDHlibValueError, match="unknown curve: "):
        KeyPair.from_dict(kp_dict)


def test_shared_secret() -> None:
    ec = secp192r1
    kp = KeyPair.from_prv_key(1, ec)
    assert shared_secret(kp, G_HEX) == G_HEX
    assert shared_secret(kp, bytes.fromhex(G_HEX)) == G_HEX

    kp2 = KeyPair.from_prv_key(2, ec)
    assert shared_secret(kp2, G_HEX) == hex_from_point(ec.double(ec.G), ec)

    for ec in CURVES.values():
        alice = gen_key_pair(ec)
        bob = gen_key_pair(ec)
        s_alice = shared_secret(alice, bob.pub_key_hex)
        s_bob = shared_secret(bob, alice.pub_key_hex)
        assert s_alice == s_bob
        assert len(s_alice) == 2 * (2 * ec.p_size + 1)
        assert s_alice.startswith("04")
        S = mult(alice.prv_key * bob.prv_key, ec.G, ec)
        assert s_alice == hex_from_point(S, ec)

    for ec in low_card_curves.values():
        for q1 in range(1, ec.n):
            alice = KeyPair.from_prv_key(q1, ec)
            bob = KeyPair.from_prv_key(ec.n - q1, ec)
            assert shared_secret(alice, bob.pub_key_hex) == shared_secret(
                bob, alice.pub_key_hex
            )


def test_shared_secret_exceptions() -> None:
    kp = KeyPair.from_prv_key(1, secp192r1)

    # compressed point representation
    with pytest.raises(InvalidEncoding, match="not an uncompressed point: "):
        shared_secret(kp, "03" + "00" * 32)
    with pytest.raises(InvalidEncoding, match="not an hex-string: "):
        shared_secret(kp, "04" + "zz" * 48)
    with pytest.raises(InvalidEncoding, match="coordinates do not split in equal"):
        shared_secret(kp, G_HEX[:-2])
    with pytest.raises(InvalidEncoding, match="point not on curve: "):
        shared_secret(kp, G_HEX[:-2] + "00")
    # peer public key from another curve
    peer = gen_key_pair(CURVES["secp256k1"])
    with pytest.raises(InvalidEncoding, match="invalid size for uncompressed point: "):
        shared_secret(kp, peer.pub_key_hex)


def test_gec2() -> None:
    """GEC 2: Test Vectors for SEC 1, section 4.1

    http://read.pudn.com/downloads168/doc/772358/TestVectorsforSEC%201-gec2.pdf
    """

    # 4.1.1
    ec = CURVES["secp160r1"]
    hf = sha1

    # 4.1.2
    dU = 971761939728640320549601132085879836204587084162
    assert format(dU, str(ec.p_size) + "x") == "aa374ffc3ce144e6b073307972cb6d57b2a4e982"
    QU = mult(dU, ec.G, ec)
    assert QU == AffinePoint(
        466448783855397898016055842232266600516272889280,
        1110706324081757720403272427311003102474457754220,
    )
    U = KeyPair.from_prv_key(dU, ec)
    assert U.pub_key == QU

    # 4.1.3
    dV = 399525573676508631577122671218044116107572676710
    assert format(dV, str(ec.p_size) + "x") == "45fb58a92a17ad4b15101c66e74f277e2b460866"
    QV = mult(dV, ec.G, ec)
    assert QV == AffinePoint(
        420773078745784176406965940076771545932416607676,
        221937774842090227911893783570676792435918278531,
    )
    V = KeyPair.from_prv_key(dV, ec)
    assert V.pub_key == QV

    # expected results
    z_exp = 1155982782519895915997745984453282631351432623114
    zstr = "ca7c0f8c3ffa87a96e1b74ac8e6af594347bb40a"
    size = 20
    keying_data_exp = "744ab703f5bc082e59185f6d049d2d367db245c2"

    # 4.1.4
    z = mult(dU, QV, ec).x
    assert z == z_exp
    assert format(z, str(ec.p_size) + "x") == zstr
    z_bytes = z.to_bytes(ec.p_size, byteorder="big", signed=False)
    keying_data = ansi_x9_63_kdf(z_bytes, size, hf, None)
    assert keying_data.hex() == keying_data_exp
    assert diffie_hellman(U, V.pub_key_hex, size, None, hf).hex() == keying_data_exp

    # 4.1.5
    z = mult(dV, QU, ec).x
    assert z == z_exp
    assert diffie_hellman(V, U.pub_key_hex, size, None, hf).hex() == keying_data_exp

    # the full shared point carries z as x-coordinate
    s = shared_secret(U, V.pub_key_hex)
    assert s == shared_secret(V, U.pub_key_hex)
    assert s[2 : 2 + 2 * ec.p_size] == zstr


def test_diffie_hellman() -> None:
    ec = secp192k1
    alice = gen_key_pair(ec)
    bob = gen_key_pair(ec)
    for size in (16, 32, 33, 100):
        k_alice = diffie_hellman(alice, bob.pub_key_hex, size)
        k_bob = diffie_hellman(bob, alice.pub_key_hex, size)
        assert k_alice == k_bob
        assert len(k_alice) == size

    shared_info = b"ecdhlib"
    k1 = diffie_hellman(alice, bob.pub_key_hex, 32, shared_info, sha256)
    k2 = diffie_hellman(alice, bob.pub_key_hex, 32, None, sha256)
    assert k1 != k2
    # longer keying data extends the shorter one
    k3 = diffie_hellman(alice, bob.pub_key_hex, 64, shared_info, sha256)
    assert k3[:32] == k1

    # keying data comes from the x-coordinate of the shared point
    S = mult(alice.prv_key * bob.prv_key, ec.G, ec)
    z = S.x.to_bytes(ec.p_size, byteorder="big", signed=False)
    assert k1 == ansi_x9_63_kdf(z, 32, sha256, shared_info)

    with pytest.raises(InvalidEncoding, match="not an uncompressed point: "):
        diffie_hellman(alice, "03" + "00" * 24, 32)


def test_infinity_shared_point() -> None:
    ec = secp192r1
    # private keys equal to zero mod n, bypassing validation
    for prv_key in (0, ec.n):
        kp = KeyPair(prv_key, ec.G, ec, check_validity=False)
        with pytest.raises(ECDHlibRuntimeError, match="invalid \\(INF\\) shared secret"):
            shared_secret(kp, G_HEX)
        with pytest.raises(ECDHlibRuntimeError, match="invalid \\(INF\\) shared secret"):
            diffie_hellman(kp, G_HEX, 32)


def test_ansi_x9_63_kdf() -> None:
    z = b"\x01" * 20
    assert ansi_x9_63_kdf(z, 0, sha1, None) == b""
    assert len(ansi_x9_63_kdf(z, 45, sha1, None)) == 45
    assert ansi_x9_63_kdf(z, 20, sha1, None) == sha1(z + b"\x00\x00\x00\x01").digest()

    err_msg = "cannot derive a key larger than "
    with pytest.raises(ECDHlibValueError, match=err_msg):
        ansi_x9_63_kdf(z, 20 * 2 ** 32, sha1, None)

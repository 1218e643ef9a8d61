#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Any, Callable, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "04 db4ff10ec057e9ae26b07d0280b7f4341da5d1b1eae06c7d 9b2f2f6d9c5628a7844163d015be86344082aa88d95e2f9d"
#
# use ecdhlib.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for serialized points (SEC 1 uncompressed representation)
Octets = Union[bytes, str]

# hex-string or bytes representation of an int
# Integer = Union[Octets, int]
Integer = Union[bytes, str, int]

# Hash digest constructor: it may be any name suitable to hashlib.new()
HashF = Callable[..., Any]

# Source of cryptographically secure random bytes:
# called with the number of bytes required, e.g. secrets.token_bytes
EntropySource = Callable[[int], bytes]

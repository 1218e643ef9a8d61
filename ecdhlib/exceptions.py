#!/usr/bin/env python3

# Copyright (C) 2026 The ecdhlib developers
#
# This file is part of ecdhlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecdhlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are mainly meant to discriminate between Exceptions being raised
by ecdhlib from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the ecdhlib versions are derived.

Memory exhaustion is left to the built-in MemoryError.
"""


class ECDHlibValueError(ValueError):
    pass


class ECDHlibTypeError(TypeError):
    pass


class ECDHlibRuntimeError(RuntimeError):
    pass


class InvalidEncoding(ECDHlibValueError):
    "Malformed or unsupported SEC 1 point representation."


class NoModularInverse(ECDHlibValueError):
    "Division by a value not coprime to the modulus."


class CurveConstructionError(ECDHlibValueError):
    "Unparsable or inconsistent elliptic curve domain parameters."


class EntropyUnavailable(ECDHlibRuntimeError):
    "The randomness source could not supply the requested bytes."

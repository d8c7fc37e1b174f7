"""RSA Step-by-Step: textbook RSA with every intermediate arithmetic step exposed.

Provides the number theory RSA is built on (gcd, extended Euclidean algorithm, modular inverse, trial-division
primality and random small primes), modular exponentiation with an optional human-readable trace, the UTF-8
text/integer codec, and small-key assembly on top of them. Intended for learning: keys are tens of bits and nothing
here is constant-time.

Typical usage example:

    pk = RSAPrivKey(17, 19, 5)
    c = pk.pub.encrypt("\x02")
    trace = mod_pow_with_steps(c, pk.expo, pk.mod)
    print("\n".join(trace.steps))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsasteps.codec import integer_to_text
from rsasteps.codec import text_to_integer
from rsasteps.errors import InvalidPrimeInput
from rsasteps.errors import MalformedText
from rsasteps.errors import MessageTooLarge
from rsasteps.errors import NoInverse
from rsasteps.errors import RangeHasNoPrime
from rsasteps.keys import pick_public_exponent
from rsasteps.keys import RSAPrivKey
from rsasteps.keys import RSAPubKey
from rsasteps.modexp import mod_pow
from rsasteps.modexp import mod_pow_with_steps
from rsasteps.modexp import StepTrace
from rsasteps.numtheory import extended_euclidean
from rsasteps.numtheory import gcd
from rsasteps.numtheory import generate_random_prime
from rsasteps.numtheory import is_prime
from rsasteps.numtheory import mod_inverse

__version__ = "0.1.0"
__all__ = [
    "RSAPrivKey",
    "RSAPubKey",
    "StepTrace",
    "pick_public_exponent",
    "gcd",
    "extended_euclidean",
    "mod_inverse",
    "is_prime",
    "generate_random_prime",
    "mod_pow",
    "mod_pow_with_steps",
    "text_to_integer",
    "integer_to_text",
    "NoInverse",
    "RangeHasNoPrime",
    "InvalidPrimeInput",
    "MessageTooLarge",
    "MalformedText",
]

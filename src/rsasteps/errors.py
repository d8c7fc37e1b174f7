"""Failure taxonomy of the RSA step-by-step utilities.

Every failure is recoverable by the caller. Each exception subclasses the built-in exception that would describe it
without this module, so code catching ``ValueError`` or ``RuntimeError`` keeps working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class NoInverse(ValueError):
    """The value and modulus are not coprime, so no modular inverse exists.

    For RSA this means the public exponent shares a factor with phi(n) and a different one has to be chosen.
    """


class RangeHasNoPrime(RuntimeError):
    """No prime could be drawn from the requested range within the sampling budget."""


class InvalidPrimeInput(ValueError):
    """A supplied p or q is not prime, p equals q, or the primes are too small to carry a key."""


class MessageTooLarge(ValueError):
    """The message representative is not smaller than the modulus n."""


class MalformedText(ValueError):
    """Decoded bytes are not valid UTF-8, usually the sign of a mismatched key."""

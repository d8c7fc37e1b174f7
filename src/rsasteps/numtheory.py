"""Number theory underpinning textbook RSA: gcd, Bezout coefficients, inverses and small primes.

Everything here works on plain Python integers and keeps no state between calls. The primality test is a simple
trial division, which is fine for the tens-of-bits primes used when studying RSA by hand, and is the documented
scaling limit of this module.

Typical usage example:

    p = generate_random_prime(2, 50)
    g, x, y = extended_euclidean(240, 46)
    d = mod_inverse(5, 288)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets

from rsasteps.errors import NoInverse
from rsasteps.errors import RangeHasNoPrime

logger = logging.getLogger(__name__)

MAX_PRIME_ATTEMPTS: int = 10000


def _tdivmod(a: int, b: int) -> tuple[int, int]:
    """Division with the quotient truncated toward zero.

    Python's ``//`` floors, while the Euclidean recursions here are defined with a truncating quotient and a
    remainder carrying the sign of the dividend. Both agree for non-negative operands.

    Args:
        a: Dividend.
        b: Divisor, non-zero.

    Returns:
        Tuple of (quotient, remainder) with ``a == quotient * b + remainder``.
    """
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by Euclid's algorithm.

    Follows ``gcd(a, 0) = a`` and ``gcd(a, b) = gcd(b, a rem b)``, unrolled into a loop.

    Args:
        a: First integer.
        b: Second integer.

    Returns:
        The greatest common divisor. ``gcd(0, 0)`` is 0.
    """
    while b:
        a, b = b, _tdivmod(a, b)[1]
    return a


def extended_euclidean(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Finds x and y such that a*x + b*y = g = gcd(a, b). The forward iteration keeps the running coefficient pairs
    instead of unwinding a call stack, and yields exactly the coefficients of the recursive formulation
    ``x = y1, y = x1 - (a quot b) * y1``.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        Tuple of (g, x, y), the gcd followed by the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q, r = _tdivmod(r0, r1)
        r0, r1 = r1, r
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(e: int, phi: int) -> int:
    """Modular multiplicative inverse of `e` modulo `phi`.

    Args:
        e: The value to invert, usually the public exponent.
        phi: The modulus, usually the totient. Must be positive.

    Returns:
        The d in ``[0, phi)`` with ``(e * d) % phi == 1``.

    Raises:
        NoInverse: If `e` and `phi` are not coprime.
        ValueError: If `phi` is not positive.
    """
    if phi <= 0:
        raise ValueError("Modulus must be positive.")
    g, x, _ = extended_euclidean(e, phi)
    if g not in (1, -1):
        raise NoInverse(f"{e} has no inverse modulo {phi}: gcd is {abs(g)}.")
    # A negative gcd only shows up for negative inputs; flip the coefficient to match.
    return (x * g) % phi


def is_prime(num: int) -> bool:
    """Deterministic trial-division primality test.

    Skips multiples of 2 and 3, then tries the divisor pairs 6k - 1 and 6k + 1 up to the square root.

    Args:
        num: The candidate.

    Returns:
        True if `num` is prime, False otherwise. Values below 2 are never prime.
    """
    if num <= 1:
        return False
    if num <= 3:
        return True
    if num % 2 == 0 or num % 3 == 0:
        return False
    i = 5
    while i * i <= num:
        if num % i == 0 or num % (i + 2) == 0:
            return False
        i += 6
    return True


def generate_random_prime(low: int, high: int, attempts: int = MAX_PRIME_ATTEMPTS) -> int:
    """Draw a uniformly random prime from the inclusive range ``[low, high]``.

    Samples candidates with the `secrets` generator until one passes `is_prime`. The loop is bounded, so a range
    without primes ends in an error instead of spinning forever.

    Args:
        low: Lower bound, inclusive.
        high: Upper bound, inclusive.
        attempts: How many candidates to draw before giving up. Defaults to `MAX_PRIME_ATTEMPTS`.

    Returns:
        A prime p with ``low <= p <= high``.

    Raises:
        ValueError: If `low` is greater than `high` or `attempts` is not positive.
        RangeHasNoPrime: If the range cannot hold a prime or none was drawn within `attempts` samples.
    """
    if low > high:
        raise ValueError("Lower bound must not exceed the upper bound.")
    if attempts < 1:
        raise ValueError("At least one attempt is required.")
    if high < 2:
        raise RangeHasNoPrime(f"Range [{low}, {high}] lies below the smallest prime.")
    span = high - low + 1
    for attempt in range(1, attempts + 1):
        candidate = low + secrets.randbelow(span)
        if is_prime(candidate):
            logger.debug("Drew prime %d from [%d, %d] after %d attempt(s)", candidate, low, high, attempt)
            return candidate
    raise RangeHasNoPrime(f"No prime found in [{low}, {high}] after {attempts} attempts. Widen the range.")

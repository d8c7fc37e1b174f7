"""Modular exponentiation, the RSA encryption and decryption primitive, with an optional step trace.

Both variants share one right-to-left square-and-multiply loop, so the traced result can never drift from the
silent one.

Typical usage example:

    c = mod_pow(2, 5, 323)
    trace = mod_pow_with_steps(32, 173, 323)
    print("\n".join(trace.steps))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import Callable, NamedTuple


class StepTrace(NamedTuple):
    """Human-readable record of one modular exponentiation.

    Attributes:
        steps: Display lines, in execution order.
        result: The numeric result, identical to `mod_pow` for the same arguments.
    """
    steps: tuple[str, ...]
    result: int


def _check(exponent: int, modulus: int) -> None:
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    if modulus < 1:
        raise ValueError("Modulus must be positive.")


def _square_and_multiply(base: int,
                         exponent: int,
                         modulus: int,
                         on_bit: Callable[[int, int, int, int], None] | None = None) -> int:
    """Binary exponentiation over the exponent bits from least to most significant.

    Args:
        base: Base, already reduced into ``[0, modulus)``.
        exponent: Non-negative exponent.
        modulus: Modulus greater than 1.
        on_bit: Optional callback receiving (bit position, bit, accumulator after the bit, current base power)
            before the base is squared.

    Returns:
        ``base ** exponent % modulus``.
    """
    result = 1
    position = 0
    while True:
        bit = exponent & 1
        if bit:
            result = (result * base) % modulus
        exponent >>= 1
        if on_bit is not None:
            on_bit(position, bit, result, base)
        if not exponent:
            return result
        base = (base * base) % modulus
        position += 1


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes ``base ** exponent mod modulus`` by square-and-multiply.

    Args:
        base: The base. Negative values are normalised into ``[0, modulus)`` first.
        exponent: The exponent, non-negative.
        modulus: The modulus, positive.

    Returns:
        The result in ``[0, modulus)``. Always 0 for a modulus of 1.

    Raises:
        ValueError: If the exponent is negative or the modulus not positive.
    """
    _check(exponent, modulus)
    if modulus == 1:
        return 0
    return _square_and_multiply(base % modulus, exponent, modulus)


def mod_pow_with_steps(base: int, exponent: int, modulus: int) -> StepTrace:
    """Same as `mod_pow`, additionally describing each step for display.

    The trace restates the formula, shows the exponent in binary, then for each bit (counted from the right) whether
    it multiplied the accumulator in, the accumulator value and the squared base.

    Args:
        base: The base. Negative values are normalised into ``[0, modulus)`` first.
        exponent: The exponent, non-negative.
        modulus: The modulus, positive.

    Returns:
        A `StepTrace` of the display lines and the numeric result.

    Raises:
        ValueError: If the exponent is negative or the modulus not positive.
    """
    _check(exponent, modulus)
    if modulus == 1:
        return StepTrace(("Modulus is 1, result is 0.",), 0)
    binary = format(exponent, "b")
    last = len(binary) - 1
    steps = [
        "Calculating (base ^ exponent) % modulus",
        f"({base} ^ {exponent}) % {modulus}",
        f"Exponent in binary: {binary}",
        "---",
        "Initialize result = 1",
    ]
    reduced = base % modulus
    if reduced != base:
        steps.append(f"Reduce base: {base} % {modulus} = {reduced}")
    accumulator = 1

    def record(position: int, bit: int, result: int, power: int) -> None:
        nonlocal accumulator
        steps.append(f"\nBit {position} (from right) = {bit}")
        if bit:
            steps.append("Bit is 1: result = (result * base) % modulus")
            steps.append(f"result = ({accumulator} * {power}) % {modulus} = {result}")
        else:
            steps.append(f"Bit is 0: result remains {result}")
        accumulator = result
        if position < last:
            steps.append("Square base: base = (base * base) % modulus")
            steps.append(f"base = ({power} * {power}) % {modulus} = {(power * power) % modulus}")

    result = _square_and_multiply(reduced, exponent, modulus, record)
    steps.append("---")
    steps.append(f"Final exponent bit processed. Result = {result}")
    return StepTrace(tuple(steps), result)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ModularArithmetic - the small arbitrary-precision toolbox SRP needs.

All functions are pure and operate on Python ints. Only the operations the
SRP engine uses are provided:

    * to_zn            - true modulo into [0, n)
    * extended_gcd     - iterative extended Euclid
    * modular_inverse  - inverse in Z/nZ
    * mod_pow          - square-and-multiply, negative exponents allowed
"""

from cognitosrp.crypto.Errors import DomainError


def to_zn(a: int, n: int) -> int:
    """
    Return the smallest non-negative value congruent to a modulo n.

    Raises:
        DomainError: if n < 1.
    """
    if n < 1:
        raise DomainError("modulus must be > 0")

    # Python's % already folds negatives into the positive residue class
    return a % n


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """
    Solve g = gcd(a, b) = a*x + b*y.

    Args:
        a (int): first operand, >= 1.
        b (int): second operand, >= 1.

    Returns:
        tuple[int, int, int]: (g, x, y).

    Raises:
        DomainError: if a or b is < 1.
    """
    if a < 1 or b < 1:
        raise DomainError("a and b must be > 0")

    x, y = 0, 1
    u, v = 1, 0

    while a != 0:
        q, r = divmod(b, a)
        m = x - u * q
        n = y - v * q
        b, a = a, r
        x, y = u, v
        u, v = m, n

    return b, x, y


def modular_inverse(a: int, n: int) -> int:
    """
    Return the inverse of a in the multiplicative group modulo n.

    Raises:
        DomainError: if n < 1 or gcd(a, n) != 1.
    """
    a_zn = to_zn(a, n)
    if a_zn == 0:
        raise DomainError(f"{a} has no inverse modulo {n}")

    g, x, _ = extended_gcd(a_zn, n)
    if g != 1:
        raise DomainError(f"{a} has no inverse modulo {n}")

    return to_zn(x, n)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Compute base ** exponent mod modulus, normalized into [0, modulus).

    Negative exponents are served through the modular inverse of
    base ** |exponent|. The positive path walks the exponent bits from least
    to most significant; it branches on exponent bits only.

    Raises:
        DomainError: if modulus < 1, or the exponent is negative and no
            inverse exists.
    """
    if modulus < 1:
        raise DomainError("modulus must be > 0")
    if modulus == 1:
        return 0

    base = to_zn(base, modulus)

    if exponent < 0:
        return modular_inverse(mod_pow(base, -exponent, modulus), modulus)

    result = 1
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus

    return result

"""Shortest round-trip decimal formatting of binary floating-point numbers (Grisu2)."""

from __future__ import annotations

import math
import struct

from jsonwriter.diyfp import (
    ALPHA,
    GAMMA,
    DiyFp,
    compute_boundaries,
    get_cached_power_for_binary_exponent,
)

_MIN_EXP = -4
_DOUBLE_DIGITS10 = 15
_SINGLE_DIGITS10 = 6


def find_largest_pow10(n: int) -> tuple[int, int]:
    """Return ``(k, pow10)`` with ``pow10 = 10**(k-1) <= n < 10**k``.

    For ``n == 0`` the result is ``(1, 1)``. ``n`` must fit in 32 bits.
    """
    if not 0 <= n < (1 << 32):
        raise ValueError(f"value out of 32-bit range: {n}")
    for k in range(10, 1, -1):
        pow10 = 10 ** (k - 1)
        if n >= pow10:
            return k, pow10
    return 1, 1


def _round(digits: list[int], dist: int, delta: int, rest: int, ten_k: int) -> None:
    """Decrement the last digit while that brings the value closer to w."""
    while (
        rest < dist
        and delta - rest >= ten_k
        and (rest + ten_k < dist or dist - rest > rest + ten_k - dist)
    ):
        digits[-1] -= 1
        rest += ten_k


def _digit_gen(m_minus: DiyFp, w: DiyFp, m_plus: DiyFp) -> tuple[list[int], int]:
    """Generate digits of a value V in [M-, M+]; return the digits and an exponent shift."""
    if not ALPHA <= m_plus.e <= GAMMA:
        raise ValueError("exponent outside the [alpha, gamma] range")

    delta = m_plus.sub(m_minus).f
    dist = m_plus.sub(w).f

    shift = -m_plus.e
    one_f = 1 << shift

    p1 = m_plus.f >> shift
    p2 = m_plus.f & (one_f - 1)

    digits: list[int] = []
    k, pow10 = find_largest_pow10(p1)

    n = k
    while n > 0:
        d, p1 = divmod(p1, pow10)
        digits.append(d)
        n -= 1
        rest = (p1 << shift) + p2
        if rest <= delta:
            _round(digits, dist, delta, rest, pow10 << shift)
            return digits, n
        pow10 //= 10

    m = 0
    while True:
        p2 *= 10
        digits.append(p2 >> shift)
        p2 &= one_f - 1
        m += 1
        delta *= 10
        dist *= 10
        if p2 <= delta:
            break

    _round(digits, dist, delta, p2, one_f)
    return digits, -m


def grisu2(value: float, single: bool = False) -> tuple[str, int]:
    """Return ``(digits, exponent)`` such that ``value == int(digits) * 10**exponent``.

    The value must be finite and positive. The digits round-trip to the value.
    """
    if not math.isfinite(value):
        raise ValueError("value must be finite")
    if not value > 0:
        raise ValueError("value must be positive")

    bounds = compute_boundaries(value, single)
    m_minus, v, m_plus = bounds.minus, bounds.w, bounds.plus

    cached = get_cached_power_for_binary_exponent(m_plus.e)
    c_minus_k = DiyFp(cached.f, cached.e)

    w = v.mul(c_minus_k)
    w_minus = m_minus.mul(c_minus_k)
    w_plus = m_plus.mul(c_minus_k)

    lower = DiyFp(w_minus.f + 1, w_minus.e)
    upper = DiyFp(w_plus.f - 1, w_plus.e)

    digits, shift = _digit_gen(lower, w, upper)
    return "".join(map(str, digits)), -cached.k + shift


def append_exponent(e: int) -> str:
    """Format an exponent with a sign and at least two digits, like ``%g``."""
    if not -1000 < e < 1000:
        raise ValueError(f"exponent out of range: {e}")
    sign = "-" if e < 0 else "+"
    return f"{sign}{abs(e):02d}"


def format_buffer(digits: str, decimal_exponent: int, min_exp: int, max_exp: int) -> str:
    """Render ``digits * 10**decimal_exponent`` in fixed or exponential notation.

    Fixed notation is used when the value lies in ``[10**min_exp, 10**max_exp)``.
    """
    if min_exp >= 0:
        raise ValueError("min_exp must be negative")
    if max_exp <= 0:
        raise ValueError("max_exp must be positive")
    if not digits:
        raise ValueError("no digits to format")

    k = len(digits)
    n = k + decimal_exponent

    if k <= n <= max_exp:
        return digits + "0" * (n - k) + ".0"
    if 0 < n <= max_exp:
        return f"{digits[:n]}.{digits[n:]}"
    if min_exp < n <= 0:
        return "0." + "0" * (-n) + digits

    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{mantissa}e{append_exponent(n - 1)}"


def _to_single(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise ValueError(f"value out of single precision range: {value}") from exc


def to_chars(value: float, single: bool = False) -> str:
    """Return the shortest decimal text that reads back as ``value``.

    The format resembles ``%g``; integral values get a trailing ``.0``.
    NaN and infinities are rejected.
    """
    if not math.isfinite(value):
        raise ValueError("value must be finite")
    if single:
        value = _to_single(value)

    sign = ""
    if math.copysign(1.0, value) < 0:
        sign = "-"
        value = -value

    if value == 0:
        return sign + "0.0"

    digits, decimal_exponent = grisu2(value, single)
    max_exp = _SINGLE_DIGITS10 if single else _DOUBLE_DIGITS10
    return sign + format_buffer(digits, decimal_exponent, _MIN_EXP, max_exp)
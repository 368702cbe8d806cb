"""Arithmetic and logic of the CPU: results and the status flags they leave behind.

Every function takes the status register ``p`` and returns the updated one,
together with the new value where the operation produces one.
"""

import enum


class Flag(enum.IntFlag):
    """Bits of the processor status register."""

    C = 0x01
    Z = 0x02
    I = 0x04  # noqa: E741
    D = 0x08
    B = 0x10
    R = 0x20
    V = 0x40
    N = 0x80


def _with(p, flag, condition):
    return (p | flag) if condition else (p & ~flag)


def set_nz(p, value):
    """Return ``p`` with N and Z describing the byte ``value``."""
    value &= 0xFF
    p = int(p) & ~(Flag.N | Flag.Z) & 0xFF
    p |= value & Flag.N
    if value == 0:
        p |= Flag.Z
    return int(p)


def adc(a, data, p):
    """Add ``data`` and the carry to the accumulator; return ``(a, p)``."""
    a &= 0xFF
    data &= 0xFF
    p = int(p)
    carry = p & Flag.C

    if p & Flag.D:
        low = (a & 15) + (data & 15) + carry
        high = (a >> 4) + (data >> 4)
        if low > 9:
            low += 6
            high += 1
        p = _with(p, Flag.Z, (a + data + carry) == 0)
        p = _with(p, Flag.N, high & 8)
        p = _with(p, Flag.V, ~(a ^ data) & ((high << 4) ^ a) & 128)
        if high > 9:
            high += 6
        p = _with(p, Flag.C, high > 15)
        return ((high << 4) | (low & 15)) & 0xFF, int(p) & 0xFF

    total = (a + data + carry) & 0xFFFF
    result = total & 0xFF
    p = _with(p, Flag.C, total >> 8)
    p = _with(p, Flag.V, ~(a ^ data) & (a ^ result) & 128)
    return result, set_nz(p, result)


def sbc(a, data, p):
    """Subtract ``data`` and the borrow from the accumulator; return ``(a, p)``."""
    a &= 0xFF
    data &= 0xFF
    p = int(p)
    borrow = 0 if p & Flag.C else 1

    difference = (a - data - borrow) & 0xFFFF
    result = difference & 0xFF
    p = _with(p, Flag.C, not (difference >> 8))
    p = _with(p, Flag.V, (a ^ data) & (a ^ result) & 128)
    p = set_nz(p, result)

    if p & Flag.D:
        low = ((a & 15) - (data & 15) - borrow) & 0xFFFF
        high = ((a >> 4) - (data >> 4)) & 0xFFFF
        if low > 9:
            low = (low - 6) & 0xFFFF
            high = (high - 1) & 0xFFFF
        if high > 9:
            high = (high - 6) & 0xFFFF
        return ((high << 4) | (low & 15)) & 0xFF, p
    return result, p


def compare(register, data, p):
    """Return ``p`` after comparing ``register`` with ``data``."""
    register &= 0xFF
    data &= 0xFF
    p = _with(int(p), Flag.C, register >= data)
    return set_nz(p, register - data)


def bit(a, data, p):
    """Return ``p`` after testing ``data`` against the accumulator."""
    data &= 0xFF
    p = _with(int(p), Flag.Z, not (data & a))
    p &= ~(Flag.V | Flag.N)
    p |= data & (Flag.V | Flag.N)
    return int(p) & 0xFF


def asl(value, p):
    """Shift ``value`` left, bit 7 into the carry; return ``(value, p)``."""
    value &= 0xFF
    p = _with(int(p), Flag.C, value & 128)
    value = (value << 1) & 0xFF
    return value, set_nz(p, value)


def lsr(value, p):
    """Shift ``value`` right, bit 0 into the carry; return ``(value, p)``."""
    value &= 0xFF
    p = _with(int(p), Flag.C, value & 1)
    value >>= 1
    return value, set_nz(p, value)


def rol(value, p):
    """Rotate ``value`` left through the carry; return ``(value, p)``."""
    value &= 0xFF
    carry_in = int(p) & Flag.C
    p = _with(int(p), Flag.C, value & 128)
    value = ((value << 1) | carry_in) & 0xFF
    return value, set_nz(p, value)


def ror(value, p):
    """Rotate ``value`` right through the carry; return ``(value, p)``."""
    value &= 0xFF
    carry_in = int(p) & Flag.C
    p = _with(int(p), Flag.C, value & 1)
    value >>= 1
    if carry_in:
        value |= 128
    return value, set_nz(p, value)
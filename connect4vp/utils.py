"""Conversions between register bytes and integers."""

from __future__ import annotations


def to_int(buf) -> int:
    """Decode the first four bytes of ``buf`` as a big-endian signed 32-bit integer."""
    if len(buf) < 4:
        raise ValueError("buffer must hold at least 4 bytes")
    return int.from_bytes(bytes(buf[:4]), "big", signed=True)


def to_uchar(val: int) -> bytes:
    """Encode ``val`` as four big-endian bytes, keeping its low 32 bits."""
    return (val & 0xFFFFFFFF).to_bytes(4, "big")


def to_hex(c: int) -> str:
    """Format a byte as two upper-case hexadecimal digits."""
    if not 0 <= c <= 0xFF:
        raise ValueError(f"not a byte: {c}")
    return f"{c:02X}"
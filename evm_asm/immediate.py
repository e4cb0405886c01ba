"""
Conversion of push operands into fixed width, big-endian immediates.

Binary, octal and decimal literals go through a 128 bit integer, so they can never produce more than 16 bytes,
even for push17..push32. Hex literals and selectors are decoded directly and can fill all 32 bytes.
"""
from __future__ import annotations

from bitarray.util import int2ba, bits2bytes
from Crypto.Hash import keccak
from frozendict import frozendict

from evm_asm.errors import ImmediateTooLarge

MAX_NUMERIC_BITS = 128

# Digits needed to write 2**128 - 1 in each radix.
_MAX_DIGITS = frozendict({2: 128, 8: 43, 10: 39})


def keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def pad_immediate(raw: bytes, width: int) -> bytes:
    """Left pad `raw` with zero bytes to exactly `width` bytes. Never truncates."""
    if len(raw) > width:
        raise ImmediateTooLarge(width, len(raw))
    return bytes(width - len(raw)) + raw


def radix_to_bytes(digits: str, radix: int, width: int) -> bytes:
    """Minimal big-endian encoding of an unsigned literal, at least one byte long."""
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS[radix]:
        raise ImmediateTooLarge(width)
    value = int(digits, radix)
    if value.bit_length() > MAX_NUMERIC_BITS:
        raise ImmediateTooLarge(width)
    bits = int2ba(value, endian="big")
    return int2ba(value, bits2bytes(len(bits)) * 8, endian="big").tobytes()


def hex_to_bytes(digits: str) -> bytes:
    return bytes.fromhex(digits)


def selector_bytes(signature: str, width: int) -> bytes:
    return keccak256(signature.encode("utf-8"))[:width]


def numeric_immediate(digits: str, radix: int, width: int) -> bytes:
    return pad_immediate(radix_to_bytes(digits, radix, width), width)


def hex_immediate(digits: str, width: int) -> bytes:
    return pad_immediate(hex_to_bytes(digits), width)


def selector_immediate(signature: str, width: int) -> bytes:
    return pad_immediate(selector_bytes(signature, width), width)

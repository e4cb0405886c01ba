import pytest

from evm_asm.errors import ImmediateTooLarge
from evm_asm.immediate import hex_immediate, hex_to_bytes, keccak256, numeric_immediate, pad_immediate, \
    radix_to_bytes, selector_bytes, selector_immediate


def test_pad_immediate():
    assert pad_immediate(b"\x01", 3) == b"\x00\x00\x01"
    assert pad_immediate(b"\x01\x02", 2) == b"\x01\x02"
    with pytest.raises(ImmediateTooLarge) as excinfo:
        pad_immediate(b"\x01\x02", 1)
    assert (excinfo.value.width, excinfo.value.got) == (1, 2)


def test_radix_to_bytes_is_minimal():
    assert radix_to_bytes("0", 10, 1) == b"\x00"
    assert radix_to_bytes("255", 10, 1) == b"\xff"
    assert radix_to_bytes("256", 10, 1) == b"\x01\x00"
    assert radix_to_bytes("777", 8, 2) == b"\x01\xff"
    assert radix_to_bytes("000101", 2, 1) == b"\x05"


def test_radix_to_bytes_128_bit_limit():
    assert radix_to_bytes("1" * 128, 2, 32) == b"\xff" * 16
    with pytest.raises(ImmediateTooLarge) as excinfo:
        radix_to_bytes("1" * 129, 2, 32)
    assert excinfo.value.width == 32
    assert excinfo.value.got is None


def test_numeric_immediate():
    assert numeric_immediate("42", 10, 2) == b"\x00\x2a"
    with pytest.raises(ImmediateTooLarge):
        numeric_immediate("65536", 10, 2)


def test_hex_keeps_leading_zeros():
    assert hex_to_bytes("00ff") == b"\x00\xff"
    assert hex_immediate("00ff", 2) == b"\x00\xff"
    with pytest.raises(ImmediateTooLarge):
        hex_immediate("0000ff", 2)


def test_keccak256():
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


def test_selector():
    assert selector_bytes("name()", 4) == bytes.fromhex("06fdde03")
    assert selector_immediate("transfer(address,uint256)", 32).hex() == \
        "a9059cbb2ab09eb219583f4a59a5d0623ade346d962bcd4e46b11da047c9049b"
    assert selector_immediate("transfer(address,uint256)", 1) == b"\xa9"


def test_leading_zeros_are_ignored():
    assert radix_to_bytes("0" * 5000 + "1", 10, 1) == b"\x01"
    assert radix_to_bytes("0" * 5000, 8, 1) == b"\x00"
    assert radix_to_bytes("0" * 200 + "1" * 128, 2, 32) == b"\xff" * 16


def test_too_many_digits_is_too_large():
    with pytest.raises(ImmediateTooLarge) as excinfo:
        radix_to_bytes("9" * 5000, 10, 32)
    assert excinfo.value.width == 32
    assert excinfo.value.got is None
    assert radix_to_bytes(str(2 ** 128 - 1), 10, 32) == b"\xff" * 16
    with pytest.raises(ImmediateTooLarge):
        radix_to_bytes("1" + "0" * 39, 10, 32)
    with pytest.raises(ImmediateTooLarge):
        radix_to_bytes("7" * 44, 8, 32)

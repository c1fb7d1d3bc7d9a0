from __future__ import annotations

import re

from eth_hash.auto import keccak

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]*$")
_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def is_hex(value: str) -> bool:
    return isinstance(value, str) and bool(_HEX_RE.match(value))


def is_address(value: str) -> bool:
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def strip_0x(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def hex_to_bytes(value: str) -> bytes:
    body = strip_0x(value)
    if len(body) % 2:
        body = "0" + body
    return bytes.fromhex(body)


def int_to_minimal_bytes(value: int) -> bytes:
    """
    Encode a non-negative integer as big-endian bytes without leading zeros.

    Zero encodes as the empty byte string, which is how RLP represents
    the integer 0.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative integer: {value}")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def int_to_minimal_hex(value: int) -> str:
    """Minimal big-endian hex with 0x prefix; zero encodes as ``"0x"``."""
    return "0x" + int_to_minimal_bytes(value).hex()


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")


def from_quantity(value: str) -> int:
    """Decode a JSON-RPC QUANTITY string into an int."""
    return int(value, 16)


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    addr = strip_0x(address).lower()
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result

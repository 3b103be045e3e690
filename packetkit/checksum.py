"""Internet checksum (RFC 1071) helpers shared by the protocol modules."""

from __future__ import annotations

import ipaddress
from typing import Union

AddressLike = Union[ipaddress.IPv4Address, str, int, bytes]


def _ones_complement_sum(data: bytes | bytearray | memoryview, initial: int = 0) -> int:
    """Add up ``data`` as big-endian 16-bit words; an odd tail byte is zero padded."""
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    total = initial + sum(
        int.from_bytes(data[pos : pos + 2], "big") for pos in range(0, len(data), 2)
    )
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return total


def cal_checksum(buffer: bytes | bytearray | memoryview) -> int:
    """Return the one's complement checksum of ``buffer``.

    Computed over a buffer whose checksum field is already filled in,
    a correct buffer yields 0.
    """
    return ~_ones_complement_sum(buffer) & 0xFFFF


def ipv4_cal_checksum(
    buffer: bytes | bytearray | memoryview,
    src_ip: AddressLike,
    dest_ip: AddressLike,
    protocol: int,
) -> int:
    """Return the checksum of an upper-layer segment including the IPv4 pseudo header."""
    source = ipaddress.IPv4Address(src_ip).packed
    destination = ipaddress.IPv4Address(dest_ip).packed
    pseudo_header = (
        source
        + destination
        + bytes((0, int(protocol) & 0xFF))
    )
    initial = _ones_complement_sum(pseudo_header) + len(buffer)
    return ~_ones_complement_sum(buffer, initial) & 0xFFFF
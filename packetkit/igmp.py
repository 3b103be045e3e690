"""IGMP version 1 (RFC 1112) and version 2 (RFC 2236) message views."""

from __future__ import annotations

import ipaddress
from enum import IntEnum

from .checksum import AddressLike, cal_checksum

MESSAGE_LEN = 8


class IgmpType(IntEnum):
    """IGMP message types across versions."""

    QUERY = 0x11
    REPORT_V1 = 0x12
    REPORT_V2 = 0x16
    REPORT_V3 = 0x22
    LEAVE_V2 = 0x17


class IgmpV1Type(IntEnum):
    """IGMPv1 message types."""

    QUERY = 0x11
    REPORT_V1 = 0x12


class IgmpV2Type(IntEnum):
    """IGMPv2 message types."""

    QUERY = 0x11
    REPORT_V2 = 0x16
    LEAVE_V2 = 0x17


def _check_u8(value: int, what: str) -> int:
    value = int(value)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} out of range: {value}")
    return value


def _lookup(table: type[IntEnum], value: int) -> IntEnum | int:
    try:
        return table(value)
    except ValueError:
        return value


def igmp_type_from_value(value: int) -> IgmpType | int:
    """Map a type byte to an :class:`IgmpType`, or return the number if unknown."""
    return _lookup(IgmpType, _check_u8(value, "igmp type"))


def _as_message(buffer: bytes | bytearray | memoryview) -> bytearray:
    if len(buffer) != MESSAGE_LEN:
        raise ValueError(f"igmp message must be {MESSAGE_LEN} bytes")
    return buffer if isinstance(buffer, bytearray) else bytearray(buffer)


def _read_checksum(buffer: bytearray) -> int:
    return int.from_bytes(buffer[2:4], "big")


def _write_checksum(buffer: bytearray, value: int) -> None:
    value = int(value)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"checksum out of range: {value}")
    buffer[2:4] = value.to_bytes(2, "big")


def _refresh_checksum(buffer: bytearray) -> None:
    _write_checksum(buffer, 0)
    _write_checksum(buffer, cal_checksum(buffer))


def _checksum_ok(buffer: bytearray) -> bool:
    return _read_checksum(buffer) == 0 or cal_checksum(buffer) == 0


class IgmpV1Packet:
    """A view over an IGMPv1 message: version and type nibbles, checksum, group.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        self.buffer = _as_message(buffer)

    @property
    def version(self) -> int:
        """Version nibble."""
        return self.buffer[0] >> 4

    @version.setter
    def version(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= 0x0F:
            raise ValueError(f"igmp version out of range: {value}")
        self.buffer[0] = (value << 4) | (self.buffer[0] & 0x0F)

    @property
    def igmp_type(self) -> IgmpV1Type | int:
        """Type, read from the low nibble of the first byte."""
        return _lookup(IgmpV1Type, self.buffer[0] & 0x0F)

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        value = _check_u8(value, "igmp type")
        self.buffer[0] = (self.buffer[0] & 0xF0) | value

    @property
    def unused(self) -> int:
        """The unused second byte."""
        return self.buffer[1]

    @property
    def checksum(self) -> int:
        """Checksum field."""
        return _read_checksum(self.buffer)

    @checksum.setter
    def checksum(self, value: int) -> None:
        _write_checksum(self.buffer, value)

    @property
    def is_valid(self) -> bool:
        """True when the checksum is unset (0) or verifies over the message."""
        return _checksum_ok(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        """Multicast group address."""
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value: AddressLike) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    def update_checksum(self) -> None:
        """Recompute the checksum over the message and store it."""
        _refresh_checksum(self.buffer)

    def __repr__(self) -> str:
        return (
            f"IgmpV1Packet(version={self.version}, type={self.igmp_type!r}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"group_address={self.group_address})"
        )


class IgmpV2Packet:
    """A view over an IGMPv2 message: type, max response time, checksum, group.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        self.buffer = _as_message(buffer)

    @property
    def igmp_type(self) -> IgmpV2Type | int:
        """Message type."""
        return _lookup(IgmpV2Type, self.buffer[0])

    @igmp_type.setter
    def igmp_type(self, value: int) -> None:
        self.buffer[0] = _check_u8(value, "igmp type")

    @property
    def max_resp_time(self) -> int:
        """Maximum response time in tenths of a second."""
        return self.buffer[1]

    @max_resp_time.setter
    def max_resp_time(self, value: int) -> None:
        self.buffer[1] = _check_u8(value, "max response time")

    @property
    def checksum(self) -> int:
        """Checksum field."""
        return _read_checksum(self.buffer)

    @checksum.setter
    def checksum(self, value: int) -> None:
        _write_checksum(self.buffer, value)

    @property
    def is_valid(self) -> bool:
        """True when the checksum is unset (0) or verifies over the message."""
        return _checksum_ok(self.buffer)

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        """Multicast group address."""
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value: AddressLike) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    def update_checksum(self) -> None:
        """Recompute the checksum over the message and store it."""
        _refresh_checksum(self.buffer)

    def __repr__(self) -> str:
        return (
            f"IgmpV2Packet(type={self.igmp_type!r}, max_resp_time={self.max_resp_time}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"group_address={self.group_address})"
        )
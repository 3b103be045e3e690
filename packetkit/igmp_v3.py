"""IGMP version 3 (RFC 3376) query, report and group record views."""

from __future__ import annotations

import ipaddress
from enum import IntEnum

from .checksum import AddressLike, cal_checksum

QUERY_HEADER_LEN = 12
REPORT_HEADER_LEN = 8
RECORD_HEADER_LEN = 8
ADDRESS_LEN = 4


class IgmpV3Type(IntEnum):
    """IGMPv3 message types."""

    QUERY = 0x11
    REPORT_V3 = 0x22


class IgmpV3RecordType(IntEnum):
    """Group record types of an IGMPv3 report."""

    MODE_IS_INCLUDE = 1
    MODE_IS_EXCLUDE = 2
    CHANGE_TO_INCLUDE_MODE = 3
    CHANGE_TO_EXCLUDE_MODE = 4
    ALLOW_NEW_SOURCES = 5
    BLOCK_OLD_SOURCES = 6


def _lookup(table: type[IntEnum], value: int) -> IntEnum | int:
    try:
        return table(value)
    except ValueError:
        return value


def _check_u8(value: int, what: str) -> int:
    value = int(value)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} out of range: {value}")
    return value


def _as_buffer(buffer: bytes | bytearray | memoryview, minimum: int, what: str) -> bytearray:
    if len(buffer) < minimum:
        raise ValueError(f"{what} shorter than {minimum} bytes")
    return buffer if isinstance(buffer, bytearray) else bytearray(buffer)


def _read_addresses(buffer: bytearray, start: int, count: int) -> list[ipaddress.IPv4Address] | None:
    """Read ``count`` addresses from ``start``; None if none are announced or they overrun."""
    if count == 0:
        return None
    end = start + count * ADDRESS_LEN
    if end > len(buffer):
        return None
    return [
        ipaddress.IPv4Address(bytes(buffer[pos : pos + ADDRESS_LEN]))
        for pos in range(start, end, ADDRESS_LEN)
    ]


def _read_address(
    buffer: bytearray, start: int, count: int, index: int
) -> ipaddress.IPv4Address | None:
    index = int(index)
    if not 0 <= index < count:
        return None
    pos = start + index * ADDRESS_LEN
    if pos + ADDRESS_LEN > len(buffer):
        return None
    return ipaddress.IPv4Address(bytes(buffer[pos : pos + ADDRESS_LEN]))


class IgmpV3QueryPacket:
    """A view over an IGMPv3 membership query.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        self.buffer = _as_buffer(buffer, QUERY_HEADER_LEN, "igmpv3 query")

    @property
    def igmp_type(self) -> IgmpV3Type | int:
        """Message type."""
        return _lookup(IgmpV3Type, self.buffer[0])

    def set_igmp_type(self) -> None:
        """Mark the message as a query."""
        self.buffer[0] = IgmpV3Type.QUERY

    @property
    def max_resp_code(self) -> int:
        """Maximum response code."""
        return self.buffer[1]

    @max_resp_code.setter
    def max_resp_code(self, value: int) -> None:
        self.buffer[1] = _check_u8(value, "max response code")

    @property
    def checksum(self) -> int:
        """Checksum field."""
        return int.from_bytes(self.buffer[2:4], "big")

    @checksum.setter
    def checksum(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"checksum out of range: {value}")
        self.buffer[2:4] = value.to_bytes(2, "big")

    @property
    def is_valid(self) -> bool:
        """True when the checksum is unset (0) or verifies over the message."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def group_address(self) -> ipaddress.IPv4Address:
        """Queried group; 0.0.0.0 for a general query."""
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @group_address.setter
    def group_address(self, value: AddressLike) -> None:
        self.buffer[4:8] = ipaddress.IPv4Address(value).packed

    @property
    def resv(self) -> int:
        """Reserved high nibble of byte 8."""
        return self.buffer[8] >> 4

    @property
    def s(self) -> int:
        """Suppress router-side processing flag."""
        return (self.buffer[8] & 0x0F) >> 3

    @property
    def qrv(self) -> int:
        """Querier's robustness variable."""
        return self.buffer[8] & 0x07

    @qrv.setter
    def qrv(self, value: int) -> None:
        value = int(value)
        self.buffer[8] = (self.buffer[8] & ~0x07 & 0xFF) | (value & 0x07)

    @property
    def qqic(self) -> int:
        """Querier's query interval code."""
        return self.buffer[9]

    @qqic.setter
    def qqic(self, value: int) -> None:
        self.buffer[9] = _check_u8(value, "qqic")

    @property
    def source_number(self) -> int:
        """Number of source addresses announced."""
        return int.from_bytes(self.buffer[10:12], "big")

    @property
    def source_addresses(self) -> list[ipaddress.IPv4Address] | None:
        """All source addresses; None if there are none or the buffer is short."""
        return _read_addresses(self.buffer, QUERY_HEADER_LEN, self.source_number)

    def source_address(self, index: int) -> ipaddress.IPv4Address | None:
        """The source address at ``index``, or None if it is not present."""
        return _read_address(self.buffer, QUERY_HEADER_LEN, self.source_number, index)

    def update_checksum(self) -> None:
        """Recompute the checksum over the message and store it."""
        self.checksum = 0
        self.checksum = cal_checksum(self.buffer)

    def __repr__(self) -> str:
        return (
            f"IgmpV3QueryPacket(type={self.igmp_type!r}, "
            f"max_resp_code={self.max_resp_code}, checksum={self.checksum}, "
            f"is_valid={self.is_valid}, group_address={self.group_address}, "
            f"s={self.s}, qrv={self.qrv}, qqic={self.qqic}, "
            f"source_number={self.source_number}, "
            f"source_addresses={self.source_addresses})"
        )


class IgmpV3RecordPacket:
    """A view over one group record of an IGMPv3 report.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        self.buffer = _as_buffer(buffer, RECORD_HEADER_LEN, "igmpv3 group record")

    @property
    def record_type(self) -> IgmpV3RecordType | int:
        """Record type."""
        return _lookup(IgmpV3RecordType, self.buffer[0])

    @property
    def aux_data_len(self) -> int:
        """Auxiliary data length in 4-byte units."""
        return self.buffer[1]

    @property
    def source_number(self) -> int:
        """Number of source addresses."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def multicast_address(self) -> ipaddress.IPv4Address:
        """Multicast group the record applies to."""
        return ipaddress.IPv4Address(bytes(self.buffer[4:8]))

    @property
    def source_addresses(self) -> list[ipaddress.IPv4Address] | None:
        """All source addresses; None if there are none or the buffer is short."""
        return _read_addresses(self.buffer, RECORD_HEADER_LEN, self.source_number)

    def source_address(self, index: int) -> ipaddress.IPv4Address | None:
        """The source address at ``index``, or None if it is not present."""
        return _read_address(self.buffer, RECORD_HEADER_LEN, self.source_number, index)

    @property
    def auxiliary_data(self) -> bytes:
        """Auxiliary data following the sources; empty if the buffer is short."""
        start = RECORD_HEADER_LEN + self.source_number * ADDRESS_LEN
        end = start + self.aux_data_len * 4
        if end > len(self.buffer):
            return b""
        return bytes(self.buffer[start:end])

    def __repr__(self) -> str:
        return (
            f"IgmpV3RecordPacket(record_type={self.record_type!r}, "
            f"aux_data_len={self.aux_data_len}, source_number={self.source_number}, "
            f"multicast_address={self.multicast_address}, "
            f"source_addresses={self.source_addresses}, "
            f"auxiliary_data={self.auxiliary_data!r})"
        )


class IgmpV3ReportPacket:
    """A view over an IGMPv3 membership report.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        self.buffer = _as_buffer(buffer, REPORT_HEADER_LEN, "igmpv3 report")

    @property
    def igmp_type(self) -> IgmpV3Type | int:
        """Message type."""
        return _lookup(IgmpV3Type, self.buffer[0])

    @property
    def reserved1(self) -> int:
        """Reserved second byte."""
        return self.buffer[1]

    @property
    def checksum(self) -> int:
        """Checksum field."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def is_valid(self) -> bool:
        """True when the checksum is unset (0) or verifies over the message."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def reserved2(self) -> int:
        """Reserved 16-bit field."""
        return int.from_bytes(self.buffer[4:6], "big")

    @property
    def record_number(self) -> int:
        """Number of group records announced."""
        return int.from_bytes(self.buffer[6:8], "big")

    @property
    def group_records(self) -> list[IgmpV3RecordPacket] | None:
        """The group records; None if there are none or any record is truncated."""
        count = self.record_number
        if count == 0:
            return None
        records = []
        start = REPORT_HEADER_LEN
        size = len(self.buffer)
        for _ in range(count):
            if start + RECORD_HEADER_LEN > size:
                return None
            head = IgmpV3RecordPacket(bytes(self.buffer[start : start + RECORD_HEADER_LEN]))
            end = (
                start
                + RECORD_HEADER_LEN
                + head.aux_data_len * 4
                + head.source_number * ADDRESS_LEN
            )
            if end > size:
                return None
            records.append(IgmpV3RecordPacket(bytes(self.buffer[start:end])))
            start = end
        return records

    def __repr__(self) -> str:
        return (
            f"IgmpV3ReportPacket(type={self.igmp_type!r}, reserved1={self.reserved1}, "
            f"checksum={self.checksum}, is_valid={self.is_valid}, "
            f"reserved2={self.reserved2}, record_number={self.record_number}, "
            f"group_records={self.group_records})"
        )
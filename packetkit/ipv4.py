"""IPv4 packet (RFC 791) view."""

from __future__ import annotations

import ipaddress

from .checksum import AddressLike, cal_checksum
from .ip_protocol import IpProtocol, protocol_from_value

MIN_HEADER_LEN = 20


class IpV4Packet:
    """A view over an IPv4 packet.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        data = buffer if isinstance(buffer, bytearray) else bytearray(buffer)
        if len(data) < MIN_HEADER_LEN:
            raise ValueError(f"ipv4 packet shorter than {MIN_HEADER_LEN} bytes")
        if data[0] >> 4 != 4:
            raise ValueError("not an ipv4 packet")
        self.buffer = data
        if len(data) < self._header_bytes:
            raise ValueError("ipv4 header length exceeds the buffer")

    @property
    def _header_bytes(self) -> int:
        return self.header_len * 4

    @property
    def version(self) -> int:
        """IP version, 4 for IPv4."""
        return self.buffer[0] >> 4

    @property
    def header_len(self) -> int:
        """Header length in 4-byte units."""
        return self.buffer[0] & 0x0F

    @property
    def dscp(self) -> int:
        """Differentiated services code point."""
        return self.buffer[1] >> 2

    @property
    def ecn(self) -> int:
        """Explicit congestion notification bits."""
        return self.buffer[1] & 0b11

    @property
    def length(self) -> int:
        """Total length of the packet in bytes, as stated in the header."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def id(self) -> int:
        """Identification shared by the fragments of one datagram."""
        return int.from_bytes(self.buffer[4:6], "big")

    @property
    def flags(self) -> int:
        """The 3 flag bits: reserved, don't fragment, more fragments."""
        return self.buffer[6] >> 5

    @flags.setter
    def flags(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= 0b111:
            raise ValueError(f"ipv4 flags out of range: {value}")
        self.buffer[6] = (self.buffer[6] & 0b0001_1111) | (value << 5)

    @property
    def offset(self) -> int:
        """Fragment offset (13 bits)."""
        return int.from_bytes(self.buffer[6:8], "big") & 0x1FFF

    @property
    def ttl(self) -> int:
        """Time to live."""
        return self.buffer[8]

    @property
    def protocol(self) -> IpProtocol | int:
        """Upper-layer protocol."""
        return protocol_from_value(self.buffer[9])

    @protocol.setter
    def protocol(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"protocol number out of range: {value}")
        self.buffer[9] = value

    @property
    def checksum(self) -> int:
        """Header checksum field."""
        return int.from_bytes(self.buffer[10:12], "big")

    @property
    def is_valid(self) -> bool:
        """True when the checksum is unset (0) or verifies over the header."""
        return self.checksum == 0 or cal_checksum(self.header) == 0

    @property
    def source_ip(self) -> ipaddress.IPv4Address:
        """Source address."""
        return ipaddress.IPv4Address(bytes(self.buffer[12:16]))

    @source_ip.setter
    def source_ip(self, value: AddressLike) -> None:
        self.buffer[12:16] = ipaddress.IPv4Address(value).packed

    @property
    def destination_ip(self) -> ipaddress.IPv4Address:
        """Destination address."""
        return ipaddress.IPv4Address(bytes(self.buffer[16:20]))

    @destination_ip.setter
    def destination_ip(self, value: AddressLike) -> None:
        self.buffer[16:20] = ipaddress.IPv4Address(value).packed

    @property
    def options(self) -> bytes:
        """Header options and padding."""
        return bytes(self.buffer[MIN_HEADER_LEN : self._header_bytes])

    @property
    def header(self) -> bytes:
        """The whole header, options included."""
        return bytes(self.buffer[: self._header_bytes])

    @property
    def payload(self) -> bytes:
        """Bytes after the header."""
        return bytes(self.buffer[self._header_bytes :])

    def header_view(self) -> memoryview:
        """Writable view of the header within the underlying buffer."""
        return memoryview(self.buffer)[: self._header_bytes]

    def payload_view(self) -> memoryview:
        """Writable view of the payload within the underlying buffer."""
        return memoryview(self.buffer)[self._header_bytes :]

    def update_checksum(self) -> None:
        """Recompute the header checksum and store it."""
        self.buffer[10:12] = b"\x00\x00"
        self.buffer[10:12] = cal_checksum(self.header).to_bytes(2, "big")

    def __repr__(self) -> str:
        protocol = self.protocol
        shown = protocol.name if isinstance(protocol, IpProtocol) else f"Unknown({protocol})"
        return (
            f"IpV4Packet(version={self.version}, header_len={self.header_len}, "
            f"dscp={self.dscp}, ecn={self.ecn}, length={self.length}, id={self.id}, "
            f"flags={self.flags}, offset={self.offset}, ttl={self.ttl}, "
            f"protocol={shown}, checksum={self.checksum}, is_valid={self.is_valid}, "
            f"source={self.source_ip}, destination={self.destination_ip}, "
            f"options={self.options!r}, payload={self.payload!r})"
        )


def parse_ip_packet(buffer: bytes | bytearray | memoryview) -> IpV4Packet:
    """Parse an IP packet by its version nibble; only IPv4 is supported."""
    if len(buffer) == 0:
        raise ValueError("empty ip packet")
    version = buffer[0] >> 4
    if version == 4:
        return IpV4Packet(buffer)
    raise ValueError(f"unsupported ip version: {version}")
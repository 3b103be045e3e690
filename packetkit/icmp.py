"""ICMP message (RFC 792) view and its type and code tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .checksum import cal_checksum
from .ipv4 import IpV4Packet

HEADER_LEN = 8
TIMESTAMP_LEN = 12


class IcmpKind(IntEnum):
    """ICMP message types."""

    ECHO_REPLY = 0
    DESTINATION_UNREACHABLE = 3
    SOURCE_QUENCH = 4
    REDIRECT = 5
    ECHO_REQUEST = 8
    ROUTER_ADVERTISEMENT = 9
    ROUTER_SOLICITATION = 10
    TIME_EXCEEDED = 11
    PARAMETER_PROBLEM = 12
    TIMESTAMP_REQUEST = 13
    TIMESTAMP_REPLY = 14
    INFORMATION_REQUEST = 15
    INFORMATION_REPLY = 16
    ADDRESS_MASK_REQUEST = 17
    ADDRESS_MASK_REPLY = 18
    TRACE_ROUTE = 30


class DestinationUnreachable(IntEnum):
    """Codes of Destination Unreachable messages."""

    DESTINATION_NETWORK_UNREACHABLE = 0
    DESTINATION_HOST_UNREACHABLE = 1
    DESTINATION_PROTOCOL_UNREACHABLE = 2
    DESTINATION_PORT_UNREACHABLE = 3
    FRAGMENTATION_REQUIRED = 4
    SOURCE_ROUTE_FAILED = 5
    DESTINATION_NETWORK_UNKNOWN = 6
    DESTINATION_HOST_UNKNOWN = 7
    SOURCE_HOST_ISOLATED = 8
    NETWORK_ADMINISTRATIVELY_PROHIBITED = 9
    HOST_ADMINISTRATIVELY_PROHIBITED = 10
    NETWORK_UNREACHABLE_FOR_TOS = 11
    HOST_UNREACHABLE_FOR_TOS = 12
    COMMUNICATION_ADMINISTRATIVELY_PROHIBITED = 13
    HOST_PRECEDENCE_VIOLATION = 14
    PRECEDENT_CUTOFF_IN_EFFECT = 15


class Redirect(IntEnum):
    """Codes of Redirect messages."""

    REDIRECT_DATAGRAM_FOR_NETWORK = 0
    REDIRECT_DATAGRAM_FOR_HOST = 1
    REDIRECT_DATAGRAM_FOR_TOS_AND_NETWORK = 2
    REDIRECT_DATAGRAM_FOR_TOS_AND_HOST = 3


class TimeExceeded(IntEnum):
    """Codes of Time Exceeded messages."""

    TRANSIT = 0
    REASSEMBLY = 1


class ParameterProblem(IntEnum):
    """Codes of Parameter Problem messages."""

    POINTER_INDICATES_ERROR = 0
    MISSING_REQUIRED_DATA = 1
    BAD_LENGTH = 2


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


def kind_from_value(value: int) -> IcmpKind | int:
    """Map a type byte to an :class:`IcmpKind`, or return the number if unknown."""
    return _lookup(IcmpKind, _check_u8(value, "icmp type"))


_CODE_TABLES: dict[int, type[IntEnum]] = {
    IcmpKind.DESTINATION_UNREACHABLE: DestinationUnreachable,
    IcmpKind.REDIRECT: Redirect,
    IcmpKind.PARAMETER_PROBLEM: ParameterProblem,
}


def code_from(kind: int, code: int) -> IntEnum | int:
    """Interpret a code byte in the context of its message type.

    Codes are named for Destination Unreachable, Redirect and Parameter
    Problem messages; any other type, or an unnamed code, gives the number.
    """
    code = _check_u8(code, "icmp code")
    table = _CODE_TABLES.get(int(kind))
    return code if table is None else _lookup(table, code)


class HeaderOtherForm(Enum):
    """How the second 32-bit word of an ICMP header is laid out."""

    UNUSED = "unused"
    POINTER = "pointer"
    ADDRESS = "address"
    IDENTIFIER = "identifier"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class HeaderOther:
    """The second header word, split according to the message type.

    ``values`` holds four bytes for UNUSED, ADDRESS and UNKNOWN, one byte
    for POINTER, and (identifier, sequence) for IDENTIFIER.
    """

    form: HeaderOtherForm
    values: tuple[int, ...]


@dataclass(frozen=True)
class Timestamp:
    """Originate, receive and transmit timestamps of a timestamp message."""

    originate: int
    receive: int
    transmit: int


_IDENTIFIER_KINDS = frozenset(
    {
        IcmpKind.ECHO_REPLY,
        IcmpKind.ECHO_REQUEST,
        IcmpKind.TIMESTAMP_REQUEST,
        IcmpKind.TIMESTAMP_REPLY,
        IcmpKind.INFORMATION_REQUEST,
        IcmpKind.INFORMATION_REPLY,
    }
)
_UNUSED_KINDS = frozenset(
    {IcmpKind.DESTINATION_UNREACHABLE, IcmpKind.TIME_EXCEEDED, IcmpKind.SOURCE_QUENCH}
)
_ERROR_KINDS = frozenset(
    {
        IcmpKind.DESTINATION_UNREACHABLE,
        IcmpKind.TIME_EXCEEDED,
        IcmpKind.PARAMETER_PROBLEM,
        IcmpKind.SOURCE_QUENCH,
        IcmpKind.REDIRECT,
    }
)
_TIMESTAMP_KINDS = frozenset({IcmpKind.TIMESTAMP_REQUEST, IcmpKind.TIMESTAMP_REPLY})


class IcmpPacket:
    """A view over an ICMP message.

    A ``bytearray`` buffer is used in place, so changes are visible to the
    caller; any other bytes-like buffer is copied.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        if len(buffer) < HEADER_LEN:
            raise ValueError(f"icmp message shorter than {HEADER_LEN} bytes")
        self.buffer = buffer if isinstance(buffer, bytearray) else bytearray(buffer)

    @property
    def kind(self) -> IcmpKind | int:
        """Message type."""
        return kind_from_value(self.buffer[0])

    @kind.setter
    def kind(self, value: int) -> None:
        self.buffer[0] = _check_u8(value, "icmp type")

    @property
    def code(self) -> IntEnum | int:
        """Message code, interpreted for the message type."""
        return code_from(self.buffer[0], self.buffer[1])

    @property
    def checksum(self) -> int:
        """Checksum field."""
        return int.from_bytes(self.buffer[2:4], "big")

    @property
    def is_valid(self) -> bool:
        """True when the checksum is unset (0) or verifies over the message."""
        return self.checksum == 0 or cal_checksum(self.buffer) == 0

    @property
    def header_other(self) -> HeaderOther:
        """The type-dependent second header word."""
        kind = self.kind
        word = bytes(self.buffer[4:8])
        if kind in _IDENTIFIER_KINDS:
            identifier = int.from_bytes(word[0:2], "big")
            sequence = int.from_bytes(word[2:4], "big")
            return HeaderOther(HeaderOtherForm.IDENTIFIER, (identifier, sequence))
        if kind in _UNUSED_KINDS:
            return HeaderOther(HeaderOtherForm.UNUSED, tuple(word))
        if kind == IcmpKind.REDIRECT:
            return HeaderOther(HeaderOtherForm.ADDRESS, tuple(word))
        if kind == IcmpKind.PARAMETER_PROBLEM:
            return HeaderOther(HeaderOtherForm.POINTER, (word[0],))
        return HeaderOther(HeaderOtherForm.UNKNOWN, tuple(word))

    @property
    def payload(self) -> bytes:
        """Bytes after the 8-byte header."""
        return bytes(self.buffer[HEADER_LEN:])

    @property
    def description(self) -> IpV4Packet | Timestamp | bytes:
        """The message body, interpreted for the message type.

        Error messages carry the offending IPv4 header (raw bytes if it does
        not parse); timestamp messages carry three timestamps; anything else
        is returned as raw bytes.
        """
        kind = self.kind
        payload = self.payload
        if kind in _ERROR_KINDS:
            try:
                return IpV4Packet(payload)
            except ValueError:
                return payload
        if kind in _TIMESTAMP_KINDS:
            if len(payload) < TIMESTAMP_LEN:
                raise ValueError(
                    f"timestamp message body shorter than {TIMESTAMP_LEN} bytes"
                )
            return Timestamp(
                *(int.from_bytes(payload[pos : pos + 4], "big") for pos in (0, 4, 8))
            )
        return payload

    def update_checksum(self) -> None:
        """Recompute the checksum over the whole message and store it."""
        self.buffer[2:4] = b"\x00\x00"
        self.buffer[2:4] = cal_checksum(self.buffer).to_bytes(2, "big")

    def __repr__(self) -> str:
        kind = self.kind
        code = self.code
        kind_shown = kind.name if isinstance(kind, IcmpKind) else f"Unknown({kind})"
        code_shown = code.name if isinstance(code, IntEnum) else f"Other({code})"
        marker = "" if self.is_valid else "!"
        return (
            f"IcmpPacket{marker}(kind={kind_shown}, code={code_shown}, "
            f"checksum={self.checksum}, payload={self.payload!r})"
        )
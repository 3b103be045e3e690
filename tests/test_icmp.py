import pytest

from packetkit.checksum import cal_checksum
from packetkit.icmp import (
    DestinationUnreachable,
    HeaderOther,
    HeaderOtherForm,
    IcmpKind,
    IcmpPacket,
    ParameterProblem,
    Redirect,
    TimeExceeded,
    Timestamp,
    code_from,
    kind_from_value,
)
from packetkit.ipv4 import IpV4Packet


def _echo(kind=8, identifier=1, sequence=1, data=b""):
    return bytearray(
        bytes((kind, 0, 0, 0))
        + identifier.to_bytes(2, "big")
        + sequence.to_bytes(2, "big")
        + data
    )


def _ipv4_header():
    header = bytearray(20)
    header[0] = 0x45
    header[2:4] = (28).to_bytes(2, "big")
    header[8] = 64
    header[9] = 17
    header[12:16] = bytes((10, 0, 0, 1))
    header[16:20] = bytes((10, 0, 0, 2))
    return header


def test_kind_from_value_known_and_unknown():
    assert kind_from_value(8) is IcmpKind.ECHO_REQUEST
    assert kind_from_value(0) is IcmpKind.ECHO_REPLY
    assert kind_from_value(30) is IcmpKind.TRACE_ROUTE
    assert kind_from_value(99) == 99
    assert not isinstance(kind_from_value(99), IcmpKind)


@pytest.mark.parametrize("kind", list(IcmpKind))
def test_kind_round_trip(kind):
    assert kind_from_value(int(kind)) is kind


def test_kind_from_value_out_of_range():
    with pytest.raises(ValueError):
        kind_from_value(256)


def test_code_from_per_kind():
    assert (
        code_from(IcmpKind.DESTINATION_UNREACHABLE, 3)
        is DestinationUnreachable.DESTINATION_PORT_UNREACHABLE
    )
    assert code_from(IcmpKind.REDIRECT, 1) is Redirect.REDIRECT_DATAGRAM_FOR_HOST
    assert code_from(IcmpKind.PARAMETER_PROBLEM, 2) is ParameterProblem.BAD_LENGTH
    assert code_from(IcmpKind.ECHO_REQUEST, 0) == 0
    assert not isinstance(code_from(IcmpKind.ECHO_REQUEST, 0), DestinationUnreachable)


def test_code_from_unknown_code_gives_number():
    assert code_from(IcmpKind.DESTINATION_UNREACHABLE, 16) == 16
    assert code_from(IcmpKind.REDIRECT, 4) == 4


def test_time_exceeded_codes_are_not_mapped_by_code_from():
    result = code_from(IcmpKind.TIME_EXCEEDED, 1)
    assert result == 1
    assert not isinstance(result, TimeExceeded)
    assert TimeExceeded(1) is TimeExceeded.REASSEMBLY


def test_short_buffer_rejected():
    with pytest.raises(ValueError):
        IcmpPacket(bytes(7))


def test_update_checksum_makes_packet_valid():
    packet = IcmpPacket(_echo(data=b"ping data"))
    packet.update_checksum()
    assert packet.checksum != 0
    assert packet.is_valid is True
    assert cal_checksum(packet.buffer) == 0


def test_echo_request_checksum_value():
    packet = IcmpPacket(_echo())
    packet.update_checksum()
    assert packet.checksum == 0xF7FD


def test_corrupted_checksum_is_invalid():
    packet = IcmpPacket(_echo(data=b"abcd"))
    packet.update_checksum()
    packet.buffer[9] ^= 0xFF
    assert packet.is_valid is False


def test_zero_checksum_counts_as_valid():
    packet = IcmpPacket(_echo(data=b"xyz"))
    assert packet.checksum == 0
    assert packet.is_valid is True


def test_bytearray_buffer_is_shared():
    raw = _echo()
    packet = IcmpPacket(raw)
    packet.kind = IcmpKind.ECHO_REPLY
    assert raw[0] == 0
    assert packet.kind is IcmpKind.ECHO_REPLY


def test_kind_setter_range():
    packet = IcmpPacket(_echo())
    with pytest.raises(ValueError):
        packet.kind = 300
    assert packet.kind is IcmpKind.ECHO_REQUEST


def test_header_other_identifier():
    packet = IcmpPacket(_echo(identifier=0x1234, sequence=7))
    assert packet.header_other == HeaderOther(HeaderOtherForm.IDENTIFIER, (0x1234, 7))


def test_header_other_forms():
    raw = bytearray(bytes((5, 0, 0, 0, 192, 168, 1, 1)))
    assert IcmpPacket(raw).header_other == HeaderOther(
        HeaderOtherForm.ADDRESS, (192, 168, 1, 1)
    )
    raw[0] = 12
    assert IcmpPacket(raw).header_other == HeaderOther(HeaderOtherForm.POINTER, (192,))
    raw[0] = 11
    assert IcmpPacket(raw).header_other.form is HeaderOtherForm.UNUSED
    raw[0] = 9
    assert IcmpPacket(raw).header_other == HeaderOther(
        HeaderOtherForm.UNKNOWN, (192, 168, 1, 1)
    )


def test_payload_and_code():
    packet = IcmpPacket(bytes((3, 1, 0, 0, 0, 0, 0, 0)) + b"tail")
    assert packet.payload == b"tail"
    assert packet.code is DestinationUnreachable.DESTINATION_HOST_UNREACHABLE


def test_description_embedded_ipv4():
    body = _ipv4_header() + bytes(8)
    packet = IcmpPacket(bytes((3, 3, 0, 0, 0, 0, 0, 0)) + body)
    description = packet.description
    assert isinstance(description, IpV4Packet)
    assert str(description.source_ip) == "10.0.0.1"
    assert str(description.destination_ip) == "10.0.0.2"


def test_description_error_kind_with_bad_ip_is_raw():
    packet = IcmpPacket(bytes((11, 0, 0, 0, 0, 0, 0, 0)) + b"short")
    assert packet.description == b"short"


def test_description_timestamp():
    body = (
        (100).to_bytes(4, "big")
        + (200).to_bytes(4, "big")
        + (300).to_bytes(4, "big")
    )
    packet = IcmpPacket(_echo(kind=13, data=body))
    assert packet.description == Timestamp(100, 200, 300)


def test_description_timestamp_too_short():
    packet = IcmpPacket(_echo(kind=14, data=bytes(4)))
    with pytest.raises(ValueError):
        packet.description
    assert packet.payload == bytes(4)


def test_description_other_is_payload():
    packet = IcmpPacket(_echo(data=b"hello"))
    assert packet.description == b"hello"


def test_repr_marks_invalid():
    packet = IcmpPacket(_echo(data=b"ab"))
    packet.update_checksum()
    assert repr(packet).startswith("IcmpPacket(")
    packet.buffer[8] ^= 0x01
    assert repr(packet).startswith("IcmpPacket!(")
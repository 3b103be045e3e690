import ipaddress

import pytest

from packetkit.checksum import cal_checksum, ipv4_cal_checksum

IPV4_HEADER = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")


def test_all_ones_word_sums_to_zero():
    assert cal_checksum(bytes([255, 255])) == 0


def test_known_ipv4_header_checksum():
    assert cal_checksum(IPV4_HEADER) == 0xB861


def test_filled_in_checksum_verifies_to_zero():
    header = bytearray(IPV4_HEADER)
    header[10:12] = cal_checksum(header).to_bytes(2, "big")
    assert cal_checksum(header) == 0


def test_empty_buffer():
    assert cal_checksum(b"") == 0xFFFF


def test_odd_length_is_zero_padded():
    assert cal_checksum(b"\x12\x34\x56") == cal_checksum(b"\x12\x34\x56\x00")


def test_accepts_bytearray_and_memoryview():
    expected = cal_checksum(IPV4_HEADER)
    assert cal_checksum(bytearray(IPV4_HEADER)) == expected
    assert cal_checksum(memoryview(IPV4_HEADER)) == expected


def _udp_segment(payload: bytes) -> bytearray:
    length = 8 + len(payload)
    return bytearray(
        (1234).to_bytes(2, "big")
        + (5678).to_bytes(2, "big")
        + length.to_bytes(2, "big")
        + b"\x00\x00"
        + payload
    )


@pytest.mark.parametrize("payload", [b"", b"hello", b"even"])
def test_pseudo_header_checksum_verifies_to_zero(payload):
    src = ipaddress.IPv4Address("10.0.0.1")
    dst = ipaddress.IPv4Address("10.0.0.2")
    segment = _udp_segment(payload)
    segment[6:8] = ipv4_cal_checksum(segment, src, dst, 17).to_bytes(2, "big")
    assert ipv4_cal_checksum(segment, src, dst, 17) == 0


def test_pseudo_header_accepts_strings():
    segment = _udp_segment(b"data")
    by_object = ipv4_cal_checksum(
        segment, ipaddress.IPv4Address("192.168.1.1"), ipaddress.IPv4Address("192.168.1.2"), 17
    )
    assert ipv4_cal_checksum(segment, "192.168.1.1", "192.168.1.2", 17) == by_object


def test_pseudo_header_depends_on_protocol_and_addresses():
    segment = _udp_segment(b"data")
    base = ipv4_cal_checksum(segment, "10.0.0.1", "10.0.0.2", 17)
    assert ipv4_cal_checksum(segment, "10.0.0.1", "10.0.0.2", 6) != base
    assert ipv4_cal_checksum(segment, "10.0.0.3", "10.0.0.2", 17) != base


def test_pseudo_header_rejects_bad_address():
    with pytest.raises(ValueError):
        ipv4_cal_checksum(b"\x00" * 8, "not-an-ip", "10.0.0.2", 17)
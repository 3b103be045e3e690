import pytest

from packetkit.ip_protocol import IpProtocol, protocol_from_value


@pytest.mark.parametrize(
    "value, expected",
    [(1, IpProtocol.ICMP), (2, IpProtocol.IGMP), (6, IpProtocol.TCP), (17, IpProtocol.UDP)],
)
def test_common_protocols(value, expected):
    assert protocol_from_value(value) is expected


def test_test_numbers():
    assert protocol_from_value(253) is IpProtocol.TEST1
    assert protocol_from_value(254) is IpProtocol.TEST2


@pytest.mark.parametrize("value", [143, 200, 252, 255])
def test_unassigned_numbers_stay_plain(value):
    result = protocol_from_value(value)
    assert not isinstance(result, IpProtocol)
    assert result == value


def test_every_byte_round_trips():
    assert [int(protocol_from_value(v)) for v in range(256)] == list(range(256))


def test_members_round_trip():
    for member in IpProtocol:
        assert protocol_from_value(int(member)) is member


@pytest.mark.parametrize("value", [-1, 256, 1000])
def test_out_of_range_rejected(value):
    with pytest.raises(ValueError):
        protocol_from_value(value)
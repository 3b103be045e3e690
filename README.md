# packetkit

Views over raw network packet bytes. Each packet class wraps a bytes-like
buffer, checks its length when it is constructed and exposes the header
fields as properties. A `bytearray` buffer is used in place, so setters and
`update_checksum()` change the caller's bytes. Any other buffer is copied
first.

A buffer that is too short, or not of the expected kind, raises
`ValueError`. A field value that is out of range for its bits also raises
`ValueError`.

## What is included

- `packetkit.checksum`: `cal_checksum(buffer)` computes the RFC 1071 Internet
  checksum. `ipv4_cal_checksum(buffer, src_ip, dest_ip, protocol)` computes
  the same checksum with the IPv4 pseudo header included.
- `packetkit.ip_protocol`: the `IpProtocol` enum of assigned protocol numbers.
  `protocol_from_value(value)` returns the matching member, or the plain
  number if that number is unassigned.
- `packetkit.ipv4`: `IpV4Packet` and `parse_ip_packet(buffer)`.
  `parse_ip_packet` reads the version nibble and accepts IPv4 only. The
  properties are `version`, `header_len`, `dscp`, `ecn`, `length`, `id`,
  `flags`, `offset`, `ttl`, `protocol`, `checksum`, `is_valid`, `source_ip`,
  `destination_ip`, `options`, `header` and `payload`. You can set `flags`,
  `protocol`, `source_ip` and `destination_ip`. `update_checksum()` rewrites
  the header checksum.
- `packetkit.icmp`: `IcmpPacket`, the `IcmpKind` enum of message types, and
  the code enums `DestinationUnreachable`, `Redirect`, `TimeExceeded` and
  `ParameterProblem`. `kind_from_value(value)` and `code_from(kind, code)`
  convert raw bytes. `IcmpPacket.header_other` returns a `HeaderOther` for the
  second header word. `IcmpPacket.description` returns one of three things:
  an `IpV4Packet` for error messages, a `Timestamp` for timestamp messages,
  or the raw payload bytes.
- `packetkit.igmp`: `IgmpV1Packet` and `IgmpV2Packet`, the type enums
  `IgmpType`, `IgmpV1Type` and `IgmpV2Type`, and
  `igmp_type_from_value(value)`.
- `packetkit.igmp_v3`: `IgmpV3QueryPacket`, `IgmpV3ReportPacket` and
  `IgmpV3RecordPacket`, with the `IgmpV3Type` and `IgmpV3RecordType` enums.
  `IgmpV3ReportPacket.group_records` splits a report into its group records.
  It returns `None` when the report has no records or when any record is
  truncated.
- `packetkit.finger`: `Finger(token)` computes 12-byte fingerprints with
  `calculate_finger(nonce, secret_body)`. A fingerprint is the last 12 bytes
  of SHA-256 over the nonce, the body and the SHA-256 of the token.

## What it does not do

packetkit has no views for Ethernet frames, ARP, TCP or UDP. For a TCP or UDP
segment you can still compute the checksum with
`packetkit.checksum.ipv4_cal_checksum`, giving protocol number 6 or 17. The
package does not capture or send packets, and it does not encrypt payloads.

## Installation

```
pip install packetkit
```

## Example

```python
from packetkit.icmp import IcmpKind, IcmpPacket
from packetkit.ip_protocol import IpProtocol
from packetkit.ipv4 import parse_ip_packet

header = bytearray(
    b"\x45\x00\x00\x14\x00\x00\x00\x00\x40\x01\x00\x00"
    b"\x0a\x00\x00\x01\x0a\x00\x00\x02"
)
ip = parse_ip_packet(header)
ip.update_checksum()
assert ip.is_valid
assert ip.protocol is IpProtocol.ICMP
print(ip.source_ip, ip.destination_ip, ip.ttl)

echo = IcmpPacket(bytearray(b"\x08\x00\x00\x00\x00\x01\x00\x01ping"))
echo.update_checksum()
assert echo.is_valid
assert echo.kind is IcmpKind.ECHO_REQUEST
print(echo.header_other.values)  # (1, 1): identifier and sequence number
```

## Running the tests

```
pip install packetkit[test]
pytest
```
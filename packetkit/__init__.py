"""Views over raw IPv4, ICMP and IGMP packet bytes, with Internet checksums and fingerprints."""

__version__ = "0.1.0"
"""IPv4 upper-layer protocol numbers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TypeVar

_E = TypeVar("_E", bound=Enum)

# Protocol names in order of their numbers, starting at 0.
_SEQUENTIAL_NAMES = """
    HOPOPT ICMP IGMP GGP IPV4 ST TCP CBT EGP IGP
    BBN_RCC_MON NVP_II PUP ARGUS EMCON XNET CHAOS UDP MUX DCN_MEAS
    HMP PRM XNS_IDP TRUNK1 TRUNK2 LEAF1 LEAF2 RDP IRTP ISO_TP4
    NETBLT MFE_NSP MERIT_INP DCCP THREE_PC IDPR XTP DDP IDPR_CMTP TP_PLUS_PLUS
    IL IPV6 SDRP IPV6_ROUTE IPV6_FRAG IDRP RSVP GRE DSR BNA
    ESP AH I_NLSP SWIPE NARP MOBILE TLSP SKIP IPV6_ICMP IPV6_NO_NXT
    IPV6_OPTS HOST_INTERNAL CFTP LOCAL_NETWORK SAT_EXPAK KRYPTOLAN RVD IPPC DISTRIBUTED_FS SAT_MON
    VISA IPCV CPNX CPHB WSN PVP BR_SAT_MON SUN_ND WB_MON WB_EXPAK
    ISO_IP VMTP SECURE_VMTP VINES TTP_OR_IPTM NSFNET_IGP DGP TCF EIGRP OSPFIGP
    SPRITE_RPC LARP MTP AX25 IPIP MICP SCC_SP ETHERIP ENCAP PRIV_ENCRYPTION
    GMTP IFMP PNNI PIM ARIS SCPS QNX A_N IP_COMP SNP
    COMPAQ_PEER IPX_IN_IP VRRP PGM ZERO_HOP L2TP DDX IATP STP SRP
    UTI SMP SM PTP ISIS_OVER_IPV4 FIRE CRTP CRUDP SSCOPMCE IPLT
    SPS PIPE SCTP FC RSVP_E2E_IGNORE MOBILITY_HEADER UDP_LITE MPLS_IN_IP MANET HIP
    SHIM6 WESP ROHC
""".split()

IpProtocol = IntEnum(  # type: ignore[misc]
    "IpProtocol",
    [(name, number) for number, name in enumerate(_SEQUENTIAL_NAMES)]
    + [("TEST1", 253), ("TEST2", 254)],
    module=__name__,
    qualname="IpProtocol",
)
IpProtocol.__doc__ = "Assigned IPv4 protocol numbers."


def _enum_or_number(enum_cls: type[_E], value: int, bits: int) -> _E | int:
    """Map ``value`` to a member of ``enum_cls``, or return it if unassigned."""
    value = int(value)
    if not 0 <= value < 1 << bits:
        raise ValueError(f"{enum_cls.__name__} value out of range: {value}")
    try:
        return enum_cls(value)
    except ValueError:
        return value


def protocol_from_value(value: int) -> IpProtocol | int:
    """Map a protocol byte to an :class:`IpProtocol`, or return the number if unassigned."""
    return _enum_or_number(IpProtocol, value, 8)
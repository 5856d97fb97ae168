"""On-chain address validation and classification.

decode_address() fully validates a Base58Check or SegWit address and reports
its network and script type. detect_address_type() and is_valid_address()
are non-raising shortcuts over it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import codec
from networks import BASE58_VERSIONS, SEGWIT_HRPS, Network, network_matches

__all__ = ["AddressInfo", "decode_address", "detect_address_type", "is_valid_address"]

_BASE58_CHARS = frozenset("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")


@dataclass(frozen=True)
class AddressInfo:
    address: str
    network: Network
    address_type: str  # p2pkh | p2sh | p2wpkh | p2wsh | p2tr | witness_unknown
    witness_version: Optional[int] = None
    program: bytes = b""

    @property
    def is_base58(self) -> bool:
        return self.witness_version is None


def _segwit_type(witver: int, program: bytes) -> str:
    if witver == 0:
        return "p2wpkh" if len(program) == 20 else "p2wsh"
    if witver == 1 and len(program) == 32:
        return "p2tr"
    return "witness_unknown"


def _decode_segwit(addr: str) -> AddressInfo:
    pos = addr.rfind("1")
    hrp = addr[:pos].lower()
    if hrp not in SEGWIT_HRPS:
        raise ValueError(f"HRP SegWit desconegut: {hrp!r}")
    witver, program = codec.decode_segwit_address(hrp, addr)
    return AddressInfo(
        address=addr,
        network=SEGWIT_HRPS[hrp],
        address_type=_segwit_type(witver, program),
        witness_version=witver,
        program=program,
    )


def _decode_base58(addr: str) -> AddressInfo:
    if not set(addr) <= _BASE58_CHARS:
        raise ValueError("Caràcter fora de l'alfabet Base58")
    # 21-byte payload + 4-byte checksum never exceeds 35 characters
    if not (25 <= len(addr) <= 35):
        raise ValueError("Longitud d'adreça Base58 fora de rang")
    payload = codec.b58decode_check(addr)
    if len(payload) != 21:
        raise ValueError(f"Payload Base58 de {len(payload)} bytes (21 esperats)")
    version = payload[0]
    if version not in BASE58_VERSIONS:
        raise ValueError(f"Version byte desconegut: 0x{version:02x}")
    network, kind = BASE58_VERSIONS[version]
    return AddressInfo(address=addr, network=network, address_type=kind, program=payload[1:])


def decode_address(addr: str) -> AddressInfo:
    """Validate ``addr`` and return its details; raise ValueError if invalid."""
    if not addr:
        raise ValueError("Adreça buida")
    if "1" in addr and addr[:addr.rfind("1")].lower() in SEGWIT_HRPS:
        return _decode_segwit(addr)
    return _decode_base58(addr)


def detect_address_type(addr: str) -> Optional[str]:
    try:
        return decode_address(addr).address_type
    except ValueError:
        return None


def is_valid_address(addr: str, network: Optional[Network] = None) -> bool:
    try:
        info = decode_address(addr)
    except ValueError:
        return False
    return network_matches(info.network, network, base58=info.is_base58)

"""Lightning node public key validation (33-byte compressed secp256k1 points)."""
from __future__ import annotations

__all__ = ["decode_node_pubkey", "is_node_pubkey", "is_on_curve"]

# secp256k1: y^2 = x^3 + 7 over F_p
_P = 2**256 - 2**32 - 977
_HEX = frozenset("0123456789abcdefABCDEF")


def is_on_curve(x: int) -> bool:
    """True if some y satisfies y^2 = x^3 + 7 (mod p) for this x."""
    if not (0 <= x < _P):
        return False
    rhs = (pow(x, 3, _P) + 7) % _P
    # p % 4 == 3, so a square root (if any) is rhs^((p+1)/4)
    y = pow(rhs, (_P + 1) // 4, _P)
    return y * y % _P == rhs


def decode_node_pubkey(text: str) -> bytes:
    """Return the 33 key bytes for a hex node id, or raise ValueError."""
    if len(text) != 66:
        raise ValueError(f"Node id de {len(text)} caràcters (66 esperats)")
    if not set(text) <= _HEX:
        raise ValueError("Node id no és hexadecimal")
    raw = bytes.fromhex(text)
    if raw[0] not in (0x02, 0x03):
        raise ValueError(f"Prefix de clau comprimida invàlid: 0x{raw[0]:02x}")
    if not is_on_curve(int.from_bytes(raw[1:], "big")):
        raise ValueError("El punt no és a la corba secp256k1")
    return raw


def is_node_pubkey(text: str) -> bool:
    try:
        decode_node_pubkey(text)
    except ValueError:
        return False
    return True

"""Lightweight encoding/decoding primitives shared across the validators.

Currently exposes:
  - Base58Check encode/decode (backed by the 'base58' package)
  - Bech32 / Bech32m encode/decode (BIP173 / BIP350)
  - SegWit address encode/decode on top of Bech32
  - convertbits for 8 <-> 5 bit regrouping

Design goals:
  - Every decode failure is a ValueError with a short message.
  - Zero network / side effects.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

import base58

__all__ = [
    "b58encode_check",
    "b58decode_check",
    # Bech32 / SegWit helpers
    "Encoding",
    "BECH32_CHARSET",
    "bech32_hrp_expand",
    "bech32_polymod",
    "bech32_create_checksum",
    "bech32_encode",
    "bech32_decode",
    "convertbits",
    "encode_segwit_address",
    "decode_segwit_address",
]


# ------------------------- Base58Check -------------------------
def b58decode_check(s: str) -> bytes:
    """Return payload (version byte + data) after validating the Base58Check checksum."""
    if not s:
        raise ValueError("Empty Base58 string")
    try:
        return base58.b58decode_check(s)
    except Exception as e:  # library raises ValueError or KeyError; normalize
        raise ValueError("Base58 checksum invalid") from e


def b58encode_check(payload: bytes) -> str:
    """Encode payload (version + data) with a 4-byte double-SHA256 checksum."""
    return base58.b58encode_check(payload).decode("ascii")


# ------------------------- Bech32 / Bech32m -------------------------
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_INDEX = {c: i for i, c in enumerate(BECH32_CHARSET)}


class Encoding(Enum):
    """Checksum constant selecting Bech32 (BIP173) or Bech32m (BIP350)."""

    BECH32 = 1
    BECH32M = 0x2BC830A3


def bech32_hrp_expand(hrp: str) -> List[int]:
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def bech32_polymod(values) -> int:
    generators = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for v in values:
        b = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ v
        for i in range(5):
            if (b >> i) & 1:
                chk ^= generators[i]
    return chk


def bech32_create_checksum(hrp: str, data, encoding: Encoding = Encoding.BECH32) -> List[int]:
    polymod = bech32_polymod(bech32_hrp_expand(hrp) + list(data) + [0] * 6) ^ encoding.value
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def bech32_encode(hrp: str, data, encoding: Encoding = Encoding.BECH32) -> str:
    data = list(data)
    combined = data + bech32_create_checksum(hrp, data, encoding)
    return hrp + "1" + "".join(BECH32_CHARSET[d] for d in combined)


def bech32_decode(text: str, max_length: Optional[int] = 90) -> Tuple[str, List[int], Encoding]:
    """Split a Bech32/Bech32m string into (hrp, data without checksum, encoding).

    ``max_length=None`` lifts the BIP173 length cap, which BOLT11 invoices exceed.
    """
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise ValueError("Caràcter fora de rang ASCII a Bech32")
    if text != text.lower() and text != text.upper():
        raise ValueError("Bech32 mixed-case no permès")
    if max_length is not None and len(text) > max_length:
        raise ValueError("Bech32 massa llarg")
    text = text.lower()
    pos = text.rfind("1")
    if pos < 1 or pos + 7 > len(text):
        raise ValueError("Format Bech32 invàlid")
    hrp = text[:pos]
    data = []
    for c in text[pos + 1:]:
        if c not in _BECH32_INDEX:
            raise ValueError(f"Caràcter invàlid en Bech32: {c}")
        data.append(_BECH32_INDEX[c])
    polymod = bech32_polymod(bech32_hrp_expand(hrp) + data)
    if polymod == Encoding.BECH32.value:
        encoding = Encoding.BECH32
    elif polymod == Encoding.BECH32M.value:
        encoding = Encoding.BECH32M
    else:
        raise ValueError("Checksum Bech32/Bech32m invàlid")
    return hrp, data[:-6], encoding


def convertbits(data, frombits: int, tobits: int, pad: bool = True) -> List[int]:
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1
    for b in data:
        if b < 0 or b >> frombits:
            raise ValueError("Valor fora de rang")
        acc = (acc << frombits | b) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
        raise ValueError("Bits sobrants després de la conversió")
    return ret


# ------------------------- SegWit -------------------------
def encode_segwit_address(hrp: str, witver: int, witprog: bytes) -> str:
    if not (0 <= witver <= 16):
        raise ValueError("Witness version fora de rang")
    encoding = Encoding.BECH32 if witver == 0 else Encoding.BECH32M
    data = [witver] + convertbits(list(witprog), 8, 5, True)
    return bech32_encode(hrp, data, encoding)


def decode_segwit_address(hrp: str, address: str) -> Tuple[int, bytes]:
    """Return (witness_version, witness_program) for ``address`` under ``hrp``.

    Applies the BIP350 rule: v0 needs Bech32, v1..v16 need Bech32m.
    """
    got_hrp, data, encoding = bech32_decode(address)
    if got_hrp != hrp:
        raise ValueError(f"HRP inesperat: {got_hrp!r}")
    if not data:
        raise ValueError("Massa curt per contenir dades + checksum")
    witver = data[0]
    if witver > 16:
        raise ValueError("Witness version fora de rang")
    program = bytes(convertbits(data[1:], 5, 8, False))
    if not (2 <= len(program) <= 40):
        raise ValueError("Longitud de witness program fora de rang")
    if witver == 0 and len(program) not in (20, 32):
        raise ValueError("Witness v0 requereix 20 o 32 bytes")
    expected = Encoding.BECH32 if witver == 0 else Encoding.BECH32M
    if encoding is not expected:
        raise ValueError("Checksum Bech32/Bech32m invàlid per aquesta versió")
    return witver, program

"""BOLT11 payment request validation.

Only structural well-formedness is checked: Bech32 checksum, human-readable
part, timestamp, tagged-field framing, mandatory fields and the signature
length. The signature itself is not verified and expiry is not compared
against the clock, so the result depends on the text alone.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

import codec
from networks import INVOICE_CURRENCIES, Network

__all__ = ["InvoiceSummary", "decode_invoice", "is_invoice"]

_HRP_RE = re.compile(r"^ln(bcrt|bc|tbs|tb)(?:(\d+)([munp])?)?$")

# msat per unit of the amount multiplier; 1 BTC = 10^11 msat
_MSAT_PER_UNIT = {
    None: 10**11,
    "m": 10**8,
    "u": 10**5,
    "n": 10**2,
}

_TIMESTAMP_GROUPS = 7
_SIGNATURE_GROUPS = 104
_DEFAULT_EXPIRY = 3600

# Tagged field types (Bech32 character values)
_TAG_PAYMENT_HASH = 1   # p
_TAG_EXPIRY = 6         # x
_TAG_DESCRIPTION = 13   # d
_TAG_PAYEE = 19         # n
_TAG_DESCRIPTION_HASH = 23  # h


@dataclass(frozen=True)
class InvoiceSummary:
    network: Network
    amount_msat: Optional[int]
    timestamp: int
    payment_hash: str
    description: Optional[str] = None
    description_hash: Optional[str] = None
    expiry: int = _DEFAULT_EXPIRY
    payee: Optional[str] = None


def _to_int(groups: List[int]) -> int:
    n = 0
    for g in groups:
        n = n * 32 + g
    return n


def _to_bytes(groups: List[int]) -> bytes:
    return bytes(codec.convertbits(groups, 5, 8, False))


def _parse_amount(digits: Optional[str], multiplier: Optional[str]) -> Optional[int]:
    if digits is None:
        return None
    if digits.startswith("0"):
        raise ValueError("Import amb zeros a l'esquerra")
    value = int(digits)
    if multiplier == "p":
        if value % 10:
            raise ValueError("Import en pico-BTC no divisible per 10")
        return value // 10
    return value * _MSAT_PER_UNIT[multiplier]


def decode_invoice(text: str) -> InvoiceSummary:
    """Validate a BOLT11 invoice and return its summary; raise ValueError if malformed."""
    hrp, data, encoding = codec.bech32_decode(text, max_length=None)
    if encoding is not codec.Encoding.BECH32:
        raise ValueError("Les factures BOLT11 usen Bech32, no Bech32m")
    m = _HRP_RE.match(hrp)
    if not m:
        raise ValueError(f"HRP de factura invàlid: {hrp!r}")
    currency, digits, multiplier = m.groups()
    amount_msat = _parse_amount(digits, multiplier)

    if len(data) < _TIMESTAMP_GROUPS + _SIGNATURE_GROUPS:
        raise ValueError("Factura massa curta")
    timestamp = _to_int(data[:_TIMESTAMP_GROUPS])
    tagged = data[_TIMESTAMP_GROUPS:-_SIGNATURE_GROUPS]
    signature = _to_bytes(data[-_SIGNATURE_GROUPS:])
    if signature[64] > 3:
        raise ValueError("Recovery id fora de rang")

    payment_hashes = []
    description = None
    description_hash = None
    expiry = _DEFAULT_EXPIRY
    payee = None

    i = 0
    while i < len(tagged):
        if i + 3 > len(tagged):
            raise ValueError("Camp etiquetat truncat")
        tag = tagged[i]
        length = tagged[i + 1] * 32 + tagged[i + 2]
        field = tagged[i + 3:i + 3 + length]
        if len(field) != length:
            raise ValueError("Camp etiquetat més llarg que la factura")
        i += 3 + length

        # Fixed-size fields with an unexpected length are skipped, not fatal
        if tag == _TAG_PAYMENT_HASH and length == 52:
            payment_hashes.append(_to_bytes(field).hex())
        elif tag == _TAG_DESCRIPTION:
            description = _to_bytes(field).decode("utf-8")
        elif tag == _TAG_DESCRIPTION_HASH and length == 52:
            description_hash = _to_bytes(field).hex()
        elif tag == _TAG_EXPIRY:
            expiry = _to_int(field)
        elif tag == _TAG_PAYEE and length == 53:
            payee = _to_bytes(field).hex()

    if len(payment_hashes) != 1:
        raise ValueError("Cal exactament un payment hash")
    if description is None and description_hash is None:
        raise ValueError("Falta descripció o hash de descripció")

    return InvoiceSummary(
        network=INVOICE_CURRENCIES[currency],
        amount_msat=amount_msat,
        timestamp=timestamp,
        payment_hash=payment_hashes[0],
        description=description,
        description_hash=description_hash,
        expiry=expiry,
        payee=payee,
    )


def is_invoice(text: str) -> bool:
    try:
        decode_invoice(text)
    except ValueError:
        return False
    return True

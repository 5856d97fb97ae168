"""Payment URI parsing: ``bitcoin:`` (BIP21, unified ``lightning=``) and ``lightning:``.

parse_payment_uri() only splits the URI into its raw materials; validating
the address or invoice inside is left to the classifier.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional
from urllib.parse import parse_qsl

__all__ = ["PaymentUri", "is_payment_uri", "parse_payment_uri"]

SCHEMES = ("bitcoin", "lightning")

# BIP21 amountparam: *digit [ "." *digit ], at least one digit
_AMOUNT_RE = re.compile(r"(?=\.?[0-9])[0-9]*(?:\.[0-9]*)?")


@dataclass(frozen=True)
class PaymentUri:
    scheme: str
    address: Optional[str] = None
    amount: Optional[Decimal] = None
    label: Optional[str] = None
    message: Optional[str] = None
    lightning: Optional[str] = None
    params: Dict[str, str] = field(default_factory=dict)


def _scheme_of(text: str) -> Optional[str]:
    head, sep, _ = text.partition(":")
    if not sep:
        return None
    head = head.lower()
    return head if head in SCHEMES else None


def is_payment_uri(text: str) -> bool:
    return _scheme_of(text) is not None


def _parse_amount(raw: str) -> Decimal:
    if not _AMOUNT_RE.fullmatch(raw):
        raise ValueError(f"Import BIP21 invàlid: {raw!r}")
    return Decimal(raw)


def parse_payment_uri(text: str) -> PaymentUri:
    scheme = _scheme_of(text)
    if scheme is None:
        raise ValueError("No és un URI de pagament")
    body = text.partition(":")[2]

    if scheme == "lightning":
        if not body:
            raise ValueError("URI lightning buit")
        return PaymentUri(scheme=scheme, lightning=body)

    address, _, query = body.partition("?")
    values: Dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        key = key.lower()
        if key in values:
            raise ValueError(f"Paràmetre BIP21 repetit: {key}")
        values[key] = value

    required = [k for k in values if k.startswith("req-")]
    if required:
        raise ValueError(f"Paràmetres obligatoris no suportats: {', '.join(required)}")

    amount = _parse_amount(values.pop("amount")) if "amount" in values else None
    return PaymentUri(
        scheme=scheme,
        address=address or None,
        amount=amount,
        label=values.pop("label", None),
        message=values.pop("message", None),
        lightning=values.pop("lightning", None) or None,
        params=values,
    )

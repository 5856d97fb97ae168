"""Destination classifier for the send flow.

classify() maps any string to exactly one DestinationKind. Schemes are tried
in a fixed priority order:

  1. payment URIs (``bitcoin:`` / ``lightning:``)
  2. BOLT11 invoice
  3. on-chain address (Base58Check or SegWit)
  4. node public key (66 hex chars, compressed secp256k1 point)

Anything else is UNKNOWN. Text is not trimmed or case-folded first; each
scheme applies its own case rules. Validation failures inside the scheme
decoders are ValueErrors and never leave this module.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from addressing import AddressInfo, decode_address
from bip21 import PaymentUri, is_payment_uri, parse_payment_uri
from invoice import InvoiceSummary, decode_invoice
from networks import Network, network_matches
from node_key import is_node_pubkey

__all__ = ["DestinationKind", "ParsedDestination", "classify", "parse_destination"]


class DestinationKind(Enum):
    ONCHAIN_ADDRESS = "onchain_address"
    NODE_PUBKEY = "node_pubkey"
    INVOICE = "invoice"
    UNKNOWN = "unknown"

    @property
    def actionable(self) -> bool:
        return self in (DestinationKind.ONCHAIN_ADDRESS, DestinationKind.NODE_PUBKEY)


@dataclass(frozen=True)
class ParsedDestination:
    kind: DestinationKind
    network: Optional[Network] = None
    address_type: Optional[str] = None
    invoice: Optional[InvoiceSummary] = None
    uri: Optional[PaymentUri] = None


_UNKNOWN = ParsedDestination(DestinationKind.UNKNOWN)


def _as_invoice(text: str, network: Optional[Network]) -> Optional[ParsedDestination]:
    try:
        summary = decode_invoice(text)
    except ValueError:
        return None
    if not network_matches(summary.network, network):
        return None
    return ParsedDestination(DestinationKind.INVOICE, network=summary.network, invoice=summary)


def _as_address(text: str, network: Optional[Network]) -> Optional[ParsedDestination]:
    try:
        info: AddressInfo = decode_address(text)
    except ValueError:
        return None
    if not network_matches(info.network, network, base58=info.is_base58):
        return None
    return ParsedDestination(
        DestinationKind.ONCHAIN_ADDRESS, network=info.network, address_type=info.address_type
    )


def _from_uri(text: str, network: Optional[Network]) -> ParsedDestination:
    try:
        uri = parse_payment_uri(text)
    except ValueError:
        return _UNKNOWN

    if uri.address:
        found = _as_address(uri.address, network)
    elif uri.lightning:
        found = _as_invoice(uri.lightning, network)
    else:
        found = None

    if found is None:
        return ParsedDestination(DestinationKind.UNKNOWN, uri=uri)
    return ParsedDestination(
        found.kind,
        network=found.network,
        address_type=found.address_type,
        invoice=found.invoice,
        uri=uri,
    )


def parse_destination(text: str, network: Optional[Network] = None) -> ParsedDestination:
    """Classify ``text`` and return the decoded details alongside the kind.

    ``network`` restricts accepted addresses and invoices to one network;
    None accepts all of them. Node keys carry no network and always pass.
    """
    if not text:
        return _UNKNOWN
    if is_payment_uri(text):
        return _from_uri(text, network)

    found = _as_invoice(text, network) or _as_address(text, network)
    if found is not None:
        return found
    if is_node_pubkey(text):
        return ParsedDestination(DestinationKind.NODE_PUBKEY)
    return _UNKNOWN


def classify(text: str, network: Optional[Network] = None) -> DestinationKind:
    return parse_destination(text, network).kind

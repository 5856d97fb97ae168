"""Send-intent controller: turns raw destination text into a proceed/reject decision.

The controller is stateless and performs no navigation. On success it returns
a Proceed payload carrying the original text untouched; the presentation
layer forwards it to the amount-entry stage. Every rejection carries a
RejectionReason so callers can localize or log each case separately.

Policy table:

  ""                 -> Reject(EMPTY_INPUT)
  INVOICE            -> Reject(UNSUPPORTED_INVOICE)
  UNKNOWN            -> Reject(UNPARSEABLE_DESTINATION)
  ONCHAIN_ADDRESS    -> Proceed
  NODE_PUBKEY        -> Proceed
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union
from urllib.parse import urlencode

from destination import DestinationKind, classify
from networks import Network

__all__ = [
    "RejectionReason",
    "Proceed",
    "Reject",
    "SendIntent",
    "decide",
    "rejection_message",
    "DEFAULT_NEXT_STAGE",
]

logger = logging.getLogger(__name__)

DEFAULT_NEXT_STAGE = "/send/amount"


class RejectionReason(Enum):
    EMPTY_INPUT = "empty_input"
    UNSUPPORTED_INVOICE = "unsupported_invoice"
    UNPARSEABLE_DESTINATION = "unparseable_destination"


_MESSAGES: Dict[RejectionReason, str] = {
    RejectionReason.EMPTY_INPUT: "You didn't paste anything!",
    RejectionReason.UNSUPPORTED_INVOICE: "We don't support invoices yet",
    RejectionReason.UNPARSEABLE_DESTINATION: "Couldn't parse that one, buddy",
}


def rejection_message(reason: RejectionReason) -> str:
    """User-facing notification text for a rejection reason."""
    return _MESSAGES[reason]


@dataclass(frozen=True)
class Proceed:
    destination: str
    kind: DestinationKind

    def __post_init__(self):
        if not self.kind.actionable:
            raise ValueError(f"Proceed requires an actionable kind, got {self.kind.value}")

    def next_stage_path(self, base: str = DEFAULT_NEXT_STAGE) -> str:
        """Location of the amount-entry stage with the destination as a query parameter."""
        return f"{base}?{urlencode({'destination': self.destination})}"

    def to_dict(self) -> Dict:
        return {"action": "proceed", "destination": self.destination, "kind": self.kind.value}


@dataclass(frozen=True)
class Reject:
    reason: RejectionReason

    @property
    def message(self) -> str:
        return rejection_message(self.reason)

    def to_dict(self) -> Dict:
        return {"action": "reject", "reason": self.reason.value, "message": self.message}


SendIntent = Union[Proceed, Reject]


def decide(text: str, network: Optional[Network] = None) -> SendIntent:
    """Decide what the send flow does with ``text``.

    Only the exact empty string counts as empty input; whitespace is not
    trimmed, so padded text goes through the classifier like anything else.
    """
    if text == "":
        logger.debug("decide: empty input")
        return Reject(RejectionReason.EMPTY_INPUT)

    kind = classify(text, network)
    if kind is DestinationKind.INVOICE:
        intent: SendIntent = Reject(RejectionReason.UNSUPPORTED_INVOICE)
    elif kind is DestinationKind.UNKNOWN:
        intent = Reject(RejectionReason.UNPARSEABLE_DESTINATION)
    else:
        intent = Proceed(destination=text, kind=kind)

    logger.debug("decide: kind=%s -> %s", kind.value, intent.to_dict()["action"])
    return intent

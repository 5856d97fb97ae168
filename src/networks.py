"""Bitcoin networks and the encoding markers that identify them."""
from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = ["Network", "network_matches"]


class Network(Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    SIGNET = "signet"
    REGTEST = "regtest"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Network"]:
        """Map a config string to a Network; ``""``/``"any"``/None mean no restriction."""
        v = (value or "").strip().lower()
        if v in ("", "any", "all"):
            return None
        try:
            return cls(v)
        except ValueError:
            raise ValueError(
                f"Xarxa desconeguda: {value!r} (vàlides: any, "
                + ", ".join(n.value for n in cls) + ")"
            ) from None


# Base58 version bytes: (p2pkh, p2sh)
BASE58_VERSIONS = {
    0x00: (Network.MAINNET, "p2pkh"),
    0x05: (Network.MAINNET, "p2sh"),
    0x6F: (Network.TESTNET, "p2pkh"),
    0xC4: (Network.TESTNET, "p2sh"),
}

# SegWit human-readable parts; signet reuses the testnet one
SEGWIT_HRPS = {
    "bc": Network.MAINNET,
    "tb": Network.TESTNET,
    "bcrt": Network.REGTEST,
}

# BOLT11 currency prefixes
INVOICE_CURRENCIES = {
    "bc": Network.MAINNET,
    "tb": Network.TESTNET,
    "tbs": Network.SIGNET,
    "bcrt": Network.REGTEST,
}


def network_matches(found: Optional[Network], wanted: Optional[Network], base58: bool = False) -> bool:
    """True if a destination on ``found`` is acceptable when ``wanted`` is configured.

    On-chain encodings cannot tell testnet from signet, so a TESTNET address
    is accepted for either. Base58 version bytes are also shared with regtest;
    regtest SegWit addresses have their own ``bcrt`` HRP.
    """
    if wanted is None:
        return True
    if found is wanted:
        return True
    if found is not Network.TESTNET:
        return False
    return wanted is Network.SIGNET or (base58 and wanted is Network.REGTEST)

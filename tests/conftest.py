import sys, pathlib
import pytest

# --- Ensure src/ is importable for a src-layout project ---
_PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _PROJECT_ROOT / "src"
if _SRC.exists():
    sys.path.insert(0, str(_SRC))

import codec  # noqa: E402


def _groups(n, count):
    return [(n >> 5 * (count - 1 - i)) & 31 for i in range(count)]


def _tag(tag, groups):
    return [tag, len(groups) >> 5, len(groups) & 31] + list(groups)


def build_invoice(
    hrp="lnbc2500u",
    timestamp=1496314658,
    payment_hash=bytes(range(32)),
    description="1 cup coffee",
    description_hash=None,
    extra_fields=(),
    payment_hashes=1,
    recovery_id=0,
    encoding=codec.Encoding.BECH32,
):
    """Assemble a structurally valid BOLT11 string (dummy signature, real checksum)."""
    data = _groups(timestamp, 7)
    for _ in range(payment_hashes):
        data += _tag(1, codec.convertbits(payment_hash, 8, 5, True))
    if description is not None:
        data += _tag(13, codec.convertbits(description.encode("utf-8"), 8, 5, True))
    if description_hash is not None:
        data += _tag(23, codec.convertbits(description_hash, 8, 5, True))
    for tag, groups in extra_fields:
        data += _tag(tag, groups)
    signature = bytes(range(1, 65)) + bytes([recovery_id])
    data += codec.convertbits(signature, 8, 5, True)
    return codec.bech32_encode(hrp, data, encoding)


@pytest.fixture
def make_invoice():
    return build_invoice


@pytest.fixture
def invoice():
    return build_invoice()


# Vectors reals (testnet m/84'/1'/0'/0/i i mainnet BIP173/BIP350)
TESTNET_P2WPKH = "tb1q0wwa08elht6gq8uzjsl66mdhjl7rcsetakcf4t"
MAINNET_P2WPKH = "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"
MAINNET_P2TR = "bc1p0xlxvlhemja6c4dqv22uapctqupfhlxm9h8z3k2e72q4k9hcz7vqzk5jj0"
TESTNET_P2TR = "tb1pqqqqp399et2xygdj5xreqhjjvcmzhxw4aywxecjdzew6hylgvsesf3hn0c"
GENESIS_P2PKH = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"
NODE_PUBKEY = "03144e30cd31663a3770469818f3125b9e7af76b196c867f54cf11a9a4a644d074"


@pytest.fixture
def node_pubkey():
    return NODE_PUBKEY


@pytest.fixture
def onchain_address():
    return TESTNET_P2WPKH

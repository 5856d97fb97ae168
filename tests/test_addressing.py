import pytest

import codec
from addressing import decode_address, detect_address_type, is_valid_address
from networks import Network


@pytest.mark.parametrize("addr, network, kind", [
    ("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", Network.MAINNET, "p2pkh"),
    ("bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4", Network.MAINNET, "p2wpkh"),
    ("BC1QW508D6QEJXTDG4Y5R3ZARVARY0C5XW7KV8F3T4", Network.MAINNET, "p2wpkh"),
    ("tb1q0wwa08elht6gq8uzjsl66mdhjl7rcsetakcf4t", Network.TESTNET, "p2wpkh"),
    ("tb1qfqzk956wtxlvvghewk5hqu6vwqjtjm5qmua7wx", Network.TESTNET, "p2wpkh"),
    ("bc1p0xlxvlhemja6c4dqv22uapctqupfhlxm9h8z3k2e72q4k9hcz7vqzk5jj0", Network.MAINNET, "p2tr"),
    ("tb1pqqqqp399et2xygdj5xreqhjjvcmzhxw4aywxecjdzew6hylgvsesf3hn0c", Network.TESTNET, "p2tr"),
])
def test_known_addresses(addr, network, kind):
    info = decode_address(addr)
    assert info.network is network
    assert info.address_type == kind
    assert detect_address_type(addr) == kind


@pytest.mark.parametrize("version, network, kind", [
    (0x05, Network.MAINNET, "p2sh"),
    (0x6F, Network.TESTNET, "p2pkh"),
    (0xC4, Network.TESTNET, "p2sh"),
])
def test_base58_versions(version, network, kind):
    addr = codec.b58encode_check(bytes([version]) + bytes(range(20)))
    info = decode_address(addr)
    assert (info.network, info.address_type) == (network, kind)
    assert info.program == bytes(range(20))


@pytest.mark.parametrize("hrp, witver, size, network, kind", [
    ("bc", 0, 32, Network.MAINNET, "p2wsh"),
    ("bcrt", 0, 20, Network.REGTEST, "p2wpkh"),
    ("tb", 2, 16, Network.TESTNET, "witness_unknown"),
])
def test_segwit_variants(hrp, witver, size, network, kind):
    addr = codec.encode_segwit_address(hrp, witver, bytes(size))
    info = decode_address(addr)
    assert (info.network, info.address_type, info.witness_version) == (network, kind, witver)


@pytest.mark.parametrize("bad_addr", [
    "",
    # Bech32 with wrong checksum (alter last char)
    "tb1q0wwa08elht6gq8uzjsl66mdhjl7rcsetakcf4x",
    # Bech32 mixed case invalid
    "Tb1q0wwa08elht6gq8uzjsl66mdhjl7rcsetakcf4t",
    # Base58 invalid char (0 is not in alphabet)
    "mipcBbFg9gMiCh81Kj8tqqdgoZub1ZJRf0",
    # Genesis address with one character changed
    "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNA",
    " 1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
    "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4\n",
])
def test_invalid_addresses(bad_addr):
    with pytest.raises(ValueError):
        decode_address(bad_addr)
    assert detect_address_type(bad_addr) is None
    assert not is_valid_address(bad_addr)


def test_foreign_hrp_rejected():
    ltc = codec.encode_segwit_address("ltc", 0, bytes(20))
    assert not is_valid_address(ltc)


def test_unknown_base58_version_rejected():
    # 0x30 is Litecoin P2PKH
    addr = codec.b58encode_check(b"\x30" + bytes(20))
    with pytest.raises(ValueError) as exc:
        decode_address(addr)
    assert "Version byte" in str(exc.value)


def test_base58_wrong_payload_length_rejected():
    addr = codec.b58encode_check(b"\x00" + bytes(range(1, 25)))
    assert not is_valid_address(addr)


def test_network_filter():
    tb = "tb1q0wwa08elht6gq8uzjsl66mdhjl7rcsetakcf4t"
    assert is_valid_address(tb)
    assert is_valid_address(tb, Network.TESTNET)
    # signet shares testnet encodings
    assert is_valid_address(tb, Network.SIGNET)
    assert not is_valid_address(tb, Network.MAINNET)
    assert not is_valid_address(tb, Network.REGTEST)


def test_legacy_testnet_versions_accepted_on_regtest():
    legacy = codec.b58encode_check(b"\x6f" + bytes(range(20)))
    assert decode_address(legacy).is_base58
    assert is_valid_address(legacy, Network.REGTEST)
    assert is_valid_address(legacy, Network.SIGNET)
    assert not is_valid_address(legacy, Network.MAINNET)

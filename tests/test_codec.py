"""Tests for legacy transaction signing and serialization."""

from __future__ import annotations

import pytest
import rlp
from eth_account import Account

from conftest import CONTRACT_ADDRESS, PRIVATE_KEY
from ethremote.chain.codec import (
    LegacyTransactionCodec,
    decode_raw_transaction,
    signing_preimage,
    transaction_hash,
)
from ethremote.chain.tx import UnsignedTransaction
from ethremote.exceptions import EncodingError, SigningError
from ethremote.utils import hex_to_bytes, keccak256

CALLDATA = "0xdeadbeef" + format(21, "064x")


def _tx(**overrides) -> UnsignedTransaction:
    fields = dict(
        to=CONTRACT_ADDRESS,
        data=CALLDATA,
        sender=Account.from_key(PRIVATE_KEY).address,
        nonce=7,
        gas_limit=26_000,
        gas_price=20_000_000_000,
        value=0,
    )
    fields.update(overrides)
    return UnsignedTransaction(**fields)


@pytest.fixture()
def codec() -> LegacyTransactionCodec:
    return LegacyTransactionCodec()


def test_round_trip_recovers_fields(codec: LegacyTransactionCodec) -> None:
    tx = _tx(value=12345)
    decoded = decode_raw_transaction(codec.sign_and_serialize(tx, PRIVATE_KEY))

    assert decoded["to"].lower() == CONTRACT_ADDRESS
    assert decoded["data"] == CALLDATA
    assert decoded["value"] == 12345
    assert decoded["nonce"] == 7
    assert decoded["gas"] == 26_000
    assert decoded["gasPrice"] == 20_000_000_000
    assert decoded["v"] in (27, 28)
    assert decoded["chainId"] is None


def test_signature_recovers_signer(codec: LegacyTransactionCodec) -> None:
    raw = codec.sign_and_serialize(_tx(), PRIVATE_KEY)
    assert Account.recover_transaction(raw) == Account.from_key(PRIVATE_KEY).address


def test_serialization_is_deterministic(codec: LegacyTransactionCodec) -> None:
    tx = _tx()
    assert codec.sign_and_serialize(tx, PRIVATE_KEY) == codec.sign_and_serialize(tx, PRIVATE_KEY)


def test_zero_fields_encode_as_empty(codec: LegacyTransactionCodec) -> None:
    raw = codec.sign_and_serialize(_tx(nonce=0, value=0), PRIVATE_KEY)
    items = rlp.decode(hex_to_bytes(raw))
    assert items[0] == b""  # nonce
    assert items[4] == b""  # value
    assert items[1] == (20_000_000_000).to_bytes(5, "big")


def test_preimage_excludes_signature(codec: LegacyTransactionCodec) -> None:
    items = rlp.decode(signing_preimage(_tx()))
    assert len(items) == 6


def test_eip155_chain_id(codec: LegacyTransactionCodec) -> None:
    tx = _tx(chain_id=1337)
    assert len(rlp.decode(signing_preimage(tx))) == 9

    raw = codec.sign_and_serialize(tx, PRIVATE_KEY)
    decoded = decode_raw_transaction(raw)
    assert decoded["v"] in (1337 * 2 + 35, 1337 * 2 + 36)
    assert decoded["chainId"] == 1337
    assert Account.recover_transaction(raw) == Account.from_key(PRIVATE_KEY).address


def test_private_key_without_prefix(codec: LegacyTransactionCodec) -> None:
    tx = _tx()
    assert codec.sign_and_serialize(tx, PRIVATE_KEY[2:]) == codec.sign_and_serialize(tx, PRIVATE_KEY)


@pytest.mark.parametrize(
    "private_key",
    [
        "",
        "0x1234",
        "0x" + "zz" * 32,
        PRIVATE_KEY + "00",
    ],
)
def test_malformed_private_key(codec: LegacyTransactionCodec, private_key: str) -> None:
    with pytest.raises(SigningError):
        codec.sign_and_serialize(_tx(), private_key)


def test_sender_mismatch_only_checked_when_requested(codec: LegacyTransactionCodec) -> None:
    other = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
    # Unchecked by default: the node is the one to reject it
    codec.sign_and_serialize(_tx(sender=other), PRIVATE_KEY)

    with pytest.raises(SigningError) as exc_info:
        codec.sign_and_serialize(_tx(sender=other), PRIVATE_KEY, expected_sender=other)
    assert exc_info.value.details["expected"] == other


def test_transaction_hash(codec: LegacyTransactionCodec) -> None:
    raw = codec.sign_and_serialize(_tx(), PRIVATE_KEY)
    tx_hash = transaction_hash(raw)
    assert len(tx_hash) == 66
    assert tx_hash == "0x" + keccak256(hex_to_bytes(raw)).hex()


@pytest.mark.parametrize(
    "raw_tx",
    [
        "0xzz",
        "0x" + rlp.encode([b"\x01", b"\x02"]).hex(),
        "0x" + rlp.encode(b"not a list").hex(),
        "0x" + rlp.encode([b""] * 8 + [[b"\x01"]]).hex(),
        "0xc0ff",
    ],
)
def test_decode_rejects_non_transactions(raw_tx: str) -> None:
    with pytest.raises(EncodingError):
        decode_raw_transaction(raw_tx)

"""
Legacy transaction codec - sign and serialize with RLP.

Layout: rlp([nonce, gasPrice, gasLimit, to, value, data, v, r, s]).
Integers enter RLP as minimal big-endian bytes, so 0 becomes the empty
string. Without a chain id the signing pre-image is the first six fields
and v is 27/28; with one it follows EIP-155.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import rlp
from eth_account import Account

from ..exceptions import EncodingError, SigningError
from ..utils import (
    bytes_to_int,
    hex_to_bytes,
    int_to_minimal_bytes,
    is_hex,
    keccak256,
    strip_0x,
    to_checksum_address,
)
from .tx import UnsignedTransaction

logger = logging.getLogger(__name__)


def _fields(tx: UnsignedTransaction) -> list[bytes]:
    return [
        int_to_minimal_bytes(tx.nonce),
        int_to_minimal_bytes(tx.gas_price),
        int_to_minimal_bytes(tx.gas_limit),
        hex_to_bytes(tx.to),
        int_to_minimal_bytes(tx.value),
        hex_to_bytes(tx.data),
    ]


def signing_preimage(tx: UnsignedTransaction) -> bytes:
    """RLP bytes that are hashed and signed for ``tx``."""
    fields = _fields(tx)
    if tx.chain_id is not None:
        fields += [int_to_minimal_bytes(tx.chain_id), b"", b""]
    return rlp.encode(fields)


def transaction_hash(raw_tx: str) -> str:
    """Hash a node would report for a serialized transaction."""
    return "0x" + keccak256(hex_to_bytes(raw_tx)).hex()


def _load_key(private_key: str):
    body = strip_0x(private_key or "")
    if len(body) != 64 or not is_hex(body):
        raise SigningError("Private key must be 32 bytes of hex (64 characters, optional 0x prefix)")
    try:
        return Account.from_key("0x" + body)
    except Exception as exc:
        raise SigningError("Invalid private key", details={"error": str(exc)}) from exc


class LegacyTransactionCodec:
    """Transaction codec/signer capability for pre-EIP-2718 transactions."""

    def sign_and_serialize(
        self,
        tx: UnsignedTransaction,
        private_key: str,
        *,
        expected_sender: Optional[str] = None,
    ) -> str:
        """
        Sign a transaction and serialize it for ``eth_sendRawTransaction``.

        Args:
            tx: Unsigned transaction
            private_key: Hex private key, with or without 0x prefix
            expected_sender: If given, the key's address must equal it

        Returns:
            0x-prefixed hex encoded signed transaction

        Raises:
            SigningError: If the key is malformed, does not match
                ``expected_sender``, or signing fails
        """
        account = _load_key(private_key)
        if expected_sender is not None and account.address.lower() != expected_sender.lower():
            raise SigningError(
                "Private key does not belong to the sending account",
                details={"expected": expected_sender, "derived": account.address},
            )

        msg_hash = keccak256(signing_preimage(tx))
        try:
            signature = account.unsafe_sign_hash(msg_hash)
        except Exception as exc:
            raise SigningError("Failed to sign transaction", details={"error": str(exc)}) from exc

        v = signature.v
        if tx.chain_id is not None:
            v = tx.chain_id * 2 + 35 + (v - 27)

        signed = _fields(tx) + [
            int_to_minimal_bytes(v),
            int_to_minimal_bytes(signature.r),
            int_to_minimal_bytes(signature.s),
        ]
        logger.debug("transaction signed and serialized")
        return "0x" + rlp.encode(signed).hex()


def decode_raw_transaction(raw_tx: str) -> dict[str, Any]:
    """
    Decode a serialized legacy transaction back into its fields.

    Returns:
        Dict with nonce, gasPrice, gas, to, value, data, v, r, s, chainId

    Raises:
        EncodingError: If the input is not hex or not a signed legacy transaction
    """
    try:
        items = rlp.decode(hex_to_bytes(raw_tx))
    except (rlp.DecodingError, TypeError, ValueError) as exc:
        raise EncodingError(f"Cannot decode raw transaction: {exc}") from exc
    if not isinstance(items, list) or len(items) != 9 or not all(isinstance(i, bytes) for i in items):
        raise EncodingError("Not a signed legacy transaction")

    nonce, gas_price, gas, to, value, data, v, r, s = items
    v_int = bytes_to_int(v)
    return {
        "nonce": bytes_to_int(nonce),
        "gasPrice": bytes_to_int(gas_price),
        "gas": bytes_to_int(gas),
        "to": to_checksum_address(to.hex()) if to else None,
        "value": bytes_to_int(value),
        "data": "0x" + data.hex(),
        "v": v_int,
        "r": bytes_to_int(r),
        "s": bytes_to_int(s),
        "chainId": (v_int - 35) // 2 if v_int >= 35 else None,
    }

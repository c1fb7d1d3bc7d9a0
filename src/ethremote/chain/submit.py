"""Remote Submitter - broadcast raw transactions and simulate calls."""

from __future__ import annotations

import logging

from ..exceptions import BroadcastError, CallError, RemoteError, RemoteTimeoutError
from ..utils import is_hex
from .rpc import RemoteNode, restage

logger = logging.getLogger(__name__)

TX_HASH_LENGTH = 66  # 0x + 32 bytes hex


class RemoteSubmitter:
    """Hand serialized transactions and call payloads to the remote node."""

    def __init__(self, node: RemoteNode) -> None:
        self._node = node

    async def broadcast(self, raw_tx: str) -> str:
        """
        Broadcast a signed transaction. Does not wait for inclusion.

        Args:
            raw_tx: 0x-prefixed hex encoded signed transaction

        Returns:
            Transaction hash (0x-prefixed, 66 characters)

        Raises:
            BroadcastError: If the node rejects the transaction
            RemoteTimeoutError: If the node does not answer in time
        """
        logger.debug("sending transaction")
        try:
            tx_hash = await self._node.send_raw_transaction(raw_tx)
        except RemoteTimeoutError:
            raise
        except RemoteError as exc:
            raise restage(BroadcastError, exc, "Transaction rejected") from exc

        if not (isinstance(tx_hash, str) and len(tx_hash) == TX_HASH_LENGTH
                and tx_hash.startswith("0x") and is_hex(tx_hash)):
            raise BroadcastError(
                f"Node returned an invalid transaction hash: {tx_hash!r}",
                method="eth_sendRawTransaction",
                endpoint=self._node.provider,
                rpc_error=tx_hash,
            )

        logger.debug("transaction sent: %s", tx_hash)
        return tx_hash

    async def simulate(self, contract_address: str, payload: str) -> str:
        """
        Execute a read-only message call.

        Args:
            contract_address: 0x-prefixed contract address
            payload: 0x-prefixed hex calldata

        Returns:
            Raw hex return data exactly as reported by the node

        Raises:
            CallError: If the call reverts or the node reports an error
            RemoteTimeoutError: If the node does not answer in time
        """
        logger.debug("calling %s", contract_address)
        try:
            result = await self._node.call({"to": contract_address, "data": payload})
        except RemoteTimeoutError:
            raise
        except RemoteError as exc:
            raise restage(CallError, exc, "Call failed") from exc

        if not isinstance(result, str):
            raise CallError(
                f"Node returned a non-hex call result: {result!r}",
                method="eth_call",
                endpoint=self._node.provider,
                rpc_error=result,
            )
        return result

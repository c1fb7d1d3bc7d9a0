"""
Async JSON-RPC client for a remote Ethereum node.

Lightweight alternative to web3.py: uses httpx for HTTP. One ``RemoteNode``
is opened per operation and closed when it finishes; nothing is shared
between invocations.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional

import httpx

from ..config import get_rpc_timeout
from ..exceptions import RemoteError, RemoteTimeoutError
from ..utils import from_quantity

logger = logging.getLogger(__name__)


class RemoteNode:
    """
    Remote node capability: the five JSON-RPC reads and writes ethremote needs.

    Usage::

        async with RemoteNode("http://localhost:8545") as node:
            nonce = await node.get_transaction_count(address)
    """

    def __init__(
        self,
        provider: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            provider: URL of the remote node's JSON-RPC endpoint
            timeout: Seconds per round trip (default: ETHREMOTE_RPC_TIMEOUT or 30)
            transport: Custom httpx transport, e.g. ``httpx.MockTransport`` in tests
        """
        self.provider = provider
        self.timeout = get_rpc_timeout(timeout)
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "RemoteNode":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            RemoteTimeoutError: If the round trip exceeds the timeout
            RemoteError: If the transport fails or the node returns an error
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        logger.debug("rpc -> %s %s", self.provider, method)

        try:
            response = await self._client.post(self.provider, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            raise RemoteTimeoutError(
                f"{method} timed out after {self.timeout}s",
                method=method,
                endpoint=self.provider,
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise RemoteError(
                f"{method} failed: HTTP {exc.response.status_code}",
                method=method,
                endpoint=self.provider,
                rpc_error=exc.response.text,
                details={"status_code": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteError(
                f"{method} failed: {exc}",
                method=method,
                endpoint=self.provider,
            ) from exc
        except ValueError as exc:
            raise RemoteError(
                f"{method} returned a non-JSON response",
                method=method,
                endpoint=self.provider,
            ) from exc

        if not isinstance(data, dict):
            raise RemoteError(
                f"{method} returned a malformed JSON-RPC response",
                method=method,
                endpoint=self.provider,
                rpc_error=data,
            )

        if data.get("error") is not None:
            error = data["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RemoteError(
                f"RPC error: {message}",
                method=method,
                endpoint=self.provider,
                rpc_error=error,
            )

        return data.get("result")

    async def _quantity(self, method: str, params: list) -> int:
        result = await self.request(method, params)
        try:
            return from_quantity(result)
        except (TypeError, ValueError) as exc:
            raise RemoteError(
                f"{method} returned a non-quantity result: {result!r}",
                method=method,
                endpoint=self.provider,
                rpc_error=result,
            ) from exc

    async def get_transaction_count(self, address: str, block: str = "latest") -> int:
        """Get the transaction count (nonce) of an address."""
        return await self._quantity("eth_getTransactionCount", [address, block])

    async def gas_price(self) -> int:
        """Get the node's suggested gas price in wei."""
        return await self._quantity("eth_gasPrice", [])

    async def estimate_gas(self, tx: dict) -> int:
        """Estimate the gas needed to execute a call object."""
        return await self._quantity("eth_estimateGas", [tx])

    async def send_raw_transaction(self, raw_tx: str) -> str:
        """
        Send a signed raw transaction.

        Returns:
            Transaction hash as reported by the node
        """
        return await self.request("eth_sendRawTransaction", [raw_tx])

    async def call(self, tx: dict, block: str = "latest") -> str:
        """Execute a message call without creating a transaction."""
        return await self.request("eth_call", [tx, block])


def restage(error_cls: type[RemoteError], exc: RemoteError, message: str) -> RemoteError:
    """Re-express a transport-level ``RemoteError`` as a stage-specific one."""
    return error_cls(
        f"{message}: {exc.message}",
        method=exc.method,
        endpoint=exc.endpoint,
        rpc_error=exc.rpc_error,
        details=exc.details,
    )

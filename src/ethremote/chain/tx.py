"""
Transaction Assembler - build unsigned contract transactions.

Encodes the call payload from the contract interface, then resolves the
chain-dependent fields (nonce, gas price, gas limit) from the remote node.
Nothing is cached: every assembly re-reads the nonce, so two concurrent
assemblies for the same sender can observe the same value. Callers that
send several transactions from one account must serialize them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import RemoteError, RemoteQueryError, RemoteTimeoutError
from ..utils import int_to_minimal_hex
from .abi import AbiEncoder, ContractInterface
from .rpc import RemoteNode, restage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallRequest:
    contract_address: str
    interface: ContractInterface
    function_name: str
    arguments: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class UnsignedTransaction:
    """Legacy transaction fields before signing. ``sender`` is informational."""

    to: str
    data: str
    sender: str
    nonce: int
    gas_limit: int
    gas_price: int
    value: int = 0
    chain_id: Optional[int] = None


def encode_payload(request: CallRequest, encoder: AbiEncoder) -> str:
    """Look up the requested function and ABI-encode the call to hex calldata."""
    descriptor = request.interface.find_function(request.function_name)
    return encoder.encode_call(descriptor, request.arguments)


class TransactionAssembler:
    """Turn a call request plus chain state into an ``UnsignedTransaction``."""

    def __init__(self, node: RemoteNode, encoder: Optional[AbiEncoder] = None) -> None:
        self._node = node
        self._encoder = encoder or AbiEncoder()

    async def assemble(
        self,
        request: CallRequest,
        sender: str,
        *,
        value: int = 0,
        gas_limit: Optional[int] = None,
        chain_id: Optional[int] = None,
    ) -> UnsignedTransaction:
        """
        Build an unsigned contract call transaction.

        Lookup and encoding happen before any network access. The nonce,
        gas price and (when ``gas_limit`` is None) gas estimate are then
        fetched concurrently and must all succeed.

        Args:
            request: Contract, interface, function and arguments
            sender: Address paying for the transaction
            value: ETH value in wei (default: 0)
            gas_limit: Gas limit used verbatim (default: estimate remotely)
            chain_id: EIP-155 chain id, or None for an unprotected transaction

        Raises:
            InterfaceLookupError: If the function is missing or overloaded
            EncodingError: If the arguments do not match the inputs
            RemoteQueryError: If any remote read fails
            RemoteTimeoutError: If any remote read times out
        """
        payload = encode_payload(request, self._encoder)
        logger.debug("assembling %s on %s", request.function_name, request.contract_address)

        reads = [self._node.get_transaction_count(sender), self._node.gas_price()]
        if gas_limit is None:
            reads.append(
                self._node.estimate_gas({"to": request.contract_address, "data": payload})
            )

        results = await asyncio.gather(*reads, return_exceptions=True)
        for result in results:
            if isinstance(result, RemoteTimeoutError):
                raise result
            if isinstance(result, RemoteError):
                raise restage(RemoteQueryError, result, "Failed to resolve transaction fields") from result
            if isinstance(result, BaseException):
                raise result

        nonce, gas_price = results[0], results[1]
        if gas_limit is None:
            gas_limit = results[2]

        tx = UnsignedTransaction(
            to=request.contract_address,
            data=payload,
            sender=sender,
            nonce=nonce,
            gas_limit=gas_limit,
            gas_price=gas_price,
            value=value,
            chain_id=chain_id,
        )
        logger.debug(
            "unsigned transaction: to=%s nonce=%d gas=%d gasPrice=%s value=%s",
            tx.to,
            tx.nonce,
            tx.gas_limit,
            int_to_minimal_hex(tx.gas_price),
            int_to_minimal_hex(tx.value),
        )
        return tx

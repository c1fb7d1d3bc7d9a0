"""
Public operations - send a contract transaction or make a read-only call.

Each operation validates its parameters, opens its own connection to the
remote node, runs the pipeline once and closes the connection. There are
no retries: the first failing stage fails the whole operation.

Example::

    tx_hash = await send_transaction({
        "from": "0x...",
        "privateKey": "...",
        "contractAddress": "0x...",
        "abi": artifact["abi"],
        "functionName": "double",
        "functionArguments": [21],
        "provider": "http://localhost:8545",
    })
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from .chain.abi import AbiEncoder
from .chain.codec import LegacyTransactionCodec
from .chain.rpc import RemoteNode
from .chain.submit import RemoteSubmitter
from .chain.tx import TransactionAssembler, encode_payload
from .params import CallParams, TransactionParams

logger = logging.getLogger(__name__)


def _transaction_params(params: Union[TransactionParams, Mapping[str, Any]]) -> TransactionParams:
    if isinstance(params, TransactionParams):
        return params
    return TransactionParams.from_dict(params)


def _call_params(params: Union[CallParams, Mapping[str, Any]]) -> CallParams:
    if isinstance(params, CallParams):
        return params
    return CallParams.from_dict(params)


async def _sign(
    params: TransactionParams,
    node: RemoteNode,
    encoder: AbiEncoder,
    codec: LegacyTransactionCodec,
) -> str:
    tx = await TransactionAssembler(node, encoder).assemble(
        params.call_request(),
        params.sender,
        value=params.value,
        gas_limit=params.gas_limit,
        chain_id=params.chain_id,
    )
    return codec.sign_and_serialize(
        tx,
        params.private_key,
        expected_sender=params.sender if params.check_sender else None,
    )


async def create_signed_raw_transaction(
    params: Union[TransactionParams, Mapping[str, Any]],
    *,
    encoder: Optional[AbiEncoder] = None,
    codec: Optional[LegacyTransactionCodec] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Assemble and sign a contract transaction without broadcasting it.

    Returns:
        0x-prefixed hex encoded signed transaction
    """
    params = _transaction_params(params)
    async with RemoteNode(params.provider, timeout=params.timeout, transport=transport) as node:
        return await _sign(params, node, encoder or AbiEncoder(), codec or LegacyTransactionCodec())


async def send_raw_transaction(
    raw_tx: str,
    provider: str,
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Broadcast an already signed transaction.

    Returns:
        Transaction hash (0x-prefixed, 66 characters)
    """
    async with RemoteNode(provider, timeout=timeout, transport=transport) as node:
        return await RemoteSubmitter(node).broadcast(raw_tx)


async def send_transaction(
    params: Union[TransactionParams, Mapping[str, Any]],
    *,
    encoder: Optional[AbiEncoder] = None,
    codec: Optional[LegacyTransactionCodec] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Create, sign and send a contract transaction.

    The nonce is read from the node on every call and never tracked
    locally; concurrent sends from one account must be serialized by
    the caller.

    Args:
        params: Mapping with from, privateKey, contractAddress, abi,
            functionName, functionArguments, provider and optionally
            value, gasLimit, chainId, checkSender, timeout
        encoder: ABI encoder capability
        codec: Transaction codec/signer capability
        transport: httpx transport for the remote node connection

    Returns:
        Transaction hash (0x-prefixed, 66 characters)

    Raises:
        ValidationError, InterfaceLookupError, EncodingError,
        RemoteQueryError, SigningError, BroadcastError, RemoteTimeoutError
    """
    params = _transaction_params(params)
    async with RemoteNode(params.provider, timeout=params.timeout, transport=transport) as node:
        raw_tx = await _sign(params, node, encoder or AbiEncoder(), codec or LegacyTransactionCodec())
        tx_hash = await RemoteSubmitter(node).broadcast(raw_tx)

    logger.info("Transaction sent: %s.%s hash=%s", params.contract_address, params.function_name, tx_hash)
    return tx_hash


async def call(
    params: Union[CallParams, Mapping[str, Any]],
    *,
    encoder: Optional[AbiEncoder] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Execute a read-only contract call.

    Args:
        params: Mapping with contractAddress, abi, functionName,
            functionArguments, provider and optionally timeout

    Returns:
        Raw hex return data as reported by the node (not ABI-decoded)

    Raises:
        ValidationError, InterfaceLookupError, EncodingError, CallError,
        RemoteTimeoutError
    """
    params = _call_params(params)
    payload = encode_payload(params.call_request(), encoder or AbiEncoder())

    async with RemoteNode(params.provider, timeout=params.timeout, transport=transport) as node:
        return await RemoteSubmitter(node).simulate(params.contract_address, payload)

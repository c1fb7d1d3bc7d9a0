"""
Public parameter records.

Callers pass the same camelCase mapping the JavaScript library accepted
(``from``, ``privateKey``, ``contractAddress``, ``abi``, ``functionName``,
``functionArguments``, ``provider``, ...). ``from_dict`` validates it
against the bundled JSON schema before any network access and returns a
closed, immutable record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .chain.abi import ContractInterface
from .chain.tx import CallRequest
from .exceptions import ValidationError
from .schemas import CALL_PARAMS_SCHEMA, TRANSACTION_PARAMS_SCHEMA, SchemaRegistry


def _normalize(payload: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            "Parameters must be a mapping",
            errors=[f"<root>: expected a mapping, got {type(payload).__name__}"],
        )
    normalized = dict(payload)
    for key in ("abi", "functionArguments"):
        if isinstance(normalized.get(key), tuple):
            normalized[key] = list(normalized[key])
    return normalized


@dataclass(frozen=True)
class CallParams:
    contract_address: str
    abi: list[dict[str, Any]]
    function_name: str
    function_arguments: list[Any]
    provider: str
    timeout: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], registry: SchemaRegistry | None = None) -> "CallParams":
        payload = _normalize(payload)
        registry = registry or SchemaRegistry.default()
        registry.validate_instance(payload, CALL_PARAMS_SCHEMA)
        return cls(
            contract_address=payload["contractAddress"],
            abi=payload["abi"],
            function_name=payload["functionName"],
            function_arguments=payload["functionArguments"],
            provider=payload["provider"],
            timeout=payload.get("timeout"),
        )

    def call_request(self) -> CallRequest:
        return CallRequest(
            contract_address=self.contract_address,
            interface=ContractInterface.from_abi(self.abi),
            function_name=self.function_name,
            arguments=list(self.function_arguments),
        )


@dataclass(frozen=True)
class TransactionParams:
    sender: str
    private_key: str = field(repr=False)
    contract_address: str
    abi: list[dict[str, Any]]
    function_name: str
    function_arguments: list[Any]
    provider: str
    value: int = 0
    gas_limit: Optional[int] = None
    chain_id: Optional[int] = None
    check_sender: bool = False
    timeout: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], registry: SchemaRegistry | None = None) -> "TransactionParams":
        payload = _normalize(payload)
        registry = registry or SchemaRegistry.default()
        registry.validate_instance(payload, TRANSACTION_PARAMS_SCHEMA)
        return cls(
            sender=payload["from"],
            private_key=payload["privateKey"],
            contract_address=payload["contractAddress"],
            abi=payload["abi"],
            function_name=payload["functionName"],
            function_arguments=payload["functionArguments"],
            provider=payload["provider"],
            value=int(payload.get("value", 0)),
            gas_limit=int(payload["gasLimit"]) if payload.get("gasLimit") is not None else None,
            chain_id=int(payload["chainId"]) if payload.get("chainId") is not None else None,
            check_sender=payload.get("checkSender", False),
            timeout=payload.get("timeout"),
        )

    def call_request(self) -> CallRequest:
        return CallRequest(
            contract_address=self.contract_address,
            interface=ContractInterface.from_abi(self.abi),
            function_name=self.function_name,
            arguments=list(self.function_arguments),
        )

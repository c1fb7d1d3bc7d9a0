"""Shared fixtures: a fake remote node served through httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import pytest
from eth_account import Account

from ethremote.chain.codec import transaction_hash

CONTRACT_ADDRESS = "0x13ab619da719796aa7a97bf046a51528ac11bd0f"
PROVIDER = "http://node.test:8545"
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

PONG_HEX = (
    "0x"
    "0000000000000000000000000000000000000000000000000000000000000020"
    "0000000000000000000000000000000000000000000000000000000000000004"
    "706f6e6700000000000000000000000000000000000000000000000000000000"
)

PARKOUR_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "ping",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "pure",
    },
    {
        "type": "function",
        "name": "double",
        "inputs": [{"name": "value", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "event",
        "name": "Doubled",
        "inputs": [{"name": "value", "type": "uint256", "indexed": False}],
        "anonymous": False,
    },
]


class FakeNode:
    """In-memory JSON-RPC node. Records every request it receives."""

    def __init__(
        self,
        nonce: int = 7,
        gas_price: int = 20_000_000_000,
        gas_estimate: int = 26_000,
        call_result: str = PONG_HEX,
    ) -> None:
        self.nonce = nonce
        self.gas_price = gas_price
        self.gas_estimate = gas_estimate
        self.call_result = call_result
        self.errors: dict[str, Any] = {}
        self.timeouts: set[str] = set()
        self.unreachable: set[str] = set()
        self.responses: dict[str, httpx.Response] = {}
        self.results: dict[str, Any] = {}
        self.requests: list[dict[str, Any]] = []
        self.transport = httpx.MockTransport(self.handle)

    @property
    def methods(self) -> list[str]:
        return [r["method"] for r in self.requests]

    def params_of(self, method: str) -> Optional[list]:
        for request in self.requests:
            if request["method"] == method:
                return request["params"]
        return None

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        method = body["method"]

        if method in self.timeouts:
            raise httpx.ReadTimeout("timed out", request=request)
        if method in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if method in self.responses:
            return self.responses[method]
        if method in self.errors:
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": body["id"], "error": self.errors[method]}
            )
        if method in self.results:
            result = self.results[method]
        elif method == "eth_getTransactionCount":
            result = hex(self.nonce)
        elif method == "eth_gasPrice":
            result = hex(self.gas_price)
        elif method == "eth_estimateGas":
            result = hex(self.gas_estimate)
        elif method == "eth_sendRawTransaction":
            result = transaction_hash(body["params"][0])
        elif method == "eth_call":
            result = self.call_result
        else:
            return httpx.Response(
                200,
                json={
                    "jsonrpc": "2.0",
                    "id": body["id"],
                    "error": {"code": -32601, "message": "method not found"},
                },
            )
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


@pytest.fixture()
def fake_node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def sender() -> str:
    return Account.from_key(PRIVATE_KEY).address


@pytest.fixture()
def call_params() -> dict[str, Any]:
    return {
        "contractAddress": CONTRACT_ADDRESS,
        "abi": PARKOUR_ABI,
        "functionName": "ping",
        "functionArguments": [],
        "provider": PROVIDER,
    }


@pytest.fixture()
def send_params(sender: str) -> dict[str, Any]:
    return {
        "contractAddress": CONTRACT_ADDRESS,
        "abi": PARKOUR_ABI,
        "functionName": "double",
        "functionArguments": [21],
        "provider": PROVIDER,
        "from": sender,
        "privateKey": PRIVATE_KEY,
    }

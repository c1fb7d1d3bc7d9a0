"""Exception hierarchy for ethremote."""

from __future__ import annotations

from typing import Any, Optional


class EthRemoteError(Exception):
    """Base exception for every failure surfaced by ethremote."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(EthRemoteError):
    """Raised when call parameters are missing or have the wrong shape."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message, {"errors": errors or []})
        self.errors = errors or []


class InterfaceLookupError(EthRemoteError):
    """Raised when a function name does not resolve to exactly one ABI entry."""

    def __init__(self, message: str, function_name: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, details)
        self.function_name = function_name


class EncodingError(EthRemoteError):
    """Raised when arguments do not match the function's declared inputs."""

    pass


class SigningError(EthRemoteError):
    """Raised when the private key is malformed or signing fails."""

    pass


class RemoteError(EthRemoteError):
    """Raised when the remote node fails or rejects a JSON-RPC request.

    ``rpc_error`` holds the node's error object exactly as it was returned.
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        endpoint: Optional[str] = None,
        rpc_error: Any = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details)
        self.method = method
        self.endpoint = endpoint
        self.rpc_error = rpc_error


class RemoteQueryError(RemoteError):
    """Raised when reading nonce, gas price or gas estimate fails."""

    pass


class BroadcastError(RemoteError):
    """Raised when the node rejects a raw transaction."""

    pass


class CallError(RemoteError):
    """Raised when a simulated call reverts or the node reports an error."""

    pass


class RemoteTimeoutError(RemoteError):
    """Raised when a JSON-RPC round trip exceeds its timeout."""

    pass


__all__ = [
    "EthRemoteError",
    "ValidationError",
    "InterfaceLookupError",
    "EncodingError",
    "SigningError",
    "RemoteError",
    "RemoteQueryError",
    "BroadcastError",
    "CallError",
    "RemoteTimeoutError",
]

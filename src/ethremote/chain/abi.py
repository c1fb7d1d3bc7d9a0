"""
ABI handling - function lookup, calldata encoding and result decoding.

The contract interface is supplied by the caller as plain data (the
``abi`` list of a Truffle/Foundry build artifact). ``load_abi`` is a
convenience for callers that keep the artifact on disk.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, ParseError
from eth_abi.exceptions import EncodingError as AbiEncodingError

from ..exceptions import EncodingError, InterfaceLookupError
from ..utils import hex_to_bytes, is_address, is_hex, keccak256, to_checksum_address

_ARRAY_SUFFIX_RE = re.compile(r"^(.*)\[(\d*)\]$")


def load_abi(path: Path) -> list[dict[str, Any]]:
    """
    Load a contract ABI from a JSON file.

    Accepts either a build artifact with an ``abi`` key or a bare ABI list.

    Args:
        path: Path to the JSON file

    Returns:
        ABI as a list of dicts

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no ABI
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"ABI not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    if isinstance(artifact, dict):
        artifact = artifact.get("abi")
    if not isinstance(artifact, list):
        raise ValueError(f"No ABI in {path}")

    return artifact


def canonical_type(param: Mapping[str, Any]) -> str:
    """Canonical type string of an ABI parameter, expanding tuples."""
    abi_type = param["type"]
    if not abi_type.startswith("tuple"):
        return abi_type
    suffix = abi_type[len("tuple"):]
    inner = ",".join(canonical_type(c) for c in param.get("components", []))
    return f"({inner}){suffix}"


@dataclass(frozen=True)
class FunctionDescriptor:
    name: str
    inputs: tuple[dict[str, Any], ...] = ()
    outputs: tuple[dict[str, Any], ...] = ()
    state_mutability: str = "nonpayable"

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> "FunctionDescriptor":
        mutability = entry.get("stateMutability")
        if mutability is None:
            # Pre-0.4.16 compiler output only has the constant/payable flags
            if entry.get("constant"):
                mutability = "view"
            elif entry.get("payable"):
                mutability = "payable"
            else:
                mutability = "nonpayable"
        return cls(
            name=entry["name"],
            inputs=tuple(entry.get("inputs", [])),
            outputs=tuple(entry.get("outputs", [])),
            state_mutability=mutability,
        )

    @property
    def input_types(self) -> list[str]:
        return [canonical_type(p) for p in self.inputs]

    @property
    def output_types(self) -> list[str]:
        return [canonical_type(p) for p in self.outputs]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return keccak256(self.signature.encode("utf-8"))[:4]


@dataclass(frozen=True)
class ContractInterface:
    """Ordered, immutable collection of a contract's function descriptors."""

    functions: tuple[FunctionDescriptor, ...]

    @classmethod
    def from_abi(cls, abi: Sequence[Mapping[str, Any]]) -> "ContractInterface":
        functions = tuple(
            FunctionDescriptor.from_entry(entry)
            for entry in abi
            if entry.get("type", "function") == "function" and "name" in entry
        )
        return cls(functions)

    def find_function(self, function_name: str) -> FunctionDescriptor:
        """
        Look up a function by exact name.

        Raises:
            InterfaceLookupError: If no entry matches, or several do (overloads)
        """
        matches = [f for f in self.functions if f.name == function_name]
        if not matches:
            raise InterfaceLookupError(
                f"Function {function_name} not found in ABI",
                function_name=function_name,
            )
        if len(matches) > 1:
            raise InterfaceLookupError(
                f"Function {function_name} is overloaded; lookup by name is ambiguous",
                function_name=function_name,
                details={"signatures": [f.signature for f in matches]},
            )
        return matches[0]


class AbiEncoder:
    """Encode calldata and decode return data with eth-abi."""

    def encode_call(self, descriptor: FunctionDescriptor, args: Sequence[Any]) -> str:
        """
        ABI-encode a function call.

        Args:
            descriptor: Function to call
            args: Function arguments, coerced to the declared input types

        Returns:
            0x-prefixed hex encoded calldata

        Raises:
            EncodingError: On argument count or type mismatch
        """
        args = list(args)
        if len(args) != len(descriptor.inputs):
            raise EncodingError(
                f"{descriptor.name} expects {len(descriptor.inputs)} arguments, got {len(args)}",
                details={"expected": len(descriptor.inputs), "received": len(args)},
            )

        try:
            input_types = descriptor.input_types
            values = [_coerce(param, arg) for param, arg in zip(descriptor.inputs, args)]
            encoded_args = encode(input_types, values) if values else b""
        except (AbiEncodingError, ParseError, KeyError, ValueError, TypeError) as exc:
            raise EncodingError(
                f"Cannot encode arguments for {descriptor.name}: {exc}",
                details={"inputs": list(descriptor.inputs)},
            ) from exc

        return "0x" + descriptor.selector.hex() + encoded_args.hex()

    def decode_result(self, descriptor: FunctionDescriptor, data: str) -> Any:
        """
        ABI-decode a function call result.

        Args:
            descriptor: Function that produced the data
            data: 0x-prefixed hex encoded return data

        Returns:
            Decoded result (single value, tuple, or None for no outputs)
        """
        output_types = descriptor.output_types
        if not output_types or data in ("", "0x"):
            return None

        try:
            decoded = decode(output_types, hex_to_bytes(data))
        except (DecodingError, ParseError, ValueError) as exc:
            raise EncodingError(
                f"Cannot decode result of {descriptor.signature}: {exc}",
                details={"types": output_types},
            ) from exc

        if len(decoded) == 1:
            return decoded[0]
        return decoded


def _coerce(param: Mapping[str, Any], value: Any) -> Any:
    """Coerce a human-supplied argument towards the ABI type eth-abi expects."""
    abi_type = param["type"]

    array = _ARRAY_SUFFIX_RE.match(abi_type)
    if array:
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"Expected a sequence for {abi_type}, got {type(value).__name__}")
        element = dict(param, type=array.group(1))
        return [_coerce(element, v) for v in value]

    if abi_type == "tuple":
        components = param.get("components", [])
        if isinstance(value, Mapping):
            value = [value[c["name"]] for c in components]
        if len(value) != len(components):
            raise ValueError(f"Expected {len(components)} tuple components, got {len(value)}")
        return tuple(_coerce(c, v) for c, v in zip(components, value))

    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 16) if value.startswith(("0x", "0X")) else int(value, 10)

    if abi_type.startswith("bytes") and isinstance(value, str):
        if not is_hex(value):
            raise ValueError(f"Expected hex string for {abi_type}: {value!r}")
        return hex_to_bytes(value)

    if abi_type == "address" and isinstance(value, str) and is_address(value):
        return to_checksum_address(value)

    return value

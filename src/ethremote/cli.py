"""
ethremote CLI

Command-line interface for calling contract functions through a remote node.

Commands:
  send     - Sign and broadcast a contract transaction
  call     - Make a read-only contract call
  address  - Show the address of the configured private key
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click

from . import __version__
from .chain.abi import AbiEncoder, ContractInterface, load_abi
from .config import PROVIDER_ENV_VAR
from .exceptions import EthRemoteError
from .keys import get_address, load_private_key
from .remote import call as remote_call
from .remote import send_transaction


def _parse_args(args_json: str) -> list[Any]:
    try:
        args = json.loads(args_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--args") from exc
    if not isinstance(args, list):
        raise click.BadParameter("Args must be a JSON array", param_hint="--args")
    return args


def _load_abi(abi_path: Path) -> list[dict[str, Any]]:
    try:
        return load_abi(abi_path)
    except (OSError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)


def _fail(exc: Exception) -> None:
    click.secho(f"ERROR: {exc}", fg="red")
    sys.exit(1)


def _format_value(value: Any) -> str:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


contract_options = [
    click.option("--contract", required=True, help="Target contract address"),
    click.option(
        "--abi",
        "abi_path",
        required=True,
        type=click.Path(dir_okay=False, path_type=Path),
        help="Build artifact or ABI JSON file",
    ),
    click.option("--function", "func_name", required=True, help="Function name to call"),
    click.option("--args", "args_json", default="[]", help="Function args as JSON array"),
    click.option(
        "--provider",
        envvar=PROVIDER_ENV_VAR,
        required=True,
        help="Remote node JSON-RPC URL",
    ),
    click.option("--timeout", default=None, type=float, help="Seconds per RPC round trip"),
]


def with_contract_options(func):
    for option in reversed(contract_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="ethremote")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Call smart contract functions through a remote Ethereum node."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@with_contract_options
@click.option("--value", default=0, type=click.IntRange(min=0), help="ETH value in wei")
@click.option("--gas-limit", default=None, type=click.IntRange(min=0), help="Gas limit (default: estimate)")
@click.option("--chain-id", default=None, type=click.IntRange(min=1), help="EIP-155 chain id")
@click.option("--from", "sender", default=None, help="Sender address (default: key's address)")
@click.option("--check-sender", is_flag=True, help="Fail if the key does not match --from")
def send(
    contract: str,
    abi_path: Path,
    func_name: str,
    args_json: str,
    provider: str,
    timeout: Optional[float],
    value: int,
    gas_limit: Optional[int],
    chain_id: Optional[int],
    sender: Optional[str],
    check_sender: bool,
) -> None:
    """
    Sign and broadcast a contract transaction.

    The private key is read from PRIVATE_KEY (environment or ./.env).
    Prints the transaction hash; does not wait for confirmation.
    """
    args = _parse_args(args_json)
    abi = _load_abi(abi_path)

    try:
        private_key = load_private_key()
        sender = sender or get_address(private_key)
    except (ValueError, EthRemoteError) as exc:
        _fail(exc)

    params: dict[str, Any] = {
        "from": sender,
        "privateKey": private_key,
        "contractAddress": contract,
        "abi": abi,
        "functionName": func_name,
        "functionArguments": args,
        "provider": provider,
        "value": value,
        "checkSender": check_sender,
    }
    if gas_limit is not None:
        params["gasLimit"] = gas_limit
    if chain_id is not None:
        params["chainId"] = chain_id
    if timeout is not None:
        params["timeout"] = timeout

    try:
        tx_hash = asyncio.run(send_transaction(params))
    except EthRemoteError as exc:
        _fail(exc)

    click.echo(tx_hash)


@cli.command()
@with_contract_options
@click.option("--decode", is_flag=True, help="ABI-decode the return data")
def call(
    contract: str,
    abi_path: Path,
    func_name: str,
    args_json: str,
    provider: str,
    timeout: Optional[float],
    decode: bool,
) -> None:
    """Make a read-only contract call and print the return data."""
    args = _parse_args(args_json)
    abi = _load_abi(abi_path)

    params: dict[str, Any] = {
        "contractAddress": contract,
        "abi": abi,
        "functionName": func_name,
        "functionArguments": args,
        "provider": provider,
    }
    if timeout is not None:
        params["timeout"] = timeout

    try:
        result = asyncio.run(remote_call(params))
        if decode:
            descriptor = ContractInterface.from_abi(abi).find_function(func_name)
            result = _format_value(AbiEncoder().decode_result(descriptor, result))
    except EthRemoteError as exc:
        _fail(exc)

    click.echo(result)


@cli.command()
def address() -> None:
    """Show the address of the configured private key."""
    try:
        click.echo(get_address(load_private_key()))
    except (ValueError, EthRemoteError) as exc:
        _fail(exc)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

"""
Private key loading for the command line.

The library operations take the private key as a plain parameter; this
module only exists so the CLI can read ``PRIVATE_KEY`` from the process
environment or a ``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from .exceptions import SigningError

DEFAULT_ENV_FILE = Path(".env")


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load private key from a .env file or the environment.

    Args:
        env_path: Path to .env file (default: ./.env)

    Returns:
        0x-prefixed hex private key

    Raises:
        ValueError: If PRIVATE_KEY is not set
    """
    env_path = env_path or DEFAULT_ENV_FILE

    if env_path.exists():
        load_dotenv(env_path, override=False)

    private_key = os.environ.get("PRIVATE_KEY")
    if not private_key:
        raise ValueError(f"PRIVATE_KEY not found. Set it in the environment or in {env_path}")

    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


def get_account(private_key: str) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Raises:
        SigningError: If the key is not a valid secp256k1 private key
    """
    try:
        return Account.from_key(private_key)
    except Exception as exc:
        raise SigningError("Invalid private key", details={"error": str(exc)}) from exc


def get_address(private_key: str) -> str:
    """Get the checksummed address for a private key."""
    return get_account(private_key).address

"""
Environment-backed defaults.

Every operation takes its settings per call; these helpers only supply
fallbacks for values the caller left out.
"""

from __future__ import annotations

import os
from typing import Optional

PROVIDER_ENV_VAR = "ETHREMOTE_PROVIDER"
TIMEOUT_ENV_VAR = "ETHREMOTE_RPC_TIMEOUT"

DEFAULT_RPC_TIMEOUT = 30.0  # seconds per JSON-RPC round trip


def get_rpc_timeout(timeout: Optional[float] = None) -> float:
    """
    Resolve the JSON-RPC timeout.

    Args:
        timeout: Explicit per-call timeout, wins when given

    Returns:
        Timeout in seconds
    """
    if timeout is not None:
        return float(timeout)
    raw = os.environ.get(TIMEOUT_ENV_VAR)
    if raw:
        return float(raw)
    return DEFAULT_RPC_TIMEOUT

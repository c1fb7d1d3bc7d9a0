__version__ = "1.0.0"

__all__ = [
    # Operations
    "send_transaction",
    "call",
    "create_signed_raw_transaction",
    "send_raw_transaction",
    # Parameters
    "TransactionParams",
    "CallParams",
    # Pipeline stages
    "AbiEncoder",
    "CallRequest",
    "ContractInterface",
    "FunctionDescriptor",
    "LegacyTransactionCodec",
    "RemoteNode",
    "RemoteSubmitter",
    "TransactionAssembler",
    "UnsignedTransaction",
    "decode_raw_transaction",
    "load_abi",
    # Errors
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

from .chain.abi import AbiEncoder, ContractInterface, FunctionDescriptor, load_abi
from .chain.codec import LegacyTransactionCodec, decode_raw_transaction
from .chain.rpc import RemoteNode
from .chain.submit import RemoteSubmitter
from .chain.tx import CallRequest, TransactionAssembler, UnsignedTransaction
from .exceptions import (
    BroadcastError,
    CallError,
    EncodingError,
    EthRemoteError,
    InterfaceLookupError,
    RemoteError,
    RemoteQueryError,
    RemoteTimeoutError,
    SigningError,
    ValidationError,
)
from .params import CallParams, TransactionParams
from .remote import call, create_signed_raw_transaction, send_raw_transaction, send_transaction

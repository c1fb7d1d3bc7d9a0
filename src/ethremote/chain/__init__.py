"""
Chain - transaction assembly, signing and remote submission.

Provides ABI handling, an async JSON-RPC client, the legacy transaction
codec and the submitter used by the public operations in ``ethremote.remote``.

Uses httpx + eth-account + eth-abi + rlp instead of the heavyweight web3.py.
"""

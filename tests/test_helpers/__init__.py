"""
Shared helpers for the ENS profile SDK tests.
"""
from .resolver_stub import (
    ALICE_ADDRESS,
    ALICE_ADDRESS_BYTES,
    OTHER_ADDRESS_BYTES,
    FakeContractCaller,
    bytes_result,
    multicall_response,
    text_result,
)

__all__ = [
    "ALICE_ADDRESS",
    "ALICE_ADDRESS_BYTES",
    "OTHER_ADDRESS_BYTES",
    "FakeContractCaller",
    "bytes_result",
    "multicall_response",
    "text_result",
]

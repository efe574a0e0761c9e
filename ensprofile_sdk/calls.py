"""
Build the ordered resolver calls for a requested record set.
"""
import logging
from typing import List, Optional, Sequence

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from .models import (
    CONTENT_HASH_KEY,
    PRIMARY_COIN_TYPE,
    CallDescriptor,
    RecordKind,
    RequestedRecordSet,
)

logger = logging.getLogger(__name__)

TEXT_SIGNATURE = "text(bytes32,string)"
ADDR_SIGNATURE = "addr(bytes32,uint256)"
CONTENTHASH_SIGNATURE = "contenthash(bytes32)"

TEXT_SELECTOR = function_signature_to_4byte_selector(TEXT_SIGNATURE)
ADDR_SELECTOR = function_signature_to_4byte_selector(ADDR_SIGNATURE)
CONTENTHASH_SELECTOR = function_signature_to_4byte_selector(CONTENTHASH_SIGNATURE)


def encode_text_call(node: bytes, key: str) -> bytes:
    return TEXT_SELECTOR + encode(["bytes32", "string"], [node, key])


def encode_addr_call(node: bytes, coin_type: str) -> bytes:
    return ADDR_SELECTOR + encode(["bytes32", "uint256"], [node, int(coin_type)])


def encode_contenthash_call(node: bytes) -> bytes:
    return CONTENTHASH_SELECTOR + encode(["bytes32"], [node])


def has_key(calls: Sequence[CallDescriptor], key: str, kind: Optional[RecordKind] = None) -> bool:
    """Whether any descriptor in ``calls`` carries ``key`` (and ``kind``, if given)."""
    return any(call.key == key and (kind is None or call.kind == kind) for call in calls)


def primary_address_index(calls: Sequence[CallDescriptor]) -> int:
    """Position of the first coin type 60 call."""
    for index, call in enumerate(calls):
        if call.kind == RecordKind.ADDR and call.key == PRIMARY_COIN_TYPE:
            return index
    raise ValueError("Batch has no primary address call")


def build_calls(records: RequestedRecordSet, node: bytes) -> List[CallDescriptor]:
    """
    Build resolver calls for ``records`` against ``node``.

    Texts come first, then coin types, then the content hash. The primary
    address (coin type 60) is appended once when it was not requested, so
    every batch can answer "what address does this name point to".

    Args:
        records: Records to fetch
        node: 32-byte namehash the calls are encoded against

    Returns:
        Call descriptors in batch order
    """
    calls: List[CallDescriptor] = []

    for key in records.texts or []:
        calls.append(CallDescriptor(
            key=key,
            kind=RecordKind.TEXT,
            encoded_call=encode_text_call(node, key),
        ))

    for coin_type in records.coin_types or []:
        calls.append(CallDescriptor(
            key=coin_type,
            kind=RecordKind.ADDR,
            encoded_call=encode_addr_call(node, coin_type),
        ))

    if records.wants_content_hash_call:
        calls.append(CallDescriptor(
            key=CONTENT_HASH_KEY,
            kind=RecordKind.CONTENTHASH,
            encoded_call=encode_contenthash_call(node),
        ))

    if not has_key(calls, PRIMARY_COIN_TYPE, RecordKind.ADDR):
        calls.append(CallDescriptor(
            key=PRIMARY_COIN_TYPE,
            kind=RecordKind.ADDR,
            encoded_call=encode_addr_call(node, PRIMARY_COIN_TYPE),
            implicit=True,
        ))

    logger.debug(f"Built {len(calls)} resolver calls")
    return calls

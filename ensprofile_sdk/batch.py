"""
Multicall batch codec.

Wraps the encoded resolver calls of a batch into one ``multicall(bytes[])``
payload and unwraps the aligned results again.
"""
import logging
from typing import List, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

from .exceptions import BatchDecodeError, DecodeMismatchError
from .models import CallDescriptor

logger = logging.getLogger(__name__)

MULTICALL_SIGNATURE = "multicall(bytes[])"
MULTICALL_SELECTOR = function_signature_to_4byte_selector(MULTICALL_SIGNATURE)


def encode_multicall(calls: Sequence[CallDescriptor]) -> bytes:
    """Encode ``calls`` as resolver ``multicall`` calldata, preserving order."""
    return MULTICALL_SELECTOR + encode(["bytes[]"], [[call.encoded_call for call in calls]])


def decode_multicall(response: bytes, calls: Sequence[CallDescriptor]) -> List[bytes]:
    """
    Decode a ``multicall`` return value into one result per call.

    Args:
        response: ABI-encoded ``bytes[]`` returned by the resolver
        calls: The descriptors the batch was built from

    Returns:
        Raw results, positionally aligned with ``calls``

    Raises:
        BatchDecodeError: If the response is not an ABI ``bytes[]``
        DecodeMismatchError: If the result count differs from the call count
    """
    try:
        (results,) = decode(["bytes[]"], bytes(response))
    except DecodingError as e:
        logger.error(f"Malformed multicall response: {e}")
        raise BatchDecodeError(f"Malformed multicall response: {str(e)}") from e
    return check_alignment(list(results), calls)


def check_alignment(results: List[bytes], calls: Sequence[CallDescriptor]) -> List[bytes]:
    if len(results) != len(calls):
        raise DecodeMismatchError(expected=len(calls), received=len(results))
    return results


def decode_bytes_result(result: bytes) -> bytes:
    """Decode an ABI ``bytes`` return value (``addr``/``contenthash``)."""
    try:
        return decode(["bytes"], bytes(result))[0]
    except DecodingError as e:
        raise BatchDecodeError(f"Malformed bytes result: {str(e)}") from e


def decode_string_result(result: bytes) -> str:
    """Decode an ABI ``string`` return value (``text``)."""
    try:
        return decode(["string"], bytes(result))[0]
    except DecodingError as e:
        raise BatchDecodeError(f"Malformed string result: {str(e)}") from e

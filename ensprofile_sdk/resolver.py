"""
On-chain forward (name -> profile) and reverse (address -> profile) paths.

Both build one multicall batch, send it through an injected ContractCaller
and format the aligned results. Transport failures propagate untouched.
"""
import logging
from typing import List, Optional, Sequence

from .address_codec import encode_evm_address
from .batch import check_alignment, decode_bytes_result, decode_multicall, encode_multicall
from .calls import build_calls, primary_address_index
from .contracts import ContractCaller
from .exceptions import AddressDecodeError
from .formatter import RecordFormatter, is_zero
from .models import (
    PRIMARY_COIN_TYPE,
    CallDescriptor,
    ForwardResolution,
    ProfileResult,
    RequestedRecordSet,
)
from .names import EMPTY_NODE, dns_encode, namehash, reverse_node_name

logger = logging.getLogger(__name__)


def primary_address(
    results: Sequence[bytes],
    calls: Sequence[CallDescriptor],
    formatter: RecordFormatter
) -> Optional[str]:
    """
    Checksummed primary address from a batch, or None when unset.

    Falls back to plain EIP-55 formatting when the registry has no format
    for coin type 60, and reports bytes that are not an address as unset.
    """
    raw = decode_bytes_result(results[primary_address_index(calls)])
    if is_zero(raw):
        return None
    try:
        if formatter.codecs.supports(PRIMARY_COIN_TYPE):
            return formatter.codecs.encode(PRIMARY_COIN_TYPE, raw)
        return encode_evm_address(raw)
    except AddressDecodeError as e:
        logger.warning(f"Ignoring malformed primary address record: {e}")
        return None


def resolve_name(
    caller: ContractCaller,
    name: str,
    records: RequestedRecordSet,
    formatter: RecordFormatter
) -> ForwardResolution:
    """
    Resolve ``records`` for ``name`` in one multicall.

    Args:
        caller: Contract-call capability
        name: Name to resolve
        records: Concrete records to fetch
        formatter: Formatter used for the results

    Returns:
        The primary address and the formatted records
    """
    calls = build_calls(records, namehash(name))
    response = caller.resolve(dns_encode(name), encode_multicall(calls))
    results = decode_multicall(response, calls)

    return ForwardResolution(
        address=primary_address(results, calls, formatter),
        records=formatter.format(results, calls, records),
    )


def resolve_address(
    caller: ContractCaller,
    address: str,
    records: RequestedRecordSet,
    formatter: RecordFormatter
) -> ProfileResult:
    """
    Resolve the primary name of ``address`` and its records.

    The name is only trusted when its coin type 60 record points back at
    ``address``; otherwise the result has ``match=False`` and no records.

    Args:
        caller: Contract-call capability
        address: 0x-prefixed hex address
        records: Concrete records to fetch
        formatter: Formatter used for the results

    Returns:
        Profile with ``name``, ``records`` and ``match``
    """
    reverse_name = reverse_node_name(address)
    calls = build_calls(records, EMPTY_NODE)

    name, raw_results = caller.reverse(
        dns_encode(reverse_name),
        [call.encoded_call for call in calls]
    )
    results: List[bytes] = check_alignment(list(raw_results), calls)
    name = name or None

    resolved = decode_bytes_result(results[primary_address_index(calls)])
    if "0x" + resolved.hex() != address.lower():
        logger.info(f"Reverse record for {address} does not resolve back to it (name={name})")
        return ProfileResult(name=name, records=None, match=False)

    return ProfileResult(
        name=name,
        records=formatter.format(results, calls, records),
        match=True,
    )

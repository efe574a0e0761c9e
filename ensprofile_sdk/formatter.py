"""
Turn raw multicall results into typed profile records.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from ._rate_limited_log import RateLimitedLog
from .address_codec import CodecRegistry, default_registry
from .batch import check_alignment, decode_bytes_result, decode_string_result
from .exceptions import AddressDecodeError, UnsupportedCoinTypeError
from .models import (
    CallDescriptor,
    ProfileRecords,
    RecordKind,
    RequestedRecordSet,
    ResolvedRecord,
)


def is_zero(raw: bytes) -> bool:
    """True for empty or all-zero byte values, which mean "unset"."""
    return not raw.strip(b"\x00")


def is_zero_hex(value: str) -> bool:
    digits = value[2:] if value.startswith("0x") else value
    return not digits.strip("0")


class RecordFormatter:
    """
    Decodes multicall results against their call descriptors.

    Unset values (empty text, all-zero bytes), addresses for coin types
    without a registered format and address bytes their format cannot render
    are dropped rather than reported.
    """

    def __init__(
        self,
        codecs: Optional[CodecRegistry] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.codecs = codecs or default_registry()
        self.logger = logger or logging.getLogger(__name__)
        self._drop_log = RateLimitedLog(logger_instance=self.logger)

    def decode_item(self, result: bytes, call: CallDescriptor) -> Optional[ResolvedRecord]:
        """
        Decode one result.

        Returns:
            The resolved record, or None if the record is unset, unsupported
            or undecodable

        Raises:
            BatchDecodeError: If the result is not valid ABI data for its kind
        """
        if call.kind == RecordKind.TEXT:
            text = decode_string_result(result)
            if text == "":
                return None
            return ResolvedRecord(key=call.key, kind=call.kind, value=text)

        if call.kind == RecordKind.ADDR:
            raw = decode_bytes_result(result)
            if is_zero(raw):
                return None
            try:
                coin_format = self.codecs.get(call.key)
            except UnsupportedCoinTypeError:
                self._drop_log.log(
                    f"Dropping address record for unsupported coin type {call.key}",
                    level="debug"
                )
                return None
            try:
                value = coin_format.encode(raw)
            except AddressDecodeError as e:
                self._drop_log.log(
                    f"Dropping undecodable {coin_format.name} address record: {e}",
                    level="warning"
                )
                return None
            return ResolvedRecord(
                key=call.key,
                kind=call.kind,
                coin=coin_format.name,
                value=value,
            )

        if call.kind == RecordKind.CONTENTHASH:
            raw = decode_bytes_result(result)
            if is_zero(raw):
                return None
            return ResolvedRecord(key=call.key, kind=call.kind, value="0x" + raw.hex())

        raise ValueError(f"Unknown record kind: {call.kind!r}")

    def format(
        self,
        results: Sequence[bytes],
        calls: Sequence[CallDescriptor],
        records: RequestedRecordSet
    ) -> ProfileRecords:
        """
        Build the record buckets for a batch.

        Only buckets present in ``records`` are set on the result. Records
        keep the order of the calls they came from.

        Args:
            results: Raw results aligned with ``calls``
            calls: Descriptors the batch was built from
            records: The record set the batch was built for

        Returns:
            Profile record buckets
        """
        check_alignment(list(results), calls)

        resolved: List[tuple] = []
        for result, call in zip(results, calls):
            record = self.decode_item(result, call)
            if record is not None:
                resolved.append((call, record))

        buckets: Dict[str, Any] = {}

        if records.has_literal_content_hash:
            literal = records.content_hash
            buckets["content_hash"] = None if is_zero_hex(literal) else literal
        elif records.wants_content_hash_call:
            found = next(
                (record for _, record in resolved if record.kind == RecordKind.CONTENTHASH),
                None
            )
            buckets["content_hash"] = found.value if found else None

        if records.texts is not None:
            buckets["texts"] = [
                record for _, record in resolved if record.kind == RecordKind.TEXT
            ]

        if records.coin_types is not None:
            buckets["coin_types"] = [
                record for call, record in resolved
                if record.kind == RecordKind.ADDR and not call.implicit
            ]

        self.logger.debug(
            f"Formatted {len(resolved)} of {len(calls)} records"
        )
        return ProfileRecords(**buckets)

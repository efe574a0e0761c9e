"""
Data models for the ENS profile SDK.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecordKind(str, Enum):
    """Resolver record kinds that can be batched into one multicall."""
    TEXT = "text"
    ADDR = "addr"
    CONTENTHASH = "contenthash"


CONTENT_HASH_KEY = "contentHash"
PRIMARY_COIN_TYPE = "60"


def _normalize_coin_types(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    normalized = []
    for item in value:
        if isinstance(item, bool):
            raise ValueError("coin type must be an integer, not a boolean")
        text = str(item).strip()
        if not text.isdigit():
            raise ValueError(f"coin type must be a non-negative integer, got {item!r}")
        normalized.append(str(int(text)))
    return normalized


class CallDescriptor(BaseModel):
    """One resolver call inside a multicall batch"""
    key: str
    kind: RecordKind
    encoded_call: bytes
    implicit: bool = False


class RequestedRecordSet(BaseModel):
    """
    Concrete set of records to fetch on-chain.

    ``content_hash`` is either a flag asking for the ``contenthash`` call or
    a literal ``0x`` hex hash that is already known and bypasses the call.
    """
    model_config = ConfigDict(populate_by_name=True)

    content_hash: Optional[Union[bool, str]] = Field(None, alias="contentHash")
    texts: Optional[List[str]] = None
    coin_types: Optional[List[str]] = Field(None, alias="coinTypes")

    @field_validator("coin_types", mode="before")
    @classmethod
    def _coin_types(cls, value: Any) -> Any:
        return _normalize_coin_types(value)

    @field_validator("content_hash")
    @classmethod
    def _content_hash(cls, value: Any) -> Any:
        if isinstance(value, str):
            digits = value[2:] if value.startswith("0x") else None
            if digits is None or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise ValueError(f"content hash literal must be 0x-prefixed hex, got {value!r}")
        return value

    @property
    def has_literal_content_hash(self) -> bool:
        return isinstance(self.content_hash, str)

    @property
    def wants_content_hash_call(self) -> bool:
        return self.content_hash is True


class ProfileOptions(BaseModel):
    """
    Caller-facing profile options.

    ``texts`` and ``coin_types`` take either an explicit list of keys or
    ``True`` for "every record the index knows about".
    """
    model_config = ConfigDict(populate_by_name=True)

    content_hash: bool = Field(False, alias="contentHash")
    texts: Optional[Union[bool, List[str]]] = None
    coin_types: Optional[Union[bool, List[str]]] = Field(None, alias="coinTypes")

    @field_validator("coin_types", mode="before")
    @classmethod
    def _coin_types(cls, value: Any) -> Any:
        return _normalize_coin_types(value)

    @classmethod
    def everything(cls) -> "ProfileOptions":
        return cls(content_hash=True, texts=True, coin_types=True)

    @property
    def wants_everything(self) -> bool:
        return self.texts is True or self.coin_types is True

    def to_requested(self) -> RequestedRecordSet:
        """Narrowed options as a concrete record set (boolean lists dropped)."""
        return RequestedRecordSet(
            content_hash=True if self.content_hash else None,
            texts=self.texts if isinstance(self.texts, list) else None,
            coin_types=self.coin_types if isinstance(self.coin_types, list) else None,
        )


class ResolvedRecord(BaseModel):
    """A decoded, non-empty resolver record"""
    key: str
    kind: RecordKind
    coin: Optional[str] = None
    value: str


class ProfileRecords(BaseModel):
    """Record buckets of a profile; only requested buckets are set."""
    model_config = ConfigDict(populate_by_name=True)

    content_hash: Optional[str] = Field(None, alias="contentHash")
    texts: Optional[List[ResolvedRecord]] = None
    coin_types: Optional[List[ResolvedRecord]] = Field(None, alias="coinTypes")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ProfileResult(BaseModel):
    """Profile returned by the orchestrator"""
    name: Optional[str] = None
    address: Optional[str] = None
    records: Optional[ProfileRecords] = None
    match: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ForwardResolution(BaseModel):
    """Result of the on-chain forward path"""
    address: Optional[str] = None
    records: ProfileRecords


class ResolverRecordBundle(BaseModel):
    """Record keys the subgraph has indexed for a name's resolver"""
    texts: List[str] = Field(default_factory=list)
    coin_types: List[str] = Field(default_factory=list)
    content_hash: Optional[str] = None
    addr_id: Optional[str] = None

    @field_validator("texts", mode="before")
    @classmethod
    def _texts(cls, value: Any) -> Any:
        return value or []

    @field_validator("coin_types", mode="before")
    @classmethod
    def _coin_types(cls, value: Any) -> Any:
        return _normalize_coin_types(value) or []

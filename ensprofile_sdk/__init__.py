"""
ENS profile SDK - resolve names and addresses to ENS profiles.
"""
from .address_codec import CodecRegistry, CoinFormat, default_registry, evm_coin_type
from .client import ProfileClient
from .contracts import ContractCaller, UniversalResolverCaller
from .exceptions import (
    AddressDecodeError,
    BatchDecodeError,
    DecodeMismatchError,
    GraphQueryError,
    InvalidOptionsError,
    ProfileDecodeError,
    ProfileError,
    TransportError,
    UnsupportedCoinTypeError,
)
from .graph import GraphClient
from .models import (
    CallDescriptor,
    ProfileOptions,
    ProfileRecords,
    ProfileResult,
    RecordKind,
    RequestedRecordSet,
    ResolvedRecord,
)
from .version import __version__

__all__ = [
    "ProfileClient",
    "GraphClient",
    "ContractCaller",
    "UniversalResolverCaller",
    "CodecRegistry",
    "CoinFormat",
    "default_registry",
    "evm_coin_type",
    "CallDescriptor",
    "ProfileOptions",
    "ProfileRecords",
    "ProfileResult",
    "RecordKind",
    "RequestedRecordSet",
    "ResolvedRecord",
    "ProfileError",
    "InvalidOptionsError",
    "TransportError",
    "GraphQueryError",
    "ProfileDecodeError",
    "BatchDecodeError",
    "DecodeMismatchError",
    "AddressDecodeError",
    "UnsupportedCoinTypeError",
    "__version__",
]

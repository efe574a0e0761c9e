"""
Exceptions for the ENS profile SDK.
"""
from typing import Optional


class ProfileError(Exception):
    """Base exception for profile resolution errors."""
    pass


class InvalidOptionsError(ProfileError, ValueError):
    """Raised when profile options or the lookup subject are malformed."""
    pass


class TransportError(ProfileError):
    """
    Base for index and transport errors raised by this package.

    Failures of the underlying web3 or requests transports are re-raised
    unchanged and do not carry this type.
    """
    pass


class GraphQueryError(TransportError):
    """Raised when the subgraph answers with a GraphQL error payload."""

    def __init__(self, message: str, errors: Optional[list] = None):
        self.errors = errors or []
        super().__init__(message)


class ProfileDecodeError(ProfileError):
    """Base exception for responses that cannot be decoded."""
    pass


class BatchDecodeError(ProfileDecodeError):
    """Raised when a multicall response is not valid ABI data."""
    pass


class DecodeMismatchError(ProfileDecodeError):
    """Raised when the response item count differs from the request count."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Resolver returned {received} results for {expected} calls"
        )


class AddressDecodeError(ProfileDecodeError):
    """Raised when a coin format cannot render the stored address bytes."""
    pass


class UnsupportedCoinTypeError(ProfileError):
    """Raised when no address format is registered for a coin type."""

    def __init__(self, coin_type: str):
        self.coin_type = coin_type
        super().__init__(f"Unsupported coin type: {coin_type}")

"""
Name helpers: namehash, DNS wire encoding and reverse-registry names.
"""
from ens import ENS
from ens.utils import dns_encode_name
from eth_utils import is_hex_address

from .exceptions import InvalidOptionsError

REVERSE_SUFFIX = ".addr.reverse"
EMPTY_NODE = b"\x00" * 32


def is_name(value: str) -> bool:
    """Anything containing a label separator is treated as a name."""
    return "." in value


def namehash(name: str) -> bytes:
    """EIP-137 namehash of ``name`` as 32 raw bytes."""
    return bytes(ENS.namehash(name))


def dns_encode(name: str) -> bytes:
    """DNS wire-format encoding expected by the Universal Resolver."""
    return bytes(dns_encode_name(name))


def reverse_node_name(address: str) -> str:
    """
    Reverse-registry name for an address.

    Args:
        address: 0x-prefixed hex address, any casing

    Returns:
        Lowercase hex without prefix followed by ``.addr.reverse``

    Raises:
        InvalidOptionsError: If the value is not a hex address
    """
    if not is_hex_address(address):
        raise InvalidOptionsError(f"Not a hex address: {address!r}")
    return address.lower()[2:] + REVERSE_SUFFIX

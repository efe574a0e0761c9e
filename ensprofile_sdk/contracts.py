"""
Contract-call capability backed by the ENS Universal Resolver.
"""
import logging
from typing import List, Optional, Protocol, Sequence, Tuple

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

# Universal Resolver on Ethereum mainnet
DEFAULT_UNIVERSAL_RESOLVER = "0xce01f8eee7E479C928F8919abD53E553a36CeF67"


class ContractCaller(Protocol):
    """Protocol for the on-chain call transport"""

    def resolve(self, encoded_name: bytes, data: bytes) -> bytes:
        """Run ``data`` against the resolver of a DNS-encoded name"""
        ...

    def reverse(self, encoded_reverse_name: bytes, calls: Sequence[bytes]) -> Tuple[str, List[bytes]]:
        """Resolve the name behind a reverse record and run ``calls`` against it"""
        ...


class UniversalResolverCaller:
    """
    ContractCaller that talks to a Universal Resolver through web3.

    Reverse calls are encoded against the empty node; the contract swaps in
    the node of the name it finds in the reverse registry before running them.
    Failures from web3 or the HTTP transport are logged and re-raised as-is.
    """

    UNIVERSAL_RESOLVER_ABI = [
        {
            "inputs": [
                {"internalType": "bytes", "name": "name", "type": "bytes"},
                {"internalType": "bytes", "name": "data", "type": "bytes"}
            ],
            "name": "resolve",
            "outputs": [
                {"internalType": "bytes", "name": "", "type": "bytes"},
                {"internalType": "address", "name": "", "type": "address"}
            ],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [
                {"internalType": "bytes", "name": "reverseName", "type": "bytes"},
                {"internalType": "bytes[]", "name": "data", "type": "bytes[]"}
            ],
            "name": "reverse",
            "outputs": [
                {"internalType": "string", "name": "", "type": "string"},
                {"internalType": "bytes[]", "name": "", "type": "bytes[]"},
                {"internalType": "address", "name": "", "type": "address"},
                {"internalType": "address", "name": "", "type": "address"}
            ],
            "stateMutability": "view",
            "type": "function"
        }
    ]

    def __init__(
        self,
        w3: Web3,
        address: str = DEFAULT_UNIVERSAL_RESOLVER,
        logger: Optional[logging.Logger] = None
    ):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.logger = logger or logging.getLogger(__name__)
        self.contract = self.w3.eth.contract(
            address=self.address,
            abi=self.UNIVERSAL_RESOLVER_ABI
        )

    @classmethod
    def from_rpc_url(
        cls,
        rpc_url: str,
        address: str = DEFAULT_UNIVERSAL_RESOLVER,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ) -> "UniversalResolverCaller":
        w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
        return cls(w3, address=address, logger=logger)

    def resolve(self, encoded_name: bytes, data: bytes) -> bytes:
        """
        Call ``resolve(bytes,bytes)``.

        Args:
            encoded_name: DNS wire-format name
            data: Calldata for the name's resolver

        Returns:
            The resolver's raw return data
        """
        self.logger.debug(f"resolve() with {len(data)} bytes of calldata")
        try:
            result, _resolver = self.contract.functions.resolve(encoded_name, data).call()
        except (Web3Exception, requests.RequestException) as e:
            self.logger.error(f"Universal resolver resolve() failed: {e}")
            raise
        return bytes(result)

    def reverse(self, encoded_reverse_name: bytes, calls: Sequence[bytes]) -> Tuple[str, List[bytes]]:
        """
        Call ``reverse(bytes,bytes[])``.

        Args:
            encoded_reverse_name: DNS wire-format ``<hex>.addr.reverse`` name
            calls: Resolver calldata encoded against the empty node

        Returns:
            The primary name and one raw result per call
        """
        self.logger.debug(f"reverse() with {len(calls)} calls")
        try:
            name, results, _reverse_resolver, _resolver = self.contract.functions.reverse(
                encoded_reverse_name,
                list(calls)
            ).call()
        except (Web3Exception, requests.RequestException) as e:
            self.logger.error(f"Universal resolver reverse() failed: {e}")
            raise
        return name, [bytes(result) for result in results]

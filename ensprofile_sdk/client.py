"""
ProfileClient - Main client for ENS profile lookups.
"""
import logging
import urllib.parse
from typing import Any, Dict, Optional, Tuple, Union

import requests

from .address_codec import CodecRegistry
from .contracts import DEFAULT_UNIVERSAL_RESOLVER, ContractCaller, UniversalResolverCaller
from .exceptions import InvalidOptionsError
from .formatter import RecordFormatter
from .graph import DEFAULT_GRAPH_URL, GraphClient, expand_requested_records
from .models import ProfileOptions, ProfileResult, RequestedRecordSet
from .names import is_name
from .resolver import resolve_address, resolve_name

OptionsLike = Union[ProfileOptions, Dict[str, Any], None]


def validate_url(url_name: str, url: str) -> None:
    """
    Require https:// unless the host is local.

    Raises:
        ValueError: If the URL uses another scheme for a remote host
    """
    parsed = urllib.parse.urlparse(url)
    host = parsed.hostname or ''
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not is_local:
        raise ValueError(f"{url_name} must use https:// for security (got: {parsed.scheme}://)")


class ProfileClient:
    """
    Resolves names and addresses to ENS profiles.

    Names (anything containing a ``.``) go through the forward path;
    everything else is treated as an address. When the caller asks for
    "all" texts or coin types, the subgraph is queried first to discover
    which keys exist, then every value is read on-chain.

    Each call runs its external requests one after another and keeps no
    state between calls. Nothing is retried.
    """

    def __init__(
        self,
        contract_caller: ContractCaller,
        graph_client: GraphClient,
        codecs: Optional[CodecRegistry] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ProfileClient

        Args:
            contract_caller: On-chain call capability
            graph_client: Subgraph query capability
            codecs: Address formats (defaults to the built-in registry)
            logger: Optional logger instance to use for debug/info logging
        """
        self.contract_caller = contract_caller
        self.graph_client = graph_client
        self.logger = logger or logging.getLogger(__name__)
        self.formatter = RecordFormatter(codecs=codecs, logger=self.logger)

    @classmethod
    def from_urls(
        cls,
        rpc_url: str,
        graph_url: str = DEFAULT_GRAPH_URL,
        universal_resolver: str = DEFAULT_UNIVERSAL_RESOLVER,
        timeout: int = 30,
        codecs: Optional[CodecRegistry] = None,
        logger: Optional[logging.Logger] = None
    ) -> "ProfileClient":
        """
        Build a client from endpoint URLs.

        Args:
            rpc_url: Ethereum RPC endpoint URL
            graph_url: ENS subgraph URL
            universal_resolver: Universal Resolver contract address
            timeout: Timeout for RPC and subgraph requests in seconds
            codecs: Address formats (defaults to the built-in registry)
            logger: Optional logger instance

        Raises:
            ValueError: If the URLs don't use https (unless they're localhost/127.0.0.1)
        """
        for url_name, url in [("rpc_url", rpc_url), ("graph_url", graph_url)]:
            validate_url(url_name, url)

        caller = UniversalResolverCaller.from_rpc_url(
            rpc_url,
            address=universal_resolver,
            timeout=timeout,
            logger=logger
        )
        graph = GraphClient(graph_url, session=requests.Session(), timeout=timeout, logger=logger)
        return cls(caller, graph, codecs=codecs, logger=logger)

    def get_profile(self, name_or_address: str, options: OptionsLike = None) -> ProfileResult:
        """
        Resolve a profile for a name or an address.

        Args:
            name_or_address: ``alice.eth`` or ``0x…``
            options: Records to fetch; ``None`` means everything

        Returns:
            For names: ``address`` and ``records``. For addresses: ``name``,
            ``records`` and ``match``; ``records`` is None when the reverse
            record could not be verified.

        Raises:
            InvalidOptionsError: If the options or the address are malformed
            ProfileDecodeError: If the resolver response cannot be decoded
        """
        if not isinstance(name_or_address, str) or not name_or_address:
            raise InvalidOptionsError("name_or_address must be a non-empty string")

        parsed = self._parse_options(options)
        if is_name(name_or_address):
            return self._profile_from_name(name_or_address, parsed)
        return self._profile_from_address(name_or_address, parsed)

    def get_name(self, address: str) -> Tuple[Optional[str], bool]:
        """
        Primary name of an address.

        Returns:
            ``(name, match)``; ``match`` is False when there is no name or the
            name does not resolve back to ``address``
        """
        result = resolve_address(
            self.contract_caller,
            address,
            RequestedRecordSet(),
            self.formatter
        )
        return result.name, bool(result.match)

    def _profile_from_name(self, name: str, options: Optional[ProfileOptions]) -> ProfileResult:
        records = self._wanted_records(name, options)
        forward = resolve_name(self.contract_caller, name, records, self.formatter)
        return ProfileResult(address=forward.address, records=forward.records)

    def _profile_from_address(self, address: str, options: Optional[ProfileOptions]) -> ProfileResult:
        if options is not None and not options.wants_everything:
            self.logger.debug(f"Narrowed options for {address}, using reverse batch")
            return resolve_address(
                self.contract_caller,
                address,
                options.to_requested(),
                self.formatter
            )

        name, match = self.get_name(address)
        if not match:
            self.logger.info(f"No verified primary name for {address}")
            return ProfileResult(name=name, records=None, match=False)

        records = self._wanted_records(name, options)
        forward = resolve_name(self.contract_caller, name, records, self.formatter)
        return ProfileResult(name=name, records=forward.records, match=True)

    def _wanted_records(self, name: str, options: Optional[ProfileOptions]) -> RequestedRecordSet:
        if options is not None and not options.wants_everything:
            return options.to_requested()
        self.logger.debug(f"Expanding records for {name} from the subgraph")
        return expand_requested_records(
            self.graph_client,
            name,
            options or ProfileOptions.everything()
        )

    @staticmethod
    def _parse_options(options: OptionsLike) -> Optional[ProfileOptions]:
        if options is None or isinstance(options, ProfileOptions):
            return options
        if isinstance(options, dict):
            try:
                return ProfileOptions.model_validate(options)
            except ValueError as e:
                raise InvalidOptionsError(f"Invalid profile options: {str(e)}") from e
        raise InvalidOptionsError(f"options must be a dict or ProfileOptions, got {type(options).__name__}")

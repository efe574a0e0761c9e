"""
Index shortcut through the ENS subgraph.

The subgraph tells us which record keys a name's resolver has ever set, so
that "all texts" or "all coin types" can be turned into explicit keys. The
values themselves are always read on-chain afterwards.
"""
import logging
from typing import Any, Dict, Optional

import requests

from .exceptions import GraphQueryError
from .models import ProfileOptions, RequestedRecordSet, ResolverRecordBundle

DEFAULT_GRAPH_URL = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"

RECORDS_QUERY = """
query getRecords($name: String!) {
  domains(where: { name: $name }) {
    resolver {
      texts
      coinTypes
      contentHash
      addr {
        id
      }
    }
  }
}
"""


class GraphClient:
    """
    Minimal GraphQL client for the ENS subgraph.

    Requests are sent once; HTTP and connection errors from ``requests``
    are logged and re-raised unchanged.
    """

    def __init__(
        self,
        graph_url: str = DEFAULT_GRAPH_URL,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        self.graph_url = graph_url
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a GraphQL query.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The ``data`` member of the response

        Raises:
            GraphQueryError: If the response is not JSON or carries ``errors``
            requests.RequestException: If the HTTP request fails
        """
        try:
            response = self.session.post(
                self.graph_url,
                json={"query": query, "variables": variables},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"Subgraph request failed: {e}")
            raise

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            self.logger.warning(f"Unexpected Content-Type: {content_type} (expected application/json)")

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON response from subgraph: {e}")
            raise GraphQueryError(f"Invalid JSON response from subgraph: {str(e)}") from e

        if payload.get("errors"):
            raise GraphQueryError(f"Subgraph returned errors: {payload['errors']}", errors=payload["errors"])

        return payload.get("data") or {}

    def fetch_resolver_records(self, name: str) -> ResolverRecordBundle:
        """
        Fetch the record keys indexed for ``name``'s resolver.

        A name the subgraph does not know, or one without a resolver, gives
        an empty bundle.
        """
        data = self.query(RECORDS_QUERY, {"name": name})
        domains = data.get("domains") or []
        resolver = domains[0].get("resolver") if domains else None
        if not resolver:
            self.logger.debug(f"No indexed resolver for {name}")
            return ResolverRecordBundle()

        return ResolverRecordBundle(
            texts=resolver.get("texts"),
            coin_types=resolver.get("coinTypes"),
            content_hash=resolver.get("contentHash"),
            addr_id=(resolver.get("addr") or {}).get("id"),
        )


def expand_requested_records(
    graph: GraphClient,
    name: str,
    options: ProfileOptions
) -> RequestedRecordSet:
    """
    Replace every "all" flag in ``options`` with the keys the index knows.

    Explicit key lists are kept as given. A requested content hash becomes
    the indexed literal, or ``"0x"`` (unset) if the index has none.

    Args:
        graph: Subgraph client
        name: Name to look up
        options: Caller options

    Returns:
        A concrete record set for the forward resolver
    """
    bundle = graph.fetch_resolver_records(name)

    def concrete(wanted, indexed):
        if wanted is True:
            return list(indexed)
        return wanted if isinstance(wanted, list) else None

    return RequestedRecordSet(
        content_hash=(bundle.content_hash or "0x") if options.content_hash else None,
        texts=concrete(options.texts, bundle.texts),
        coin_types=concrete(options.coin_types, bundle.coin_types),
    )

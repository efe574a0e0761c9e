#!/usr/bin/env python3
"""
Look up an ENS profile by name or address.

Usage:
    RPC_URL=https://... python examples/profile_lookup.py vitalik.eth
    RPC_URL=https://... python examples/profile_lookup.py 0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045
"""
import json
import logging
import os
import sys

from ensprofile_sdk import ProfileClient


def main():
    """
    Demonstrate basic usage of the ProfileClient.

    This example shows how to:
    1. Initialize the client from endpoint URLs
    2. Fetch a full profile (subgraph discovery + on-chain values)
    3. Fetch a narrowed profile with a single batched call
    """
    if len(sys.argv) != 2:
        print(__doc__)
        return

    RPC_URL = os.environ.get("RPC_URL")
    GRAPH_URL = os.environ.get("GRAPH_URL", "https://api.thegraph.com/subgraphs/name/ensdomains/ens")
    if not RPC_URL:
        print("ERROR: RPC_URL environment variable is required")
        return

    logging.basicConfig(level=logging.DEBUG if os.environ.get("DEBUG") else logging.INFO)
    client = ProfileClient.from_urls(RPC_URL, GRAPH_URL)
    subject = sys.argv[1]

    print("Full profile:")
    print(json.dumps(client.get_profile(subject).to_dict(), indent=2))

    print("Narrowed profile:")
    narrowed = client.get_profile(subject, {"texts": ["url", "avatar"], "coinTypes": ["60", "0"]})
    print(json.dumps(narrowed.to_dict(), indent=2))


if __name__ == "__main__":
    main()

"""
Pytest fixtures for the ENS profile SDK tests.
"""
import pytest
import requests

from ensprofile_sdk.client import ProfileClient
from ensprofile_sdk.formatter import RecordFormatter
from ensprofile_sdk.graph import GraphClient
from tests.test_helpers import ALICE_ADDRESS_BYTES, FakeContractCaller

TEST_RPC_URL = "https://rpc.example.com"
TEST_GRAPH_URL = "https://graph.example.com/subgraphs/name/ensdomains/ens"
CONTENT_HASH = bytes.fromhex("e301017012201687de19f1516b9e560ab8655faa678e3a023ebff43494ac06a36581aafc957e")


@pytest.fixture
def formatter():
    """Formatter with the built-in coin formats"""
    return RecordFormatter()


@pytest.fixture
def alice_records():
    """Records stored on alice.eth's resolver"""
    return {
        ("text", "email"): "",
        ("text", "url"): "https://alice.example",
        ("text", "com.twitter"): "alice",
        ("addr", "60"): ALICE_ADDRESS_BYTES,
        ("addr", "0"): bytes.fromhex("76a914" + "22" * 20 + "88ac"),
        ("contenthash",): CONTENT_HASH,
    }


@pytest.fixture
def fake_caller(alice_records):
    """Contract caller answering from alice_records, reverse name alice.eth"""
    return FakeContractCaller(alice_records, reverse_name="alice.eth")


@pytest.fixture
def graph_client():
    """Subgraph client on its own session, for use with requests_mock"""
    return GraphClient(TEST_GRAPH_URL, session=requests.Session(), timeout=5)


@pytest.fixture
def mock_subgraph(requests_mock):
    """Subgraph that knows alice.eth's record keys"""
    def respond(request, context):
        context.headers["Content-Type"] = "application/json"
        name = request.json()["variables"]["name"]
        if name != "alice.eth":
            return {"data": {"domains": []}}
        return {
            "data": {
                "domains": [{
                    "resolver": {
                        "texts": ["url", "email", "com.twitter"],
                        "coinTypes": ["60", "0"],
                        "contentHash": "0x" + CONTENT_HASH.hex(),
                        "addr": {"id": "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"},
                    }
                }]
            }
        }

    return requests_mock.post(TEST_GRAPH_URL, json=respond, status_code=200)


@pytest.fixture
def client(fake_caller, graph_client):
    """ProfileClient wired to the fake resolver and the test subgraph URL"""
    return ProfileClient(fake_caller, graph_client)

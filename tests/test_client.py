"""
Tests for the ProfileClient orchestrator.
"""
import pytest
import requests
from unittest.mock import patch

from ensprofile_sdk import ProfileClient, ProfileOptions
from ensprofile_sdk.exceptions import InvalidOptionsError
from ensprofile_sdk.graph import GraphClient
from ensprofile_sdk.resolver import resolve_name as real_resolve_name
from tests.conftest import CONTENT_HASH, TEST_GRAPH_URL, TEST_RPC_URL
from tests.test_helpers import ALICE_ADDRESS, ALICE_ADDRESS_BYTES, OTHER_ADDRESS_BYTES, FakeContractCaller


class TestNamePath:

    def test_everything_by_default(self, client, mock_subgraph):
        result = client.get_profile("alice.eth")

        assert result.address == ALICE_ADDRESS
        assert result.match is None
        assert result.records.content_hash == "0x" + CONTENT_HASH.hex()
        assert [r.key for r in result.records.texts] == ["url", "com.twitter"]
        assert [r.coin for r in result.records.coin_types] == ["ETH", "BTC"]
        assert mock_subgraph.call_count == 1

    def test_index_concretises_coin_types(self, client, mock_subgraph):
        """Forward resolver receives the indexed coin types, not the flag"""
        with patch("ensprofile_sdk.client.resolve_name", wraps=real_resolve_name) as spy:
            client.get_profile("alice.eth")

        records = spy.call_args.args[2]
        assert records.coin_types == ["60", "0"]
        assert records.texts == ["url", "email", "com.twitter"]

    def test_narrowed_options_skip_the_index(self, client, requests_mock):
        result = client.get_profile("alice.eth", {"texts": ["email"], "coinTypes": ["60"]})

        assert requests_mock.call_count == 0
        assert result.to_dict() == {
            "address": ALICE_ADDRESS,
            "records": {
                "texts": [],
                "coinTypes": [{"key": "60", "kind": "addr", "coin": "ETH", "value": ALICE_ADDRESS}],
            },
        }

    def test_texts_all_with_explicit_coins(self, client, mock_subgraph):
        result = client.get_profile("alice.eth", ProfileOptions(texts=True, coin_types=["0"]))

        assert [r.key for r in result.records.texts] == ["url", "com.twitter"]
        assert [r.key for r in result.records.coin_types] == ["0"]
        assert "contentHash" not in result.records.to_dict()

    def test_segwit_btc_record_keeps_profile(self, graph_client):
        caller = FakeContractCaller({
            ("text", "url"): "https://alice.example",
            ("addr", "60"): ALICE_ADDRESS_BYTES,
            ("addr", "0"): b"\x00\x14" + b"\x22" * 20,
        })
        client = ProfileClient(caller, graph_client)

        result = client.get_profile("alice.eth", {"texts": ["url"], "coinTypes": ["0"]})

        assert result.address == ALICE_ADDRESS
        assert result.records.texts[0].value == "https://alice.example"
        btc = result.records.coin_types[0]
        assert btc.coin == "BTC"
        assert btc.value.startswith("bc1q")

    def test_unrenderable_btc_record_is_left_out(self, graph_client):
        caller = FakeContractCaller({
            ("text", "url"): "https://alice.example",
            ("addr", "60"): ALICE_ADDRESS_BYTES,
            ("addr", "0"): b"\x6a\x04abcd",
        })
        client = ProfileClient(caller, graph_client)

        result = client.get_profile("alice.eth", {"texts": ["url"], "coinTypes": ["0"]})

        assert result.address == ALICE_ADDRESS
        assert result.records.coin_types == []
        assert result.records.texts[0].value == "https://alice.example"

    def test_index_failure_propagates(self, client, requests_mock, fake_caller):
        requests_mock.post(TEST_GRAPH_URL, status_code=500)

        with pytest.raises(requests.HTTPError):
            client.get_profile("alice.eth")
        fake_caller.resolve.assert_not_called()


class TestAddressPath:

    def test_everything_for_verified_address(self, client, mock_subgraph, fake_caller):
        result = client.get_profile(ALICE_ADDRESS)

        assert result.name == "alice.eth"
        assert result.match is True
        assert [r.key for r in result.records.texts] == ["url", "com.twitter"]
        fake_caller.reverse.assert_called_once()
        fake_caller.resolve.assert_called_once()

    def test_unverified_name_stops_early(self, graph_client, requests_mock):
        caller = FakeContractCaller({("addr", "60"): OTHER_ADDRESS_BYTES}, reverse_name="alice.eth")
        client = ProfileClient(caller, graph_client)

        result = client.get_profile(ALICE_ADDRESS)

        assert result.to_dict() == {"name": "alice.eth", "records": None, "match": False}
        assert requests_mock.call_count == 0
        caller.resolve.assert_not_called()

    def test_no_name(self, graph_client):
        client = ProfileClient(FakeContractCaller({}, reverse_name=""), graph_client)

        result = client.get_profile(ALICE_ADDRESS)

        assert result.name is None
        assert result.records is None
        assert result.match is False

    def test_narrowed_options_use_reverse_batch(self, client, fake_caller, requests_mock):
        result = client.get_profile(ALICE_ADDRESS, {"texts": ["url"], "contentHash": True})

        assert result.match is True
        assert result.records.texts[0].value == "https://alice.example"
        assert result.records.content_hash == "0x" + CONTENT_HASH.hex()
        fake_caller.resolve.assert_not_called()
        assert requests_mock.call_count == 0

    def test_get_name(self, client):
        assert client.get_name(ALICE_ADDRESS) == ("alice.eth", True)

    def test_invalid_address(self, client):
        with pytest.raises(InvalidOptionsError):
            client.get_profile("not-an-address")


class TestOptions:

    def test_rejects_bad_option_types(self, client):
        with pytest.raises(InvalidOptionsError):
            client.get_profile("alice.eth", ["texts"])

    def test_rejects_bad_coin_types(self, client):
        with pytest.raises(InvalidOptionsError):
            client.get_profile("alice.eth", {"coinTypes": ["eth"]})

    def test_rejects_empty_subject(self, client):
        with pytest.raises(InvalidOptionsError):
            client.get_profile("")


class TestFromUrls:

    @patch("ensprofile_sdk.client.UniversalResolverCaller")
    def test_from_urls(self, MockCaller):
        client = ProfileClient.from_urls(TEST_RPC_URL, TEST_GRAPH_URL, timeout=7)

        MockCaller.from_rpc_url.assert_called_once()
        assert MockCaller.from_rpc_url.call_args.kwargs["timeout"] == 7
        assert isinstance(client.graph_client, GraphClient)
        assert client.graph_client.graph_url == TEST_GRAPH_URL

    @pytest.mark.parametrize("rpc_url,graph_url", [
        ("http://rpc.example.com", TEST_GRAPH_URL),
        (TEST_RPC_URL, "http://graph.example.com"),
    ])
    def test_insecure_urls_rejected(self, rpc_url, graph_url):
        with pytest.raises(ValueError, match="must use https"):
            ProfileClient.from_urls(rpc_url, graph_url)

    @patch("ensprofile_sdk.client.UniversalResolverCaller")
    def test_localhost_allowed(self, MockCaller):
        ProfileClient.from_urls("http://localhost:8545", "http://127.0.0.1:8000/subgraphs/name/ens")
        MockCaller.from_rpc_url.assert_called_once()

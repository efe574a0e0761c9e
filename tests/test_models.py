"""
Tests for the data models.
"""
import pytest
from pydantic import ValidationError

from ensprofile_sdk.models import (
    ProfileOptions,
    ProfileRecords,
    RequestedRecordSet,
    ResolverRecordBundle,
)


def test_requested_record_set_aliases_and_coin_normalisation():
    records = RequestedRecordSet.model_validate({"coinTypes": [60, "0", "0061"], "contentHash": True})

    assert records.coin_types == ["60", "0", "61"]
    assert records.wants_content_hash_call
    assert not records.has_literal_content_hash


def test_literal_content_hash():
    records = RequestedRecordSet(content_hash="0xe301")

    assert records.has_literal_content_hash
    assert not records.wants_content_hash_call


@pytest.mark.parametrize("value", ["e301", "0xzz", "ipfs://x"])
def test_literal_content_hash_must_be_hex(value):
    with pytest.raises(ValidationError):
        RequestedRecordSet(content_hash=value)


@pytest.mark.parametrize("value", [["eth"], [True], ["-1"]])
def test_bad_coin_types(value):
    with pytest.raises(ValidationError):
        RequestedRecordSet(coin_types=value)


def test_profile_options_everything():
    options = ProfileOptions.everything()

    assert options.wants_everything
    assert options.content_hash is True


@pytest.mark.parametrize("options,expected", [
    (ProfileOptions(texts=True), True),
    (ProfileOptions(coin_types=True), True),
    (ProfileOptions(texts=["url"], coin_types=["60"]), False),
    (ProfileOptions(content_hash=True), False),
])
def test_wants_everything(options, expected):
    assert options.wants_everything is expected


def test_to_requested_drops_flags():
    options = ProfileOptions(texts=False, coin_types=["60"], content_hash=True)

    records = options.to_requested()

    assert records.texts is None
    assert records.coin_types == ["60"]
    assert records.content_hash is True


def test_profile_records_dump_only_set_buckets():
    assert ProfileRecords(texts=[]).to_dict() == {"texts": []}
    assert ProfileRecords(content_hash=None).to_dict() == {"contentHash": None}
    assert ProfileRecords().to_dict() == {}


def test_bundle_defaults():
    bundle = ResolverRecordBundle(texts=None, coin_types=None)
    assert bundle.texts == []
    assert bundle.coin_types == []

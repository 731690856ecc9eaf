import pytest
import responses

from bl3shift.catalog import CodeCatalog, parse_code_entry
from bl3shift.exceptions import FetchError
from tests.conftest import CODE_LIST_URL

CODE_LIST = [{
    "meta": {"version": "0.1", "description": "SHiFT codes for Borderlands 3"},
    "codes": [
        {
            "code": "WJCBB-WRXS9-R35ZW-HT5TJ-9HJ59",
            "type": "shift",
            "game": "Borderlands 3",
            "platform": "Universal",
            "reward": "1 Gold Key",
            "expires": "Unknown",
        },
        {
            "code": "KSW3T-T59JS-CWF96-RBJ33-T3FCW",
            "type": "shift",
            "game": "Borderlands 3",
            "platform": "Epic",
            "reward": "Snowglobe ECHO Skin",
        },
        {"type": "shift", "platform": "Steam", "reward": "broken entry"},
        {"code": "Z9Z9Z-Z9Z9Z-Z9Z9Z-Z9Z9Z-Z9Z9Z", "reward": "3 Golden Keys"},
    ],
}]


@pytest.fixture
def catalog(config):
    return CodeCatalog(config)


@responses.activate
def test_fetch_codes(catalog):
    responses.add(responses.GET, CODE_LIST_URL, json=CODE_LIST)

    codes = catalog.fetch_codes()

    assert [c.code for c in codes] == [
        "WJCBB-WRXS9-R35ZW-HT5TJ-9HJ59",
        "KSW3T-T59JS-CWF96-RBJ33-T3FCW",
        "Z9Z9Z-Z9Z9Z-Z9Z9Z-Z9Z9Z-Z9Z9Z",
    ]

    universal = codes[0]
    assert universal.is_universal
    assert universal.platforms == []
    assert universal.reward == "1 Gold Key"

    epic = codes[1]
    assert not epic.is_universal
    assert epic.platforms == ["epic"]

    no_platform = codes[2]
    assert not no_platform.is_universal
    assert no_platform.platforms == []


@responses.activate
def test_fetch_codes_empty_list(catalog):
    responses.add(responses.GET, CODE_LIST_URL, json=[])

    assert catalog.fetch_codes() == []


@responses.activate
def test_fetch_codes_bad_status(catalog):
    responses.add(responses.GET, CODE_LIST_URL, status=500, body="")

    with pytest.raises(FetchError, match="unexpected code 500"):
        catalog.fetch_codes()


@responses.activate
def test_fetch_codes_invalid_json(catalog):
    responses.add(responses.GET, CODE_LIST_URL, body="not JSON")

    with pytest.raises(FetchError, match="could not JSON decode"):
        catalog.fetch_codes()


@responses.activate
def test_fetch_codes_unexpected_shape(catalog):
    responses.add(responses.GET, CODE_LIST_URL, json={"codes": []})

    with pytest.raises(FetchError, match="JSON array"):
        catalog.fetch_codes()


def test_parse_code_entry_rejects_non_string_code():
    assert parse_code_entry({"code": 12345, "platform": "steam"}) is None
    assert parse_code_entry("ABCDE") is None


def test_parse_code_entry_is_case_insensitive_for_universal():
    assert parse_code_entry({"code": "ABCDE", "platform": " UNIVERSAL "}).is_universal

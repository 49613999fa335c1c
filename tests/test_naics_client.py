from __future__ import annotations

import pytest
import requests

from countyscope.ingestion.naics_client import NaicsClient, extract_records, record_code, record_title
from tests.conftest import FakeResp, FakeSession


def _client(handler) -> NaicsClient:
    client = NaicsClient(base_url="https://naics.test/dataHandler.php", year="2022")
    fake = FakeSession(handler)
    fake.headers = client.session.headers
    client.session = fake
    return client


def test_extract_records_accepts_object_or_array() -> None:
    as_object = {"result": {"0": {"naics22": "62"}, "1": {"naics22": "11"}, "2": "junk"}}
    as_array = {"result": [{"naics22": "62"}, None]}

    assert extract_records(as_object) == [{"naics22": "62"}, {"naics22": "11"}]
    assert extract_records(as_array) == [{"naics22": "62"}]
    assert extract_records({"result": None}) == []
    assert extract_records([]) == []


def test_record_helpers() -> None:
    rec = {"naics22": 621, "title": "", "index_desc": " Ambulatory "}

    assert record_code(rec, "code", "naics22") == "621"
    assert record_title(rec) == "Ambulatory"
    assert record_code({}, "code") == ""


def test_search_sends_year_input_and_chart() -> None:
    client = _client(lambda url, params, headers: FakeResp(200, {"result": [{"code": "62"}]}))

    records = client.search("", chart=True)

    assert records == [{"code": "62"}]
    assert client.session.calls[0]["params"] == {"search": "2022", "input": "", "chart": "chart"}
    assert client.session.headers["User-Agent"] == "naics-collector/1.0"
    assert client.session.headers["Accept"] == "application/json"


def test_search_raises_on_http_error_and_bad_json() -> None:
    with pytest.raises(requests.exceptions.HTTPError):
        _client(lambda url, params, headers: FakeResp(503, text="down")).search("62")

    with pytest.raises(ValueError):
        _client(lambda url, params, headers: FakeResp(200, text="<html>")).search("62")

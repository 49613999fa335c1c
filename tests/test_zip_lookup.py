from __future__ import annotations

import pytest
import requests

from countyscope.errors import HudLookupError
from countyscope.ingestion.hud_client import HudClient, normalize_zip
from countyscope.models import CountyInfo
from countyscope.services.zip_lookup import ZipCountyResolver, fallback_county
from tests.conftest import FakeResp, FakeSession


def _hud(handler, token: str | None = "tok") -> HudClient:
    client = HudClient(token=token, base_url="https://hud.test/usps")
    client.session = FakeSession(handler)
    return client


def test_normalize_zip() -> None:
    assert normalize_zip("02459") == "02459"
    assert normalize_zip("2459") == "02459"
    assert normalize_zip(" 02459-1234 ") == "02459"
    assert normalize_zip(None) == "00000"


def test_lookup_county_parses_geoid() -> None:
    payload = {"data": {"results": [{"geoid": "25017", "county_name": "MIDDLESEX", "state_name": "MA"}]}}
    client = _hud(lambda url, params, headers: FakeResp(200, payload))

    county = client.lookup_county("2459")

    assert county == CountyInfo("25", "017", "MIDDLESEX, MA")
    call = client.session.calls[0]
    assert call["params"] == {"type": 2, "query": "02459"}
    assert call["headers"]["Authorization"] == "Bearer tok"


@pytest.mark.parametrize(
    "resp, message",
    [
        (FakeResp(401, text="unauthorized"), "HUD API query failed: 401"),
        (FakeResp(200, {"data": {"results": []}}), "not found in HUD database"),
        (FakeResp(200, {"data": {"results": [{"geoid": "250"}]}}), "Could not determine county FIPS"),
        (FakeResp(200, text="not json"), "invalid JSON"),
    ],
)
def test_lookup_county_raises_on_bad_responses(resp, message) -> None:
    client = _hud(lambda url, params, headers: resp)

    with pytest.raises(HudLookupError, match=message):
        client.lookup_county("02459")


def test_resolver_uses_hud_when_available() -> None:
    payload = {"data": {"results": [{"geoid": "48201", "county_name": "HARRIS", "state_name": "TX"}]}}
    resolver = ZipCountyResolver(hud_client=_hud(lambda url, params, headers: FakeResp(200, payload)))

    assert resolver.resolve("77002").geoid == "48201"


def test_resolver_falls_back_to_static_table() -> None:
    def handler(url, params, headers):
        raise requests.exceptions.ConnectionError("down")

    resolver = ZipCountyResolver(hud_client=_hud(handler))

    county = resolver.resolve("10001")
    assert county == CountyInfo("36", "061", "New York County, NY")


def test_resolver_returns_none_for_unknown_zip() -> None:
    resolver = ZipCountyResolver(hud_client=_hud(lambda url, params, headers: FakeResp(403, text="no")))

    assert resolver.resolve("99999") is None


def test_fallback_table() -> None:
    assert fallback_county("02459").name == "Middlesex County, MA"
    assert fallback_county("20810").name == "Montgomery County, MD"
    assert fallback_county("12345") is None


def test_resolver_skips_hud_without_token() -> None:
    client = _hud(lambda url, params, headers: FakeResp(200, {}), token=None)
    resolver = ZipCountyResolver(hud_client=client)

    assert resolver.resolve("98101").name == "King County, WA"
    assert client.session.calls == []


def test_lookup_county_rejects_non_list_results() -> None:
    client = _hud(lambda url, params, headers: FakeResp(200, {"data": {"results": {"x": 1}}}))

    with pytest.raises(HudLookupError, match="not found in HUD database"):
        client.lookup_county("10001")


def test_resolver_falls_back_on_unexpected_hud_payload() -> None:
    resolver = ZipCountyResolver(
        hud_client=_hud(lambda url, params, headers: FakeResp(200, {"data": {"results": {"x": 1}}}))
    )

    assert resolver.resolve("10001") == CountyInfo("36", "061", "New York County, NY")


def test_resolver_falls_back_on_any_hud_error() -> None:
    def handler(url, params, headers):
        raise KeyError("geoid")

    resolver = ZipCountyResolver(hud_client=_hud(handler))

    assert resolver.resolve("60601").name == "Cook County, IL"

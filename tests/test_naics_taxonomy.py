from __future__ import annotations

import requests

from countyscope.models import NaicsCode
from countyscope.services.naics_taxonomy import (
    FALLBACK_SECTORS,
    NaicsTaxonomyService,
    child_search_terms,
)
from tests.conftest import FakeNaicsClient


def _service(client: FakeNaicsClient, cache) -> NaicsTaxonomyService:
    return NaicsTaxonomyService(client=client, cache=cache)


def test_child_search_terms_order() -> None:
    assert child_search_terms("621") == ["621", "621*", "6210", "6211", "62"]


def test_chart_method_keeps_two_digit_codes(cache) -> None:
    chart = [
        {"code": "62", "title": "Health Care and Social Assistance"},
        {"naics22": "11", "index_desc": "Agriculture"},
        {"code": "621", "title": "Ambulatory"},
        {"code": "31-33", "title": "Manufacturing"},
        {"code": "23", "title": ""},
    ]
    service = _service(FakeNaicsClient(chart=chart), cache)

    codes = service.fetch_naics_codes("2022")

    assert codes == [
        NaicsCode("11", "Agriculture"),
        NaicsCode("23", "NAICS 23"),
        NaicsCode("62", "Health Care and Social Assistance"),
    ]
    assert cache.get("all-2022") == codes


def test_sweep_method_used_when_chart_is_empty(cache) -> None:
    client = FakeNaicsClient(
        responses={
            "0": requests.exceptions.ConnectionError("down"),
            "a": [{"naics22": "11", "title": "Agriculture"}, {"naics22": "111", "title": "Crop"}],
            "h": [{"naics22": "62", "title": "Health"}, {"naics22": "11", "title": "Other title"}],
            "z": [{"naics22": "99", "title": ""}],
        }
    )
    service = _service(client, cache)

    codes = service.fetch_naics_codes("2022")

    assert codes == [NaicsCode("11", "Agriculture"), NaicsCode("62", "Health"), NaicsCode("99", "NAICS 99")]
    searched = [term for term, chart in client.calls if not chart]
    assert len(searched) == 36


def test_static_fallback_when_both_methods_fail(cache) -> None:
    service = _service(FakeNaicsClient(chart=requests.exceptions.Timeout("slow")), cache)

    codes = service.fetch_naics_codes("2022")

    sectors = {c.code for c in codes if c.level == 2}
    assert sectors == set(FALLBACK_SECTORS)
    assert any(c.code == "622" and c.title == "Hospitals" for c in codes)
    assert "all-2022" in cache


def test_sector_list_is_cached(cache) -> None:
    client = FakeNaicsClient(chart=[{"code": "62", "title": "Health"}])
    service = _service(client, cache)

    service.fetch_naics_codes("2022")
    service.fetch_naics_codes("2022")

    assert len(client.calls) == 1


def test_get_two_digit_codes_and_descriptions(cache) -> None:
    client = FakeNaicsClient(chart=[{"code": "62", "title": "Health"}, {"code": "23", "title": "Construction"}])
    service = _service(client, cache)

    assert service.get_two_digit_codes() == {"23": "Construction", "62": "Health"}
    assert service.get_code_description("62") == "Health"
    assert service.get_code_description("6211") == "NAICS 6211"


def test_get_child_codes_filters_direct_children(cache) -> None:
    client = FakeNaicsClient(
        responses={
            "62": [
                {"naics22": "622", "title": "Hospitals"},
                {"naics22": "621", "index_desc": "Ambulatory Health Care Services"},
                {"naics22": "6211", "title": "Offices of Physicians"},
                {"naics22": "541", "title": "Professional Services"},
                {"code": "623", "description": "Nursing Care"},
                {"naics22": "621", "title": "Duplicate"},
                {"naics22": "62A", "title": "Not numeric"},
            ],
        }
    )
    service = _service(client, cache)

    children = service.get_child_codes("62")

    assert children == [
        NaicsCode("621", "Ambulatory Health Care Services"),
        NaicsCode("622", "Hospitals"),
        NaicsCode("623", "Nursing Care"),
    ]
    assert client.calls == [("62", False)]


def test_get_child_codes_tries_strategies_in_order(cache) -> None:
    client = FakeNaicsClient(
        responses={
            "621": [{"naics22": "621", "title": "Ambulatory"}],
            "621*": requests.exceptions.HTTPError("500"),
            "6210": ValueError("bad json"),
            "6211": [{"naics22": "6211", "title": "Offices of Physicians"}],
            "62": [{"naics22": "6212", "title": "Offices of Dentists"}],
        }
    )
    service = _service(client, cache)

    children = service.get_child_codes("621")

    assert children == [NaicsCode("6211", "Offices of Physicians")]
    assert [term for term, _ in client.calls] == ["621", "621*", "6210", "6211"]


def test_get_child_codes_caches_results_including_leaves(cache) -> None:
    client = FakeNaicsClient()
    service = _service(client, cache)

    assert service.get_child_codes("621111") == []
    calls_after_first = len(client.calls)
    assert calls_after_first == 5

    assert service.get_child_codes("621111") == []
    assert len(client.calls) == calls_after_first
    assert cache.get("children-621111") == []


def test_get_child_codes_serves_cache_without_io(cache) -> None:
    cache.set("children-62", [NaicsCode("621", "Ambulatory")])
    client = FakeNaicsClient()

    children = _service(client, cache).get_child_codes("62")

    assert children == [NaicsCode("621", "Ambulatory")]
    assert client.calls == []


def test_get_child_codes_unexpected_error_is_not_cached(cache) -> None:
    class Exploding(FakeNaicsClient):
        def search(self, term, chart=False, year=None):
            raise RuntimeError("unexpected")

    service = _service(Exploding(), cache)

    assert service.get_child_codes("62") == []
    assert "children-62" not in cache

"""Shared fakes for CountyScope tests. No test touches the network."""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest
import requests

from countyscope.cache import TaxonomyCache


class FakeResp:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    """Stands in for requests.Session; `handler(url, params, headers)` returns a FakeResp."""

    def __init__(self, handler: Callable[..., FakeResp]) -> None:
        self.handler = handler
        self.calls: list[dict] = []
        self.headers: dict = {}

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {})})
        return self.handler(url, dict(params or {}), dict(headers or {}))


class FakeNaicsClient:
    """Stands in for NaicsClient; `responses` maps search term -> records or exception."""

    def __init__(self, responses: dict | None = None, chart: Any = None) -> None:
        self.responses = responses or {}
        self.chart = chart if chart is not None else []
        self.calls: list[tuple[str, bool]] = []

    def search(self, term, chart=False, year=None):
        self.calls.append((term, chart))
        result = self.chart if chart else self.responses.get(term, [])
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def cache() -> TaxonomyCache:
    return TaxonomyCache()

"""
Shared test fixtures.

HTTP is replaced by FakeSession, which routes requests by method and
URL and records every call.
"""

import copy
from typing import Any, Dict, List, Optional

import pytest
import requests

from inventory_sync.audit.logger import SyncLogger
from inventory_sync.config.models import InventorySyncConfig
from inventory_sync.providers.source_provider import SourceCatalogProvider
from inventory_sync.providers.target_provider import TargetCatalogProvider

SOURCE_URL = "https://erp.test/api/products"
TARGET_URL = "https://store.test/api"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, json_data: Any = None, status_code: int = 200, text: Optional[str] = None):
        self._json = json_data
        self.status_code = status_code
        self.text = text if text is not None else ("" if json_data is None else str(json_data))

    def json(self):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json


class FakeSession:
    """
    Routes (method, url) to canned responses.

    A route value may be a FakeResponse, an exception to raise, a list
    consumed one item per call, or a callable taking the recorded call.
    """

    def __init__(self):
        self.routes: Dict[tuple, Any] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, url: str, response: Any) -> None:
        self.routes[(method, url)] = response

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        call = {
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "params": dict(params or {}),
            "json": copy.deepcopy(json),
            "timeout": timeout,
        }
        self.calls.append(call)

        route = self.routes.get((method, url))
        if route is None:
            return FakeResponse({"message": "not found"}, status_code=404)
        if isinstance(route, list):
            route = route.pop(0)
        if callable(route) and not isinstance(route, FakeResponse):
            route = route(call)
        if isinstance(route, Exception):
            raise route
        return route

    def calls_to(self, method: str, url: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method and c["url"] == url]


def paged(pages: List[List[dict]]):
    """Route handler serving target catalog pages by the 'page' parameter."""

    def handler(call):
        page = call["params"]["page"]
        items = pages[page - 1] if page <= len(pages) else []
        return FakeResponse({"data": items})

    return handler


@pytest.fixture
def logger():
    return SyncLogger("sync_tests")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def config():
    return InventorySyncConfig.model_validate(
        {
            "source": {"url": SOURCE_URL},
            "target": {
                "base_url": TARGET_URL,
                "api_key": {"value": "secret-key"},
                "page_size": 2,
            },
            "sync": {"interval_seconds": 5},
        }
    )


@pytest.fixture
def source_provider(config, logger, session):
    return SourceCatalogProvider(config.source, logger, session=session)


@pytest.fixture
def target_provider(config, logger, session):
    return TargetCatalogProvider(config.target, "secret-key", logger, session=session)


@pytest.fixture
def requests_error():
    return requests.ConnectionError("connection refused")

"""
Shared fixtures for unit tests.

Requests never leave the process: a fake transport adapter is mounted on the
requests.Session injected into UnityCatalogClient.
"""
import json
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, unquote, urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter

from unitycatalog_client import UnityCatalogClient

BASE_URL = "http://uc.test:8080"
API = "/api/2.1/unity-catalog"


def make_response(request, status: int, content: bytes, content_type: str = "application/json"):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.encoding = "utf-8"
    response.headers["Content-Type"] = content_type
    response.url = request.url
    response.request = request
    return response


class FakeAdapter(BaseAdapter):
    """Returns queued responses in order and records every request sent."""

    def __init__(self):
        super().__init__()
        self.sent: List[requests.PreparedRequest] = []
        self.verify_flags: List[Any] = []
        self._queue: List[Any] = []

    def reply(self, status: int = 200, json_body: Any = None, text: Optional[str] = None):
        if text is not None:
            self._queue.append((status, text.encode("utf-8"), "text/plain"))
        else:
            self._queue.append((status, json.dumps(json_body).encode("utf-8"), "application/json"))
        return self

    def fail(self, exc: Exception):
        self._queue.append(exc)
        return self

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]

    def last_query(self) -> Dict[str, List[str]]:
        return parse_qs(urlsplit(self.last.url).query, keep_blank_values=True)

    def last_json(self) -> Any:
        return json.loads(self.last.body)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        self.verify_flags.append(verify)
        if not self._queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        status, content, content_type = item
        return make_response(request, status, content, content_type)

    def close(self):
        pass


class FakeUnityCatalogServer(BaseAdapter):
    """
    In-memory stand-in for the catalog service.

    Mirrors its conventions: 409 on duplicate create, 404 on missing
    resources, and a 200 delete answered with a plain-text "200 OK" body.
    """

    def __init__(self):
        super().__init__()
        self.store: Dict[str, Dict[str, Dict[str, Any]]] = {"catalogs": {}, "schemas": {}, "tables": {}}
        self.sent: List[requests.PreparedRequest] = []
        self._clock = 1700000000000

    def close(self):
        pass

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        parts = urlsplit(request.url)
        query = {k: v[0] for k, v in parse_qs(parts.query).items()}
        path = parts.path[len(API) + 1:].split("/", 1)
        collection = path[0]
        identifier = unquote(path[1]) if len(path) > 1 else None
        body = json.loads(request.body) if request.body else {}
        items = self.store[collection]

        if identifier is None and request.method == "GET":
            return self._list(request, collection, query)
        if identifier is None and request.method == "POST":
            key = self._key(collection, body)
            if key in items:
                return make_response(request, 409, f"{key} already exists".encode(), "text/plain")
            self._clock += 1
            info = dict(body, created_at=self._clock, id=f"id-{len(self.sent)}")
            items[key] = info
            return self._json(request, 200, info)

        if identifier not in items:
            error = {"error_code": "NOT_FOUND", "message": f"{identifier} not found"}
            return self._json(request, 404, error)
        if request.method == "GET":
            return self._json(request, 200, items[identifier])
        if request.method == "PATCH":
            info = dict(items.pop(identifier))
            new_name = body.pop("new_name", None)
            info.update(body)
            if new_name:
                info["name"] = new_name
            self._clock += 1
            info["updated_at"] = self._clock
            items[self._key(collection, info)] = info
            return self._json(request, 200, info)
        if request.method == "DELETE":
            del items[identifier]
            return make_response(request, 200, b"200 OK", "text/plain")
        return make_response(request, 405, b"method not allowed", "text/plain")

    @staticmethod
    def _key(collection: str, info: Dict[str, Any]) -> str:
        if collection == "catalogs":
            return info["name"]
        if collection == "schemas":
            return f"{info['catalog_name']}.{info['name']}"
        return f"{info['catalog_name']}.{info['schema_name']}.{info['name']}"

    def _list(self, request, collection: str, query: Dict[str, str]):
        values = [
            v for v in self.store[collection].values()
            if all(v.get(f) == query[f] for f in ("catalog_name", "schema_name") if f in query)
        ]
        start = int(query.get("page_token", 0))
        size = int(query.get("max_results", len(values) or 1))
        page = values[start:start + size]
        payload: Dict[str, Any] = {collection: page}
        if start + size < len(values):
            payload["next_page_token"] = str(start + size)
        return self._json(request, 200, payload)

    @staticmethod
    def _json(request, status: int, payload: Any):
        return make_response(request, status, json.dumps(payload).encode("utf-8"))


def _client_for(adapter: BaseAdapter) -> UnityCatalogClient:
    session = requests.Session()
    session.trust_env = False
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return UnityCatalogClient(BASE_URL, session=session)


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def client(fake_adapter) -> UnityCatalogClient:
    """Client whose requests are answered by fake_adapter."""
    uc = _client_for(fake_adapter)
    yield uc
    uc.close()


@pytest.fixture
def fake_server() -> FakeUnityCatalogServer:
    server = FakeUnityCatalogServer()
    server.store["catalogs"]["unity"] = {"name": "unity", "comment": "Main catalog", "id": "id-unity"}
    server.store["schemas"]["unity.default"] = {"name": "default", "catalog_name": "unity"}
    return server


@pytest.fixture
def server_client(fake_server) -> UnityCatalogClient:
    """Client talking to the in-memory FakeUnityCatalogServer."""
    uc = _client_for(fake_server)
    yield uc
    uc.close()

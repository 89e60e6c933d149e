import json
from typing import Callable, Dict, List, Tuple

import httpx
import pytest
from src.config import OpenSearchSettings, ScraperSettings, Settings, StorageSettings
from src.schemas.record import Record
from src.services.corpus.store import CorpusStore
from src.services.opensearch.bulk_encoder import BulkEncoder
from src.services.opensearch.client import OpenSearchClient
from src.services.opensearch.index_gateway import IndexGateway
from src.services.opensearch.query_gateway import QueryGateway
from src.services.pipeline import IngestionPipeline
from src.services.scraper.client import WikiTableScraper

SOURCE_URL = "https://en.wikipedia.org/wiki/List_of_Star_Wars_characters"
BACKEND_HOST = "http://opensearch.test:9200"

CHARACTERS_HTML = """
<html>
<body>
<table class="wikitable">
<tbody>
<tr><th>Character</th><th>Portrayed by</th><th>Description</th></tr>
<tr><td>Luke Skywalker
</td><td>Mark Hamill
</td><td>A farm boy turned <a href="/wiki/Jedi">Jedi</a>.
</td></tr>
<tr><td>Yoda
</td><td>Frank Oz
</td><td>Grand Master of the Jedi Order.
</td></tr>
<tr><td colspan="2">Merged cell
</td><td>Two cells only
</td></tr>
<tr><td>One
</td><td>Two
</td><td>Three
</td><td>Four cells
</td></tr>
<tr><td>Lonely cell
</td></tr>
</tbody>
</table>
<table class="infobox">
<tbody>
<tr><td>Not</td><td>a</td><td>wikitable</td></tr>
</tbody>
</table>
</body>
</html>
"""


@pytest.fixture
def characters_html() -> str:
    return CHARACTERS_HTML


@pytest.fixture
def sample_records() -> List[Record]:
    return [
        Record(name="Luke Skywalker", portrayal="Mark Hamill", description="A farm boy turned Jedi."),
        Record(name="Yoda", portrayal="Frank Oz", description="Grand Master of the Jedi Order."),
        Record(name="Padmé Amidala", portrayal="Natalie Portman", description="Queen, then senator, of Naboo."),
    ]


@pytest.fixture
def index_settings() -> Dict:
    return {
        "settings": {"number_of_shards": 1},
        "mappings": {"properties": {"name": {"type": "text"}}},
    }


@pytest.fixture
def settings(tmp_path, index_settings) -> Settings:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps(index_settings), encoding="utf-8")
    return Settings(
        scraper=ScraperSettings(source_url=SOURCE_URL),
        storage=StorageSettings(
            corpus_path=str(tmp_path / "dataset.json"),
            bulk_path=str(tmp_path / "bulk.json"),
            index_settings_path=str(settings_path),
        ),
        opensearch=OpenSearchSettings(host=BACKEND_HOST, index_name="starwars"),
    )


class FakeBackend:
    """
    Stands in for the search backend.

    Records every request with its fully read body; answers come from a
    route table keyed by (method, path), defaulting to 200 with an empty
    JSON object.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, method: str, path: str, status_code: int = 200, json_body=None, text=None):
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body if json_body is not None else {})

        self.routes[(method, path)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(request.read())
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(200, json={})
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self) -> List[Tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def body_for(self, method: str, path: str) -> bytes:
        for request, body in zip(self.requests, self.bodies):
            if (request.method, request.url.path) == (method, path):
                return body
        raise AssertionError(f"No {method} {path} request was made")


@pytest.fixture
def backend() -> FakeBackend:
    fake = FakeBackend()
    # index missing until created
    fake.on("HEAD", "/starwars", status_code=404)
    fake.on("PUT", "/starwars", json_body={"acknowledged": True, "index": "starwars"})
    fake.on("PUT", "/starwars/_doc/_bulk", json_body={"took": 3, "errors": False, "items": []})
    return fake


@pytest.fixture
def opensearch_client(settings, backend) -> OpenSearchClient:
    return OpenSearchClient(host=BACKEND_HOST, settings=settings, transport=backend.transport())


@pytest.fixture
def index_gateway(opensearch_client) -> IndexGateway:
    return IndexGateway(opensearch_client)


@pytest.fixture
def query_gateway(opensearch_client) -> QueryGateway:
    return QueryGateway(opensearch_client, name_boost=10)


@pytest.fixture
def source_transport(characters_html) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=characters_html, headers={"Content-Type": "text/html; charset=utf-8"})

    return httpx.MockTransport(handler)


@pytest.fixture
def pipeline(settings, source_transport, index_gateway, query_gateway) -> IngestionPipeline:
    return IngestionPipeline(
        scraper=WikiTableScraper(SOURCE_URL, transport=source_transport),
        corpus_store=CorpusStore(settings.storage.corpus_path),
        encoder=BulkEncoder(),
        index_gateway=index_gateway,
        query_gateway=query_gateway,
        index_name="starwars",
        index_settings_path=settings.storage.index_settings_path,
        bulk_path=settings.storage.bulk_path,
    )

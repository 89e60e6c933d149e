from typing import Optional
from src.config import Settings, get_settings
from .client import OpenSearchClient
from .index_gateway import IndexGateway
from .query_gateway import QueryGateway


def make_opensearch_client(settings: Optional[Settings] = None) -> OpenSearchClient:
    """Factory function to create an OpenSearch client owned by the caller, who closes it."""
    if settings is None:
        settings = get_settings()
    return OpenSearchClient(host=settings.opensearch.host, settings=settings)


def make_index_gateway(client: OpenSearchClient) -> IndexGateway:
    return IndexGateway(client)


def make_query_gateway(client: OpenSearchClient) -> QueryGateway:
    return QueryGateway(client, name_boost=client.settings.opensearch.name_boost)

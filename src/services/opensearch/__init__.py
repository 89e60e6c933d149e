from .bulk_encoder import BulkEncoder, open_payload
from .client import OpenSearchClient
from .factory import make_index_gateway, make_opensearch_client, make_query_gateway
from .index_config import load_index_settings
from .index_gateway import IndexGateway
from .query_builder import CharacterQueryBuilder, build_query
from .query_gateway import QueryGateway

__all__ = [
    "BulkEncoder",
    "CharacterQueryBuilder",
    "IndexGateway",
    "OpenSearchClient",
    "QueryGateway",
    "build_query",
    "load_index_settings",
    "make_index_gateway",
    "make_opensearch_client",
    "make_query_gateway",
    "open_payload",
]

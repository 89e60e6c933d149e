import json
import logging
from typing import Any, Dict

from src.exceptions import BackendResponseError

from .client import OpenSearchClient
from .query_builder import CharacterQueryBuilder

logger = logging.getLogger(__name__)


class QueryGateway:
    """Runs relevance queries and hands back the backend's raw result."""

    def __init__(self, client: OpenSearchClient, name_boost: int = 10):
        self.client = client
        self.name_boost = name_boost

    def search(self, index_name: str, text: str) -> Dict[str, Any]:
        """
        Search the index for free text.

        Returns:
            The backend's result document, unmodified
        """
        search_body = CharacterQueryBuilder(query=text, name_boost=self.name_boost).build()
        response = self.client.request("GET", f"/{index_name}/_search", f"Search on '{index_name}'", json=search_body)
        try:
            result = response.json()
        except json.JSONDecodeError as e:
            logger.error(f"Search on '{index_name}' returned a non-JSON body")
            raise BackendResponseError(f"Search on '{index_name}'", response.status_code, response.text) from e
        if not isinstance(result, dict):
            raise BackendResponseError(f"Search on '{index_name}'", response.status_code, response.text)

        total = result.get("hits", {}).get("total", {})
        if isinstance(total, dict):
            total = total.get("value")
        logger.info(f"Search for '{text}' returned {total} results")
        return result

import json
import logging
from typing import Any, Dict, Iterable, Iterator

from .client import JSON_HEADERS, OpenSearchClient

logger = logging.getLogger(__name__)


def _encode_chunks(lines: Iterable[str]) -> Iterator[bytes]:
    for line in lines:
        yield line.encode("utf-8")


class IndexGateway:
    """
    Index lifecycle and bulk loading against the search backend.
    """

    def __init__(self, client: OpenSearchClient):
        self.client = client

    # ============================================================
    # INDEX MANAGEMENT
    # ============================================================

    def index_exists(self, name: str) -> bool:
        response = self.client.request("HEAD", f"/{name}", f"Index '{name}' lookup", allowed_statuses=(404,))
        return response.status_code != 404

    def ensure_index(self, name: str, settings: Dict[str, Any], force: bool = False) -> bool:
        """
        Create the index with the given settings document as body.

        Args:
            name: Index name
            settings: Settings/mappings document, sent verbatim
            force: If True, delete an existing index before creating

        Returns:
            True if the index was created, False if it already existed
        """
        if self.index_exists(name):
            if not force:
                logger.info(f"Index {name} already exists")
                return False
            logger.info(f"Deleting existing index: {name}")
            self.client.request("DELETE", f"/{name}", f"Index '{name}' deletion")

        logger.info(f"Creating index {self.client.host}/{name}")
        self.client.request("PUT", f"/{name}", f"Index '{name}' creation", json=settings)
        logger.info(f"Index {name} successfully created")
        return True

    # ============================================================
    # DOCUMENT INDEXING
    # ============================================================

    def bulk_load(self, name: str, payload: Iterable[str]) -> Dict[str, Any]:
        """
        Stream a bulk payload to the backend in a single request.

        The payload is consumed lazily and sent chunk by chunk, so memory use
        does not grow with the corpus. Only the HTTP status decides success;
        per-item failures inside a successful response are logged, not raised.

        Args:
            name: Target index name
            payload: Bulk lines, each ending with a newline

        Returns:
            The backend's bulk response document
        """
        path = f"/{name}/_doc/_bulk"
        logger.info(f"Importing bulk dataset to {self.client.host}{path}")
        response = self.client.request(
            "PUT",
            path,
            f"Bulk import {name}",
            content=_encode_chunks(payload),
            headers=JSON_HEADERS,
        )

        try:
            result = response.json()
        except json.JSONDecodeError:
            logger.warning(f"Bulk import {name} returned a non-JSON body")
            return {}

        logger.debug(f"Bulk response: {result}")
        if isinstance(result, dict) and result.get("errors"):
            failed = [
                item for item in result.get("items", [])
                if any("error" in action for action in item.values())
            ]
            logger.warning(f"Bulk import {name} reported {len(failed)} failed items")
        logger.info("Dataset successfully imported")
        return result

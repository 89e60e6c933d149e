import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError
from src.config import Settings, get_settings
from src.exceptions import ConfigurationError, PipelineException, StarwarsSearchException
from src.services.corpus.store import CorpusStore
from src.services.opensearch.bulk_encoder import BulkEncoder, open_payload
from src.services.opensearch.index_config import load_index_settings
from src.services.opensearch.index_gateway import IndexGateway
from src.services.opensearch.query_gateway import QueryGateway
from src.services.scraper.client import WikiTableScraper

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """
    Sequences index creation, extraction, corpus persistence, bulk encoding
    and bulk loading, and routes ad-hoc queries to the query gateway.

    Stages run strictly one after another and the first failure aborts the
    run. Nothing done by earlier stages is rolled back.
    """

    def __init__(
        self,
        scraper: WikiTableScraper,
        corpus_store: CorpusStore,
        encoder: BulkEncoder,
        index_gateway: IndexGateway,
        query_gateway: QueryGateway,
        index_name: str,
        index_settings_path: Union[str, Path],
        bulk_path: Union[str, Path],
    ):
        self.scraper = scraper
        self.corpus_store = corpus_store
        self.encoder = encoder
        self.index_gateway = index_gateway
        self.query_gateway = query_gateway
        self.index_name = index_name
        self.index_settings_path = Path(index_settings_path)
        self.bulk_path = Path(bulk_path)

    def initialize(self, force: bool = False) -> bool:
        """Create the index from the settings artifact. Returns True if created."""
        settings = load_index_settings(self.index_settings_path)
        return self.index_gateway.ensure_index(self.index_name, settings, force=force)

    def run(self, url: Optional[str] = None, fetch: bool = True, force: bool = False) -> Dict[str, Any]:
        """
        Execute a full ingestion run.

        Args:
            url: Source page, defaults to the scraper's configured page
            fetch: If False, reuse the existing corpus artifact instead of scraping
            force: If True, drop and recreate the index

        Returns:
            Run summary
        """
        results = {
            "index_created": False,
            "records_extracted": 0,
            "records_encoded": 0,
            "bulk_errors": False,
            "processing_time": 0,
        }
        start_time = datetime.now()

        try:
            logger.info(f"Step 1: Ensuring index '{self.index_name}'...")
            results["index_created"] = self.initialize(force=force)

            if fetch:
                logger.info("Step 2: Extracting records from source page...")
                records = self.scraper.scrape(url)
                results["records_extracted"] = len(records)

                logger.info("Step 3: Persisting corpus...")
                self.corpus_store.write(records)
            else:
                logger.info("Steps 2-3: Reusing existing corpus artifact")

            logger.info("Step 4: Encoding bulk payload...")
            corpus = self.corpus_store.read()
            results["records_encoded"] = self.encoder.write_payload(corpus, self.index_name, self.bulk_path)

            logger.info("Step 5: Loading bulk payload...")
            with open_payload(self.bulk_path) as payload:
                response = self.index_gateway.bulk_load(self.index_name, payload)
            results["bulk_errors"] = bool(response.get("errors"))

        except StarwarsSearchException:
            raise
        except Exception as e:
            logger.error(f"Pipeline error: {e}")
            raise PipelineException(f"Pipeline execution failed: {e}") from e

        results["processing_time"] = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Pipeline completed in {results['processing_time']:.1f}s: "
            f"{results['records_extracted']} extracted, "
            f"{results['records_encoded']} encoded"
        )
        return results

    def search(self, text: str) -> Dict[str, Any]:
        return self.query_gateway.search(self.index_name, text)

    def close(self) -> None:
        """Release the HTTP connections held by the scraper and the backend client."""
        self.scraper.close()
        self.index_gateway.client.close()
        if self.query_gateway.client is not self.index_gateway.client:
            self.query_gateway.client.close()


def make_ingestion_pipeline(
    settings: Optional[Settings] = None,
    index_name: Optional[str] = None,
) -> IngestionPipeline:
    """Factory function to create IngestionPipeline instance."""
    from src.services.corpus.factory import make_corpus_store
    from src.services.opensearch.factory import make_index_gateway, make_opensearch_client, make_query_gateway
    from src.services.scraper.factory import make_scraper

    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e

    client = make_opensearch_client(settings)
    return IngestionPipeline(
        scraper=make_scraper(settings),
        corpus_store=make_corpus_store(settings),
        encoder=BulkEncoder(),
        index_gateway=make_index_gateway(client),
        query_gateway=make_query_gateway(client),
        index_name=index_name or settings.opensearch.index_name,
        index_settings_path=settings.storage.index_settings_path,
        bulk_path=settings.storage.bulk_path,
    )

import logging
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup, Tag
from src.exceptions import SourceFetchError
from src.schemas.record import Record

logger = logging.getLogger(__name__)

ROWS_SELECTOR = "table.wikitable > tbody > tr"
CELLS_SELECTOR = "td"
RECORD_FIELDS = ("name", "portrayal", "description")


def clean_cell_text(text: str) -> str:
    """Drop the single trailing newline left behind by the cell markup."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def row_to_record(row: Tag) -> Optional[Record]:
    """
    Map a table row to a Record.

    Only rows with exactly three data cells become records; header rows,
    merged-cell rows and anything else yield None.
    """
    cells = [clean_cell_text(cell.get_text()) for cell in row.select(CELLS_SELECTOR)]
    if len(cells) != len(RECORD_FIELDS):
        return None
    return Record(**dict(zip(RECORD_FIELDS, cells)))


def extract_records(html: str) -> List[Record]:
    """Parse every wikitable row of a page into records, in document order."""
    # html5lib inserts the implied <tbody>, as browsers do
    soup = BeautifulSoup(html, "html5lib")
    rows = soup.select(ROWS_SELECTOR)

    records = []
    for row in rows:
        record = row_to_record(row)
        if record is None:
            logger.debug("Skipping row without exactly three cells")
            continue
        records.append(record)

    logger.info(f"Extracted {len(records)} records from {len(rows)} table rows")
    return records


class WikiTableScraper:
    """
    Fetches an encyclopedia page and extracts its wikitable rows as records.
    """

    def __init__(
        self,
        source_url: str,
        user_agent: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.source_url = source_url
        headers = {"User-Agent": user_agent} if user_agent else {}
        self.client = httpx.Client(
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            transport=transport,
        )

    def fetch_page(self, url: Optional[str] = None) -> str:
        """
        Download the page as text.

        Raises:
            SourceFetchError: On any transport failure or non-success status
        """
        url = url or self.source_url
        logger.info(f"Fetching source page {url}")
        try:
            response = self.client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            logger.error(f"Source page {url} returned status {e.response.status_code}")
            raise SourceFetchError(f"Could not fetch {url}: status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Source page {url} could not be fetched: {e}")
            raise SourceFetchError(f"Could not fetch {url}: {e}") from e

    def scrape(self, url: Optional[str] = None) -> List[Record]:
        """Fetch the page and extract its records."""
        return extract_records(self.fetch_page(url))

    def close(self) -> None:
        self.client.close()

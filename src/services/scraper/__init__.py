from .client import WikiTableScraper, extract_records, row_to_record
from .factory import make_scraper

__all__ = ["WikiTableScraper", "extract_records", "make_scraper", "row_to_record"]

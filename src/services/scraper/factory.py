from typing import Optional
from src.config import Settings, get_settings
from .client import WikiTableScraper


def make_scraper(settings: Optional[Settings] = None) -> WikiTableScraper:
    """Factory function to create a scraper for the configured source page."""
    if settings is None:
        settings = get_settings()
    return WikiTableScraper(
        source_url=settings.scraper.source_url,
        user_agent=settings.scraper.user_agent,
        timeout_seconds=settings.scraper.timeout_seconds,
    )

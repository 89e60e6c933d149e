from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"
class DefaultSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        extra="ignore",
        frozen=True,
        env_nested_delimiter="__")

class ScraperSettings(DefaultSettings):
    """Source page settings."""
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        env_prefix="SCRAPER__",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    source_url: str = "https://en.wikipedia.org/wiki/List_of_Star_Wars_characters"
    user_agent: str = "starwars-search/0.1 (+https://github.com)"
    timeout_seconds: Optional[float] = None  # None waits forever


class StorageSettings(DefaultSettings):
    """Local artifact locations."""
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        env_prefix="STORAGE__",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    corpus_path: str = "dataset.json"
    bulk_path: str = "bulk.json"
    index_settings_path: str = "settings.json"


class OpenSearchSettings(DefaultSettings):
    """Opensearch settings"""
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        env_prefix="OPENSEARCH__",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    host: str = "http://localhost:9200"
    index_name: str = "starwars"
    timeout_seconds: Optional[float] = None

    # Relevance weighting of name over description
    name_boost: int = 10


class Settings(DefaultSettings):
    app_version: str = "0.1.0"
    environment: str = "development"

    scraper: ScraperSettings = Field(default_factory=ScraperSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)


def get_settings() -> Settings:
    return Settings()

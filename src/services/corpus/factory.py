from typing import Optional
from src.config import Settings, get_settings
from .store import CorpusStore


def make_corpus_store(settings: Optional[Settings] = None, path: Optional[str] = None) -> CorpusStore:
    """Factory function to create a corpus store at the configured path."""
    if settings is None:
        settings = get_settings()
    return CorpusStore(path or settings.storage.corpus_path)

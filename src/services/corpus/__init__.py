from .factory import make_corpus_store
from .store import CorpusStore

__all__ = ["CorpusStore", "make_corpus_store"]

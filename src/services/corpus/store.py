import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import TypeAdapter, ValidationError
from src.exceptions import ArtifactIOError, MalformedCorpusError
from src.schemas.record import Record

logger = logging.getLogger(__name__)

_CORPUS_ADAPTER = TypeAdapter(List[Record])


class CorpusStore:
    """
    Persists the extracted records as a pretty-printed JSON array.

    The artifact sits between extraction and encoding so that a bulk load can
    be redone without fetching the source page again.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def write(self, records: Sequence[Record]) -> Path:
        """Serialize records to the corpus artifact, replacing any previous one."""
        logger.info(f"Writing {len(records)} records to '{self.path}'")
        payload = [record.model_dump() for record in records]
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.write("\n")
        except OSError as e:
            logger.error(f"Could not write corpus '{self.path}': {e}")
            raise ArtifactIOError(f"Could not write corpus '{self.path}': {e}") from e

        logger.info(f"Corpus '{self.path}' successfully created")
        return self.path

    def read(self) -> List[Record]:
        """
        Load the corpus artifact.

        Raises:
            ArtifactIOError: If the file cannot be read
            MalformedCorpusError: If the content is not an array of records
        """
        try:
            contents = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not read corpus '{self.path}': {e}")
            raise ArtifactIOError(f"Could not read corpus '{self.path}': {e}") from e

        try:
            records = _CORPUS_ADAPTER.validate_json(contents)
        except ValidationError as e:
            logger.error(f"Corpus '{self.path}' is malformed: {e}")
            raise MalformedCorpusError(f"Corpus '{self.path}' is not an array of records: {e}") from e

        logger.info(f"Loaded {len(records)} records from '{self.path}'")
        return records

    def exists(self) -> bool:
        return self.path.is_file()

import json
import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Union

from src.exceptions import ArtifactIOError
from src.schemas.record import Record

logger = logging.getLogger(__name__)


def _compact(value: dict) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class BulkEncoder:
    """
    Turns a record sequence into the line-delimited bulk payload.

    Every record becomes two lines: an action line naming the target index and
    a fresh document id, then the record's fields.
    """

    def __init__(self, id_factory: Callable[[], str] = lambda: str(uuid.uuid4())):
        self.id_factory = id_factory

    def action_line(self, index_name: str) -> str:
        return _compact({"index": {"_index": index_name, "_id": self.id_factory()}}) + "\n"

    @staticmethod
    def document_line(record: Record) -> str:
        return _compact(record.model_dump()) + "\n"

    def encode(self, records: Iterable[Record], index_name: str) -> Iterator[str]:
        """Lazily yield payload lines, each ending with a single newline."""
        for record in records:
            yield self.action_line(index_name)
            yield self.document_line(record)

    def write_payload(self, records: Iterable[Record], index_name: str, path: Union[str, Path]) -> int:
        """
        Write the payload produced by `encode` to the bulk artifact.

        Returns:
            Number of records encoded
        """
        path = Path(path)
        logger.info(f"Creating bulk input '{path}'")
        lines = 0
        try:
            with path.open("w", encoding="utf-8", newline="\n") as f:
                for line in self.encode(records, index_name):
                    f.write(line)
                    lines += 1
        except OSError as e:
            logger.error(f"Could not write bulk input '{path}': {e}")
            raise ArtifactIOError(f"Could not write bulk input '{path}': {e}") from e

        count = lines // 2
        logger.info(f"Bulk input '{path}' successfully created with {count} operations")
        return count


@contextmanager
def open_payload(path: Union[str, Path]) -> Iterator[Iterator[str]]:
    """
    Open a bulk artifact and stream it back line by line.

    Lines are yielded with exactly one trailing newline so the body sent over
    the wire matches the file. The file is closed when the block exits,
    whether or not the lines were consumed.

    Raises:
        ArtifactIOError: If the file cannot be opened
    """
    path = Path(path)
    try:
        f = path.open("r", encoding="utf-8", newline="")
    except OSError as e:
        logger.error(f"Could not read bulk input '{path}': {e}")
        raise ArtifactIOError(f"Could not read bulk input '{path}': {e}") from e

    with f:
        yield (line.rstrip("\r\n") + "\n" for line in f)

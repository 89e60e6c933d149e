import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from src.exceptions import ArtifactIOError, ConfigurationError

logger = logging.getLogger(__name__)


def load_index_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the index-settings artifact used verbatim as the create-index body.

    Raises:
        ArtifactIOError: If the file cannot be read
        ConfigurationError: If it is not a JSON object
    """
    path = Path(path)
    logger.info(f"Reading index settings '{path}'")
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not read index settings '{path}': {e}")
        raise ArtifactIOError(f"Could not read index settings '{path}': {e}") from e

    try:
        settings = json.loads(contents)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Index settings '{path}' is not valid JSON: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigurationError(f"Index settings '{path}' must be a JSON object")
    return settings

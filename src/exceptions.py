from typing import Optional


class StarwarsSearchException(Exception):
    """Base exception for every error raised by this package."""


class ConfigurationError(StarwarsSearchException):
    """Exception raised when configuration is invalid."""


# Source page exceptions
class SourceFetchError(StarwarsSearchException):
    """Exception raised when the source page cannot be retrieved or read as text."""


# Local artifact exceptions
class ArtifactIOError(StarwarsSearchException):
    """Exception raised when a local artifact cannot be read or written."""


class MalformedCorpusError(StarwarsSearchException):
    """Exception raised when the corpus artifact is not an array of records."""


# Search backend exceptions
class OpenSearchException(StarwarsSearchException):
    """Base exception for OpenSearch-related errors."""


class BackendConnectionError(OpenSearchException):
    """Exception raised when the backend cannot be reached at all."""


class BackendRequestError(OpenSearchException):
    """Exception raised when the backend answers with a non-success status.

    Carries the numeric status and the verbatim response body, which is the
    only diagnostic the backend gives for failures such as malformed settings
    or an index that already exists.
    """

    def __init__(self, operation: str, status_code: int, body: str, endpoint: Optional[str] = None):
        self.operation = operation
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        target = f" ({endpoint})" if endpoint else ""
        super().__init__(f"{operation} failed with status {status_code}{target}: {body}")


class BackendResponseError(OpenSearchException):
    """Exception raised when a successful backend response is not a JSON object."""

    def __init__(self, operation: str, status_code: int, body: str):
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(f"{operation} returned status {status_code} with a body that is not a JSON object: {body}")


class PipelineException(StarwarsSearchException):
    """Exception raised during pipeline execution."""

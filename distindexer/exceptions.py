"""Custom exceptions for dist-indexer."""


class IndexerError(Exception):
    """Base exception for all indexer errors."""


class DecodeMismatch(IndexerError):
    """Raised when a directory name does not encode a release reference."""

    def __init__(self, dirname: str):
        self.dirname = dirname
        super().__init__(f"can't decode ref from directory name {dirname!r}")


class MetadataUnavailable(IndexerError):
    """Raised when a release directory's manifest or date cannot be read."""


class FetchError(IndexerError):
    """Raised when a single remote retrieval fails (transport, status, or empty body)."""

    def __init__(self, url: str, cause: BaseException | str):
        self.url = url
        self.cause = cause
        super().__init__(f"fetch failed for {url}: {cause}")


class ParseMismatch(IndexerError):
    """Raised when fetched content cannot be interpreted by an extractor."""


class CacheLoadError(IndexerError):
    """Raised when the persisted version cache is missing or corrupt."""


class OutputError(IndexerError):
    """Raised when an output destination cannot be written."""

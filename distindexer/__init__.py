"""dist-indexer — build a JSON/tab index of historical distribution releases."""

__version__ = "0.1.0"

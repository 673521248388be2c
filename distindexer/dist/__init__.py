"""Local dist directory collaborators — shipped-file manifest and release date."""

from distindexer.dist.dates import release_date
from distindexer.dist.manifest import read_files, transform_filename

__all__ = ["read_files", "release_date", "transform_filename"]

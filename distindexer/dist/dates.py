"""Release date from the earliest modification time in a release directory."""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path

from distindexer.exceptions import MetadataUnavailable

# Directory mtimes stopped being a usable date reference after the
# October 2019 storage migration; older entries keep their dates.
IGNORE_DIRECTORY_DATE = datetime(2019, 10, 1, tzinfo=timezone.utc)


def release_date(release_dir: Path) -> date:
    """Earliest mtime among the entries of *release_dir* (UTC).

    Raises :class:`MetadataUnavailable` when the directory can't be read
    or has no usable entries.
    """
    try:
        entries = list(release_dir.iterdir())
    except OSError as exc:
        raise MetadataUnavailable(f"can't list {release_dir}: {exc}") from exc

    mtimes: list[datetime] = []
    for entry in entries:
        try:
            st = entry.stat()
        except OSError as exc:
            raise MetadataUnavailable(f"can't stat {entry}: {exc}") from exc
        mtime = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
        if not entry.is_file() and mtime >= IGNORE_DIRECTORY_DATE:
            continue
        mtimes.append(mtime)

    if not mtimes:
        raise MetadataUnavailable(f"no dated entries in {release_dir}")
    return min(mtimes).date()

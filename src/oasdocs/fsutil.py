"""Filesystem helpers for writing bundled output."""

from __future__ import annotations

import logging
from pathlib import Path

from oasdocs.errors import OutputWriteError

logger = logging.getLogger(__name__)


def ensure_directory_exists(file_path: Path | str) -> Path:
    """Create every missing ancestor directory of *file_path*.

    An existing directory is fine.  Any other OS error (permissions, a
    regular file where a directory should be) propagates unchanged.
    Returns the parent directory.
    """
    directory = Path(file_path).parent
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def write_text(file_path: Path | str, text: str) -> int:
    """Write *text* as UTF-8 to *file_path*, creating parent directories.

    Raises :class:`OutputWriteError` carrying the system error message.
    Returns the number of bytes written.
    """
    path = Path(file_path)
    data = text.encode("utf-8")
    try:
        ensure_directory_exists(path)
        path.write_bytes(data)
    except OSError as exc:
        raise OutputWriteError(exc.strerror or str(exc)) from exc
    logger.debug("Wrote %d bytes to %s", len(data), path)
    return len(data)

"""Nearest description file lookup.

Starting from a directory, each candidate filename is tried in priority
order; when none exists the search moves on to the parent directory, up to
the filesystem root. The first candidate that exists decides the outcome:
either it holds a JSON object and is returned, or the lookup fails.
"""

import asyncio
import errno
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Sequence

from depversion.logging import get_logger

from .exceptions import InvalidDescriptionFileError
from .filesystem import FileSystem

logger = get_logger(__name__, component="manifest")


@dataclass
class DescriptionFile:
    """A located description file.

    Attributes:
        data: Parsed JSON object
        path: Path of the file, as produced by the filesystem's join()
    """

    data: Dict[str, Any]
    path: str


def find_description_file(
    fs: FileSystem, directory: str, description_files: Sequence[str]
) -> Optional[DescriptionFile]:
    """Find the nearest description file, blocking on each read.

    Args:
        fs: Filesystem to read from
        directory: Directory to start looking in
        description_files: Candidate filenames in priority order

    Returns:
        DescriptionFile, or None when no candidate exists up to the root

    Raises:
        InvalidDescriptionFileError: If the nearest candidate is not a JSON object
        OSError: On read failures other than a missing file
        ValueError: If the nearest candidate is not valid JSON
    """
    for path in _candidate_paths(fs, directory, description_files):
        try:
            data = fs.read_json(path)
        except OSError as e:
            if _is_missing(e):
                _log_missing(path)
                continue
            raise
        return _accept(data, path)

    return _not_found(directory)


async def get_description_file(
    fs: FileSystem, directory: str, description_files: Sequence[str]
) -> Optional[DescriptionFile]:
    """Find the nearest description file without blocking the event loop.

    Same contract as find_description_file(). Reads run one at a time in
    the default executor; candidates are never read speculatively.
    """
    for path in _candidate_paths(fs, directory, description_files):
        try:
            data = await asyncio.to_thread(fs.read_json, path)
        except OSError as e:
            if _is_missing(e):
                _log_missing(path)
                continue
            raise
        return _accept(data, path)

    return _not_found(directory)


def _candidate_paths(
    fs: FileSystem, directory: str, description_files: Sequence[str]
) -> Iterator[str]:
    """Yield candidate paths from directory up to the root, nearest first."""
    while True:
        for name in description_files:
            yield fs.join(directory, name)

        parent = fs.dirname(directory)
        if not parent or parent == directory:
            return
        directory = parent


def _is_missing(error: OSError) -> bool:
    return isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT


def _accept(data: Any, path: str) -> DescriptionFile:
    # {} is a valid (empty) manifest, arrays and primitives are not
    if not isinstance(data, dict):
        raise InvalidDescriptionFileError(path)

    logger.debug(
        "Found description file",
        extra={"event": "manifest.found", "path": path},
    )
    return DescriptionFile(data=data, path=path)


def _log_missing(path: str) -> None:
    logger.debug(
        "Description file candidate missing",
        extra={"event": "manifest.candidate_missing", "path": path},
    )


def _not_found(directory: str) -> None:
    logger.debug(
        "No description file found",
        extra={"event": "manifest.not_found", "directory": directory},
    )
    return None

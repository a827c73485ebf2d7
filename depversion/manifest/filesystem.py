"""Filesystem capability used by the description file lookup."""

import json
import os
from typing import Any, Optional, Protocol


class FileSystem(Protocol):
    """What the lookup needs from a filesystem.

    read_json must raise FileNotFoundError (or another OSError with errno
    ENOENT) for missing files; every other exception aborts the lookup.
    """

    def join(self, base: str, name: str) -> str: ...

    def dirname(self, path: str) -> Optional[str]: ...

    def read_json(self, path: str) -> Any: ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def join(self, base: str, name: str) -> str:
        return os.path.abspath(os.path.join(base, name))

    def dirname(self, path: str) -> Optional[str]:
        """Parent directory, or None at the filesystem root."""
        path = os.path.abspath(path)
        parent = os.path.dirname(path)
        if parent == path:
            return None
        return parent

    def read_json(self, path: str) -> Any:
        with open(path, "r", encoding=self.encoding) as f:
            return json.load(f)

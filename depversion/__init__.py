"""depversion: dependency version specifier normalization and manifest lookup."""

from .manifest import (
    DescriptionFile,
    InvalidDescriptionFileError,
    LocalFileSystem,
    find_description_file,
    get_description_file,
    get_required_version_from_description_file,
)
from .versioning import get_git_url_version, is_required_version, normalize_version

__version__ = "0.1.0"

__all__ = [
    "is_required_version",
    "normalize_version",
    "get_git_url_version",
    "get_description_file",
    "find_description_file",
    "get_required_version_from_description_file",
    "DescriptionFile",
    "LocalFileSystem",
    "InvalidDescriptionFileError",
]

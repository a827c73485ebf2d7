"""Description file (manifest) lookup and required version extraction."""

from .exceptions import InvalidDescriptionFileError, ManifestError
from .filesystem import FileSystem, LocalFileSystem
from .locator import DescriptionFile, find_description_file, get_description_file
from .requirements import DEPENDENCY_FIELDS, get_required_version_from_description_file

__all__ = [
    "DescriptionFile",
    "find_description_file",
    "get_description_file",
    "get_required_version_from_description_file",
    "DEPENDENCY_FIELDS",
    "FileSystem",
    "LocalFileSystem",
    "ManifestError",
    "InvalidDescriptionFileError",
]

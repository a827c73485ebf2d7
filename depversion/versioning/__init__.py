"""Version specifier normalization.

This module provides:
- is_required_version: fast check for plain semver ranges
- normalize_version: reduce any dependency specifier to a version or commit reference
- get_git_url_version: the git/URL half of normalize_version
- GitHost / get_commithash: per-host commit reference extraction
- ParsedUrl / parse_url: URL decomposition used by the pipeline
"""

from .hosts import GitHost, get_commithash
from .normalizer import get_git_url_version, is_required_version, normalize_version
from .url import ParsedUrl, parse_url

__all__ = [
    "is_required_version",
    "normalize_version",
    "get_git_url_version",
    "GitHost",
    "get_commithash",
    "ParsedUrl",
    "parse_url",
]

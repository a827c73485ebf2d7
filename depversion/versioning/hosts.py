"""Per-host commit reference extraction.

Each well-known git host gets a rule that looks at the URL path and decides
whether it points at a repository (as opposed to a release download, raw file
or sub-resource page) and, if so, which commit reference the URL carries.
Path conventions follow npm's hosted-git-info.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional

from .url import ParsedUrl, decode_uri_component

HostRule = Callable[[str, str], Optional[str]]


class GitHost(str, Enum):
    """Hosts with a dedicated commit extraction rule."""

    GITHUB = "github.com"
    GITLAB = "gitlab.com"
    BITBUCKET = "bitbucket.org"
    GIST = "gist.github.com"

    @classmethod
    def from_hostname(cls, hostname: str) -> Optional["GitHost"]:
        """Look up a host by hostname, ignoring case and a leading ``www.``."""
        hostname = hostname.lower()
        if hostname.startswith("www."):
            hostname = hostname[4:]
        try:
            return cls(hostname)
        except ValueError:
            return None


def _segments(pathname: str, count: int) -> List[Optional[str]]:
    """Split a pathname into exactly ``count`` slots, padding with None."""
    parts: List[Optional[str]] = list(pathname.split("/")[:count])
    return parts + [None] * (count - len(parts))


def _strip_git_suffix(project: Optional[str]) -> Optional[str]:
    if project and project.endswith(".git"):
        return project[:-4]
    return project


def github_commithash(pathname: str, hash_: str) -> Optional[str]:
    """/user/project[.git] or /user/project/tree/<commithash>."""
    _, user, project, type_, commithash = _segments(pathname, 5)
    if type_ and type_ != "tree":
        return None

    if not type_:
        commithash = hash_
    elif commithash:
        commithash = "#" + commithash
    else:
        # /tree with no ref
        return None

    project = _strip_git_suffix(project)
    if not user or not project:
        return None

    return commithash


def gitlab_commithash(pathname: str, hash_: str) -> Optional[str]:
    """/group[/subgroup...]/project[.git]; sub-resources and archives are rejected."""
    path = pathname[1:]
    if "/-/" in path or "/archive.tar.gz" in path:
        return None

    segments = path.split("/")
    project = _strip_git_suffix(segments.pop())
    user = "/".join(segments)
    if not user or not project:
        return None

    return hash_


def bitbucket_commithash(pathname: str, hash_: str) -> Optional[str]:
    """/user/project[.git][/aux]; download links (aux ``get``) are rejected."""
    _, user, project, aux = _segments(pathname, 4)
    if aux == "get":
        return None

    project = _strip_git_suffix(project)
    if not user or not project:
        return None

    return hash_


def gist_commithash(pathname: str, hash_: str) -> Optional[str]:
    """/user/project[.git][/aux] or /project for anonymous gists; raw links are rejected."""
    _, user, project, aux = _segments(pathname, 4)
    if aux == "raw":
        return None

    # /id alone is an anonymous gist, so only a path with no segments is rejected
    if not user and not project:
        return None

    return hash_


HOST_RULES: Dict[GitHost, HostRule] = {
    GitHost.GITHUB: github_commithash,
    GitHost.GITLAB: gitlab_commithash,
    GitHost.BITBUCKET: bitbucket_commithash,
    GitHost.GIST: gist_commithash,
}


def get_commithash(parsed: ParsedUrl) -> str:
    """Extract the commit reference carried by a parsed URL.

    Known hosts go through their rule; a rule that does not recognize the
    path yields an empty string. Other hosts return the (decoded) hash as is.

    Args:
        parsed: URL with a non-shorthand protocol

    Returns:
        Commit reference, usually with a leading ``#``, or an empty string
    """
    try:
        hash_ = decode_uri_component(parsed.hash)
    except ValueError:
        # keep the raw fragment; some published specifiers rely on it
        hash_ = parsed.hash

    host = GitHost.from_hostname(parsed.hostname)
    if host is None:
        return hash_

    return HOST_RULES[host](parsed.pathname, hash_) or ""

"""Dependency version specifier normalization.

Turns the value of a manifest dependency field into something a version
check can use:

1. Plain semver ranges (``^1.2.0``, ``>=2``, ``*``) are returned unchanged
2. Git and URL dependencies (``github:user/repo#v1.0.0``,
   ``git+ssh://git@host:user/repo.git#semver:^2``) are reduced to the version
   or commit reference they pin
3. Anything else becomes an empty string

See https://docs.npmjs.com/cli/v7/configuring-npm/package-json#urls-as-dependencies
for the accepted URL shapes.
"""

import re
from typing import Any, Optional

from depversion.logging import get_logger

from .hosts import get_commithash
from .url import ParsedUrl, can_be_decoded, parse_url

logger = get_logger(__name__, component="versioning")

# Looks like a semver range: ^1.0.0, ~2, >=3, =4, v5, 6.x, or a lone wildcard
RE_REQUIRED_VERSION = re.compile(r"^([0-9^=v<>~]|[*xX]\Z)")

# Extreme shorthand, github only. eg: foo/bar#v1.0.0
RE_URL_GITHUB_EXTREME_SHORT = re.compile(r"^[^/@:.\s][^/@:\s]*/[^@:\s]*[^/@:\s]#\S+")

# Short url with a host alias protocol. eg: github:foo/bar
RE_GIT_URL_SHORT = re.compile(r"^(github|gitlab|bitbucket|gist):/?[^/.]+/?")

RE_PROTOCOL = re.compile(r"((git\+)?(ssh|https?|file)|git|github|gitlab|bitbucket|gist):")

RE_CUSTOM_PROTOCOL = re.compile(r"^((git\+)?(ssh|https?|file)|git)://")

RE_URL_HASH_VERSION = re.compile(r"#(?:semver:)?([^\n\r\u2028\u2029]+)")

RE_HOSTNAME = re.compile(r"(?:[^/.]+(\.[^/]+)+|localhost)")

# eg: ssh://user@github.com:foo/bar
RE_HOSTNAME_WITH_COLON = re.compile(r"([^/@#:.]+(?:\.[^/@#:.]+)+|localhost):([^#/0-9]+)")

# Dotted hostname without protocol. eg: github.com/foo/bar
RE_NO_PROTOCOL = re.compile(r"^([^/@#:.]+(?:\.[^/@#:.]+)+)")

# Protocols whose URLs carry no regular hostname
PROTOCOLS_FOR_SHORT = ("github:", "gitlab:", "bitbucket:", "gist:", "file:")

DEF_GIT_PROTOCOL = "git+ssh://"

# Characters trimmed from specifiers: ASCII and Unicode spaces, line
# terminators and the byte order mark
WHITESPACE = "".join(
    chr(code)
    for code in (
        0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0xA0, 0x1680,
        *range(0x2000, 0x200B),
        0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF,
    )
)


def is_required_version(value: Any) -> bool:
    """Whether the value already looks like a semver range."""
    return isinstance(value, str) and bool(RE_REQUIRED_VERSION.match(value))


def normalize_version(version_desc: Any) -> str:
    """Normalize a dependency version specifier.

    Args:
        version_desc: Raw value of a dependency field; anything that is not a
            string counts as missing

    Returns:
        The trimmed specifier when it is a semver range, the version or commit
        reference pinned by a git/URL specifier, or an empty string when
        neither applies
    """
    if not isinstance(version_desc, str):
        version_desc = ""
    version_desc = version_desc.strip(WHITESPACE)

    if is_required_version(version_desc):
        return version_desc

    return get_git_url_version(version_desc.lower())


def expand_github_shorthand(git_url: str) -> Optional[str]:
    """foo/bar#ref -> github:foo/bar#ref, None when not in that shape."""
    if RE_URL_GITHUB_EXTREME_SHORT.match(git_url):
        return "github:" + git_url
    return None


def correct_protocol(git_url: str) -> str:
    """Make sure the URL starts with a protocol the URL parser understands."""
    # github:foo/bar#v1.0 must not get a double slash, the path would be
    # parsed as a host
    if RE_GIT_URL_SHORT.match(git_url):
        return git_url

    # eg: user@github.com:foo/bar
    if not RE_CUSTOM_PROTOCOL.match(git_url):
        return DEF_GIT_PROTOCOL + git_url

    return git_url


def correct_url(git_url: str) -> str:
    """proto://hostname.com:user/repo -> proto://hostname.com/user/repo"""
    return RE_HOSTNAME_WITH_COLON.sub(r"\1/\2", git_url, count=1)


def get_version_from_hash(hash_: str) -> str:
    """#semver:^1.2.0 -> ^1.2.0, #v1.0.0 -> v1.0.0, no hash -> ''."""
    matched = RE_URL_HASH_VERSION.search(hash_)
    return (matched and matched.group(1)) or ""


def rejection_reason(parsed: ParsedUrl, original: str) -> Optional[str]:
    """Return why a parsed URL is not a usable dependency reference, if it isn't."""
    if not RE_PROTOCOL.fullmatch(parsed.protocol):
        return "unsupported_protocol"

    if not parsed.pathname or not can_be_decoded(parsed.pathname):
        return "malformed_pathname"

    # without protocol, there should be auth info
    if RE_NO_PROTOCOL.match(original) and not parsed.username and not parsed.password:
        return "missing_auth"

    if parsed.protocol not in PROTOCOLS_FOR_SHORT and not RE_HOSTNAME.fullmatch(parsed.hostname):
        return "invalid_hostname"

    return None


def get_git_url_version(git_url: str) -> str:
    """Extract the version or commit reference from a git/URL dependency.

    Args:
        git_url: Lower-cased, trimmed specifier

    Returns:
        Version or commit reference, or an empty string when the specifier
        is not a recognized git/URL dependency
    """
    original = git_url

    corrected = expand_github_shorthand(git_url) or correct_protocol(git_url)
    corrected = correct_url(corrected)

    parsed = parse_url(corrected)
    if parsed is None:
        return _reject(original, "unparseable")

    reason = rejection_reason(parsed, original)
    if reason:
        return _reject(original, reason)

    if parsed.protocol not in PROTOCOLS_FOR_SHORT:
        commithash = get_commithash(parsed)
        return get_version_from_hash(commithash) or commithash

    return get_version_from_hash(corrected)


def _reject(specifier: str, reason: str) -> str:
    logger.debug(
        "Rejected version specifier",
        extra={
            "event": "version.rejected",
            "specifier": specifier,
            "reason": reason,
        },
    )
    return ""

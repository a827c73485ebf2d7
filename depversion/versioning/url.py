"""Minimal URL decomposition for git dependency specifiers.

The normalizer needs the same answers a browser-style (WHATWG) URL parser
gives for the handful of shapes that show up in manifests: which inputs fail
to parse at all, how the host and userinfo are split out, and what the
pathname and hash look like. ``urllib.parse.urlsplit`` never fails and keeps
fragments without their ``#``, so the decomposition here is done directly,
following the WHATWG rules that matter for those inputs:

- a scheme is required
- ``http``, ``https`` and ``file`` (and the other special schemes) always carry
  an authority, get ``/`` as their empty path and reject empty hosts
- authority hosts may not contain forbidden code points, ports must be numeric
- dot segments are resolved in hierarchical paths
- ``hash`` keeps its leading ``#`` and is empty when the fragment is empty
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import quote, unquote, unquote_to_bytes

SPECIAL_SCHEMES = frozenset({"ftp", "file", "http", "https", "ws", "wss"})

_SCHEME_RE = re.compile(r"([a-zA-Z][a-zA-Z0-9+\-.]*):")
_TAB_OR_NEWLINE_RE = re.compile(r"[\t\n\r]")
_MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9a-fA-F]{2})")
_NUMERIC_LABEL_RE = re.compile(r"[0-9]+|0[xX][0-9a-fA-F]*")
_WINDOWS_DRIVE_LETTER_RE = re.compile(r"[a-zA-Z][:|]")

# C0 control characters and space, stripped from both ends before parsing
_C0_CONTROL_OR_SPACE = "".join(chr(i) for i in range(0x21))

FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #/:<>?@[\\]^|")
FORBIDDEN_DOMAIN_CHARS = FORBIDDEN_HOST_CHARS | frozenset(
    [chr(i) for i in range(0x20)] + ["%", "\x7f"]
)

# Extra characters percent-encoded on top of C0 controls and non-ASCII
FRAGMENT_ENCODE_SET = frozenset(' "<>`')
PATH_ENCODE_SET = frozenset(' "<>`#?{}')

_SINGLE_DOT_SEGMENTS = frozenset({".", "%2e"})
_DOUBLE_DOT_SEGMENTS = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


@dataclass(frozen=True)
class ParsedUrl:
    """Decomposition of a URL, mirroring the WHATWG ``URL`` accessors.

    Attributes:
        protocol: Lower-cased scheme followed by ``:`` (e.g. ``git+ssh:``)
        username: Userinfo before the first ``:``, empty when absent
        password: Userinfo after the first ``:``, empty when absent
        hostname: Host without port, empty for hostless URLs
        port: Port digits, empty when absent
        pathname: Path (opaque or hierarchical), possibly empty
        search: Query including ``?``, empty when absent or empty
        hash: Fragment including ``#``, empty when absent or empty
    """

    protocol: str
    username: str
    password: str
    hostname: str
    port: str
    pathname: str
    search: str
    hash: str


def decode_uri_component(value: str) -> str:
    """Decode percent-escapes strictly.

    Raises:
        ValueError: On an escape that is not ``%XX`` or on escapes that do not
            form valid UTF-8
    """
    if _MALFORMED_ESCAPE_RE.search(value):
        raise ValueError(f"Malformed percent-escape in {value!r}")
    return unquote_to_bytes(value).decode("utf-8")


def can_be_decoded(value: str) -> bool:
    """Whether decode_uri_component() accepts the value."""
    try:
        decode_uri_component(value)
    except ValueError:
        return False
    return True


def parse_url(value: str) -> Optional[ParsedUrl]:
    """Parse an absolute URL.

    Returns:
        ParsedUrl, or None when the value is not a valid absolute URL
    """
    try:
        return _parse(value)
    except ValueError:
        # covers bad IDNA labels and unencodable characters as well
        return None


def _parse(value: str) -> Optional[ParsedUrl]:
    value = _TAB_OR_NEWLINE_RE.sub("", value.strip(_C0_CONTROL_OR_SPACE))

    match = _SCHEME_RE.match(value)
    if not match:
        return None

    scheme = match.group(1).lower()
    special = scheme in SPECIAL_SCHEMES
    rest = value[match.end():]

    rest, _, fragment = rest.partition("#")
    rest, _, query = rest.partition("?")
    if special:
        rest = rest.replace("\\", "/")

    username = password = hostname = port = ""

    if scheme == "file":
        if rest.startswith("//"):
            host, slash, path = rest[2:].partition("/")
            if _WINDOWS_DRIVE_LETTER_RE.fullmatch(host):
                # file://c:/foo has no host, the drive letter starts the path
                rest = f"/{host[0]}:{slash}{path}"
            else:
                hostname = _parse_host(host, special=True, allow_empty=True)
                if hostname is None:
                    return None
                if hostname == "localhost":
                    hostname = ""
                rest = slash + path
        pathname = _resolve_dot_segments(_encode(rest, PATH_ENCODE_SET)) or "/"
    elif special or rest.startswith("//"):
        rest = rest.lstrip("/") if special else rest[2:]
        authority, slash, path = rest.partition("/")
        authority_parts = _parse_authority(authority, special)
        if authority_parts is None:
            return None
        username, password, hostname, port = authority_parts
        pathname = _resolve_dot_segments(_encode(slash + path, PATH_ENCODE_SET))
        if special and not pathname:
            pathname = "/"
    elif rest.startswith("/"):
        pathname = _resolve_dot_segments(_encode(rest, PATH_ENCODE_SET))
    else:
        # opaque path, e.g. github:user/repo
        pathname = _encode(rest, frozenset())

    return ParsedUrl(
        protocol=f"{scheme}:",
        username=username,
        password=password,
        hostname=hostname,
        port=port,
        pathname=pathname,
        search=f"?{query}" if query else "",
        hash=f"#{_encode(fragment, FRAGMENT_ENCODE_SET)}" if fragment else "",
    )


def _parse_authority(authority: str, special: bool) -> Optional[Tuple[str, str, str, str]]:
    userinfo, at, hostport = authority.rpartition("@")
    if at and not hostport:
        return None

    username, _, password = userinfo.partition(":")

    if hostport.startswith("["):
        host, bracket, remainder = hostport.partition("]")
        if not bracket or (remainder and not remainder.startswith(":")):
            return None
        host += bracket
        port = remainder[1:]
        has_port = bool(remainder)
    else:
        host, colon, port = hostport.partition(":")
        has_port = bool(colon)

    if has_port and not host:
        return None
    if port and (not port.isascii() or not port.isdigit() or int(port) > 65535):
        return None

    hostname = _parse_host(host, special=special, allow_empty=not special)
    if hostname is None:
        return None

    return username, password, hostname, port


def _parse_host(host: str, special: bool, allow_empty: bool) -> Optional[str]:
    if not host:
        return "" if allow_empty else None

    if host.startswith("["):
        if not host.endswith("]"):
            return None
        address = ipaddress.IPv6Address(host[1:-1])
        return f"[{address.compressed}]"

    if not special:
        if any(ch in FORBIDDEN_HOST_CHARS for ch in host):
            return None
        return _encode(host, frozenset())

    domain = unquote(host).lower()
    if not domain.isascii():
        domain = domain.encode("idna").decode("ascii")
    if not domain or any(ch in FORBIDDEN_DOMAIN_CHARS for ch in domain):
        return None

    if _ends_in_number(domain):
        return _parse_ipv4(domain)

    return domain


def _ends_in_number(domain: str) -> bool:
    labels = domain.split(".")
    if labels[-1] == "" and len(labels) > 1:
        labels.pop()
    return bool(_NUMERIC_LABEL_RE.fullmatch(labels[-1]))


def _parse_ipv4(domain: str) -> Optional[str]:
    labels = domain.split(".")
    if labels[-1] == "" and len(labels) > 1:
        labels.pop()
    if len(labels) > 4:
        return None

    numbers = []
    for label in labels:
        number = _parse_ipv4_number(label)
        if number is None:
            return None
        numbers.append(number)

    if any(number > 255 for number in numbers[:-1]):
        return None
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        return None

    address = numbers[-1]
    for index, number in enumerate(numbers[:-1]):
        address += number * 256 ** (3 - index)

    return str(ipaddress.IPv4Address(address))


def _parse_ipv4_number(label: str) -> Optional[int]:
    if not label:
        return None

    base = 10
    if label[:2] in ("0x", "0X"):
        label, base = label[2:], 16
    elif len(label) > 1 and label.startswith("0"):
        label, base = label[1:], 8

    if not label:
        return 0

    try:
        return int(label, base)
    except ValueError:
        return None


def _resolve_dot_segments(path: str) -> str:
    if not path:
        return path

    segments = path.split("/")[1:]
    output = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT_SEGMENTS:
            if output:
                output.pop()
            if is_last:
                output.append("")
        elif lowered in _SINGLE_DOT_SEGMENTS:
            if is_last:
                output.append("")
        else:
            output.append(segment)

    return "/" + "/".join(output)


def _encode(value: str, encode_set: frozenset) -> str:
    """Percent-encode C0 controls, non-ASCII and the characters in encode_set."""
    return "".join(
        quote(ch, safe="") if ord(ch) < 0x20 or ord(ch) > 0x7E or ch in encode_set else ch
        for ch in value
    )

"""Unit tests for version specifier normalization.

Covers:
- Semver range fast path
- Short alias protocols and GitHub extreme shorthand
- SSH shorthand and explicit protocols
- Per-host path rules surfacing through normalize_version
- Rejection of unparseable and ambiguous specifiers
"""

import logging

import pytest

from depversion.versioning import get_git_url_version, is_required_version, normalize_version
from depversion.versioning.normalizer import (
    correct_protocol,
    correct_url,
    expand_github_shorthand,
    get_version_from_hash,
)


class TestIsRequiredVersion:
    """Tests for is_required_version."""

    @pytest.mark.parametrize(
        "value",
        ["1.2.3", "^1.0.0", "~2.1", ">=3", "<4.0.0", "=5.0.0", "v1.0.0", "*", "x", "X", "0"],
    )
    def test_semver_ranges(self, value):
        """Test that values starting like a range are recognized."""
        assert is_required_version(value) is True

    @pytest.mark.parametrize(
        "value",
        ["", "latest", "github:user/repo", "xx", "x.1", "**", "V1.0.0", "x\n"],
    )
    def test_non_ranges(self, value):
        """Test that wildcards only count when they are the whole value."""
        assert is_required_version(value) is False

    def test_non_string(self):
        """Test that non-string values are never ranges."""
        assert is_required_version(None) is False
        assert is_required_version(1) is False


class TestNormalizeVersionFastPath:
    """Tests for specifiers returned unchanged."""

    @pytest.mark.parametrize(
        "value", ["1.2.3", "^1.0.0", "~2", ">=3 <4", "=5", "v1.0.0", "*", "x", "X"]
    )
    def test_semver_passthrough(self, value):
        """Test that semver ranges are returned as-is."""
        assert normalize_version(value) == value

    def test_trims_whitespace(self):
        """Test that surrounding whitespace is removed."""
        assert normalize_version("  ^1.0.0  ") == "^1.0.0"

    def test_case_preserved_for_ranges(self):
        """Test that ranges are not lower-cased."""
        assert normalize_version("1.0.0-Beta.1") == "1.0.0-Beta.1"

    @pytest.mark.parametrize("value", ["1.2.3", "^2.0.0", "*", "v3"])
    def test_fast_path_is_fixed_point(self, value):
        """Test that normalizing a normalized range changes nothing."""
        once = normalize_version(value)
        assert normalize_version(once) == once


class TestNormalizeVersionGitUrls:
    """Tests for git and URL dependency specifiers."""

    @pytest.mark.parametrize(
        "specifier,expected",
        [
            ("github:user/repo#v1.0.0", "v1.0.0"),
            ("github:user/repo#semver:^1.2.0", "^1.2.0"),
            ("gitlab:group/repo#semver:~1.0", "~1.0"),
            ("bitbucket:user/repo#abc123", "abc123"),
            ("gist:11081aaa281#v1", "v1"),
            ("github:/user/repo#v2", "v2"),
        ],
    )
    def test_short_alias_protocols(self, specifier, expected):
        """Test host alias protocols take the version from the fragment."""
        assert normalize_version(specifier) == expected

    def test_short_alias_without_fragment(self):
        """Test that an alias without fragment has no version."""
        assert normalize_version("bitbucket:user/repo") == ""

    def test_extreme_shorthand(self):
        """Test owner/repo#ref is treated as a GitHub reference."""
        assert normalize_version("user/repo#v2.0.0") == "v2.0.0"

    def test_input_is_lower_cased(self):
        """Test that git URLs are matched case-insensitively."""
        assert normalize_version("GitHub:User/Repo#V1.0.0") == "v1.0.0"

    @pytest.mark.parametrize(
        "specifier,expected",
        [
            ("git+ssh://git@github.com/user/repo.git#abc123", "abc123"),
            ("git+ssh://git@github.com:user/repo.git#semver:^1.2.0", "^1.2.0"),
            ("git@github.com:user/repo.git#v1.0.0", "v1.0.0"),
            ("ssh://git@github.com:22/user/repo.git#v1", "v1"),
            ("git://github.com/user/repo#v1.1.0", "v1.1.0"),
            ("https://github.com/user/repo.git#v1.2.3", "v1.2.3"),
            ("git+https://www.github.com/user/repo#abc", "abc"),
            ("git+ssh://git@localhost:repo#v1", "v1"),
            ("https://localhost/repo#v1", "v1"),
        ],
    )
    def test_explicit_and_ssh_urls(self, specifier, expected):
        """Test URLs with explicit protocols or SSH shorthand."""
        assert normalize_version(specifier) == expected

    def test_github_tree_url(self):
        """Test that a /tree/<ref> path yields the ref."""
        assert normalize_version("https://github.com/user/repo/tree/def456") == "def456"

    @pytest.mark.parametrize(
        "specifier",
        ["https://github.com/user/repo/tree", "https://github.com/user/repo/tree/#v1"],
    )
    def test_github_tree_url_without_ref(self, specifier):
        """Test that a /tree path without a ref has no version."""
        assert normalize_version(specifier) == ""

    @pytest.mark.parametrize("specifier", ["file://c:/foo#v1", "file://C|/foo#v1"])
    def test_file_url_with_drive_letter(self, specifier):
        """Test that a Windows drive letter is part of the path, not a host."""
        assert normalize_version(specifier) == "v1"

    def test_trims_byte_order_mark(self):
        """Test that a leading byte order mark is trimmed like whitespace."""
        assert normalize_version(chr(0xFEFF) + "github:user/repo#v1") == "v1"
        assert normalize_version(chr(0xFEFF) + "^1.0.0" + chr(0x3000)) == "^1.0.0"

    def test_hash_version_stops_at_line_terminator(self):
        """Test that the fragment version ends at a line terminator."""
        assert normalize_version("github:user/repo#a\rb") == "a"
        assert get_version_from_hash("#a" + chr(0x2028) + "b") == "a"

    @pytest.mark.parametrize(
        "specifier,expected",
        [
            ("https://gitlab.com/group/sub/project.git#v1.0.0", "v1.0.0"),
            ("git+https://bitbucket.org/user/repo.git#abc", "abc"),
            ("git+https://gist.github.com/abc123.git#v1", "v1"),
            ("git+https://example.com/user/repo.git#v3.0.0", "v3.0.0"),
        ],
    )
    def test_other_hosts(self, specifier, expected):
        """Test known and unknown hosts with a fragment."""
        assert normalize_version(specifier) == expected

    def test_encoded_fragment_is_decoded(self):
        """Test that percent-escapes in the fragment are decoded."""
        assert normalize_version("git+https://example.com/user/repo#v1%2e0") == "v1.0"

    def test_malformed_fragment_is_kept_raw(self):
        """Test that an undecodable fragment is used as-is."""
        assert normalize_version("git+https://example.com/user/repo#v1%zz") == "v1%zz"

    def test_url_without_fragment(self):
        """Test that a repository URL without a ref has no version."""
        assert normalize_version("git+https://example.com/user/repo.git") == ""
        assert normalize_version("git+ssh://git@github.com:user/repo") == ""


class TestNormalizeVersionRejections:
    """Tests for specifiers that normalize to an empty string."""

    @pytest.mark.parametrize(
        "specifier",
        [
            "not a valid anything",
            "latest",
            "",
            "   ",
            "https://gitlab.com/group/sub/-/archive/main.tar.gz",
            "https://gitlab.com/project#v1",
            "https://github.com/user/repo/releases/download/v1/x.tgz",
            "https://github.com/user#v1",
            "https://bitbucket.org/user/repo/get/abc.tar.gz",
            "https://gist.github.com/user/id/raw/file.js",
            "github.com/user/repo#v1.0.0",
            "example.com/user/repo#v1.0.0",
            "https://github/user/repo#v1",
            "https://github.com/user/re%zzpo#v1",
            "ftp://example.com/repo#v1",
            "file:../local/path",
            "http://example.com:99999/repo#v1",
        ],
    )
    def test_rejected(self, specifier):
        """Test that unrecognized specifiers become an empty string."""
        assert normalize_version(specifier) == ""

    @pytest.mark.parametrize("value", [None, 42, 1.5, ["1.0.0"], {"version": "1.0.0"}])
    def test_non_string_input(self, value):
        """Test that non-string input is treated as missing."""
        assert normalize_version(value) == ""

    def test_never_raises(self):
        """Test a batch of hostile inputs never raises."""
        hostile = ["#", "@", ":", "//", "git+ssh://", "https://[::1", "a/b#", "%", "\udcff/x#y"]
        for value in hostile:
            assert isinstance(normalize_version(value), str)

    def test_rejection_is_logged(self, caplog):
        """Test that a rejection emits a debug event with its reason."""
        with caplog.at_level(logging.DEBUG, logger="depversion.versioning.normalizer"):
            assert get_git_url_version("github.com/user/repo") == ""

        records = [r for r in caplog.records if getattr(r, "event", None) == "version.rejected"]
        assert len(records) == 1
        assert records[0].reason == "missing_auth"
        assert records[0].component == "versioning"


class TestPipelineStages:
    """Tests for the individual correction stages."""

    def test_expand_github_shorthand(self):
        """Test the shorthand stage only fires for owner/repo#ref."""
        assert expand_github_shorthand("user/repo#v1") == "github:user/repo#v1"
        assert expand_github_shorthand("user/repo") is None
        assert expand_github_shorthand("git@github.com:user/repo#v1") is None
        assert expand_github_shorthand("./local/repo#v1") is None

    def test_correct_protocol_keeps_aliases(self):
        """Test alias protocols are left untouched."""
        assert correct_protocol("github:user/repo") == "github:user/repo"
        assert correct_protocol("gist:abc") == "gist:abc"

    def test_correct_protocol_keeps_explicit(self):
        """Test explicit protocols are left untouched."""
        assert correct_protocol("https://host.com/x") == "https://host.com/x"
        assert correct_protocol("git+file:///tmp/repo") == "git+file:///tmp/repo"

    def test_correct_protocol_adds_default(self):
        """Test protocol-less values get git+ssh://."""
        assert correct_protocol("git@host.com:user/repo") == "git+ssh://git@host.com:user/repo"

    def test_correct_url(self):
        """Test the SSH colon separator becomes a slash, once."""
        assert correct_url("git+ssh://git@host.com:user/repo") == "git+ssh://git@host.com/user/repo"
        assert correct_url("ssh://git@host.com:22/user/repo") == "ssh://git@host.com:22/user/repo"
        assert correct_url("git+ssh://localhost:repo:x") == "git+ssh://localhost/repo:x"

    def test_get_version_from_hash(self):
        """Test fragment version extraction."""
        assert get_version_from_hash("#semver:1.2.3") == "1.2.3"
        assert get_version_from_hash("#1.2.3") == "1.2.3"
        assert get_version_from_hash("github:user/repo#v1") == "v1"
        assert get_version_from_hash("#") == ""
        assert get_version_from_hash("no-hash") == ""

"""Unit tests for per-host commit reference extraction."""

import pytest

from depversion.versioning.hosts import (
    HOST_RULES,
    GitHost,
    bitbucket_commithash,
    get_commithash,
    gist_commithash,
    github_commithash,
    gitlab_commithash,
)
from depversion.versioning.url import parse_url


class TestGitHost:
    """Tests for host lookup."""

    def test_every_host_has_a_rule(self):
        """Test the registry covers the whole enumeration."""
        assert set(HOST_RULES) == set(GitHost)

    @pytest.mark.parametrize(
        "hostname,expected",
        [
            ("github.com", GitHost.GITHUB),
            ("www.github.com", GitHost.GITHUB),
            ("WWW.GitHub.com", GitHost.GITHUB),
            ("gitlab.com", GitHost.GITLAB),
            ("bitbucket.org", GitHost.BITBUCKET),
            ("gist.github.com", GitHost.GIST),
        ],
    )
    def test_known_hosts(self, hostname, expected):
        """Test known hosts resolve, ignoring case and www."""
        assert GitHost.from_hostname(hostname) is expected

    @pytest.mark.parametrize("hostname", ["example.com", "api.github.com", "", "github.com.evil.io"])
    def test_unknown_hosts(self, hostname):
        """Test other hosts have no rule."""
        assert GitHost.from_hostname(hostname) is None


class TestGithubRule:
    """Tests for github.com paths."""

    def test_repository_uses_hash(self):
        """Test /user/project takes the fragment."""
        assert github_commithash("/user/project", "#abc") == "#abc"
        assert github_commithash("/user/project.git", "#abc") == "#abc"

    def test_tree_path(self):
        """Test /user/project/tree/<ref> takes the ref from the path."""
        assert github_commithash("/user/project/tree/abc", "#ignored") == "#abc"

    def test_tree_without_ref(self):
        """Test a /tree path without a ref is not extractable."""
        assert github_commithash("/user/project/tree", "#abc") is None
        assert github_commithash("/user/project/tree/", "#abc") is None

    def test_trailing_slash(self):
        """Test an empty third segment counts as absent."""
        assert github_commithash("/user/project/", "#abc") == "#abc"

    @pytest.mark.parametrize(
        "pathname",
        ["/user/project/blob/abc", "/user/project/releases/download/v1", "/user", "/user/.git", "/"],
    )
    def test_rejected(self, pathname):
        """Test non-repository paths are not extractable."""
        assert github_commithash(pathname, "#abc") is None


class TestGitlabRule:
    """Tests for gitlab.com paths."""

    def test_nested_groups(self):
        """Test subgroups are accepted."""
        assert gitlab_commithash("/group/sub/project.git", "#v1") == "#v1"

    @pytest.mark.parametrize(
        "pathname",
        [
            "/group/sub/-/archive/main.tar.gz",
            "/group/project/-/tree/main",
            "/group/project/archive.tar.gz",
            "/project",
            "/group/.git",
        ],
    )
    def test_rejected(self, pathname):
        """Test sub-resources, archives and missing groups are rejected."""
        assert gitlab_commithash(pathname, "#v1") is None


class TestBitbucketRule:
    """Tests for bitbucket.org paths."""

    def test_repository(self):
        """Test /user/project takes the fragment."""
        assert bitbucket_commithash("/user/project.git", "#abc") == "#abc"
        assert bitbucket_commithash("/user/project/src", "#abc") == "#abc"

    @pytest.mark.parametrize("pathname", ["/user/project/get/abc.zip", "/user", "/user/.git"])
    def test_rejected(self, pathname):
        """Test download links and incomplete paths are rejected."""
        assert bitbucket_commithash(pathname, "#abc") is None


class TestGistRule:
    """Tests for gist.github.com paths."""

    def test_user_gist(self):
        """Test /user/id takes the fragment."""
        assert gist_commithash("/user/id", "#v1") == "#v1"

    def test_anonymous_gist(self):
        """Test a single segment is an anonymous gist id."""
        assert gist_commithash("/id.git", "#v1") == "#v1"
        assert gist_commithash("/id/", "#v1") == "#v1"

    @pytest.mark.parametrize("pathname", ["/user/id/raw", "/user/id/raw/file.js", "/"])
    def test_rejected(self, pathname):
        """Test raw links and empty paths are rejected."""
        assert gist_commithash(pathname, "#v1") is None


class TestGetCommithash:
    """Tests for get_commithash."""

    def test_unknown_host_returns_decoded_hash(self):
        """Test hosts without a rule return the decoded fragment."""
        parsed = parse_url("git+https://example.com/x#v%201")
        assert get_commithash(parsed) == "#v 1"

    def test_undecodable_hash_is_kept(self):
        """Test a malformed fragment is returned raw."""
        parsed = parse_url("git+https://example.com/x#v%zz")
        assert get_commithash(parsed) == "#v%zz"

    def test_rejecting_rule_gives_empty_string(self):
        """Test a rule that does not match yields an empty string."""
        parsed = parse_url("https://github.com/user/repo/blob/main/readme.md#l1")
        assert get_commithash(parsed) == ""

    def test_known_host(self):
        """Test known hosts go through their rule."""
        parsed = parse_url("https://www.github.com/user/repo/tree/main")
        assert get_commithash(parsed) == "#main"

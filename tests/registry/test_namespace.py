"""Tests for primary namespace inference."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from nova_installer.errors import AmbiguousNamespaceError, ErrorCodes
from nova_installer.registry.namespace import primary_namespace, resolve_namespace


# === Single entry ===


class TestSingleEntry:
    def test_single_entry_wins(self) -> None:
        """A lone psr-4 prefix is the namespace whatever its directory."""
        assert resolve_namespace({"psr-4": {"Blog\\": "lib/"}}) == "Blog"

    def test_separators_trimmed_on_both_sides(self) -> None:
        """Leading and trailing backslashes are stripped."""
        assert resolve_namespace({"psr-4": {"\\Acme\\Shop\\": "src/"}}) == "Acme\\Shop"

    def test_list_of_directories(self) -> None:
        """A single prefix mapped to several directories still wins."""
        assert resolve_namespace({"psr-4": {"Blog\\": ["src/", "lib/"]}}) == "Blog"


# === src-rooted entries ===


class TestSrcRoot:
    @pytest.mark.parametrize("source", ["src", "src/", "./src", "./src/"])
    def test_src_variants(self, source: str) -> None:
        """All spellings of the src directory select their prefix."""
        autoload = {"psr-4": {"Blog\\Test\\": "tests/", "Blog\\": source}}
        assert resolve_namespace(autoload) == "Blog"

    def test_order_independent(self) -> None:
        """The src entry is found wherever it sits in the mapping."""
        first = {"psr-4": {"Blog\\": "src/", "Blog\\Test\\": "tests/"}}
        last = {"psr-4": {"Blog\\Test\\": "tests/", "Blog\\": "src/"}}
        assert resolve_namespace(first) == resolve_namespace(last) == "Blog"

    def test_first_src_match_kept(self) -> None:
        """When several prefixes map to src, the first one wins."""
        autoload = {"psr-4": {"One\\": "src", "Two\\": "./src/"}}
        assert resolve_namespace(autoload) == "One"

    def test_src_beats_package_root(self) -> None:
        """A src entry takes precedence over a root entry."""
        autoload = {"psr-4": {"Root\\": "", "Blog\\": "src/"}}
        assert resolve_namespace(autoload) == "Blog"

    def test_similar_names_do_not_match(self) -> None:
        """Directories that merely contain 'src' are ignored."""
        autoload = {"psr-4": {"A\\": "source/", "B\\": "lib/src/"}}
        with pytest.raises(AmbiguousNamespaceError):
            resolve_namespace(autoload)


# === package-root entries ===


class TestPackageRoot:
    def test_empty_string_root(self) -> None:
        """An entry mapped to '' is selected."""
        autoload = {"psr-4": {"Blog\\Test\\": "tests/", "Blog\\": ""}}
        assert resolve_namespace(autoload) == "Blog"

    def test_dot_root(self) -> None:
        """An entry mapped to '.' is selected."""
        autoload = {"psr-4": {"Blog\\": ".", "Blog\\Test\\": "tests/"}}
        assert resolve_namespace(autoload) == "Blog"

    def test_last_root_match_kept(self) -> None:
        """With several root entries, the last in mapping order wins."""
        autoload = {"psr-4": {"First\\": "", "Other\\": "lib/", "Second\\": ".", "Third\\": ""}}
        assert resolve_namespace(autoload) == "Third"


# === Failures and other mechanisms ===


class TestFailures:
    def test_multiple_unrelated_entries_fail(self) -> None:
        """No rule applies: AmbiguousNamespaceError."""
        autoload = {"psr-4": {"A\\": "lib/", "B\\": "tests/"}}
        with pytest.raises(AmbiguousNamespaceError) as exc_info:
            resolve_namespace(autoload, package_name="acme/blog")
        assert exc_info.value.code == ErrorCodes.AMBIGUOUS_NAMESPACE
        assert exc_info.value.package_name == "acme/blog"
        assert "acme/blog" in exc_info.value.message
        assert "https://github.com/nova-framework/module-installer" in exc_info.value.message

    def test_no_autoload(self) -> None:
        """An empty autoload section fails."""
        with pytest.raises(AmbiguousNamespaceError):
            resolve_namespace({})

    def test_empty_psr4_mapping(self) -> None:
        """An empty psr-4 mapping fails."""
        with pytest.raises(AmbiguousNamespaceError):
            resolve_namespace({"psr-4": {}})

    def test_other_mechanisms_ignored(self) -> None:
        """psr-0 and classmap entries are never considered."""
        autoload: dict[str, Any] = {"psr-0": {"Legacy_": "src/"}, "classmap": ["lib/"]}
        with pytest.raises(AmbiguousNamespaceError):
            resolve_namespace(autoload)

    def test_psr4_found_after_other_mechanisms(self) -> None:
        """The psr-4 mapping is used even when other mechanisms come first."""
        autoload = {"psr-0": {"Legacy_": "src/"}, "psr-4": {"Blog\\": "src/"}}
        assert resolve_namespace(autoload) == "Blog"

    def test_custom_docs_url(self) -> None:
        """The documentation link in the error is configurable."""
        with pytest.raises(AmbiguousNamespaceError) as exc_info:
            resolve_namespace({}, package_name="x/y", docs_url="https://docs.example.org")
        assert "https://docs.example.org" in exc_info.value.message


# === primary_namespace() ===


class TestPrimaryNamespace:
    def test_reads_package_autoload(self, make_package: Callable[..., Any]) -> None:
        """The package's autoload section drives resolution."""
        package = make_package("acme/blog", {"Acme\\Blog\\": "src/", "Acme\\Blog\\Test\\": "tests/"})
        assert primary_namespace(package) == "Acme\\Blog"

    def test_error_names_package(self, make_package: Callable[..., Any]) -> None:
        """The package name is reported when resolution fails."""
        package = make_package("acme/broken")
        with pytest.raises(AmbiguousNamespaceError, match="acme/broken"):
            primary_namespace(package)

"""Unit tests for the route access decision procedure."""

import pytest

from navigation.domain.menu_tree import build_menu_tree
from navigation.domain.route_access import (
    default_route,
    is_path_accessible,
    menu_paths,
    normalize_path,
    path_matches,
)


class TestNormalizePath:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("/acme/users/", "/acme/users"),
            ("/acme/users?page=2", "/acme/users"),
            ("/acme/users#top", "/acme/users"),
            ("acme/users", "/acme/users"),
            ("/", "/"),
            ("", "/"),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert normalize_path(raw) == expected


class TestPathMatches:
    def test_exact_match(self):
        assert path_matches("/acme/users", "/acme/users")

    def test_requested_below_menu_path(self):
        assert path_matches("/acme/users/42", "/acme/users")

    def test_requested_above_menu_path(self):
        assert path_matches("/acme/users", "/acme/users/42")

    def test_segment_boundary_is_respected(self):
        assert not path_matches("/acme/users-archive", "/acme/users")
        assert not path_matches("/acme/user", "/acme/users")

    def test_trailing_slash_and_query_ignored(self):
        assert path_matches("/acme/users/?tab=roles", "/acme/users")


class TestAccessibility:
    def test_children_paths_authorize(self, make_entry):
        admin = make_entry("admin", path="/{tenant}/admin")
        users = make_entry(
            "users", path="/{tenant}/settings/users", parent_id=admin.id
        )
        docs = make_entry("docs", url="https://docs.io", parent_id=admin.id)

        paths = menu_paths(build_menu_tree([admin, users, docs], tenant_slug="acme"))

        assert paths == ["/acme/admin", "/acme/settings/users"]
        assert is_path_accessible("/acme/settings/users/7", paths)
        assert not is_path_accessible("/acme/billing", paths)

    def test_no_paths_denies(self):
        assert not is_path_accessible("/acme/dashboard", [])


class TestDefaultRoute:
    def test_current_tenant_first(self):
        assert default_route("acme", "globex") == "/acme/dashboard"

    def test_durable_tenant_second(self):
        assert default_route(None, "globex") == "/globex/dashboard"

    def test_bare_landing_page_last(self):
        assert default_route(None, None) == "/dashboard"

    def test_custom_landing_segment(self):
        assert default_route("acme", landing_segment="home") == "/acme/home"

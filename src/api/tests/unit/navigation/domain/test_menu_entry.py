"""Unit tests for the MenuEntry aggregate."""

import pytest

from navigation.domain.aggregates import EXTERNAL_LINK_TARGET, MenuEntry
from navigation.domain.value_objects import (
    MenuId,
    MenuLocation,
    PermissionMatchPolicy,
)
from shared_kernel.authorization import PermissionKey

USERS_READ = PermissionKey("users", "read", "tenant")
USERS_WRITE = PermissionKey("users", "write", "tenant")


class TestMenuEntryValidation:
    def test_requires_exactly_one_of_path_or_url(self):
        with pytest.raises(ValueError, match="exactly one of path or url"):
            MenuEntry.create(name="both", label="Both", path="/a", url="https://a.io")

        with pytest.raises(ValueError, match="exactly one of path or url"):
            MenuEntry.create(name="neither", label="Neither")

    def test_requires_name(self):
        with pytest.raises(ValueError, match="name is required"):
            MenuEntry.create(name="", label="Nameless", path="/x")

    def test_cannot_be_own_parent(self):
        menu_id = MenuId.generate()

        with pytest.raises(ValueError, match="own parent"):
            MenuEntry(id=menu_id, name="loop", label="Loop", path="/x", parent_id=menu_id)

    def test_external_link_defaults_to_new_tab(self):
        entry = MenuEntry.create(name="docs", label="Docs", url="https://docs.io")

        assert entry.is_external
        assert entry.target == EXTERNAL_LINK_TARGET

    def test_external_link_keeps_explicit_target(self):
        entry = MenuEntry.create(
            name="docs", label="Docs", url="https://docs.io", target="_self"
        )

        assert entry.target == "_self"

    def test_location_string_is_coerced(self):
        entry = MenuEntry.create(name="home", label="Home", location="HEADER", path="/")

        assert entry.location is MenuLocation.HEADER


class TestResolvedPath:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("/{tenant}/users", "/acme/users"),
            ("/[tenant]/users", "/acme/users"),
            ("/about", "/about"),
        ],
    )
    def test_substitutes_tenant_placeholders(self, make_entry, template, expected):
        entry = make_entry("users", path=template)

        assert entry.resolved_path("acme") == expected

    def test_without_slug_keeps_template(self, make_entry):
        entry = make_entry("users", path="/{tenant}/users")

        assert entry.resolved_path(None) == "/{tenant}/users"

    def test_external_entry_has_no_path(self, make_entry):
        entry = make_entry("docs", url="https://docs.io")

        assert entry.resolved_path("acme") is None


class TestVisibility:
    def test_entry_without_permissions_is_visible(self, make_entry):
        entry = make_entry("home")

        assert entry.is_visible_to(frozenset())
        assert entry.is_visible_to(frozenset(), PermissionMatchPolicy.ALL)

    def test_no_filter_shows_everything(self, make_entry):
        entry = make_entry("users", required_permissions=(USERS_READ,))

        assert entry.is_visible_to(None)

    def test_any_policy_needs_one_permission(self, make_entry):
        entry = make_entry("users", required_permissions=(USERS_READ, USERS_WRITE))

        assert entry.is_visible_to({USERS_READ}, PermissionMatchPolicy.ANY)
        assert not entry.is_visible_to(set(), PermissionMatchPolicy.ANY)

    def test_all_policy_needs_every_permission(self, make_entry):
        entry = make_entry("users", required_permissions=(USERS_READ, USERS_WRITE))

        assert not entry.is_visible_to({USERS_READ}, PermissionMatchPolicy.ALL)
        assert entry.is_visible_to({USERS_READ, USERS_WRITE}, PermissionMatchPolicy.ALL)


class TestMenuId:
    def test_from_string_rejects_non_ulid(self):
        with pytest.raises(ValueError, match="Invalid MenuId"):
            MenuId.from_string("not-a-ulid")

    def test_generated_ids_parse(self):
        menu_id = MenuId.generate()

        assert MenuId.from_string(str(menu_id)) == menu_id

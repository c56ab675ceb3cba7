"""Unit tests for TenantContextResolver."""

import json
from unittest.mock import create_autospec

import pytest

from navigation.application.observability import TenantContextResolverProbe
from navigation.application.tenant_context_resolver import TenantContextResolver
from navigation.infrastructure.durable_store import InMemoryDurableStore
from navigation.ports import SESSION_KEYS, DurableKey, TenantAccessDeniedError
from shared_kernel.tenancy import TenantSwitchNotifier


@pytest.fixture
def mock_probe():
    return create_autospec(TenantContextResolverProbe, instance=True)


@pytest.fixture
def store() -> InMemoryDurableStore:
    return InMemoryDurableStore()


@pytest.fixture
def notifier() -> TenantSwitchNotifier:
    return TenantSwitchNotifier()


@pytest.fixture
def resolver(store, notifier, mock_probe) -> TenantContextResolver:
    return TenantContextResolver(store, notifier=notifier, probe=mock_probe)


class TestResolve:
    def test_nothing_selected(self, resolver, mock_probe):
        assert resolver.resolve() is None
        mock_probe.no_tenant_resolved.assert_called_once()

    def test_reads_durable_record_then_memory(self, resolver, store, acme, mock_probe):
        store.set_item(DurableKey.CURRENT_TENANT, json.dumps(acme.to_dict()))

        assert resolver.resolve() == acme
        assert resolver.resolve() == acme

        sources = [c.kwargs["source"] for c in mock_probe.tenant_resolved.call_args_list]
        assert sources == ["durable", "memory"]

    def test_memory_wins_over_durable(self, resolver, store, acme, globex):
        resolver.set_current(acme)
        store.set_item(DurableKey.CURRENT_TENANT, json.dumps(globex.to_dict()))

        assert resolver.resolve() == acme
        assert resolver.durable_slug() == "globex"

    @pytest.mark.parametrize("tenant_type", ["SYSTEM", "DEMO"])
    def test_record_with_platform_tenant_type_is_kept(
        self, resolver, store, mock_probe, tenant_type
    ):
        record = json.dumps({"id": "t1", "slug": "system", "type": tenant_type})
        store.set_item(DurableKey.CURRENT_TENANT, record)

        tenant = resolver.resolve()

        assert tenant is not None
        assert tenant.slug == "system"
        assert tenant.type == tenant_type
        assert store.get_item(DurableKey.CURRENT_TENANT) == record
        mock_probe.malformed_record_discarded.assert_not_called()

    @pytest.mark.parametrize("raw", ["{not json", '{"slug": "acme"}', '"acme"'])
    def test_malformed_record_is_discarded(self, resolver, store, mock_probe, raw):
        store.set_item(DurableKey.CURRENT_TENANT, raw)

        assert resolver.resolve() is None
        assert store.get_item(DurableKey.CURRENT_TENANT) is None
        mock_probe.malformed_record_discarded.assert_called_once()


class TestSelection:
    def test_set_current_persists_and_notifies(self, resolver, store, notifier, acme):
        received = []
        notifier.subscribe(received.append)

        resolver.set_current(acme)

        assert json.loads(store.get_item(DurableKey.CURRENT_TENANT))["slug"] == "acme"
        assert received == [acme]

    def test_switch_to_member_tenant(self, resolver, member, acme):
        resolver.switch_tenant(member, acme)

        assert resolver.resolve() == acme

    def test_switch_to_foreign_tenant_is_denied(
        self, resolver, member, acme, globex, mock_probe
    ):
        resolver.set_current(acme)

        with pytest.raises(TenantAccessDeniedError):
            resolver.switch_tenant(member, globex)

        assert resolver.resolve() == acme
        mock_probe.tenant_switch_denied.assert_called_once_with("user-1", "tenant-globex")

    def test_super_admin_may_select_any_tenant(self, resolver, super_admin, globex):
        resolver.switch_tenant(super_admin, globex)

        assert resolver.resolve() == globex


class TestClear:
    def test_clear_removes_session_records_and_notifies(
        self, resolver, store, notifier, acme
    ):
        resolver.set_current(acme)
        for key in SESSION_KEYS:
            if key != DurableKey.CURRENT_TENANT:
                store.set_item(key, "x")
        store.set_item("theme", "dark")
        received = []
        notifier.subscribe(received.append)

        resolver.clear()

        assert resolver.resolve() is None
        assert store.keys() == ["theme"]
        assert received == [None]


class TestStoredUser:
    def test_prefers_auth_user(self, resolver, store, member, super_admin):
        store.set_item(DurableKey.USER, member.to_json())
        store.set_item(DurableKey.AUTH_USER, super_admin.to_json())

        assert resolver.stored_user() == super_admin

    def test_falls_back_when_auth_user_malformed(self, resolver, store, member):
        store.set_item(DurableKey.AUTH_USER, '{"email": "x@example.com"}')
        store.set_item(DurableKey.USER, member.to_json())

        assert resolver.stored_user() == member
        assert store.get_item(DurableKey.AUTH_USER) is None

    def test_no_user(self, resolver):
        assert resolver.stored_user() is None

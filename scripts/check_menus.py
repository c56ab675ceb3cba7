#!/usr/bin/env python3
"""Inspect tenants and their menus, and optionally run the route guard.

Usage:
    python scripts/check_menus.py                          # every tenant
    python scripts/check_menus.py --tenant-slug acme       # one tenant
    python scripts/check_menus.py --tenant-slug acme --route /acme/reports

With --route the tenant is selected on a client session whose durable
record lives at WAYFINDER_NAV_DURABLE_STORE_PATH (in memory when unset),
then the guard checks the route without a permission filter.

Environment Variables:
    WAYFINDER_DB_*: Database connection (see infrastructure.settings)
    WAYFINDER_NAV_*: Navigation settings (see infrastructure.settings)
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

load_dotenv(Path(__file__).parent.parent / ".env")

from iam.infrastructure.tenant_repository import TenantRepository  # noqa: E402
from infrastructure.database.dependencies import (  # noqa: E402
    close_database_connections,
    get_write_sessionmaker,
)
from infrastructure.logging import configure_logging  # noqa: E402
from infrastructure.settings import get_navigation_settings  # noqa: E402
from navigation.application.services import (  # noqa: E402
    MenuAdminService,
    MenuResolutionService,
)
from navigation.application.tenant_context_resolver import (  # noqa: E402
    TenantContextResolver,
)
from navigation.dependencies import (  # noqa: E402
    build_durable_store,
    build_route_guard,
)
from navigation.application.navigation_state import DEFAULT_LOCATIONS  # noqa: E402
from navigation.domain.menu_tree import MenuNode  # noqa: E402
from navigation.domain.value_objects import PermissionMatchPolicy  # noqa: E402
from navigation.infrastructure.menu_repository import MenuRepository  # noqa: E402
from navigation.ports.exceptions import MenuStoreUnavailableError  # noqa: E402

console = Console()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Inspect tenants and menus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--tenant-slug", help="Only check this tenant")
    parser.add_argument("--route", help="Run the route guard for this path")
    return parser.parse_args()


def add_nodes(tree: Tree, nodes: list[MenuNode]) -> None:
    for node in nodes:
        branch = tree.add(
            f"{node.entry.label} [dim]({node.name})[/dim] "
            f"{node.path or node.entry.url}"
        )
        add_nodes(branch, list(node.children))


async def check(args) -> int:
    settings = get_navigation_settings()
    sessionmaker = get_write_sessionmaker()

    async with sessionmaker() as session:
        tenant_repository = TenantRepository(session)
        if args.tenant_slug:
            tenant = await tenant_repository.get_by_slug(args.tenant_slug)
            if tenant is None:
                console.print(f"[red]Tenant '{args.tenant_slug}' not found[/red]")
                return 1
            tenants = [tenant]
        else:
            tenants = await tenant_repository.list_all(active_only=False)

        tenant_table = Table(title="Tenants")
        for column in ("ID", "Name", "Slug", "Type", "Active", "Menus"):
            tenant_table.add_column(column)

        admin = MenuAdminService(MenuRepository(session), session)
        for tenant in tenants:
            tenant_table.add_row(
                tenant.id.value,
                tenant.name,
                tenant.slug,
                str(tenant.type),
                "yes" if tenant.is_active else "no",
                str(await admin.count_menus(tenant.id.value)),
            )
        console.print(tenant_table)
        global_table = Table(title="Global menus")
        for column in ("Location", "Order", "Name", "Path", "Permissions"):
            global_table.add_column(column)
        for entry in await admin.list_menus(None):
            global_table.add_row(
                entry.location.value,
                str(entry.order),
                entry.name,
                entry.path or entry.url or "",
                ", ".join(str(p) for p in entry.required_permissions),
            )
        console.print(global_table)

        resolution = MenuResolutionService(
            MenuRepository(session),
            policy=PermissionMatchPolicy(settings.permission_match_policy),
        )
        for tenant in tenants:
            tree = Tree(f"[bold]{tenant.name}[/bold] ({tenant.slug})")
            for location in DEFAULT_LOCATIONS:
                nodes = await resolution.resolve_menus_or_raise(
                    tenant.id.value, location, tenant_slug=tenant.slug
                )
                if nodes:
                    add_nodes(tree.add(location.value), nodes)
            console.print(tree)

        if args.route:
            if len(tenants) != 1:
                console.print("[red]--route needs --tenant-slug[/red]")
                return 1
            resolver = TenantContextResolver(build_durable_store(settings))
            resolver.set_current(tenants[0].to_context())
            guard = build_route_guard(resolver, resolution, settings)
            outcome = await guard.check(args.route)
            if outcome is None:
                console.print("[yellow]Check superseded[/yellow]")
                return 1
            if outcome.allowed:
                console.print(f"[green]ALLOWED[/green] {outcome.path}")
            else:
                console.print(
                    f"[yellow]REDIRECT[/yellow] {outcome.path} -> "
                    f"{outcome.redirect_to} ({outcome.reason.value})"
                )
    return 0


async def main() -> int:
    args = parse_args()
    configure_logging()
    try:
        return await check(args)
    except MenuStoreUnavailableError as e:
        console.print(f"[red]Menu store unavailable:[/red] {e}")
        return 1
    finally:
        await close_database_connections()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

#!/usr/bin/env python3
"""Delete navigation menus.

Usage:
    python scripts/clear_menus.py --all                 # every menu
    python scripts/clear_menus.py --tenant-slug acme    # menus of one tenant
    python scripts/clear_menus.py --global              # tenant-less menus
    python scripts/clear_menus.py --all --yes           # skip confirmation

Environment Variables:
    WAYFINDER_DB_*: Database connection (see infrastructure.settings)
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Confirm

load_dotenv(Path(__file__).parent.parent / ".env")

from iam.infrastructure.tenant_repository import TenantRepository  # noqa: E402
from infrastructure.database.dependencies import (  # noqa: E402
    close_database_connections,
    get_write_sessionmaker,
)
from infrastructure.logging import configure_logging  # noqa: E402
from navigation.application.services import MenuAdminService  # noqa: E402
from navigation.infrastructure.menu_repository import MenuRepository  # noqa: E402
from navigation.ports.exceptions import MenuStoreUnavailableError  # noqa: E402

console = Console()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Delete navigation menus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    scope = parser.add_mutually_exclusive_group(required=True)
    scope.add_argument("--all", action="store_true", help="Delete every menu")
    scope.add_argument("--tenant-slug", help="Delete the menus of this tenant")
    scope.add_argument(
        "--global",
        dest="global_only",
        action="store_true",
        help="Delete menus without a tenant",
    )
    parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )
    return parser.parse_args()


async def clear(args) -> int:
    sessionmaker = get_write_sessionmaker()

    tenant_id = None
    if args.tenant_slug:
        async with sessionmaker() as session:
            tenant = await TenantRepository(session).get_by_slug(args.tenant_slug)
        if tenant is None:
            console.print(f"[red]Tenant '{args.tenant_slug}' not found[/red]")
            return 1
        tenant_id = tenant.id.value

    async with sessionmaker() as session:
        service = MenuAdminService(MenuRepository(session), session)
        if args.all:
            scope = "menus"
            count = await service.count_menus()
        else:
            scope = f"menus of {args.tenant_slug}" if tenant_id else "global menus"
            count = await service.count_menus(tenant_id)
        await session.rollback()

        if count == 0:
            console.print(f"[yellow]No {scope} to delete[/yellow]")
            return 0
        if not args.yes and not Confirm.ask(f"Delete {count} {scope}?"):
            console.print("Aborted")
            return 1

        if args.all:
            deleted = await service.clear_all_menus()
        else:
            deleted = await service.clear_tenant_menus(tenant_id)

    console.print(f"[green]Deleted {deleted} menus[/green]")
    return 0


async def main() -> int:
    args = parse_args()
    configure_logging()
    try:
        return await clear(args)
    except MenuStoreUnavailableError as e:
        console.print(f"[red]Menu store unavailable:[/red] {e}")
        return 1
    finally:
        await close_database_connections()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

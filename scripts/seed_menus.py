#!/usr/bin/env python3
"""Seed navigation menus.

Without --file, seeds the default structure: public header and footer
menus (global) plus, when a tenant is given, the tenant sidebar. Menus
already present by (tenant, location, name) are skipped, so re-running
is safe.

The file format is a JSON list of menus as accepted by
POST /navigation/menus/batch, with nested "children".

Usage:
    python scripts/seed_menus.py                         # global menus
    python scripts/seed_menus.py --tenant-slug acme      # + acme sidebar
    python scripts/seed_menus.py --tenant-slug acme --file menus.json

Environment Variables:
    WAYFINDER_DB_*: Database connection (see infrastructure.settings)
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

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
from navigation.presentation.menus.models import CreateMenuRequest  # noqa: E402

console = Console()

GLOBAL_MENUS = [
    {"name": "home", "label": "Home", "location": "HEADER", "path": "/", "order": 1},
    {
        "name": "features",
        "label": "Features",
        "location": "HEADER",
        "path": "/#features",
        "order": 2,
    },
    {
        "name": "login",
        "label": "Login",
        "location": "HEADER",
        "path": "/login",
        "order": 10,
    },
    {
        "name": "docs",
        "label": "Documentation",
        "location": "FOOTER",
        "url": "https://docs.example.com",
        "order": 1,
    },
    {
        "name": "privacy",
        "label": "Privacy",
        "location": "FOOTER",
        "path": "/privacy",
        "order": 2,
    },
]
for _menu in GLOBAL_MENUS:
    _menu["is_public"] = True

TENANT_SIDEBAR = [
    {
        "name": "dashboard",
        "label": "Dashboard",
        "path": "/{tenant}/dashboard",
        "icon": "LayoutDashboard",
        "category": "DASHBOARD",
        "order": 1,
    },
    {
        "name": "management",
        "label": "Management",
        "path": "/{tenant}/manage",
        "icon": "Settings",
        "category": "MANAGER_ADMIN",
        "order": 2,
        "permissions": ["users:read:tenant"],
        "children": [
            {
                "name": "users",
                "label": "Users",
                "path": "/{tenant}/manage/users",
                "icon": "Users",
                "order": 1,
                "permissions": ["users:read:tenant"],
            },
            {
                "name": "roles",
                "label": "Roles",
                "path": "/{tenant}/manage/roles",
                "icon": "Shield",
                "order": 2,
                "permissions": ["roles:read:tenant"],
            },
        ],
    },
    {
        "name": "reports",
        "label": "Reports",
        "path": "/{tenant}/reports",
        "icon": "BarChart",
        "category": "NAVIGATION",
        "order": 3,
        "permissions": ["reports:read"],
    },
]

_menu_list = TypeAdapter(list[CreateMenuRequest])


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Seed navigation menus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--tenant-slug", help="Tenant receiving the menus")
    parser.add_argument(
        "--file", type=Path, help="JSON file with the menus to seed"
    )
    return parser.parse_args()


def load_menus(path: Path) -> list[CreateMenuRequest]:
    """Parse and validate a menu file."""
    return _menu_list.validate_python(json.loads(path.read_text()))


async def seed(args) -> int:
    sessionmaker = get_write_sessionmaker()

    tenant_id = None
    if args.tenant_slug:
        async with sessionmaker() as session:
            tenant = await TenantRepository(session).get_by_slug(args.tenant_slug)
        if tenant is None:
            console.print(f"[red]Tenant '{args.tenant_slug}' not found[/red]")
            return 1
        tenant_id = tenant.id.value

    batches: list[tuple[str | None, list[CreateMenuRequest]]] = []
    if args.file:
        batches.append((tenant_id, load_menus(args.file)))
    else:
        batches.append((None, _menu_list.validate_python(GLOBAL_MENUS)))
        if tenant_id:
            batches.append((tenant_id, _menu_list.validate_python(TENANT_SIDEBAR)))

    table = Table(title="Seeded menus")
    table.add_column("Tenant")
    table.add_column("Requested", justify="right")
    table.add_column("Created", justify="right")
    table.add_column("Skipped", justify="right")

    for batch_tenant_id, menus in batches:
        entries = [e for menu in menus for e in menu.to_domain(batch_tenant_id)]
        async with sessionmaker() as session:
            created = await MenuAdminService(
                MenuRepository(session), session
            ).seed_menus(entries)
        table.add_row(
            args.tenant_slug if batch_tenant_id else "(global)",
            str(len(entries)),
            str(created),
            str(len(entries) - created),
        )

    console.print(table)
    return 0


async def main() -> int:
    args = parse_args()
    configure_logging()
    try:
        return await seed(args)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Invalid menu file:[/red] {e}")
        return 1
    except MenuStoreUnavailableError as e:
        console.print(f"[red]Menu store unavailable:[/red] {e}")
        return 1
    finally:
        await close_database_connections()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

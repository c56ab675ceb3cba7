#!/usr/bin/env python3
"""Migrate legacy user_tenants rows into user_assignments.

Commands:
    migrate   Copy every legacy membership not migrated yet
    rollback  Delete every assignment created by this migration
    verify    Compare legacy and migrated row counts

Usage:
    python scripts/migrate_user_tenant_to_assignment.py migrate
    python scripts/migrate_user_tenant_to_assignment.py migrate --dry-run
    python scripts/migrate_user_tenant_to_assignment.py rollback --yes
    python scripts/migrate_user_tenant_to_assignment.py verify

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
from rich.table import Table

load_dotenv(Path(__file__).parent.parent / ".env")

from iam.application.services import AssignmentMigrationService  # noqa: E402
from iam.infrastructure.assignment_repository import (  # noqa: E402
    AssignmentRepository,
)
from iam.ports.exceptions import MigrationError  # noqa: E402
from infrastructure.database.dependencies import (  # noqa: E402
    close_database_connections,
    get_write_sessionmaker,
)
from infrastructure.logging import configure_logging  # noqa: E402

console = Console()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Migrate user_tenants to user_assignments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate = subparsers.add_parser("migrate", help="Copy legacy memberships")
    migrate.add_argument(
        "--dry-run", action="store_true", help="Report without writing"
    )

    rollback = subparsers.add_parser("rollback", help="Delete migrated assignments")
    rollback.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )

    subparsers.add_parser("verify", help="Compare row counts")
    return parser.parse_args()


async def run(args) -> int:
    async with get_write_sessionmaker()() as session:
        service = AssignmentMigrationService(AssignmentRepository(session), session)

        if args.command == "migrate":
            report = await service.migrate(dry_run=args.dry_run)
            table = Table(title="Dry run" if report.dry_run else "Migration")
            table.add_column("Legacy rows", justify="right")
            table.add_column("Migrated", justify="right")
            table.add_column("Already migrated", justify="right")
            table.add_row(
                str(report.legacy_count), str(report.migrated), str(report.skipped)
            )
            console.print(table)
            return 0

        if args.command == "rollback":
            if not args.yes and not Confirm.ask("Delete every migrated assignment?"):
                console.print("Aborted")
                return 1
            deleted = await service.rollback()
            console.print(f"[green]Deleted {deleted} migrated assignments[/green]")
            return 0

        report = await service.verify()
        console.print(
            f"Legacy rows: {report.legacy_count}  "
            f"Migrated assignments: {report.migrated_count}"
        )
        if report.verified:
            console.print("[green]Migration verified[/green]")
            return 0
        console.print("[red]Migration incomplete[/red]")
        return 1


async def main() -> int:
    args = parse_args()
    configure_logging()
    try:
        return await run(args)
    except MigrationError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    finally:
        await close_database_connections()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

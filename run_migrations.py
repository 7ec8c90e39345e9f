#!/usr/bin/env python3
"""
Database migration runner for Supabase.

Applies the SQL files in migrations/ in name order, each in its own
transaction, and records them in a tracking table.

Usage:
    python run_migrations.py              # Apply pending migrations
    python run_migrations.py --status     # Show migration status
    python run_migrations.py --dry-run    # Show what would run
    python run_migrations.py --check      # Exit 1 if anything is pending or edited

Configuration:
    Set SUPABASE_DB_URL in your .env file (Supabase Dashboard → Settings →
    Database → Connection string → URI).
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass(frozen=True)
class MigrationFile:
    name: str
    path: Path
    checksum: str


@dataclass
class MigrationPlan:
    """Which migration files still need to run, and which changed after applying."""

    pending: list[MigrationFile]
    drifted: list[MigrationFile]

    @property
    def clean(self) -> bool:
        return not self.pending and not self.drifted


def checksum_of(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationFile]:
    """All *.sql files in name order."""
    if not directory.exists():
        return []
    return [
        MigrationFile(path.name, path, checksum_of(path.read_text()))
        for path in sorted(directory.glob("*.sql"))
    ]


def plan_migrations(files: list[MigrationFile], applied: dict[str, str]) -> MigrationPlan:
    """
    Compare files on disk against applied checksums.

    Args:
        files: Discovered migration files
        applied: Applied migration name -> checksum
    """
    pending = [f for f in files if f.name not in applied]
    drifted = [f for f in files if f.name in applied and applied[f.name] != f.checksum]
    return MigrationPlan(pending=pending, drifted=drifted)


def get_db_connection(db_url: Optional[str] = None):
    """Connect to the Supabase Postgres database, or exit with a hint."""
    db_url = db_url or get_settings().supabase_db_url
    if not db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        console.print("Find it in Supabase Dashboard → Settings → Database → Connection string → URI")
        sys.exit(1)

    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_migrations_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    name       text PRIMARY KEY,
                    checksum   text NOT NULL,
                    applied_at timestamptz NOT NULL DEFAULT now()
                )
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def fetch_applied(conn) -> dict[str, tuple[str, object]]:
    """Applied migration name -> (checksum, applied_at)."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {name: (checksum, applied_at) for name, checksum, applied_at in cur.fetchall()}


def apply_migration(conn, migration: MigrationFile) -> None:
    """Run one file and record it; rolls back both on failure."""
    console.print(f"[blue]Applying:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name}")


def print_status(files: list[MigrationFile], applied: dict[str, tuple[str, object]]) -> None:
    plan = plan_migrations(files, {name: info[0] for name, info in applied.items()})
    pending = {f.name for f in plan.pending}
    drifted = {f.name for f in plan.drifted}

    if not files and not applied:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    for name in sorted({f.name for f in files} | set(applied)):
        if name in pending:
            status = "[yellow]Pending[/yellow]"
        elif name in drifted:
            status = "[red]Changed since applied[/red]"
        else:
            status = "[green]Applied[/green]"
        applied_at = applied.get(name, (None, None))[1]
        table.add_row(name, status, applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else "")
    console.print(table)


def main() -> int:
    parser = argparse.ArgumentParser(description="Run BridgeIt database migrations")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show migration status")
    mode.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit non-zero if migrations are pending or were edited after applying",
    )
    args = parser.parse_args()

    files = discover_migrations()
    conn = get_db_connection()
    try:
        ensure_migrations_table(conn)
        applied = fetch_applied(conn)

        if args.status:
            print_status(files, applied)
            return 0

        plan = plan_migrations(files, {name: info[0] for name, info in applied.items()})
        for migration in plan.drifted:
            console.print(f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied")

        if args.check:
            for migration in plan.pending:
                console.print(f"[yellow]Pending:[/yellow] {migration.name}")
            return 0 if plan.clean else 1

        if not plan.pending:
            console.print("[green]All migrations are up to date.[/green]")
            return 0

        for migration in plan.pending:
            if args.dry_run:
                console.print(f"[cyan]Would apply:[/cyan] {migration.name}")
            else:
                apply_migration(conn, migration)
        return 0
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())

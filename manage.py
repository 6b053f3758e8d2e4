#!/usr/bin/env python3
"""
ShopLedger management CLI.

Usage:
    python manage.py serve           Apply migrations and start the API server
    python manage.py migrate         Apply pending schema migrations
    python manage.py status          Show migration status and schema checks
    python manage.py backup DEST     Snapshot the database to DEST
    python manage.py restore SRC     Stage SRC to replace the database on next start
    python manage.py list-backups    List backup files in a directory
"""

import argparse
import asyncio
import sys
from pathlib import Path

from shopledger.config import configure_logging, get_settings
from shopledger.core.exceptions import BackupError
from shopledger.infrastructure.backup import (
    BackupManager,
    list_backups,
    stage_restore,
)
from shopledger.infrastructure.storage.sqlite import Database
from shopledger.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    run_migrations,
    verify_schema_integrity,
)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn. Migrations and pending restores run in the app lifespan."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port
    print(f"Starting server on {host}:{port}...")
    print(f"  API docs:  http://{host}:{port}/docs")
    uvicorn.run(
        "shopledger.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    results = asyncio.run(run_migrations(args.db))
    if not results:
        print("Database is up to date.")
        return

    for result in results:
        state = "ok" if result.success else f"FAILED ({result.error})"
        print(f"  {result.version}: {state}")
    if not all(r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Print migration status and integrity checks."""
    status = asyncio.run(get_migration_status(args.db))
    if not status.exists:
        print("Database does not exist yet. Run 'migrate' or 'serve'.")
        return

    print(f"Current version: {status.current_version}")
    print(f"Applied: {', '.join(status.applied) or '-'}")
    print(f"Pending: {', '.join(status.pending) or '-'}")

    checks = asyncio.run(verify_schema_integrity(args.db))
    for check in checks:
        state = "PASS" if check.passed else f"FAIL {check.detail}"
        print(f"  {check.check}: {state}")
    if not all(c.passed for c in checks):
        sys.exit(1)


async def _backup(db_path: Path | None, destination: Path) -> Path:
    settings = get_settings()
    db = Database(db_path or settings.storage.db_path, settings.storage.busy_timeout)
    await db.open()
    try:
        return await BackupManager(db).backup(destination)
    finally:
        await db.close()


def cmd_backup(args: argparse.Namespace) -> None:
    """Snapshot the live database."""
    try:
        path = asyncio.run(_backup(args.db, args.destination))
    except BackupError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    print(f"Backup written -> {path}")


def restore_slot(db_path: Path | None) -> Path:
    """Restore file beside the given database, or the configured slot."""
    storage = get_settings().storage
    if db_path is None:
        return storage.restore_path
    return db_path.with_name(storage.restore_file_name)


def cmd_restore(args: argparse.Namespace) -> None:
    """Stage a backup for the next start."""
    try:
        staged = stage_restore(args.source, restore_slot(args.db))
    except BackupError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    print(f"Restore staged -> {staged}")
    print("  Restart the server to apply it.")


def cmd_list_backups(args: argparse.Namespace) -> None:
    """List backups, newest name first."""
    directory = args.directory or get_settings().backup.default_dir
    backups = list_backups(directory)
    if not backups:
        print(f"No backups in {directory}.")
        return
    for info in backups:
        print(f"  {info.name}  {info.size:>10} bytes  {info.modified_at:%Y-%m-%d %H:%M:%S}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="ShopLedger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--db", type=Path, default=None, help="Database file (default from settings)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default from settings)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default from settings)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    # backup
    p_backup = sub.add_parser("backup", help="Snapshot the database")
    p_backup.add_argument("destination", type=Path, help="Target file")
    p_backup.set_defaults(func=cmd_backup)

    # restore
    p_restore = sub.add_parser("restore", help="Stage a backup for restore")
    p_restore.add_argument("source", type=Path, help="Backup file")
    p_restore.set_defaults(func=cmd_restore)

    # list-backups
    p_list = sub.add_parser("list-backups", help="List backup files")
    p_list.add_argument("directory", type=Path, nargs="?", default=None)
    p_list.set_defaults(func=cmd_list_backups)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()

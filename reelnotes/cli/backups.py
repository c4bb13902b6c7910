"""Backup CLI commands."""

from pathlib import Path

import click

from ..store import StoreError
from .core import backups_for, cli

LIST_HINT = "See 'reelnotes backup list' for backup numbers."


@cli.group()
def backup() -> None:
    """Snapshot and restore the annotation store."""
    pass


@backup.command(name="create")
@click.option("--reason", "-r", default="manual", help="Label stored in the backup name")
@click.pass_context
def backup_create(ctx: click.Context, reason: str) -> None:
    """Snapshot the current annotation store."""
    backup_path = backups_for(ctx).create_backup_file(reason)
    if backup_path:
        click.echo(f"Backup created: {backup_path}")
    else:
        click.echo("No annotations saved yet.")


@backup.command(name="list")
@click.pass_context
def backup_list(ctx: click.Context) -> None:
    """List snapshots, newest first."""
    backups = backups_for(ctx).list_backups()
    if not backups:
        click.echo("No backups found.")
        return

    click.echo(f"\n{len(backups)} backup(s):\n")
    for i, b in enumerate(backups, 1):
        click.echo(f"  {i}. {b['timestamp']:%Y-%m-%d %H:%M:%S} [{b['reason']}] {b['size_kb']} KB  {b['path']}")
    click.echo()


@backup.command(name="restore")
@click.argument("backup_id", type=click.IntRange(min=1), required=False)
@click.option("--path", "-p", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Backup file to restore")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def backup_restore(ctx: click.Context, backup_id: int | None, path: Path | None, yes: bool) -> None:
    """Replace the annotation store with a snapshot.

    BACKUP_ID is the number shown by 'reelnotes backup list'.
    """
    manager = backups_for(ctx)

    if path:
        backup_path = path
    elif backup_id:
        backups = manager.list_backups()
        if backup_id > len(backups):
            raise click.ClickException(f"No backup number {backup_id}. {LIST_HINT}")
        backup_path = backups[backup_id - 1]["path"]
    else:
        raise click.UsageError(f"Give a BACKUP_ID or --path. {LIST_HINT}")

    if not yes and not click.confirm(f"Replace {manager.store_path} with {backup_path.name}?"):
        return

    try:
        manager.restore_backup(backup_path)
    except StoreError as e:
        raise click.ClickException(f"Not restoring {backup_path}: {e}") from e
    except OSError as e:
        raise click.ClickException(f"Failed to restore backup: {e}") from e
    click.echo(f"Restored {manager.store_path} from {backup_path.name}")

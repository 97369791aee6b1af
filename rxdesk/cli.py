"""
Maintenance commands, run with ``flask --app rxdesk <command>``.
"""
from pathlib import Path

import click
from flask import Flask, current_app

from rxdesk.exceptions import RecordsError
from rxdesk.extensions import get_stores
from rxdesk.services import (
    backup_filename,
    encode_snapshot,
    export_snapshot,
    import_snapshot,
)


def register_cli(app: Flask) -> None:
    """
    Adds small helper CLI commands:
    - flask backup export [PATH]: write a backup snapshot file
    - flask backup import PATH: merge a snapshot's prescriptions
    - flask admin-status: show whether the admin account exists
    """

    @app.cli.group("backup")
    def backup_group():
        """Export or import backup snapshots."""

    @backup_group.command("export")
    @click.argument("path", required=False, type=click.Path(dir_okay=False, path_type=Path))
    def export_command(path):
        """Write a snapshot of prescriptions and users (without password hashes)."""
        stores = get_stores()
        snapshot = export_snapshot(
            stores["prescriptions"],
            stores["credentials"],
            description=current_app.config.get("BACKUP_DESCRIPTION"),
        )
        path = path or Path(backup_filename())
        try:
            path.write_text(encode_snapshot(snapshot), encoding="utf-8")
        except OSError as e:
            raise click.ClickException(f"Cannot write {path}: {e}")
        click.echo(
            f"Exported {len(snapshot['prescriptions'])} prescriptions and "
            f"{len(snapshot['users'])} users to {path}"
        )

    @backup_group.command("import")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def import_command(path):
        """Merge a snapshot's prescriptions into the live records."""
        try:
            added = import_snapshot(path.read_bytes(), get_stores()["prescriptions"])
        except RecordsError as e:
            raise click.ClickException(e.message)
        click.echo(f"Import successful. Added {added} new prescriptions.")

    @app.cli.command("admin-status")
    def admin_status_command():
        """Show whether the admin account exists and the record counts."""
        stores = get_stores()
        credentials = stores["credentials"]
        users = credentials.list_users()
        click.echo(f"Admin registered: {'yes' if credentials.admin_exists() else 'no'}")
        click.echo(f"Moderators: {sum(1 for u in users if u.get('role') == 'moderator')}")
        click.echo(f"Prescriptions: {len(stores['prescriptions'].list_prescriptions())}")

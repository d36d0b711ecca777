# app/cli.py
from pathlib import Path

import click
from flask import current_app
from flask.cli import AppGroup

from app.gallery.builder import write_manifest
from app.services.stats_users import create_or_update_user
from app.services.visit_stats import build_summary, summary_lines

gallery_cli = AppGroup("gallery", help="Gallery manifest commands.")
stats_cli = AppGroup("stats", help="Visit statistics commands.")


@gallery_cli.command("build")
@click.option("--root", "root", default=None, help="Gallery root. Defaults to GALLERY_DIR.")
@click.option("--out", "out", default=None, help="Output file. Defaults to <root>/GALLERY_MANIFEST.")
@click.option("--hemisphere", type=click.Choice(["north", "south"]), default=None)
def gallery_build_cmd(root, out, hemisphere):
    """Scan the image folders and write gallery-manifest.json."""
    cfg = current_app.config
    root = Path(root or cfg["GALLERY_DIR"])
    out = Path(out) if out else root / cfg["GALLERY_MANIFEST"]
    hemisphere = hemisphere or cfg.get("HEMISPHERE_DEFAULT", "north")

    path = write_manifest(root, out, hemisphere=hemisphere)
    current_app.extensions["gallery_manifest"].reset()
    click.echo(f"{path.name} generated in {path.parent}")


@stats_cli.command("create-user")
@click.argument("username")
@click.password_option()
def stats_create_user_cmd(username, password):
    """Create a dashboard login, or reset its password if it exists."""
    user, created = create_or_update_user(username, password)
    click.echo(f"{'Created' if created else 'Updated'} stats user: {user.username}")


@stats_cli.command("summary")
def stats_summary_cmd():
    """Print the same aggregates the dashboard shows."""
    for line in summary_lines(build_summary()):
        click.echo(line)


def register_cli(app):
    app.cli.add_command(gallery_cli)
    app.cli.add_command(stats_cli)

"""Command-line interface for Quill.

This module defines the CLI commands using Click framework.
It provides commands for building the post catalog and for browsing posts.

Commands:
- catalog: Scan the content directory and write the JSON catalog.
- list: Show one page of posts, newest first.
- show: Print a single post as HTML or cleaned markdown.
- tags: Show every tag with its post count.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__
from .catalog import build_catalog, write_catalog
from .config import create_repository, load_config, resolve_path
from .errors import QuillError
from .models import NO_DATE


@click.group()
@click.version_option(version=__version__, prog_name="quill")
@click.option("-v", "--verbose", is_flag=True, help="Log progress and skipped posts")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Quill blog post pipeline."""
    project_root = Path.cwd()
    config = load_config(project_root)
    level = "DEBUG" if verbose else str(config.get("log_level", "WARNING")).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"root": project_root, "config": config}


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Catalog file to write (overrides quill.yaml catalog_path)",
)
@click.pass_obj
def catalog(obj: dict, output: Path | None):
    """Scan the content directory and write the post catalog."""
    root, config = obj["root"], obj["config"]
    content_dir = resolve_path(root, config["content_dir"])
    target = output or resolve_path(root, config["catalog_path"])
    try:
        entries = build_catalog(content_dir)
    except QuillError as exc:
        raise click.ClickException(str(exc)) from exc
    write_catalog(entries, target)
    click.echo(f"Catalogued {len(entries)} posts into {target}")


@cli.command(name="list")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=None,
    help="Posts per page (overrides quill.yaml page_size)",
)
@click.pass_obj
def list_posts(obj: dict, page: int, page_size: int | None):
    """List posts, newest first."""
    repository = _repository(obj)
    size = page_size or int(obj["config"].get("page_size", 5))
    try:
        view = repository.paginate(page, size)
    except QuillError as exc:
        raise click.ClickException(str(exc)) from exc

    if not view.items:
        click.echo("No posts found.")
        return
    for post in view.items:
        published = post.date.isoformat() if post.date != NO_DATE else "----------"
        click.echo(f"{published}  {click.style(post.slug, fg='cyan')}  {post.title}")
    click.echo(
        f"Page {view.current_page} of {view.total_pages} ({view.total_items} posts)"
    )


@cli.command()
@click.argument("slug")
@click.option("--markdown", is_flag=True, help="Print cleaned markdown instead of HTML")
@click.pass_obj
def show(obj: dict, slug: str, markdown: bool):
    """Print a single post."""
    post = _repository(obj).get_by_slug(slug)
    if post is None:
        raise click.ClickException(f"Post not found: {slug}")
    click.echo(click.style(post.title, bold=True))
    if post.summary is not None:
        click.echo(post.summary)
    click.echo(post.body if markdown else post.content)


@cli.command()
@click.pass_obj
def tags(obj: dict):
    """List tags with the number of posts using each."""
    repository = _repository(obj)
    try:
        counts = repository.list_all().tags().counts()
    except QuillError as exc:
        raise click.ClickException(str(exc)) from exc
    if not counts:
        click.echo("No tags found.")
        return
    for tag, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        click.echo(f"{tag} ({count})")


def _repository(obj: dict):
    try:
        return create_repository(obj["config"], obj["root"])
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc


def main():
    """Entry point for the CLI application."""
    cli()

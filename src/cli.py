"""CLI interface for titleslug."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional
from zoneinfo import ZoneInfoNotFoundError

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from titleslug.config import TitleSlugConfig, load_config, merge_cli_overrides
from titleslug.content.models import MANAGED_CONTENT_TYPE, ContentRecord
from titleslug.content.store import ContentStore
from titleslug.options import DictOptionsStore
from titleslug.slug.config import SlugPattern
from titleslug.slug.hooks import HookDispatcher, register_slug_filter
from titleslug.slug.normalize import normalize
from titleslug.slug.policy import SlugDecisionPolicy, SystemClock
from titleslug.slug.translator import translate

app = typer.Typer(
    name="titleslug",
    help="Translate content titles into URL-safe slugs.",
)

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .titleslug.toml file."),
]
ApiKeyOption = Annotated[
    Optional[str],
    typer.Option("--api-key", help="Google Cloud Translation API key."),
]
TargetOption = Annotated[
    Optional[str],
    typer.Option("--target", "-t", help="Target language code (default: en)."),
]
TypeOption = Annotated[
    str,
    typer.Option("--type", help="Content type of the record."),
]
DateOption = Annotated[
    Optional[str],
    typer.Option("--date", help="Publish date (YYYY-MM-DD). Defaults to unset."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from titleslug import __version__

        console.print(f"titleslug {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging."),
    ] = False,
) -> None:
    """titleslug - translated, URL-safe slugs for content titles."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load(config_path: Path | None, **overrides: object) -> TitleSlugConfig:
    try:
        return merge_cli_overrides(load_config(config_path), **overrides)
    except ValidationError as exc:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {exc}")
        raise typer.Exit(1) from exc


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        err_console.print(f"[red]Error:[/red] Invalid date format: {value}")
        err_console.print("Use YYYY-MM-DD format (e.g., 2024-03-05)")
        raise typer.Exit(1)


def _build_policy(
    config: TitleSlugConfig, store: ContentStore | None = None
) -> SlugDecisionPolicy:
    try:
        clock = SystemClock(config.slug.timezone)
    except ZoneInfoNotFoundError:
        err_console.print(f"[red]Error:[/red] Unknown timezone: {config.slug.timezone}")
        raise typer.Exit(1)
    return SlugDecisionPolicy(
        options=DictOptionsStore(config.as_options()),
        content_store=store,
        clock=clock,
    )


@app.command("normalize")
def normalize_cmd(
    text: Annotated[str, typer.Argument(help="Text to normalize.")],
) -> None:
    """Normalize TEXT into the slug alphabet without translating it."""
    typer.echo(normalize(text))


@app.command("translate")
def translate_cmd(
    text: Annotated[str, typer.Argument(help="Text to translate.")],
    target: TargetOption = None,
    api_key: ApiKeyOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Translate TEXT; prints TEXT unchanged when translation is unavailable."""
    config = _load(config_path, api_key=api_key, target_language=target)
    translation = config.to_translation_config()
    if not translation.is_configured:
        err_console.print("[yellow]No API key configured; text is not translated.[/yellow]")
    result = translate(text, translation.target_language, translation)
    typer.echo(result)


@app.command("convert")
def convert_cmd(
    title: Annotated[str, typer.Argument(help="Title to convert.")],
    pattern: Annotated[
        Optional[SlugPattern],
        typer.Option("--pattern", "-p", help="Slug pattern: title or date_title."),
    ] = None,
    date: DateOption = None,
    content_type: TypeOption = MANAGED_CONTENT_TYPE,
    target: TargetOption = None,
    api_key: ApiKeyOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Print the slug a new record titled TITLE would get."""
    config = _load(config_path, api_key=api_key, target_language=target, pattern=pattern)
    record = ContentRecord(
        content_type=content_type,
        title=title,
        publish_date=_parse_date(date),
    )
    result = _build_policy(config).decide(record)
    if not result.slug:
        err_console.print("[yellow]No slug generated.[/yellow]")
        raise typer.Exit(1)
    typer.echo(result.slug)


@app.command("insert")
def insert_cmd(
    title: Annotated[str, typer.Argument(help="Title of the record.")],
    content_id: Annotated[
        Optional[int],
        typer.Option("--id", help="Update the record with this id instead of creating one."),
    ] = None,
    slug: Annotated[
        str,
        typer.Option("--slug", help="Slug submitted with the record."),
    ] = "",
    date: DateOption = None,
    content_type: TypeOption = MANAGED_CONTENT_TYPE,
    store_dir: Annotated[
        Optional[Path],
        typer.Option("--store-dir", "-s", help="Directory holding the content store."),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Save a record to the local content store through the slug filter."""
    config = _load(config_path, store_directory=str(store_dir) if store_dir else None)
    store = ContentStore(Path(config.store.directory))

    dispatcher = HookDispatcher()
    register_slug_filter(dispatcher, _build_policy(config, store))

    record = ContentRecord(
        id=content_id,
        content_type=content_type,
        title=title,
        publish_date=_parse_date(date),
        slug=slug,
    )
    stored = store.insert(record, dispatcher)

    table = Table(title="Stored record")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("id", str(stored.id))
    table.add_row("type", stored.content_type)
    table.add_row("title", stored.title)
    table.add_row("publish_date", stored.publish_date.isoformat() if stored.publish_date else "-")
    table.add_row("slug", stored.slug or "-")
    console.print(table)


@app.command("config")
def config_cmd(config_path: ConfigOption = None) -> None:
    """Show the effective configuration."""
    config = _load(config_path)
    key = config.translation.api_key
    masked = f"****{key[-4:]}" if key else "(not set)"

    table = Table(title="titleslug configuration")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("translation.api_key", masked)
    table.add_row("translation.target_language", config.translation.target_language)
    table.add_row("translation.endpoint", config.translation.endpoint)
    table.add_row("translation.timeout", str(config.translation.timeout))
    table.add_row("slug.pattern", config.slug.pattern.value)
    table.add_row("slug.timezone", config.slug.timezone or "(local)")
    table.add_row("store.directory", config.store.directory)
    console.print(table)

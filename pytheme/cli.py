"""CLI interface for pytheme."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from . import __version__
from .api import ThemeClient
from .config import DEFAULT_CONFIG_FILE, ThemeConfig, load_config, save_config
from .exceptions import ThemeConfigError, ThemeError
from .output import OutputFormatter
from .sync import ThemeSync
from .utils import build_preview_url, ensure_scheme

logger = logging.getLogger(__name__)


def _load_config(ctx: Any, out: OutputFormatter) -> ThemeConfig:
    """Load the configuration named on the command line or exit."""
    try:
        return load_config(ctx.obj["config_path"])
    except ThemeConfigError as e:
        out.error(str(e))
        ctx.exit(1)


def _create_sync(ctx: Any, out: OutputFormatter) -> ThemeSync:
    """Build a ThemeSync for the theme the configuration lives in."""
    config = _load_config(ctx, out)
    try:
        client = ThemeClient.from_config(config)
    except ThemeConfigError as e:
        out.error(str(e))
        ctx.exit(1)
    ctx.call_on_close(client.close)
    root = Path(ctx.obj["config_path"]).resolve().parent
    return ThemeSync(client, config, root, out)


def _report(
    ctx: Any, out: OutputFormatter, title: str, stats: dict, action_key: str, verb: str
) -> None:
    """Print a batch summary and exit non-zero if anything failed."""
    if out.json_output:
        out.output_json(
            {
                "success": stats[action_key],
                "removed": stats["removals"],
                "failed": stats["errors"],
                "skipped": stats["skips"],
                "failed_files": stats["failed"],
            }
        )
    else:
        summary_items = [(f"Successfully {verb}", f"{stats[action_key]} files")]
        if stats["removals"] > 0 and action_key != "removals":
            summary_items.append(("Removed", f"{stats['removals']} files"))
        if stats["skips"] > 0:
            summary_items.append(("Skipped", f"{stats['skips']} files"))
        if stats["errors"] > 0:
            summary_items.append(("Failed", f"{stats['errors']} files"))
        out.print_summary(title, summary_items)

    if stats["errors"] > 0:
        ctx.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    envvar="PYTHEME_CONFIG",
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Path to the theme configuration file",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: Any, config_path: str, quiet: bool, json: bool, verbose: bool) -> None:
    """pytheme - Sync a local theme directory with your store."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)

    # Configure logging based on verbose flag
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pytheme").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.option("--api-key", "-k", prompt="API key", help="Private app API key")
@click.option(
    "--password", "-p", prompt="Password", hide_input=True, help="Private app password"
)
@click.option(
    "--store", "-s", prompt="Store", help="Store host, e.g. example.myshopify.com"
)
@click.option(
    "--theme-id", "-t", default=None, help="Theme ID (omit for published theme)"
)
@click.pass_context
def configure(
    ctx: Any, api_key: str, password: str, store: str, theme_id: Optional[str]
) -> None:
    """Create or update the configuration file.

    Whitelist and ignore patterns already present in the file are kept.
    """
    out: OutputFormatter = ctx.obj["out"]
    config_path = Path(ctx.obj["config_path"])

    config = ThemeConfig()
    if config_path.exists():
        try:
            config = load_config(config_path)
        except ThemeConfigError as e:
            out.error(str(e))
            ctx.exit(1)

    config.api_key = api_key
    config.password = password
    config.store = store
    config.theme_id = theme_id or None

    saved = save_config(config, config_path)
    out.success(f"Configuration saved to {saved}")


@main.command()
@click.argument("file_globs", nargs=-1)
@click.option("--dry-run", is_flag=True, help="Show what would be uploaded")
@click.pass_context
def upload(ctx: Any, file_globs: tuple[str, ...], dry_run: bool) -> None:
    """Upload theme files to the store.

    FILE_GLOBS: Optional patterns such as 'assets/*' limiting what is sent
    """
    out: OutputFormatter = ctx.obj["out"]
    sync = _create_sync(ctx, out)

    try:
        stats = sync.upload(glob_pattern=list(file_globs) or None, dry_run=dry_run)
    except KeyboardInterrupt:
        out.warning("\nUpload cancelled by user")
        ctx.exit(130)  # Standard exit code for SIGINT
    except (ThemeError, ValueError) as e:
        out.error(str(e))
        ctx.exit(1)

    _report(ctx, out, "Upload Complete", stats, "uploads", "uploaded")


@main.command()
@click.argument("keys", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Show what would be removed")
@click.pass_context
def remove(ctx: Any, keys: tuple[str, ...], dry_run: bool) -> None:
    """Remove assets from the store.

    KEYS: Asset keys, e.g. assets/old.js
    """
    out: OutputFormatter = ctx.obj["out"]
    sync = _create_sync(ctx, out)

    try:
        stats = sync.remove(keys, dry_run=dry_run)
    except KeyboardInterrupt:
        out.warning("\nRemoval cancelled by user")
        ctx.exit(130)
    except ThemeError as e:
        out.error(str(e))
        ctx.exit(1)

    _report(ctx, out, "Remove Complete", stats, "removals", "removed")


@main.command()
@click.option("--dry-run", is_flag=True, help="Show what would change")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def replace(ctx: Any, dry_run: bool, yes: bool) -> None:
    """Replace the remote theme with the local files.

    Remote assets that no longer exist locally are removed.
    """
    out: OutputFormatter = ctx.obj["out"]
    sync = _create_sync(ctx, out)

    if not dry_run and not yes:
        click.confirm(
            "This removes remote assets missing locally. Continue?", abort=True
        )

    try:
        stats = sync.replace(dry_run=dry_run)
    except KeyboardInterrupt:
        out.warning("\nReplace cancelled by user")
        ctx.exit(130)
    except (ThemeError, ValueError) as e:
        out.error(str(e))
        ctx.exit(1)

    _report(ctx, out, "Replace Complete", stats, "uploads", "uploaded")


@main.command()
@click.argument("keys", nargs=-1)
@click.pass_context
def download(ctx: Any, keys: tuple[str, ...]) -> None:
    """Download assets from the store into the theme directory.

    KEYS: Asset keys to fetch (default: every eligible asset)
    """
    out: OutputFormatter = ctx.obj["out"]
    sync = _create_sync(ctx, out)

    try:
        stats = sync.download(list(keys) or None)
    except KeyboardInterrupt:
        out.warning("\nDownload cancelled by user")
        ctx.exit(130)
    except ThemeError as e:
        out.error(str(e))
        ctx.exit(1)

    _report(ctx, out, "Download Complete", stats, "downloads", "downloaded")


@main.command(name="open")
@click.option("--no-browser", is_flag=True, help="Only print the preview URL")
@click.pass_context
def open_theme(ctx: Any, no_browser: bool) -> None:
    """Open the theme preview in a web browser."""
    out: OutputFormatter = ctx.obj["out"]
    config = _load_config(ctx, out)

    url = build_preview_url(config.store, config.theme_id)
    if out.json_output:
        out.output_json({"url": url})
    else:
        click.echo(url)

    if not no_browser:
        click.launch(ensure_scheme(url))


if __name__ == "__main__":
    main()

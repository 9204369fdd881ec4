#!/usr/bin/env python3
"""
bookmarker - a command-line bookmark manager

Stores name/URL pairs in a local SQLite file and prints or exports them as
text, JSON or Markdown. Listings go to stdout; status messages and logs do
not, so output can be piped.
"""
import sys
import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from bookmarker import __version__
from bookmarker.config import init_config, get_config
from bookmarker.db import Database
from bookmarker.errors import BookmarkerError, DuplicateURLError, EmptyResultError, TitleFetchError
from bookmarker.exporters import export_file, format_for_path, render
from bookmarker.models import Bookmark
from bookmarker.utils import fetch_title, open_url, validate_url

logger = logging.getLogger(__name__)


console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = ["text", "json", "md"]


def output_bookmarks(bookmarks: List[Bookmark], format: str = "text"):
    """Write bookmarks to stdout in the specified format."""
    content = render(bookmarks, format)
    if content and not content.endswith("\n"):
        content += "\n"
    sys.stdout.write(content)


def resolve_name(url: str, name: Optional[str], fetch: bool) -> str:
    """Pick a bookmark name: the given one, the page title, or the URL itself."""
    if name:
        return name
    if fetch:
        try:
            return fetch_title(url)
        except TitleFetchError as e:
            logger.warning("could not fetch title: %s", e)
    return url


def cmd_add(args):
    """Add a new bookmark."""
    config = get_config()
    url = validate_url(args.url)
    name = resolve_name(url, args.name_opt or args.name,
                        fetch=config.fetch_titles and not args.no_fetch)

    with Database(args.db) as db:
        try:
            bookmark_id = db.add(name, url)
        except DuplicateURLError:
            err_console.print(f"[yellow]Bookmark already exists: {escape(url)}[/yellow]")
            sys.exit(1)

    if args.quiet:
        print(bookmark_id)
    else:
        console.print(f"[green]Added bookmark {bookmark_id}:[/green] {escape(name)}")


def cmd_list(args):
    """List all bookmarks."""
    with Database(args.db) as db:
        bookmarks = db.all()

    if not bookmarks:
        raise EmptyResultError("no bookmarks found")

    if args.json:
        format = "json"
    elif args.md:
        format = "md"
    else:
        format = args.output
    output_bookmarks(bookmarks, format)


def cmd_get(args):
    """Show a single bookmark."""
    with Database(args.db) as db:
        bookmark = db.get(args.id)

    if bookmark is None:
        err_console.print(f"[red]Bookmark not found: {args.id}[/red]")
        sys.exit(1)
    output_bookmarks([bookmark], args.output)


def cmd_update(args):
    """Update the name and/or URL of a bookmark."""
    if not args.name and not args.url:
        err_console.print("[red]Error: Must specify --name or --url[/red]")
        sys.exit(1)

    with Database(args.db) as db:
        bookmark = db.get(args.id)
        if bookmark is None:
            err_console.print(f"[red]Bookmark not found: {args.id}[/red]")
            sys.exit(1)

        name = args.name or bookmark.name
        url = validate_url(args.url) if args.url else bookmark.url
        db.update(args.id, name, url)

    if not args.quiet:
        console.print(f"[green]Updated bookmark {args.id}[/green]")


def cmd_delete(args):
    """Delete one or more bookmarks."""
    deleted_count = 0

    with Database(args.db) as db:
        for bookmark_id in args.ids:
            if db.delete(bookmark_id):
                deleted_count += 1
                if not args.quiet:
                    console.print(f"[green]Deleted bookmark {bookmark_id}[/green]")
            else:
                err_console.print(f"[yellow]Bookmark not found: {bookmark_id}[/yellow]")

    if args.quiet:
        print(deleted_count)


def cmd_clear(args):
    """Delete every bookmark."""
    if not args.yes and not Confirm.ask("Delete all bookmarks?", default=False):
        console.print("[yellow]Aborted[/yellow]")
        return

    with Database(args.db) as db:
        count = db.delete_all()

    if args.quiet:
        print(count)
    else:
        console.print(f"[green]Deleted {count} bookmarks[/green]")


def cmd_open(args):
    """Open a bookmark in the default browser."""
    with Database(args.db) as db:
        bookmark = db.get(args.id)

    if bookmark is None:
        err_console.print(f"[red]Bookmark not found: {args.id}[/red]")
        sys.exit(1)

    open_url(bookmark.url)
    if not args.quiet:
        console.print(f"Opening {escape(bookmark.url)}")


def cmd_export(args):
    """Export all bookmarks to a file."""
    with Database(args.db) as db:
        bookmarks = db.all()

    if not bookmarks:
        raise EmptyResultError("no bookmarks to export")

    format = args.format or format_for_path(args.file)
    path = export_file(bookmarks, args.file, format)

    if not args.quiet:
        console.print(f"[green]Exported {len(bookmarks)} bookmarks to {escape(str(path))}[/green]")


def cmd_config(args):
    """Show or initialize configuration."""
    config = get_config()

    if args.action == "show":
        if args.key:
            if not hasattr(config, args.key):
                err_console.print(f"[red]Unknown config key: {args.key}[/red]")
                sys.exit(1)
            print(getattr(config, args.key))
        else:
            print(json.dumps(asdict(config), indent=2))

    elif args.action == "init":
        path = config.save()
        console.print(f"[green]Created config at {escape(str(path))}[/green]")


def configure_logging(level: str):
    """Configure the root logger; logs go to stderr."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=numeric_level, format='%(levelname)s: %(message)s')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookmarker",
        description="bookmarker - a command-line bookmark manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bookmarker add https://example.com "Example"
  bookmarker add https://python.org          # name fetched from the page title
  bookmarker list --json
  bookmarker update 3 --name "New name"
  bookmarker delete 1 2
  bookmarker export bookmarks.md

Configuration:
  Default database: $XDG_DATA_HOME/bookmarker/bm.db (or platform equivalent)
  Config file: ~/.config/bookmarker/config.toml
  Environment: BOOKMARKER_DATABASE, BOOKMARKER_OUTPUT_FORMAT, BOOKMARKER_LOG_LEVEL
        """
    )

    # Global options
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--db", help="Database file")
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-o", "--output", choices=OUTPUT_FORMATS, help="Output format")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Commands")

    add = subparsers.add_parser("add", help="Add a bookmark")
    add.add_argument("url", help="URL to bookmark")
    add.add_argument("name", nargs="?", help="Bookmark name")
    add.add_argument("-n", "--name", dest="name_opt", help="Bookmark name")
    add.add_argument("--no-fetch", action="store_true",
                     help="Do not fetch the page title when no name is given")
    add.set_defaults(func=cmd_add)

    list_parser = subparsers.add_parser("list", help="List bookmarks")
    list_format = list_parser.add_mutually_exclusive_group()
    list_format.add_argument("-j", "--json", action="store_true", help="List in JSON format")
    list_format.add_argument("-m", "--md", action="store_true", help="List in Markdown format")
    list_parser.set_defaults(func=cmd_list)

    get = subparsers.add_parser("get", help="Show a bookmark")
    get.add_argument("id", type=int, help="Bookmark ID")
    get.set_defaults(func=cmd_get)

    update = subparsers.add_parser("update", help="Update a bookmark")
    update.add_argument("id", type=int, help="Bookmark ID")
    update.add_argument("--name", help="New name")
    update.add_argument("--url", help="New URL")
    update.set_defaults(func=cmd_update)

    delete = subparsers.add_parser("delete", help="Delete bookmarks")
    delete.add_argument("ids", nargs="+", type=int, help="Bookmark IDs to delete")
    delete.set_defaults(func=cmd_delete)

    clear = subparsers.add_parser("clear", help="Delete all bookmarks")
    clear.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    clear.set_defaults(func=cmd_clear)

    open_parser = subparsers.add_parser("open", help="Open a bookmark in the browser")
    open_parser.add_argument("id", type=int, help="Bookmark ID")
    open_parser.set_defaults(func=cmd_open)

    export = subparsers.add_parser("export", help="Export all bookmarks to a file")
    export.add_argument("file", help="Output file (.json, .md, anything else is text)")
    export.add_argument("--format", choices=OUTPUT_FORMATS,
                        help="Override the format inferred from the file extension")
    export.set_defaults(func=cmd_export)

    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("action", choices=["show", "init"], help="Config action")
    config_parser.add_argument("key", nargs="?", help="Config key")
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = init_config(
            database=args.db,
            config_file=Path(args.config) if args.config else None,
            output_format=args.output,
        )
        configure_logging("DEBUG" if args.verbose else config.log_level)
        console.no_color = err_console.no_color = not config.color_output

        if not args.output:
            args.output = config.output_format

        args.func(args)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except BookmarkerError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Blog API CLI for database setup, seeding and serving."""

import argparse
import sys

import questionary
from rich.console import Console

from blogapi.config import config
from blogapi.db import Database
from blogapi.errors import StoreUnavailable
from blogapi.post.repository import PostRepository

console = Console()


def non_negative_int(value: str) -> int:
    """argparse type for a count of zero or more."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is negative")
    return number


def init_db(database: Database, args: argparse.Namespace) -> None:
    """Apply schema migrations."""
    applied = database.apply_migrations(config.migrations_path)
    for path in applied:
        console.print(f"[green]Applied[/] {path.name}")


def seed_posts(database: Database, args: argparse.Namespace) -> None:
    """Insert random posts."""
    from blogapi.seed import seed

    repo = PostRepository(database)
    posts = seed(repo, args.count)
    console.print(f"[green]Seeded {len(posts)} posts.[/] Store now holds {repo.count()}.")


def clear_posts(database: Database, args: argparse.Namespace) -> None:
    """Remove every post after confirmation."""
    repo = PostRepository(database)
    total = repo.count()
    if total == 0:
        console.print("[dim]No posts to remove.[/]")
        return

    console.print(f"[yellow]Will permanently delete [bold]{total}[/] posts.[/]")
    if not args.yes and not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    from blogapi.seed import teardown

    removed = teardown(repo)
    console.print(f"[green]Removed {removed} posts.[/]")


def serve(database: Database, args: argparse.Namespace) -> None:
    """Run the development server."""
    from blogapi.app import create_app

    app = create_app(database)
    console.print(f"[green]Serving blog API on http://{args.host}:{args.port}[/]")
    app.run(host=args.host, port=args.port)


def main():
    parser = argparse.ArgumentParser(description="Blog API CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Apply schema migrations")
    init_parser.set_defaults(handler=init_db)

    seed_parser = subparsers.add_parser("seed", help="Insert random posts")
    seed_parser.add_argument("--count", type=non_negative_int, default=config.seed_count)
    seed_parser.set_defaults(handler=seed_posts)

    clear_parser = subparsers.add_parser("clear", help="Remove every post")
    clear_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    clear_parser.set_defaults(handler=clear_posts)

    serve_parser = subparsers.add_parser("serve", help="Run the development server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=5000)
    serve_parser.set_defaults(handler=serve)

    args = parser.parse_args()

    from blogapi.app import configure_logging

    configure_logging(config.log_level)

    try:
        with Database(config.database_url) as database:
            args.handler(database, args)
    except StoreUnavailable as e:
        console.print(f"[red]{e}[/]")
        sys.exit(1)


if __name__ == "__main__":
    main()

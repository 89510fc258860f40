#!/usr/bin/env python3
"""
dropsearch - mirror Raindrop.io bookmarks into Meilisearch and search them.

    dropsearch -i              re-index every bookmark
    dropsearch some words      search the index
"""
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from dropsearch import __version__
from dropsearch.config import DropsearchConfig, init_config
from dropsearch.errors import DropsearchError
from dropsearch.indexer import index_bookmarks
from dropsearch.raindrop import RaindropClient
from dropsearch.render import render_hits
from dropsearch.search import SEARCH_LIMIT, SearchIndex

logger = logging.getLogger(__name__)

USAGE = "Usage: dropsearch [-i] [search query]"

console = Console()
err_console = Console(stderr=True)


def setup_logging(config: DropsearchConfig):
    """Configure root logging from the config's log level."""
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')


def make_index(config: DropsearchConfig) -> SearchIndex:
    return SearchIndex(
        host=config.meilisearch_host,
        api_key=config.meilisearch_token,
        index_name=config.index_name,
        timeout=config.timeout,
    )


def cmd_index(args, config: DropsearchConfig):
    """Fetch every collection and bookmark and push them to the index."""
    raindrop = RaindropClient(
        config.raindrop_token,
        api_url=config.raindrop_api_url,
        timeout=config.timeout,
    )
    index = make_index(config)

    with Progress(
        SpinnerColumn(style="bright_green"),
        TextColumn("[bright_cyan]Indexing:[/bright_cyan] [progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("starting", total=None)

        def update_progress(step: str):
            progress.update(task, description=escape(step))

        count = index_bookmarks(raindrop, index, progress_callback=update_progress)

    logger.info(f"{count} documents indexed")


def cmd_search(args, config: DropsearchConfig):
    """Query the index and print the hits."""
    index = make_index(config)
    hits = index.search(args.query, limit=SEARCH_LIMIT)
    render_hits(args.query, hits, console)


def fail(error: DropsearchError):
    """Report a fatal error and exit with status 1."""
    logger.debug("run aborted", exc_info=error)
    err_console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dropsearch",
        description="Mirror Raindrop.io bookmarks into Meilisearch and search them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dropsearch -i                   # re-index all bookmarks
  dropsearch python packaging     # search for "python packaging"

Configuration:
  Config file: ~/.config/dropsearch/config.toml or ./dropsearch.toml
  Environment: DROPSEARCH_RAINDROP_TOKEN, DROPSEARCH_MEILISEARCH_TOKEN
        """
    )
    parser.add_argument("-i", "--index", action="store_true", help="Index bookmarks")
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("--version", action="version", version=f"dropsearch {__version__}")
    parser.add_argument("words", nargs="*", help="Search query")
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.query = " ".join(args.words)

    try:
        config = init_config(config_file=Path(args.config) if args.config else None)
    except DropsearchError as e:
        fail(e)
    setup_logging(config)
    if not config.color_output:
        console.no_color = True
        err_console.no_color = True

    if args.index:
        func = cmd_index
    elif args.query:
        func = cmd_search
    else:
        print(USAGE)
        return

    try:
        func(args, config)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except DropsearchError as e:
        fail(e)


if __name__ == "__main__":
    main()

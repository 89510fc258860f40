"""
Terminal rendering of search hits.
"""
import logging
from typing import List

from rich.console import Console
from rich.markup import escape

from dropsearch.models import Bookmark

logger = logging.getLogger(__name__)


def format_created(bookmark: Bookmark) -> str:
    """Creation date as YYYY-MM-DD, or an empty string when unknown."""
    return bookmark.created.strftime("%Y-%m-%d") if bookmark.created else ""


def render_hits(query: str, hits: List[Bookmark], console: Console):
    """
    Print search hits, one block per hit.

    The excerpt line is only shown for a non-empty excerpt and the tags
    line only for a non-empty tag list.
    """
    logger.info(f"found {len(hits)} hits for {query}")

    for rank, hit in enumerate(hits, start=1):
        lines = [
            f"{rank}. [green]{escape(hit.title)}[/green]",
            f"   Link: [blue]{escape(hit.link)}[/blue]",
        ]
        if hit.excerpt:
            lines.append(f"   Excerpt: {escape(hit.excerpt)}")
        lines.append(
            f"   Domain: [dim]{escape(hit.domain)}[/dim], Created: [dim]{format_created(hit)}[/dim]"
        )
        if hit.tags:
            lines.append(f"   Tags: [yellow]{escape(', '.join(hit.tags))}[/yellow]")

        for line in lines:
            console.print(line, soft_wrap=True, highlight=False, emoji=False)
        console.print()

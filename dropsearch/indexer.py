"""
Bulk re-indexing of Raindrop bookmarks.

Fetches every collection, then the bookmarks of each collection in turn,
and submits the whole set to the search index in one call. The run is
strictly sequential and stops at the first error, so nothing is submitted
unless every fetch succeeded.
"""
import logging
from typing import Callable, List, Optional

from dropsearch.models import Bookmark
from dropsearch.raindrop import RaindropClient
from dropsearch.search import SearchIndex

logger = logging.getLogger(__name__)


def index_bookmarks(
    raindrop: RaindropClient,
    index: SearchIndex,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> int:
    """
    Mirror all Raindrop bookmarks into the search index.

    Args:
        raindrop: Client for the Raindrop API
        index: Target search index
        progress_callback: Called with a short description of each step

    Returns:
        Number of documents submitted

    Raises:
        DropsearchError: On the first fetch or submission failure
    """
    def report(step: str):
        if progress_callback:
            progress_callback(step)

    logger.info("indexing started")

    report("getting collections list")
    collections = raindrop.get_collections()

    all_bookmarks: List[Bookmark] = []
    for collection in collections:
        report(f"getting raindrops for '{collection.title}'")
        all_bookmarks.extend(raindrop.get_raindrops(collection.id))

    report("inserting into meilisearch index")
    index.add_documents(all_bookmarks)

    return len(all_bookmarks)

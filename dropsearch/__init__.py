"""
dropsearch - Raindrop.io bookmarks, searchable from the terminal

Mirrors every Raindrop collection and bookmark into a Meilisearch index
and runs free-text queries against it.

Example Usage:
    >>> from dropsearch import RaindropClient, SearchIndex, index_bookmarks
    >>> raindrop = RaindropClient(token)
    >>> index = SearchIndex("http://search", api_key=key)
    >>> index_bookmarks(raindrop, index)
    >>> index.search("python")
"""

__version__ = "0.1.0"

# Configuration
from dropsearch.config import DropsearchConfig, get_config, init_config

# Errors
from dropsearch.errors import DropsearchError, RaindropError, SearchIndexError

# Models
from dropsearch.models import Bookmark, Collection, Highlight

# Services
from dropsearch.raindrop import RaindropClient
from dropsearch.search import SearchIndex
from dropsearch.indexer import index_bookmarks

__all__ = [
    # Config
    "DropsearchConfig",
    "get_config",
    "init_config",
    # Errors
    "DropsearchError",
    "RaindropError",
    "SearchIndexError",
    # Models
    "Bookmark",
    "Collection",
    "Highlight",
    # Services
    "RaindropClient",
    "SearchIndex",
    "index_bookmarks",
]

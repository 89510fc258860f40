"""
Meilisearch index access for dropsearch.

Writes bookmarks into a named index as documents and queries them back.
Talks to the Meilisearch HTTP API directly:

- POST /indexes/{uid}/documents   add or replace documents
- POST /indexes/{uid}/search      full-text search

Documents are only ever added or replaced by ``_id``; documents that no
longer exist upstream stay in the index.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from dropsearch.errors import SearchIndexError
from dropsearch.models import Bookmark, bookmarks_to_documents

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://search"
DEFAULT_INDEX = "raindrops"
SEARCH_LIMIT = 10
PRIMARY_KEY = "_id"


class SearchIndex:
    """A single Meilisearch index holding bookmark documents."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        api_key: str = "",
        index_name: str = DEFAULT_INDEX,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the index wrapper.

        Args:
            host: Meilisearch base URL
            api_key: Meilisearch API key (sent as a bearer token)
            index_name: Index uid
            timeout: Request timeout in seconds (None = no timeout)
            session: Session to reuse (a new one is created by default)
        """
        self.host = host.rstrip("/")
        self.index_name = index_name
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    @property
    def url(self) -> str:
        return f"{self.host}/indexes/{self.index_name}"

    def add_documents(self, bookmarks: List[Bookmark]) -> Dict[str, Any]:
        """
        Submit bookmarks as documents.

        Meilisearch processes the batch asynchronously; the returned task
        info only confirms it was enqueued.

        Args:
            bookmarks: Bookmarks to add or replace

        Returns:
            The enqueued task description returned by Meilisearch
        """
        documents = bookmarks_to_documents(bookmarks)
        logger.debug(f"submitting {len(documents)} documents to {self.url}")
        return self._post(
            "/documents",
            json=documents,
            params={"primaryKey": PRIMARY_KEY},
        )

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> List[Bookmark]:
        """
        Run a full-text query against the index.

        Args:
            query: Free-text query
            limit: Maximum number of hits to return

        Returns:
            Matching bookmarks in relevance order
        """
        result = self._post("/search", json={"q": query, "limit": limit})
        try:
            return [Bookmark.from_dict(hit) for hit in result.get("hits") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SearchIndexError(f"error decoding search hit: {e!r}") from e

    def _post(self, path: str, **kwargs) -> Dict[str, Any]:
        url = self.url + path
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise SearchIndexError(f"search index request failed: {e}: {e.response.text}") from e
        except requests.RequestException as e:
            raise SearchIndexError(f"error calling search index: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise SearchIndexError(f"error decoding search index response: {e}") from e
        if not isinstance(data, dict):
            raise SearchIndexError(f"unexpected search index response: {data!r}")
        return data

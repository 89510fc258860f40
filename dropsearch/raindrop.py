"""
Raindrop.io API client for dropsearch.

Fetches collections and the bookmarks inside them from the Raindrop REST
API. Every failure (transport, undecodable body, error response) is raised
as a RaindropError; callers treat it as fatal for the run.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests

from dropsearch.errors import RaindropError
from dropsearch.models import Bookmark, Collection

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://api.raindrop.io/rest/v1"

T = TypeVar("T")


class RaindropClient:
    """
    Minimal read-only client for the Raindrop REST API.

    Usage:
        client = RaindropClient(token)
        for collection in client.get_collections():
            bookmarks = client.get_raindrops(collection.id)
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Raindrop API bearer token
            api_url: Base URL of the REST API
            timeout: Request timeout in seconds (None = no timeout)
            session: Session to reuse (a new one is created by default)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    def get_collections(self) -> List[Collection]:
        """Fetch the list of root collections."""
        return self._get_items("/collections", Collection.from_dict)

    def get_raindrops(self, collection_id: int) -> List[Bookmark]:
        """Fetch the bookmarks stored in a collection."""
        return self._get_items(f"/raindrops/{collection_id}", Bookmark.from_dict)

    def _get_items(self, path: str, decode: Callable[[Dict[str, Any]], T]) -> List[T]:
        url = self.api_url + path
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise RaindropError(f"error making request: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RaindropError(
                f"error decoding response from {url} (HTTP {response.status_code}): {e}"
            ) from e

        if not response.ok or not isinstance(payload, dict) or payload.get("result") is False:
            message = None
            if isinstance(payload, dict):
                message = payload.get("errorMessage") or payload.get("error")
            raise RaindropError(
                f"error response from {url}: HTTP {response.status_code}"
                + (f": {message}" if message else "")
            )

        try:
            return [decode(item) for item in payload.get("items") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RaindropError(f"error decoding response from {url}: {e!r}") from e

import os
import pytest
from unittest.mock import MagicMock

import dropsearch.config


def make_collection_item(collection_id, title, **overrides):
    """A collection object as returned by GET /collections."""
    item = {
        "_id": collection_id,
        "access": {"level": 4, "draggable": True},
        "collaborators": {},
        "color": "#0c797d",
        "count": 3,
        "cover": ["https://up.raindrop.io/collection/thumbs/123.png"],
        "created": "2019-06-02T09:12:41.452Z",
        "expanded": True,
        "lastUpdate": "2023-01-15T10:30:45.123Z",
        "public": False,
        "sort": 100,
        "title": title,
        "user": {"$id": 42},
        "view": "list",
    }
    item.update(overrides)
    return item


def make_raindrop_item(raindrop_id, collection_id, **overrides):
    """A bookmark object as returned by GET /raindrops/{id}."""
    item = {
        "_id": raindrop_id,
        "collection": {"$id": collection_id},
        "cover": "https://example.com/cover.png",
        "created": "2020-11-25T11:28:59.934Z",
        "domain": "example.com",
        "excerpt": f"Excerpt {raindrop_id}",
        "note": "",
        "lastUpdate": "2021-03-04T05:06:07Z",
        "link": f"https://example.com/{raindrop_id}",
        "media": [{"link": "https://example.com/cover.png"}],
        "tags": ["python", "search"],
        "title": f"Bookmark {raindrop_id}",
        "type": "link",
        "user": {"$id": 42},
        "broken": False,
        "cache": {"status": "ready", "size": 1024, "created": "2020-11-25T11:30:00Z"},
        "creatorRef": {"_id": 42, "fullName": "Sam Doe"},
        "file": {"name": "", "size": 0, "type": ""},
        "important": False,
        "highlights": [
            {
                "_id": "h1",
                "text": "highlighted text",
                "color": "yellow",
                "note": "remember this",
                "created": "2020-11-26T08:00:00Z",
            }
        ],
    }
    item.update(overrides)
    return item


def make_response(payload, status_code=200):
    """A mock requests.Response carrying a JSON payload."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


@pytest.fixture
def collection_item():
    return make_collection_item(1001, "Reading")


@pytest.fixture
def raindrop_item():
    return make_raindrop_item(501, 1001)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from real config files, tokens and the cached config."""
    for key in list(os.environ.keys()):
        if key.startswith("DROPSEARCH_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(dropsearch.config, "_config", None)
    yield

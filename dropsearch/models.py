"""
Data models for dropsearch.

Frozen dataclasses mirroring the JSON shapes of the Raindrop.io REST API.
Each record can be built from an API (or search hit) dictionary with
``from_dict`` and turned back into a JSON-ready document with ``to_dict``.
Keys use the API spelling (``_id``, ``$id``, ``lastUpdate``) so documents
stored in the search index look exactly like the API objects.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]|$)")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as returned by the Raindrop API.

    Args:
        value: Timestamp string such as ``2020-11-25T11:28:59.934Z``

    Returns:
        Timezone-aware datetime, or None for a missing/empty value

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    value = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value)
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime as RFC 3339, the inverse of :func:`parse_timestamp`.

    UTC is written as ``Z``. Whole-millisecond values get a 3-digit fraction
    (the API's own precision), anything finer gets 6 digits, and whole
    seconds get none.
    """
    if dt is None:
        return None
    text = dt.strftime("%Y-%m-%dT%H:%M:%S")
    if dt.microsecond % 1000 == 0:
        if dt.microsecond:
            text += f".{dt.microsecond // 1000:03d}"
    else:
        text += f".{dt.microsecond:06d}"
    offset = dt.utcoffset()
    if offset is None or not offset:
        return text + "Z"
    return text + dt.isoformat()[-6:]


def _ref_id(value: Any) -> Optional[int]:
    """Extract the id from a ``{"$id": n}`` reference object."""
    if not value:
        return None
    return value.get("$id")


@dataclass(frozen=True)
class Access:
    """The caller's access level to a collection."""
    level: int = 0
    draggable: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Access":
        data = data or {}
        return cls(level=data.get("level", 0), draggable=data.get("draggable", False))

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "draggable": self.draggable}


@dataclass(frozen=True)
class Collection:
    """A Raindrop collection (a named, optionally nested group of bookmarks)."""
    id: int
    title: str = ""
    created: Optional[datetime] = None
    last_update: Optional[datetime] = None
    public: bool = False
    color: str = ""
    cover: Tuple[str, ...] = ()
    sort: int = 0
    view: str = ""
    expanded: bool = False
    count: int = 0
    access: Access = field(default_factory=Access)
    parent_id: Optional[int] = None
    user_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Collection":
        """Build a collection from an API item."""
        return cls(
            id=data["_id"],
            title=data.get("title") or "",
            created=parse_timestamp(data.get("created")),
            last_update=parse_timestamp(data.get("lastUpdate")),
            public=bool(data.get("public", False)),
            color=data.get("color") or "",
            cover=tuple(data.get("cover") or ()),
            sort=data.get("sort") or 0,
            view=data.get("view") or "",
            expanded=bool(data.get("expanded", False)),
            count=data.get("count") or 0,
            access=Access.from_dict(data.get("access")),
            parent_id=_ref_id(data.get("parent")),
            user_id=_ref_id(data.get("user")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "title": self.title,
            "created": format_timestamp(self.created),
            "lastUpdate": format_timestamp(self.last_update),
            "public": self.public,
            "color": self.color,
            "cover": list(self.cover),
            "sort": self.sort,
            "view": self.view,
            "expanded": self.expanded,
            "count": self.count,
            "access": self.access.to_dict(),
            "parent": {"$id": self.parent_id} if self.parent_id is not None else None,
            "user": {"$id": self.user_id},
        }


@dataclass(frozen=True)
class Highlight:
    """A highlighted passage of a bookmarked page."""
    id: str
    text: str = ""
    color: str = ""
    note: str = ""
    created: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Highlight":
        return cls(
            id=data.get("_id") or "",
            text=data.get("text") or "",
            color=data.get("color") or "",
            note=data.get("note") or "",
            created=parse_timestamp(data.get("created")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "text": self.text,
            "color": self.color,
            "note": self.note,
            "created": format_timestamp(self.created),
        }


@dataclass(frozen=True)
class CacheInfo:
    """Status of the permanent copy Raindrop keeps of a page."""
    status: str = ""
    size: int = 0
    created: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CacheInfo":
        data = data or {}
        return cls(
            status=data.get("status") or "",
            size=data.get("size") or 0,
            created=parse_timestamp(data.get("created")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "size": self.size,
            "created": format_timestamp(self.created),
        }


@dataclass(frozen=True)
class FileInfo:
    """Metadata of an uploaded file attached to a bookmark."""
    name: str = ""
    size: int = 0
    type: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FileInfo":
        data = data or {}
        return cls(name=data.get("name") or "", size=data.get("size") or 0, type=data.get("type") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "size": self.size, "type": self.type}


@dataclass(frozen=True)
class CreatorRef:
    """The user who created a bookmark."""
    id: Optional[int] = None
    full_name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CreatorRef":
        data = data or {}
        return cls(id=data.get("_id"), full_name=data.get("fullName") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"_id": self.id, "fullName": self.full_name}


@dataclass(frozen=True)
class Bookmark:
    """
    A single Raindrop bookmark ("raindrop").

    Used both for API items and for search hits, which are stored in the
    index in the same shape.
    """
    id: int
    link: str = ""
    title: str = ""
    excerpt: str = ""
    note: str = ""
    domain: str = ""
    type: str = ""
    cover: str = ""
    tags: Tuple[str, ...] = ()
    media: Tuple[str, ...] = ()
    created: Optional[datetime] = None
    last_update: Optional[datetime] = None
    important: bool = False
    broken: bool = False
    collection_id: Optional[int] = None
    user_id: Optional[int] = None
    cache: CacheInfo = field(default_factory=CacheInfo)
    file: FileInfo = field(default_factory=FileInfo)
    creator_ref: CreatorRef = field(default_factory=CreatorRef)
    highlights: Tuple[Highlight, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bookmark":
        """
        Build a bookmark from an API item or a search hit.

        Raises:
            KeyError: If the item has no ``_id``
            ValueError: If a timestamp is malformed
        """
        return cls(
            id=data["_id"],
            link=data.get("link") or "",
            title=data.get("title") or "",
            excerpt=data.get("excerpt") or "",
            note=data.get("note") or "",
            domain=data.get("domain") or "",
            type=data.get("type") or "",
            cover=data.get("cover") or "",
            tags=tuple(data.get("tags") or ()),
            media=tuple(m.get("link", "") for m in data.get("media") or ()),
            created=parse_timestamp(data.get("created")),
            last_update=parse_timestamp(data.get("lastUpdate")),
            important=bool(data.get("important", False)),
            broken=bool(data.get("broken", False)),
            collection_id=_ref_id(data.get("collection")),
            user_id=_ref_id(data.get("user")),
            cache=CacheInfo.from_dict(data.get("cache")),
            file=FileInfo.from_dict(data.get("file")),
            creator_ref=CreatorRef.from_dict(data.get("creatorRef")),
            highlights=tuple(Highlight.from_dict(h) for h in data.get("highlights") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready document for the search index."""
        return {
            "_id": self.id,
            "collection": {"$id": self.collection_id},
            "link": self.link,
            "title": self.title,
            "excerpt": self.excerpt,
            "note": self.note,
            "domain": self.domain,
            "type": self.type,
            "cover": self.cover,
            "tags": list(self.tags),
            "media": [{"link": link} for link in self.media],
            "created": format_timestamp(self.created),
            "lastUpdate": format_timestamp(self.last_update),
            "important": self.important,
            "broken": self.broken,
            "user": {"$id": self.user_id},
            "cache": self.cache.to_dict(),
            "file": self.file.to_dict(),
            "creatorRef": self.creator_ref.to_dict(),
            "highlights": [h.to_dict() for h in self.highlights],
        }


def bookmarks_to_documents(bookmarks: List[Bookmark]) -> List[Dict[str, Any]]:
    """Convert a list of bookmarks to index documents."""
    return [b.to_dict() for b in bookmarks]

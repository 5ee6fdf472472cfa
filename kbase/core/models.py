"""Core data models for knowledge-base records.

Records are owned by the surrounding application; the search engine only
reads them. They are immutable msgspec structs so a collection can be
decoded straight from the JSON the application exports (camelCase keys).

Key components:
- Record: A single knowledge-base item (document, image, video, note, link)
- ContentType: The closed set of item kinds
- load_records: Decode a JSON array of records from disk
"""

import uuid
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import msgspec


class ContentType(str, Enum):
    """Kinds of knowledge-base items."""

    DOCUMENT = "document"
    IMAGE = "image"
    VIDEO = "video"
    NOTE = "note"
    LINK = "link"


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Record(msgspec.Struct, frozen=True, kw_only=True, rename="camel"):
    """Immutable knowledge-base item.

    Tags keep the casing they were stored with; every comparison made by the
    search engine lowercases both sides. Timestamps without a UTC offset are
    interpreted as UTC when compared.
    """

    title: str
    content_type: ContentType
    id: str = msgspec.field(default_factory=_new_id)
    user_id: str | None = None
    content: str | None = None
    file_url: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    tags: tuple[str, ...] = msgspec.field(default_factory=tuple)
    collection_id: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime = msgspec.field(default_factory=_now)
    updated_at: datetime = msgspec.field(default_factory=_now)


class RecordLoadError(Exception):
    """Raised when a records file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str):
        """Initialize with the offending path and reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load records from {path}: {reason}")


_decoder = msgspec.json.Decoder(list[Record])


def load_records(path: Path) -> list[Record]:
    """Load a JSON array of records.

    Args:
        path: File containing a JSON array of record objects.

    Returns:
        Records in file order.

    Raises:
        RecordLoadError: If the file is missing or its content is not a
            valid record array.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise RecordLoadError(path, str(e)) from e

    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise RecordLoadError(path, str(e)) from e

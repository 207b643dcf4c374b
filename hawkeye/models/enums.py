"""
Enums for type-safe string constants in the Hawk Eye catalog backend.
"""

from enum import Enum


class RecordKind(str, Enum):
    """Record kinds held by the catalog store."""
    ALBUM = "album"
    TRACK = "track"
    BLOG_POST = "blog_post"
    MERCH_ITEM = "merch_item"
    SUBSCRIBER = "subscriber"


class IngestionStatus(str, Enum):
    """Lifecycle of a background catalog import."""
    ACCEPTED = "accepted"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


class RelayMessageType(str, Enum):
    """Envelope types sent by the server on the live relay."""
    INFO = "info"
    MESSAGE = "message"
    VIEWERS = "viewers"

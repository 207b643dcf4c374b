from .enums import (
    RecordKind,
    IngestionStatus,
    RelayMessageType,
)
from .catalog import (
    AlbumCreate,
    Album,
    TrackCreate,
    Track,
    BlogPostCreate,
    BlogPost,
    MerchItemCreate,
    MerchItem,
    SubscriberCreate,
    Subscriber,
)
from .ingestion import (
    ImportRequest,
    ImportAccepted,
    IngestionRun,
)

__all__ = [
    "RecordKind",
    "IngestionStatus",
    "RelayMessageType",
    "AlbumCreate",
    "Album",
    "TrackCreate",
    "Track",
    "BlogPostCreate",
    "BlogPost",
    "MerchItemCreate",
    "MerchItem",
    "SubscriberCreate",
    "Subscriber",
    "ImportRequest",
    "ImportAccepted",
    "IngestionRun",
]

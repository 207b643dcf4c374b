from .catalog_repository import CatalogRepository, DuplicateRecordError, get_catalog_repository
from .live_relay import LiveRelay, get_live_relay

__all__ = [
    "CatalogRepository",
    "DuplicateRecordError",
    "get_catalog_repository",
    "LiveRelay",
    "get_live_relay",
]

from .catalog import router as catalog_router
from .subscribe import router as subscribe_router
from .imports import router as imports_router
from .relay import router as relay_router

__all__ = ["catalog_router", "subscribe_router", "imports_router", "relay_router"]

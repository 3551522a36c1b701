from pixelfate.api.catalogue import router as catalogue_router
from pixelfate.api.collection import router as collection_router
from pixelfate.api.health import router as health_router
from pixelfate.api.ritual import router as ritual_router

__all__ = [
    "catalogue_router",
    "collection_router",
    "health_router",
    "ritual_router",
]

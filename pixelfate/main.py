from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pixelfate.api import (
    catalogue_router,
    collection_router,
    health_router,
    ritual_router,
)
from pixelfate.api.dependencies import registry
from pixelfate.api.errors import known_error_handler
from pixelfate.config import settings
from pixelfate.db.database import init_db
from pixelfate.models.failure import KnownError


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables on startup; write any debounced state on shutdown."""
    await init_db()
    yield
    await registry.close()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pixelfate"),
    lifespan=lifespan,
)

app.include_router(catalogue_router)
app.include_router(collection_router)
app.include_router(health_router)
app.include_router(ritual_router)

app.add_exception_handler(KnownError, known_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

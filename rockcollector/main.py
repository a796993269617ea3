import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rockcollector.api import (
    converter_router,
    expeditions_router,
    game_router,
    health_router,
    minigames_router,
    packs_router,
)
from rockcollector.api.errors import game_error_handler
from rockcollector.config import settings
from rockcollector.db.database import init_db
from rockcollector.models.failure import GameError
from rockcollector.services.catalog_loader import get_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Raises CatalogLoadError on a missing or malformed catalog; startup aborts
    catalog = get_catalog()
    logger.info("Catalog ready with %d cards", len(catalog.cards))
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("rock-collector"),
    lifespan=lifespan,
)

app.include_router(game_router)
app.include_router(packs_router)
app.include_router(expeditions_router)
app.include_router(minigames_router)
app.include_router(converter_router)
app.include_router(health_router)

app.add_exception_handler(GameError, game_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

"""Application factory: routers, lifespan and logging setup."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from catalog.infrastructure.database import AsyncSessionLocal, Settings, engine, settings as default_settings
from catalog.infrastructure.seed import seed_default_category

from . import categories, products
from .dependencies import get_category_handler, get_product_handler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if app.state.settings.seed_default_category:
        async with AsyncSessionLocal() as session:
            if await seed_default_category(session) is not None:
                logger.info("default category created")
            await session.commit()
    yield
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title="Catalog API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(categories.build_router(get_category_handler), prefix=settings.api_prefix)
    app.include_router(products.build_router(get_product_handler), prefix=settings.api_prefix)
    return app

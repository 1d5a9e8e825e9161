from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from shop_server.catalog import offer_catalog
from shop_server.db import Session, create_tables
from shop_server.load_secrets import apply_timeout_seconds, catalog_reload_minutes, log_level
from shop_server.routers import user_service
from shop_server.services.offer_service import OfferApplicationService

scheduler = AsyncIOScheduler()
logging.basicConfig(level=log_level)


@asynccontextmanager
async def lifespan(app):
    """Create the tables and load the offer catalog.
    This function is called to start the server.
    """
    await create_tables()
    offer_catalog.reload()
    app.state.offer_catalog = offer_catalog
    app.state.offer_service = OfferApplicationService(
        Session, offer_catalog, timeout_seconds=apply_timeout_seconds
    )

    if catalog_reload_minutes > 0:
        scheduler.add_job(
            offer_catalog.reload,
            "interval",
            minutes=catalog_reload_minutes,
        )
        scheduler.start()
    try:
        yield
    finally:
        if scheduler.running:
            scheduler.shutdown()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(user_service.user_service_router)

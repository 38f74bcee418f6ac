from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from venue_scraper.config import Settings, configure_logging
from venue_scraper.exceptions.custom import OutputWriteError, PageProcessingError
from venue_scraper.exceptions.handlers import (
    output_write_error_handler,
    page_processing_error_handler,
)
from venue_scraper.jobs import JobStore
from venue_scraper.routers.scrape import router as scrape_router
from venue_scraper.services.pipeline import build_pipeline


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    configure_logging(settings.log_level)

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        app.state.settings = settings
        app.state.pipeline = build_pipeline(client, settings)
        app.state.job_store = JobStore()

        yield

        await app.state.job_store.shutdown()


app = FastAPI(title="Venue Scraper", lifespan=lifespan)

app.add_exception_handler(PageProcessingError, page_processing_error_handler)
app.add_exception_handler(OutputWriteError, output_write_error_handler)

app.include_router(scrape_router)

from typing import Annotated

from fastapi import Depends, Request

from venue_scraper.config import Settings
from venue_scraper.jobs import JobStore
from venue_scraper.services.pipeline import ScrapePipeline


def get_pipeline(request: Request) -> ScrapePipeline:
    return request.app.state.pipeline


def get_job_store(request: Request) -> JobStore:
    return request.app.state.job_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


PipelineDep = Annotated[ScrapePipeline, Depends(get_pipeline)]
JobStoreDep = Annotated[JobStore, Depends(get_job_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]

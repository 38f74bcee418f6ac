import logging

from fastapi import APIRouter, HTTPException

from venue_scraper.config import Settings
from venue_scraper.dependencies import JobStoreDep, PipelineDep, SettingsDep
from venue_scraper.jobs import JobStore
from venue_scraper.schemas.responses import (
    JobStatusResponse,
    JobSubmittedResponse,
    ScrapeRequest,
    ScrapeResponse,
)
from venue_scraper.services.export import write_csv
from venue_scraper.services.pipeline import ScrapePipeline

logger = logging.getLogger(__name__)

router = APIRouter()


async def scrape(
    pipeline: ScrapePipeline, settings: Settings, request: ScrapeRequest
) -> ScrapeResponse:
    result = await pipeline.run(request.url, request.pages)

    output_path = None
    if request.output_file:
        output_path = str(
            write_csv(result.listings, request.output_file, request.mode, settings.output_dir)
        )

    return ScrapeResponse(
        url=request.url,
        pages_requested=result.pages_requested,
        pages_failed=result.pages_failed,
        total=len(result.listings),
        unresolved_city=result.unresolved_city,
        unresolved_capacity=result.unresolved_capacity,
        output_path=output_path,
        listings=result.listings,
    )


async def _run_scrape(
    job_id: str,
    pipeline: ScrapePipeline,
    settings: Settings,
    store: JobStore,
    request: ScrapeRequest,
) -> None:
    store.mark_running(job_id)
    try:
        result = await scrape(pipeline, settings, request)
        store.mark_completed(job_id, result)
    except Exception as exc:
        logger.exception("Scrape job %s failed", job_id)
        store.mark_failed(job_id, str(exc))


@router.post("/scrape", response_model=JobSubmittedResponse, status_code=202)
async def submit_scrape(
    request: ScrapeRequest,
    pipeline: PipelineDep,
    settings: SettingsDep,
    store: JobStoreDep,
) -> JobSubmittedResponse:
    job = store.create_job(request)
    store.start(job.job_id, _run_scrape(job.job_id, pipeline, settings, store, request))
    return JobSubmittedResponse(
        job_id=job.job_id,
        status=job.status,
        message="Scrape job submitted",
    )


@router.get("/jobs/{job_id}", response_model=JobStatusResponse)
async def get_job_status(job_id: str, store: JobStoreDep) -> JobStatusResponse:
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobStatusResponse(**job.model_dump())


@router.post("/scrape/sync", response_model=ScrapeResponse)
async def scrape_sync(
    request: ScrapeRequest,
    pipeline: PipelineDep,
    settings: SettingsDep,
) -> ScrapeResponse:
    return await scrape(pipeline, settings, request)

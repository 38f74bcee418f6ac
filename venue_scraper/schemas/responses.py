from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from venue_scraper.schemas.listing import CompleteListing


class ScrapeRequest(BaseModel):
    url: str
    pages: int | None = Field(default=None, ge=1)
    output_file: str | None = None
    mode: Literal["w", "a"] = "w"

    @field_validator("output_file")
    @classmethod
    def _bare_file_name(cls, v: str | None) -> str | None:
        if v is not None and (not v or Path(v).name != v):
            raise ValueError("output_file must be a bare file name")
        return v


class ScrapeResponse(BaseModel):
    url: str
    pages_requested: int
    pages_failed: int
    total: int
    unresolved_city: int
    unresolved_capacity: int
    output_path: str | None = None
    listings: list[CompleteListing]


class JobSubmittedResponse(BaseModel):
    job_id: str
    status: str
    message: str


class JobStatusResponse(BaseModel):
    job_id: str
    status: str
    created_at: datetime
    started_at: datetime | None = None
    finished_at: datetime | None = None
    url: str
    pages: int | None = None
    output_file: str | None = None
    mode: str
    result: ScrapeResponse | None = None
    error: str | None = None

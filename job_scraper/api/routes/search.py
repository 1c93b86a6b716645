"""Search endpoint."""

import logging

from fastapi import APIRouter, Depends

from job_scraper.agents.workflow import JobSearchWorkflow
from job_scraper.api.schemas import JobSearchRequest, JobSearchResponse
from job_scraper.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_workflow() -> JobSearchWorkflow:
    """FastAPI dependency building the workflow from settings."""
    return JobSearchWorkflow.from_settings(get_settings())


@router.post("", response_model=JobSearchResponse)
async def search_jobs(
    data: JobSearchRequest,
    workflow: JobSearchWorkflow = Depends(get_workflow),
):
    """Run the job search workflow for a free-text request."""
    logger.info(f"Search request: {data.input[:100]}")
    output = await workflow.run(data.input)
    return JobSearchResponse(output=output)

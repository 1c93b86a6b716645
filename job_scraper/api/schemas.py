"""API request/response schemas."""

from pydantic import BaseModel, Field


class JobSearchRequest(BaseModel):
    input: str = Field(..., min_length=1, description="Free-text job search request")


class JobSearchResponse(BaseModel):
    output: str


class ErrorResponse(BaseModel):
    error: str
    detail: str

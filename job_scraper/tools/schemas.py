"""Tool schema for the `search_jobs` tool exposed to the model."""

from pydantic import BaseModel, Field

SEARCH_JOBS_TOOL_NAME = "search_jobs"

# Sent to the model verbatim.
SEARCH_JOBS_TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": SEARCH_JOBS_TOOL_NAME,
        "description": "Search for job listings on popular job websites",
        "parameters": {
            "type": "object",
            "required": ["keywords"],
            "properties": {
                "keywords": {
                    "type": "string",
                    "description": "Job search keywords (e.g., 'software engineer', 'data scientist')",
                },
                "location": {
                    "type": "string",
                    "description": "Job location (optional)",
                },
            },
            "additionalProperties": False,
        },
        "strict": True,
    },
}


class SearchJobsArgs(BaseModel):
    """Typed arguments for `search_jobs`."""

    keywords: str = Field(min_length=1)
    location: str | None = None

    class Config:
        extra = "forbid"
        str_strip_whitespace = True

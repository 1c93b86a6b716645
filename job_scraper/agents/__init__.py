"""
Agents for Job Search.

- client: Chat model adapter
- dispatcher: Routes model tool calls to handlers
- workflow: Coordinates analysis, search and formatting
"""

from job_scraper.agents.workflow import JobSearchWorkflow

__all__ = ["JobSearchWorkflow"]

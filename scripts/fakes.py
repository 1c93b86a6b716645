"""Fake agent and search provider for workflow tests."""

from job_scraper.models import ConversationMessage, SearchHit, ToolCallRequest
from job_scraper.tools.base import BaseSearchProvider


class FakeSearchProvider(BaseSearchProvider):
    """Returns canned hits; raises for queries containing a failing site."""

    name = "fake"

    def __init__(self, hits_per_query: int = 5, failing: tuple[str, ...] = ()):
        self.hits_per_query = hits_per_query
        self.failing = failing
        self.queries: list[tuple[str, int]] = []
        self.closed = 0

    async def search(self, query: str, max_results: int) -> list[SearchHit]:
        self.queries.append((query, max_results))
        for site in self.failing:
            if f"site:{site}" in query:
                raise RuntimeError(f"{site} unavailable")
        n = len(self.queries)
        return [
            SearchHit(title=f"Job {n}.{i}", url=f"https://jobs.example.com/{n}/{i}", snippet=f"Snippet {i}")
            for i in range(self.hits_per_query)
        ]

    async def aclose(self) -> None:
        self.closed += 1


class FakeAgent:
    """Replays scripted replies and records every invocation."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[dict] = []

    async def invoke(self, instructions, conversation, tools=None):
        self.calls.append({"instructions": instructions, "conversation": list(conversation), "tools": tools})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def search_call(arguments: str, call_id: str = "call_1", name: str = "search_jobs") -> ToolCallRequest:
    return ToolCallRequest(id=call_id, function_name=name, arguments=arguments)


def assistant(content: str | None = None, *calls: ToolCallRequest) -> ConversationMessage:
    return ConversationMessage(role="assistant", content=content, tool_calls=calls or None)

"""
Job search workflow.

LangGraph state machine driving the agent through a fixed set of steps:

START -> analyze_job_request -> search_job_listings -> format_job_results -> END
                             \\-> direct_response -> END

The search branch is taken only when the analysis requested tool calls.
Per-run resources are released by a finalization hook that runs exactly once
on every exit path.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, TypedDict, TypeVar

from langgraph.graph import END, START, StateGraph

from job_scraper.agents.client import AgentClient
from job_scraper.agents.dispatcher import ToolDispatcher, build_tool_registry
from job_scraper.agents.prompts import ANALYZE_PROMPT, CLARIFY_PROMPT, FORMAT_PROMPT
from job_scraper.config import Settings
from job_scraper.exceptions import FinalizationError
from job_scraper.models import ConversationMessage, extend_conversation
from job_scraper.tools import check_search_credentials, create_search_provider
from job_scraper.tools.base import BaseSearchProvider
from job_scraper.tools.job_search import SourceFanoutSearch

logger = logging.getLogger(__name__)

T = TypeVar("T")

ANALYZE_JOB_REQUEST = "analyze_job_request"
SEARCH_JOB_LISTINGS = "search_job_listings"
FORMAT_JOB_RESULTS = "format_job_results"
DIRECT_RESPONSE = "direct_response"


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    ANALYZE_REQUEST = "analyze_request"
    SEARCH_LISTINGS = "search_listings"
    FORMAT_RESULTS = "format_results"
    DIRECT_RESPONSE = "direct_response"
    FAILED = "failed"


class WorkflowState(TypedDict):
    """Graph state threaded between steps."""

    conversation: Annotated[list[ConversationMessage], extend_conversation]
    output: str | None


@dataclass
class WorkflowRun:
    """State owned by a single workflow invocation."""

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    status: WorkflowStatus = WorkflowStatus.PENDING
    conversation: list[ConversationMessage] = field(default_factory=list)
    step_outputs: dict[str, Any] = field(default_factory=dict)
    resources: AsyncExitStack = field(default_factory=AsyncExitStack)
    started_at: float = field(default_factory=time.perf_counter)
    finalized: bool = False

    def record(self, step_id: str, output: Any, messages: list[ConversationMessage]) -> dict:
        """Store a step's output and messages, and return the matching graph update."""
        self.step_outputs[step_id] = output
        self.conversation = extend_conversation(self.conversation, messages)
        return {"conversation": messages}


def route_after_analysis(state: WorkflowState) -> str:
    """Search only if the analysis asked for tools."""
    analysis = state["conversation"][-1]
    return SEARCH_JOB_LISTINGS if analysis.has_tool_calls else DIRECT_RESPONSE


class JobSearchWorkflow:
    """
    Turns a free-text job request into formatted job listings.

    Args:
        agent: Agent client used by the analysis and response steps
        provider_factory: Creates the search provider for one run
        on_end: Optional coroutine called from the finalization hook
    """

    def __init__(
        self,
        agent: AgentClient,
        provider_factory: Callable[[], BaseSearchProvider],
        on_end: Callable[[WorkflowRun], Awaitable[None]] | None = None,
    ):
        self.agent = agent
        self.provider_factory = provider_factory
        self.on_end = on_end

    @classmethod
    def from_settings(cls, settings: Settings) -> "JobSearchWorkflow":
        """
        Build the workflow from settings.

        Raises:
            ConfigurationError: If the model or search provider credentials are missing
        """
        check_search_credentials(settings)
        return cls(AgentClient.from_settings(settings), lambda: create_search_provider(settings))

    async def run(self, user_input: str) -> str:
        """
        Run the workflow for one request.

        Returns:
            Formatted job listings, or a clarification request

        Raises:
            JobSearchError: Any fatal error, after finalization has run
        """
        run = WorkflowRun()
        logger.info(f"[{run.run_id}] Workflow started")

        try:
            output = await self._execute(run, user_input)
        except BaseException as e:
            failed_in = run.status.value
            run.status = WorkflowStatus.FAILED
            logger.error(f"[{run.run_id}] Workflow error in {failed_in}: {e}")
            await self._end(run, error=e)
            raise

        await self._end(run)
        return output

    async def _execute(self, run: WorkflowRun, user_input: str) -> str:
        run.conversation = [ConversationMessage.user(user_input)]
        provider = await run.resources.enter_async_context(self.provider_factory())
        dispatcher = ToolDispatcher(build_tool_registry(SourceFanoutSearch(provider)))
        graph = self._build_graph(run, dispatcher)

        state = await graph.ainvoke({"conversation": list(run.conversation), "output": None})
        return state["output"] or ""

    async def _step(self, run: WorkflowRun, step_id: str, status: WorkflowStatus, work: Callable[[], Awaitable[T]]) -> T:
        """Run one step's unit of work with status tracking and timing."""
        run.status = status
        logger.info(f"[{run.run_id}] Step {step_id} started")
        started = time.perf_counter()

        result = await work()

        logger.info(f"[{run.run_id}] Step {step_id} finished in {time.perf_counter() - started:.2f}s")
        return result

    def _build_graph(self, run: WorkflowRun, dispatcher: ToolDispatcher):
        tools = dispatcher.registry.openai_tools()

        async def analyze_job_request(state: WorkflowState) -> dict:
            reply = await self._step(
                run,
                ANALYZE_JOB_REQUEST,
                WorkflowStatus.ANALYZE_REQUEST,
                lambda: self.agent.invoke(ANALYZE_PROMPT, state["conversation"], tools=tools),
            )
            return run.record(ANALYZE_JOB_REQUEST, reply, [reply])

        async def search_job_listings(state: WorkflowState) -> dict:
            analysis = state["conversation"][-1]
            dispatched = await self._step(
                run,
                SEARCH_JOB_LISTINGS,
                WorkflowStatus.SEARCH_LISTINGS,
                lambda: dispatcher.dispatch(analysis),
            )
            return run.record(SEARCH_JOB_LISTINGS, dispatched.results, dispatched.messages)

        async def format_job_results(state: WorkflowState) -> dict:
            reply = await self._step(
                run,
                FORMAT_JOB_RESULTS,
                WorkflowStatus.FORMAT_RESULTS,
                lambda: self.agent.invoke(FORMAT_PROMPT, state["conversation"]),
            )
            return {**run.record(FORMAT_JOB_RESULTS, reply.content, [reply]), "output": reply.content}

        async def direct_response(state: WorkflowState) -> dict:
            reply = await self._step(
                run,
                DIRECT_RESPONSE,
                WorkflowStatus.DIRECT_RESPONSE,
                lambda: self.agent.invoke(CLARIFY_PROMPT, state["conversation"]),
            )
            return {**run.record(DIRECT_RESPONSE, reply.content, [reply]), "output": reply.content}

        g = StateGraph(WorkflowState)

        g.add_node(ANALYZE_JOB_REQUEST, analyze_job_request)
        g.add_node(SEARCH_JOB_LISTINGS, search_job_listings)
        g.add_node(FORMAT_JOB_RESULTS, format_job_results)
        g.add_node(DIRECT_RESPONSE, direct_response)

        g.add_edge(START, ANALYZE_JOB_REQUEST)
        g.add_conditional_edges(
            ANALYZE_JOB_REQUEST,
            route_after_analysis,
            {SEARCH_JOB_LISTINGS: SEARCH_JOB_LISTINGS, DIRECT_RESPONSE: DIRECT_RESPONSE},
        )
        g.add_edge(SEARCH_JOB_LISTINGS, FORMAT_JOB_RESULTS)
        g.add_edge(FORMAT_JOB_RESULTS, END)
        g.add_edge(DIRECT_RESPONSE, END)

        return g.compile()

    async def _end(self, run: WorkflowRun, error: BaseException | None = None) -> None:
        """
        Finalization hook. Releases run resources exactly once.

        A failure here never masks `error`; without one it raises FinalizationError.
        """
        if run.finalized:
            return
        run.finalized = True

        try:
            await run.resources.aclose()
            if self.on_end is not None:
                await self.on_end(run)
        except Exception as e:
            logger.error(f"[{run.run_id}] Finalization failed: {e}")
            if error is None:
                raise FinalizationError(f"Workflow finalization failed: {e}") from e
        finally:
            elapsed = time.perf_counter() - run.started_at
            logger.info(f"[{run.run_id}] Workflow ended ({run.status.value}) in {elapsed:.2f}s")

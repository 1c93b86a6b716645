"""
Tool dispatcher.

Resolves tool calls from an assistant message against a closed registry,
runs the handler and produces the matching tool-result messages.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from job_scraper.exceptions import ToolArgumentParseError
from job_scraper.models import ConversationMessage, ToolCallRequest
from job_scraper.tools.job_search import SourceFanoutSearch
from job_scraper.tools.schemas import SEARCH_JOBS_TOOL_NAME, SEARCH_JOBS_TOOL_SCHEMA, SearchJobsArgs

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class RegisteredTool:
    """A tool name bound to its schema, argument model and handler."""

    name: str
    schema: dict[str, Any]
    args_model: type[BaseModel]
    handler: ToolHandler

    def parse_arguments(self, call: ToolCallRequest) -> BaseModel:
        """
        Parse raw call arguments into the tool's argument model.

        Raises:
            ToolArgumentParseError: If the call has no id, or arguments are not JSON or do not fit the schema
        """
        if not call.id:
            raise ToolArgumentParseError(self.name, call.id, call.arguments, "tool call has no id")

        try:
            data = json.loads(call.arguments)
        except json.JSONDecodeError as e:
            raise ToolArgumentParseError(self.name, call.id, call.arguments, f"not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ToolArgumentParseError(self.name, call.id, call.arguments, "arguments must be a JSON object")

        try:
            return self.args_model.model_validate(data)
        except ValidationError as e:
            raise ToolArgumentParseError(self.name, call.id, call.arguments, str(e)) from e


def _check_schema(name: str, schema: dict[str, Any], args_model: type[BaseModel]) -> None:
    """Ensure a tool schema and its argument model describe the same arguments."""
    function = schema.get("function", {})
    if function.get("name") != name:
        raise ValueError(f"Schema name {function.get('name')!r} does not match tool {name!r}")

    parameters = function.get("parameters", {})
    declared = set(parameters.get("properties", {}))
    fields = args_model.model_fields
    if declared != set(fields):
        raise ValueError(f"Schema properties {sorted(declared)} do not match {args_model.__name__} fields")

    required = set(parameters.get("required", []))
    model_required = {n for n, f in fields.items() if f.is_required()}
    if required != model_required:
        raise ValueError(f"Schema required {sorted(required)} does not match {args_model.__name__}")


class ToolRegistry:
    """Closed mapping of tool names to typed handlers."""

    def __init__(self):
        self._tools: dict[str, RegisteredTool] = {}

    def register(
        self,
        name: str,
        handler: ToolHandler,
        schema: dict[str, Any],
        args_model: type[BaseModel],
    ) -> None:
        """
        Register a tool.

        Raises:
            ValueError: If the name is taken or the schema does not match args_model
        """
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        _check_schema(name, schema, args_model)
        self._tools[name] = RegisteredTool(name=name, schema=schema, args_model=args_model, handler=handler)
        logger.debug(f"Registered tool: {name}")

    def get(self, name: str) -> RegisteredTool | None:
        return self._tools.get(name)

    def openai_tools(self) -> list[dict[str, Any]]:
        """Tool schemas in OpenAI function-calling format."""
        return [tool.schema for tool in self._tools.values()]

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)


def build_tool_registry(job_search: SourceFanoutSearch) -> ToolRegistry:
    """Registry with the `search_jobs` tool backed by the fan-out search."""
    registry = ToolRegistry()
    registry.register(SEARCH_JOBS_TOOL_NAME, job_search.search, SEARCH_JOBS_TOOL_SCHEMA, SearchJobsArgs)
    return registry


def serialize_tool_result(result: Any) -> str:
    """Serialize a handler result to the text sent back to the model."""
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, default=to_jsonable_python)


@dataclass
class DispatchResult:
    """Tool messages to append, and the raw handler results, in call order."""

    messages: list[ConversationMessage] = field(default_factory=list)
    results: list[Any] = field(default_factory=list)


class ToolDispatcher:
    """Executes the tool calls of an assistant message."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def dispatch(self, message: ConversationMessage) -> DispatchResult:
        """
        Run every recognized tool call in `message`, in order.

        Calls to unregistered tools are ignored: nothing runs and no message
        is produced for them.

        Raises:
            ToolArgumentParseError: If a recognized call has malformed arguments
        """
        dispatched = DispatchResult()
        for call in message.tool_calls or ():
            tool = self.registry.get(call.function_name)
            if tool is None:
                logger.debug(f"Ignoring call {call.id} to unknown tool {call.function_name!r}")
                continue

            args = tool.parse_arguments(call)
            logger.info(f"Executing tool {tool.name} (call {call.id})")
            result = await tool.handler(**args.model_dump())

            dispatched.results.append(result)
            dispatched.messages.append(
                ConversationMessage.tool_result(call.id, tool.name, serialize_tool_result(result))
            )
        return dispatched

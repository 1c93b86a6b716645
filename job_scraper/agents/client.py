"""
Agent client.

Thin adapter over a LangChain chat model: sends instructions, the conversation
and optional tool schemas, and returns the reply as a ConversationMessage.
"""

import json
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.messages.tool import invalid_tool_call, tool_call
from langchain_deepseek import ChatDeepSeek

from job_scraper.config import Settings
from job_scraper.exceptions import AgentInvocationError, ConfigurationError
from job_scraper.models import ConversationMessage, ToolCallRequest

logger = logging.getLogger(__name__)


def create_chat_model(settings: Settings) -> ChatDeepSeek:
    """Create the DeepSeek chat model used by the agent."""
    if not settings.deepseek_api_key:
        raise ConfigurationError("DEEPSEEK_API_KEY not set")

    return ChatDeepSeek(
        model=settings.llm_model,
        api_key=settings.deepseek_api_key,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout,
        max_retries=0,
    )


def to_langchain_messages(conversation: list[ConversationMessage]) -> list[BaseMessage]:
    """Convert conversation messages to LangChain messages."""
    messages: list[BaseMessage] = []
    for m in conversation:
        if m.role == "user":
            messages.append(HumanMessage(content=m.content or ""))
        elif m.role == "tool":
            messages.append(ToolMessage(content=m.content or "", tool_call_id=m.tool_call_id, name=m.name))
        else:
            calls, invalid = [], []
            for call in m.tool_calls or ():
                try:
                    args = json.loads(call.arguments or "{}")
                except json.JSONDecodeError as e:
                    args, error = None, str(e)
                else:
                    error = None if isinstance(args, dict) else "arguments must be a JSON object"
                if error is not None:
                    invalid.append(invalid_tool_call(name=call.function_name, args=call.arguments, id=call.id, error=error))
                    continue
                calls.append(tool_call(name=call.function_name, args=args, id=call.id))
            messages.append(AIMessage(content=m.content or "", tool_calls=calls, invalid_tool_calls=invalid))
    return messages


def _content_text(content: Any) -> str | None:
    """Flatten LangChain message content (string or content blocks) to text."""
    if isinstance(content, str):
        return content or None
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts) or None


def from_ai_message(reply: BaseMessage) -> ConversationMessage:
    """
    Convert a model reply to an assistant ConversationMessage.

    Raw argument text is kept as sent by the provider when available so that
    malformed arguments reach the dispatcher unchanged.
    """
    requests: list[ToolCallRequest] = []

    raw_calls = reply.additional_kwargs.get("tool_calls") or []
    if raw_calls:
        for raw in raw_calls:
            function = raw.get("function", {})
            requests.append(
                ToolCallRequest(
                    id=raw.get("id", ""),
                    function_name=function.get("name", ""),
                    arguments=function.get("arguments") or "",
                )
            )
    elif isinstance(reply, AIMessage):
        for call in reply.tool_calls:
            requests.append(
                ToolCallRequest(id=call["id"] or "", function_name=call["name"], arguments=json.dumps(call["args"]))
            )
        for call in reply.invalid_tool_calls:
            requests.append(
                ToolCallRequest(id=call["id"] or "", function_name=call["name"] or "", arguments=call["args"] or "")
            )

    return ConversationMessage(
        role="assistant",
        content=_content_text(reply.content),
        tool_calls=tuple(requests) or None,
    )


class AgentClient:
    """Invokes the chat model with instructions, a conversation and optional tools."""

    def __init__(self, model: BaseChatModel):
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "AgentClient":
        return cls(create_chat_model(settings))

    async def invoke(
        self,
        instructions: str,
        conversation: list[ConversationMessage],
        tools: list[dict[str, Any]] | None = None,
    ) -> ConversationMessage:
        """
        Run the model once.

        Args:
            instructions: System instructions for this step
            conversation: Conversation so far
            tools: OpenAI-format tool schemas, or None for a plain reply

        Returns:
            Assistant message, possibly carrying tool calls

        Raises:
            AgentInvocationError: If the model call fails
        """
        try:
            runnable = self.model.bind_tools(tools) if tools else self.model
            messages = [SystemMessage(content=instructions), *to_langchain_messages(conversation)]
            reply = await runnable.ainvoke(messages)
        except Exception as e:
            raise AgentInvocationError(f"Agent call failed: {e}") from e

        message = from_ai_message(reply)
        logger.debug(
            f"Agent replied with {len(message.tool_calls or ())} tool calls, "
            f"{len(message.content or '')} chars"
        )
        return message

"""Conversation and search data models."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

NO_LOCATION = "Not specified"
HIRING_PHRASES = '"open positions" OR "now hiring" OR "apply now"'


# Conversation
class ToolCallRequest(BaseModel):
    """A model-issued request to call a tool. `arguments` is raw JSON text."""

    id: str
    function_name: str
    arguments: str = ""

    class Config:
        frozen = True


class ConversationMessage(BaseModel):
    role: Literal["user", "assistant", "tool"]
    content: str | None = None
    tool_calls: tuple[ToolCallRequest, ...] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_role_fields(self) -> "ConversationMessage":
        if self.tool_calls and self.role != "assistant":
            raise ValueError("only assistant messages may carry tool_calls")
        if self.role == "tool":
            if not self.tool_call_id or not self.name:
                raise ValueError("tool messages require tool_call_id and name")
        elif self.tool_call_id is not None or self.name is not None:
            raise ValueError("tool_call_id and name are only valid on tool messages")
        return self

    @classmethod
    def user(cls, content: str) -> "ConversationMessage":
        return cls(role="user", content=content)

    @classmethod
    def tool_result(cls, tool_call_id: str, name: str, content: str) -> "ConversationMessage":
        return cls(role="tool", tool_call_id=tool_call_id, name=name, content=content)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


def extend_conversation(
    conversation: list[ConversationMessage],
    new_messages: list[ConversationMessage],
) -> list[ConversationMessage]:
    """
    Return a new conversation with `new_messages` appended.

    Every tool message must answer exactly one earlier assistant tool call.

    Raises:
        ValueError: If a tool message references an unknown or already answered call
    """
    result = list(conversation)
    for message in new_messages:
        if message.role == "tool":
            issued = [
                call.id
                for m in result
                if m.role == "assistant"
                for call in m.tool_calls or ()
            ]
            answered = {m.tool_call_id for m in result if m.role == "tool"}
            if issued.count(message.tool_call_id) != 1:
                raise ValueError(f"Tool message references unknown call id: {message.tool_call_id}")
            if message.tool_call_id in answered:
                raise ValueError(f"Tool call already answered: {message.tool_call_id}")
        result.append(message)
    return result


# Search
class SearchQuery(BaseModel):
    keywords: str = Field(min_length=1)
    location: str | None = None

    def for_site(self, site: str) -> str:
        """Build the provider query string scoped to one job site."""
        parts = [self.keywords]
        if self.location:
            parts.append(self.location)
        parts.extend([site, HIRING_PHRASES])
        return " ".join(parts)


class SearchHit(BaseModel):
    """A single hit as returned by a search provider."""

    title: str = ""
    url: str = ""
    snippet: Any = None


class SearchResult(SearchHit):
    """A search hit tagged with the job site and query it came from."""

    source: str
    keywords: str
    location: str = NO_LOCATION


@dataclass(frozen=True)
class SourceOutcome:
    """Result of searching one job site: either results or an error."""

    source: str
    results: tuple[SearchResult, ...] = ()
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

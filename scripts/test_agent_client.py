"""Tests for the chat model adapter."""

import asyncio
import json

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from fakes import assistant, search_call
from job_scraper.agents.client import AgentClient, create_chat_model, to_langchain_messages
from job_scraper.config import Settings
from job_scraper.exceptions import AgentInvocationError, ConfigurationError
from job_scraper.models import ConversationMessage
from job_scraper.tools.schemas import SEARCH_JOBS_TOOL_SCHEMA


class FakeChatModel:
    """Stands in for a LangChain chat model."""

    def __init__(self, reply):
        self.reply = reply
        self.bound_tools = None
        self.received = None

    def bind_tools(self, tools):
        self.bound_tools = tools
        return self

    async def ainvoke(self, messages):
        self.received = messages
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


def test_plain_reply():
    model = FakeChatModel(AIMessage(content="Which roles interest you?"))

    reply = asyncio.run(AgentClient(model).invoke("Clarify", [ConversationMessage.user("jobs")]))

    assert reply.role == "assistant"
    assert reply.content == "Which roles interest you?"
    assert not reply.has_tool_calls
    assert model.bound_tools is None


def test_tools_are_bound_and_calls_converted():
    model = FakeChatModel(
        AIMessage(content="", tool_calls=[{"name": "search_jobs", "args": {"keywords": "nurse"}, "id": "call_1"}])
    )

    reply = asyncio.run(
        AgentClient(model).invoke("Analyze", [ConversationMessage.user("nurse jobs")], tools=[SEARCH_JOBS_TOOL_SCHEMA])
    )

    assert model.bound_tools == [SEARCH_JOBS_TOOL_SCHEMA]
    assert reply.content is None
    assert reply.tool_calls[0].id == "call_1"
    assert reply.tool_calls[0].function_name == "search_jobs"
    assert json.loads(reply.tool_calls[0].arguments) == {"keywords": "nurse"}


def test_raw_provider_arguments_preserved():
    raw = [{"id": "call_9", "type": "function", "function": {"name": "search_jobs", "arguments": '{"keywords": '}}]
    model = FakeChatModel(AIMessage(content="", additional_kwargs={"tool_calls": raw}))

    reply = asyncio.run(AgentClient(model).invoke("Analyze", [ConversationMessage.user("jobs")]))

    assert reply.tool_calls[0].id == "call_9"
    assert reply.tool_calls[0].arguments == '{"keywords": '


def test_conversation_converted_to_langchain_messages():
    model = FakeChatModel(AIMessage(content="done"))
    conversation = [
        ConversationMessage.user("chef jobs in Lyon"),
        assistant(None, search_call('{"keywords": "chef", "location": "Lyon"}', "call_1")),
        ConversationMessage.tool_result("call_1", "search_jobs", "[]"),
    ]

    asyncio.run(AgentClient(model).invoke("Format", conversation))

    system, human, ai, tool = model.received
    assert isinstance(system, SystemMessage) and system.content == "Format"
    assert isinstance(human, HumanMessage) and human.content == "chef jobs in Lyon"
    assert isinstance(ai, AIMessage)
    assert ai.tool_calls[0]["id"] == "call_1"
    assert ai.tool_calls[0]["args"] == {"keywords": "chef", "location": "Lyon"}
    assert isinstance(tool, ToolMessage)
    assert tool.tool_call_id == "call_1"
    assert tool.name == "search_jobs"


@pytest.mark.parametrize("arguments", ["null", "[1]", "5", '{"keywords": '])
def test_non_object_arguments_become_invalid_tool_calls(arguments):
    conversation = [ConversationMessage.user("weather"), assistant(None, search_call(arguments, name="get_weather"))]

    _, ai = to_langchain_messages(conversation)

    assert ai.tool_calls == []
    assert ai.invalid_tool_calls[0]["id"] == "call_1"
    assert ai.invalid_tool_calls[0]["name"] == "get_weather"
    assert ai.invalid_tool_calls[0]["args"] == arguments


def test_backend_failure_is_wrapped():
    model = FakeChatModel(RuntimeError("503 Service Unavailable"))

    with pytest.raises(AgentInvocationError):
        asyncio.run(AgentClient(model).invoke("Analyze", [ConversationMessage.user("jobs")]))


def test_missing_api_key():
    with pytest.raises(ConfigurationError):
        create_chat_model(Settings(deepseek_api_key=""))

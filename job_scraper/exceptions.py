"""Error types raised by the job search workflow."""


class JobSearchError(Exception):
    """Base class for job search errors."""


class ConfigurationError(JobSearchError, ValueError):
    """A required credential or setting is missing or invalid."""


class AgentInvocationError(JobSearchError):
    """The language model backend call failed."""


class ToolArgumentParseError(JobSearchError):
    """A recognized tool call carried arguments that do not fit its schema."""

    def __init__(self, tool_name: str, tool_call_id: str, raw_arguments: str, reason: str):
        self.tool_name = tool_name
        self.tool_call_id = tool_call_id
        self.raw_arguments = raw_arguments
        self.reason = reason
        super().__init__(f"Invalid arguments for tool {tool_name} (call {tool_call_id}): {reason}")


class SourceSearchError(JobSearchError):
    """A single job source failed. Recovered by the fan-out search."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Search failed for {source}: {reason}")


class FinalizationError(JobSearchError):
    """The workflow finalization hook failed."""

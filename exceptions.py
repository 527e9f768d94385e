class TravelAssistantError(Exception):
    """Base class for errors raised by the travel assistant."""


class ConfigurationError(TravelAssistantError):
    """A required setting (usually a provider API key) is missing."""


class ToolArgumentsError(TravelAssistantError):
    """The model emitted tool-call arguments that could not be used."""

    def __init__(self, tool_call_id: str, raw_arguments: str, reason: str):
        self.tool_call_id = tool_call_id
        self.raw_arguments = raw_arguments
        super().__init__(f"Invalid arguments for tool call {tool_call_id}: {reason} (got {raw_arguments!r})")

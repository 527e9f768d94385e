from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ToolInvocationRequest(BaseModel):
    id: str
    function_name: str
    arguments: str = Field("{}", description="JSON-encoded arguments as emitted by the model")

    def to_message(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.function_name, "arguments": self.arguments},
        }


class SystemTurn(BaseModel):
    role: Literal["system"] = "system"
    content: str

    def to_message(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


class UserTurn(BaseModel):
    role: Literal["user"] = "user"
    content: str

    def to_message(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


class AssistantTurn(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: List[ToolInvocationRequest] = []

    @classmethod
    def from_completion(cls, message: Any) -> "AssistantTurn":
        """Build from a chat-completions `message` object."""
        calls = [
            ToolInvocationRequest(id=tc.id, function_name=tc.function.name, arguments=tc.function.arguments or "{}")
            for tc in (message.tool_calls or [])
        ]
        return cls(content=message.content, tool_calls=calls)

    def to_message(self) -> Dict[str, Any]:
        msg: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            msg["tool_calls"] = [tc.to_message() for tc in self.tool_calls]
        return msg


class ToolTurn(BaseModel):
    role: Literal["tool"] = "tool"
    tool_call_id: str
    name: str
    content: str

    def to_message(self) -> Dict[str, Any]:
        return {"role": self.role, "tool_call_id": self.tool_call_id, "name": self.name, "content": self.content}


Turn = Annotated[Union[SystemTurn, UserTurn, AssistantTurn, ToolTurn], Field(discriminator="role")]
HistoryTurn = Annotated[Union[UserTurn, AssistantTurn], Field(discriminator="role")]


class WeatherSummary(BaseModel):
    location: str
    temperature: float = Field(..., description="°C")
    feels_like: Optional[float] = None
    description: str
    humidity: Optional[int] = Field(None, description="%")
    wind_speed: Optional[float] = None
    clouds: Optional[int] = Field(None, description="%")
    visibility: Optional[int] = Field(None, description="metres")
    condition: Optional[str] = Field(None, description="Provider's main category, e.g. Clear, Rain")


@dataclass(frozen=True)
class WeatherOutcome:
    ok: bool
    summary: Optional[WeatherSummary] = None
    reason: Optional[str] = None

    @staticmethod
    def success(summary: WeatherSummary) -> "WeatherOutcome":
        return WeatherOutcome(ok=True, summary=summary, reason=None)

    @staticmethod
    def failure(reason: str) -> "WeatherOutcome":
        return WeatherOutcome(ok=False, summary=None, reason=reason)


class ChatRequest(BaseModel):
    messages: List[HistoryTurn] = Field(..., min_length=1, description="Conversation so far, oldest first")
    language: str = Field("Japanese", description="Preferred reply language when the user's is ambiguous")


class WeatherMeta(BaseModel):
    city: str
    condition: Optional[str] = None
    temp: float

    @classmethod
    def from_summary(cls, summary: WeatherSummary) -> "WeatherMeta":
        return cls(city=summary.location, condition=summary.condition or summary.description, temp=summary.temperature)


class ChatReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    weather_fetched: bool = Field(False, alias="weatherFetched")
    weather: Optional[WeatherMeta] = None


class TranscriptionResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from base import WeatherAPIBase
from config import WEATHER_ERROR_RESULT
from config.settings import settings
from exceptions import ToolArgumentsError
from llm.openai_client import LLMClient
from models import (
    ChatReply,
    HistoryTurn,
    SystemTurn,
    ToolInvocationRequest,
    ToolTurn,
    Turn,
    WeatherMeta,
    WeatherSummary,
)
from prompts import PROMPTS
from tools import GET_WEATHER, TOOL_DECLARATIONS
from utils import language_code


def assemble_conversation(history: Sequence[HistoryTurn], language: str) -> List[Turn]:
    """One system turn followed by the caller's history, order untouched."""
    system = SystemTurn(content=PROMPTS['system'].format(language=language))
    return [system, *history]


class Agent:
    name = "Agent"

    def __init__(self):
        self.tool_calls: List[Dict[str, Any]] = []
        self.logger = logging.getLogger("app")

    def log(self, request_id: str, msg: str, level: str = "info"):
        extra = {'extra_data': {"request_id": request_id, "agent": self.name}}
        getattr(self.logger, level)(msg, extra=extra)


class ToolCallingOrchestrator(Agent):
    name = "ToolCallingOrchestrator"

    def __init__(self, llm: LLMClient, weather_api: WeatherAPIBase):
        super().__init__()
        self.llm = llm
        self.weather_api = weather_api

    def handle(self, request_id: str, history: Sequence[HistoryTurn], language: str) -> ChatReply:
        turns = assemble_conversation(history, language)

        first = self.llm.complete(turns, tools=TOOL_DECLARATIONS)
        if not first.tool_calls:
            self.log(request_id, "No tool requested; returning direct answer")
            return ChatReply(reply=first.content or "", weather_fetched=False)

        # The tool turns must follow the assistant turn that asked for them
        turns.append(first)
        weather: Optional[WeatherMeta] = None
        for call in first.tool_calls:
            tool_turn, summary = self.run_tool(request_id, call, language)
            turns.append(tool_turn)
            if summary is not None:
                weather = WeatherMeta.from_summary(summary)

        final = self.llm.complete(turns)
        self.log(request_id, f"Answered after {len(first.tool_calls)} tool call(s)")
        return ChatReply(reply=final.content or "", weather_fetched=True, weather=weather)

    def run_tool(self, request_id: str, call: ToolInvocationRequest, language: str) -> Tuple[ToolTurn, Optional[WeatherSummary]]:
        if call.function_name != GET_WEATHER:
            self.log(request_id, f"Model requested unknown tool {call.function_name!r}", level="warning")
            return ToolTurn(tool_call_id=call.id, name=call.function_name, content=f"Unknown tool: {call.function_name}"), None

        city = parse_city(call)
        outcome = self.weather_api.fetch_weather(city, lang=self.weather_lang(language))
        self.tool_calls.append({
            "tool": GET_WEATHER,
            "input": {"city": city},
            "result": {"ok": outcome.ok, "reason": outcome.reason},
        })
        if not outcome.ok:
            self.log(request_id, f"Weather lookup for {city!r} failed: {outcome.reason}", level="warning")
            return ToolTurn(tool_call_id=call.id, name=GET_WEATHER, content=WEATHER_ERROR_RESULT), None

        self.log(request_id, f"Fetched weather for {city!r}")
        return ToolTurn(tool_call_id=call.id, name=GET_WEATHER, content=outcome.summary.model_dump_json()), outcome.summary

    @staticmethod
    def weather_lang(language: str) -> str:
        cfg = settings.weather
        if cfg.lang_mode == "caller":
            return language_code(language, default=cfg.lang)
        return cfg.lang


def parse_city(call: ToolInvocationRequest) -> str:
    try:
        args = json.loads(call.arguments)
    except json.JSONDecodeError as e:
        raise ToolArgumentsError(call.id, call.arguments, f"not valid JSON ({e})") from e
    city = args.get("city") if isinstance(args, dict) else None
    if not isinstance(city, str) or not city.strip():
        raise ToolArgumentsError(call.id, call.arguments, "missing 'city'")
    return city

import json
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from base import WeatherAPIBase
from models import AssistantTurn, ToolInvocationRequest, WeatherOutcome, WeatherSummary


TOKYO = WeatherSummary(
    location="Tokyo", temperature=18.4, feels_like=17.9, description="晴天",
    humidity=52, wind_speed=3.1, clouds=5, visibility=10000, condition="Clear",
)
KYOTO = WeatherSummary(
    location="Kyoto", temperature=15.2, feels_like=14.6, description="小雨",
    humidity=81, wind_speed=1.8, clouds=90, visibility=8000, condition="Rain",
)


class FakeLLM:
    """Scripted stand-in for LLMClient; replies are handed out in order."""

    def __init__(self, replies: Optional[List[AssistantTurn]] = None, transcript: str = "", transcribe_error: Exception = None):
        self.replies = list(replies or [])
        self.calls: List[dict] = []
        self.transcript = transcript
        self.transcribe_error = transcribe_error
        self.transcriptions: List[dict] = []

    def complete(self, turns, tools=None) -> AssistantTurn:
        # snapshot: the orchestrator keeps appending to the same list
        self.calls.append({"turns": list(turns), "tools": tools})
        return self.replies.pop(0)

    def transcribe(self, filename, content, content_type, language) -> str:
        self.transcriptions.append(
            {"filename": filename, "content": content, "content_type": content_type, "language": language}
        )
        if self.transcribe_error:
            raise self.transcribe_error
        return self.transcript


class FakeWeatherAPI(WeatherAPIBase):
    def __init__(self, summaries: Optional[Dict[str, WeatherSummary]] = None):
        self.summaries = summaries or {}
        self.calls: List[dict] = []

    def fetch_weather(self, city: str, lang: Optional[str] = None) -> WeatherOutcome:
        self.calls.append({"city": city, "lang": lang})
        if city in self.summaries:
            return WeatherOutcome.success(self.summaries[city])
        return WeatherOutcome.failure("status 404")


def text_reply(text: str) -> AssistantTurn:
    return AssistantTurn(content=text)


def weather_request(*cities: str, raw_arguments: Optional[str] = None) -> AssistantTurn:
    calls = [
        ToolInvocationRequest(
            id=f"call_{i}",
            function_name="get_weather",
            arguments=raw_arguments if raw_arguments is not None else json.dumps({"city": city}),
        )
        for i, city in enumerate(cities, start=1)
    ]
    return AssistantTurn(content=None, tool_calls=calls)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_weather():
    return FakeWeatherAPI({"Tokyo": TOKYO, "Kyoto": KYOTO})


@pytest.fixture
def client(fake_llm, fake_weather):
    import app as mod

    mod.app.dependency_overrides[mod.get_llm_client] = lambda: fake_llm
    mod.app.dependency_overrides[mod.get_weather_api] = lambda: fake_weather
    yield TestClient(mod.app)
    mod.app.dependency_overrides.clear()

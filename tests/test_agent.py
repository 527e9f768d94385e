from types import SimpleNamespace

import pytest

from agent import ToolCallingOrchestrator, assemble_conversation, parse_city
from api.weather_api_local import WeatherAPILocalClient
from config.settings import settings
from exceptions import ToolArgumentsError
from models import AssistantTurn, ToolInvocationRequest, UserTurn
from utils import get_api_class, language_code

from conftest import FakeLLM, FakeWeatherAPI, TOKYO, text_reply, weather_request


def test_assemble_prepends_single_system_turn():
    history = [UserTurn(content="A"), AssistantTurn(content="B"), UserTurn(content="C")]
    turns = assemble_conversation(history, "English")

    assert [t.role for t in turns] == ["system", "user", "assistant", "user"]
    assert turns[1:] == history
    assert "English" in turns[0].content
    assert "get_weather" in turns[0].content


def test_assemble_keeps_duplicates():
    history = [UserTurn(content="hi"), UserTurn(content="hi")]
    assert len(assemble_conversation(history, "Japanese")) == 3


def test_parse_city():
    call = ToolInvocationRequest(id="call_1", function_name="get_weather", arguments='{"city": "Kyoto"}')
    assert parse_city(call) == "Kyoto"


@pytest.mark.parametrize("raw", ['{"city": ', '{}', '{"city": ""}', '["Kyoto"]'])
def test_parse_city_rejects_bad_arguments(raw):
    call = ToolInvocationRequest(id="call_9", function_name="get_weather", arguments=raw)
    with pytest.raises(ToolArgumentsError) as exc:
        parse_city(call)
    assert exc.value.tool_call_id == "call_9"


def test_weather_lang_fixed(monkeypatch):
    monkeypatch.setattr(settings.weather, "lang_mode", "fixed")
    monkeypatch.setattr(settings.weather, "lang", "ja")
    assert ToolCallingOrchestrator.weather_lang("English") == "ja"


def test_weather_lang_follows_caller(monkeypatch):
    monkeypatch.setattr(settings.weather, "lang_mode", "caller")
    monkeypatch.setattr(settings.weather, "lang", "ja")
    assert ToolCallingOrchestrator.weather_lang("English") == "en"
    assert ToolCallingOrchestrator.weather_lang("Klingon") == "ja"


def test_orchestrator_records_tool_calls():
    llm = FakeLLM([weather_request("Tokyo", "Atlantis"), text_reply("done")])
    orch = ToolCallingOrchestrator(llm, FakeWeatherAPI({"Tokyo": TOKYO}))
    reply = orch.handle("req-1", [UserTurn(content="Tokyo?")], "English")

    assert reply.reply == "done"
    assert [c["result"]["ok"] for c in orch.tool_calls] == [True, False]


def test_assistant_turn_from_completion():
    message = SimpleNamespace(
        content=None,
        tool_calls=[SimpleNamespace(id="call_a", function=SimpleNamespace(name="get_weather", arguments='{"city":"Osaka"}'))],
    )
    turn = AssistantTurn.from_completion(message)
    assert turn.to_message() == {
        "role": "assistant",
        "content": None,
        "tool_calls": [
            {"id": "call_a", "type": "function", "function": {"name": "get_weather", "arguments": '{"city":"Osaka"}'}}
        ],
    }


def test_assistant_turn_without_tool_calls():
    turn = AssistantTurn.from_completion(SimpleNamespace(content="hello", tool_calls=None))
    assert turn.to_message() == {"role": "assistant", "content": "hello"}


def test_local_weather_client():
    api = WeatherAPILocalClient()
    assert api.fetch_weather(" kyoto ").summary.condition == "Rain"
    assert not api.fetch_weather("Atlantis").ok


def test_get_api_class():
    api = get_api_class("WeatherAPILocalClient")()
    assert isinstance(api, WeatherAPILocalClient)
    with pytest.raises(KeyError):
        get_api_class("NoSuchClient")


@pytest.mark.parametrize("language,expected", [
    ("Japanese", "ja"),
    ("English", "en"),
    ("en", "en"),
    (None, "ja"),
    ("French", "ja"),
])
def test_language_code(language, expected):
    assert language_code(language, default="ja") == expected

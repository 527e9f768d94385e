import logging
from typing import Any, Dict, List, Optional, Sequence

from openai import OpenAI

from config.settings import LLMConfig, settings
from exceptions import ConfigurationError
from models import AssistantTurn, Turn


class LLMClient:
    """Chat completions with tool calling, plus speech-to-text, against an OpenAI-compatible API."""

    def __init__(self, cfg: Optional[LLMConfig] = None):
        self.cfg = cfg or settings.llm
        self._client: Optional[OpenAI] = None
        self.logger = logging.getLogger("app")

    @property
    def client(self) -> OpenAI:
        # Built on first use so a missing key fails the call, not the process.
        if self._client is None:
            if not self.cfg.api_key:
                raise ConfigurationError("LLM API key missing (set APP_LLM__API_KEY)")
            kwargs: Dict[str, Any] = {"api_key": self.cfg.api_key, "base_url": self.cfg.base_url, "max_retries": 0}
            if self.cfg.request_timeout_seconds is not None:
                kwargs["timeout"] = self.cfg.request_timeout_seconds
            self._client = OpenAI(**kwargs)
        return self._client

    def complete(self, turns: Sequence[Turn], tools: Optional[List[Dict[str, Any]]] = None) -> AssistantTurn:
        kwargs: Dict[str, Any] = {
            "model": self.cfg.chat_model,
            "temperature": self.cfg.temperature,
            "messages": [t.to_message() for t in turns],
        }
        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = "auto"
        resp = self.client.chat.completions.create(**kwargs)
        turn = AssistantTurn.from_completion(resp.choices[0].message)
        self.logger.debug(f"Completion with {len(turns)} turns -> {len(turn.tool_calls)} tool call(s)")
        return turn

    def transcribe(self, filename: str, content: bytes, content_type: Optional[str], language: str) -> str:
        resp = self.client.audio.transcriptions.create(
            file=(filename, content, content_type or "application/octet-stream"),
            model=self.cfg.transcription_model,
            language=language,
            response_format="json",
        )
        return resp.text

# config/settings.py

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseModel):
    """Config for the OpenAI-compatible chat + audio provider (Groq by default)."""

    api_key: Optional[str] = Field(None, repr=False)
    base_url: str = "https://api.groq.com/openai/v1"
    chat_model: str = "llama-3.3-70b-versatile"
    transcription_model: str = "whisper-large-v3"
    temperature: float = 0.7
    request_timeout_seconds: Optional[float] = None  # None -> SDK default


class WeatherConfig(BaseModel):
    """Config for the OpenWeatherMap current-weather API."""

    api_key: Optional[str] = Field(None, repr=False)
    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: str = "metric"
    # "fixed": always describe weather in `lang`
    # "caller": follow the chat request's language preference
    lang_mode: Literal["fixed", "caller"] = "fixed"
    lang: str = "ja"
    timeout_seconds: Optional[float] = None


class TranscriptionConfig(BaseModel):
    default_language: str = "ja"


class ModulesConfig(BaseModel):
    weather_api_name: str = "OpenWeatherClient"


class LoggingConfig(BaseModel):
    """Basic logging config."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_logging: bool = True


class Settings(BaseSettings):
    """Top-level app settings loaded from environment / .env."""

    env: Literal["dev", "staging", "prod"] = "dev"

    modules: ModulesConfig = ModulesConfig()
    llm: LLMConfig = LLMConfig()
    weather: WeatherConfig = WeatherConfig()
    transcription: TranscriptionConfig = TranscriptionConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",              # all vars start with APP_
        env_nested_delimiter="__",      # APP_WEATHER__API_KEY, etc.
        case_sensitive=False,
        extra="ignore",
    )


# Single global instance you import everywhere
settings = Settings()

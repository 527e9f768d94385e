import httpx
import logging
from typing import Any, Dict, Optional

from base import WeatherAPIBase
from exceptions import ConfigurationError
from models import WeatherOutcome, WeatherSummary
from config.settings import settings

cfg = settings.weather


class OpenWeatherClient(WeatherAPIBase):
    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None):
        self.base = (base_url or cfg.base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else cfg.api_key
        # httpx's own default (5s) unless configured
        self.client = httpx.Client(timeout=cfg.timeout_seconds if cfg.timeout_seconds is not None else 5.0)
        self.logger = logging.getLogger("app")

    def _url(self, path: str) -> str:
        return f"{self.base}{path}"

    def fetch_weather(self, city: str, lang: Optional[str] = None) -> WeatherOutcome:
        if not self.api_key:
            raise ConfigurationError("OpenWeather API key missing (set APP_WEATHER__API_KEY)")

        params = {"q": city, "appid": self.api_key, "units": cfg.units, "lang": lang or cfg.lang}
        try:
            resp = self.client.get(self._url("/weather"), params=params)
        except httpx.HTTPError as e:
            self.logger.error(f"Weather request for {city!r} failed: {e}")
            return WeatherOutcome.failure(f"network error: {e}")

        if not resp.is_success:
            self.logger.warning(f"Weather provider returned {resp.status_code} for {city!r}")
            return WeatherOutcome.failure(f"status {resp.status_code}")

        try:
            summary = self._summarize(resp.json())
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            self.logger.error(f"Malformed weather payload for {city!r}: {e}")
            return WeatherOutcome.failure(f"malformed response: {e}")
        return WeatherOutcome.success(summary)

    @staticmethod
    def _summarize(data: Dict[str, Any]) -> WeatherSummary:
        main = data["main"]
        weather = data["weather"][0]
        return WeatherSummary(
            location=data["name"],
            temperature=main["temp"],
            feels_like=main.get("feels_like"),
            description=weather["description"],
            humidity=main.get("humidity"),
            wind_speed=(data.get("wind") or {}).get("speed"),
            clouds=(data.get("clouds") or {}).get("all"),
            visibility=data.get("visibility"),
            condition=weather.get("main"),
        )

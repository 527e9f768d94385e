from abc import ABC, abstractmethod
from typing import Optional

from models import WeatherOutcome


class WeatherAPIBase(ABC):

    @abstractmethod
    def fetch_weather(self, city: str, lang: Optional[str] = None) -> WeatherOutcome:
        """Current weather for a city; failures come back as WeatherOutcome.failure, never raised"""

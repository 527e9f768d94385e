from typing import Dict, Optional

from base import WeatherAPIBase
from models import WeatherOutcome, WeatherSummary


class WeatherAPILocalClient(WeatherAPIBase):
    """A local mock."""
    def __init__(self):
        # seed some cities
        self._cities: Dict[str, WeatherSummary] = {
            "tokyo": WeatherSummary(
                location="Tokyo", temperature=18.4, feels_like=17.9, description="晴天",
                humidity=52, wind_speed=3.1, clouds=5, visibility=10000, condition="Clear",
            ),
            "kyoto": WeatherSummary(
                location="Kyoto", temperature=15.2, feels_like=14.6, description="小雨",
                humidity=81, wind_speed=1.8, clouds=90, visibility=8000, condition="Rain",
            ),
            "osaka": WeatherSummary(
                location="Osaka", temperature=17.0, feels_like=16.5, description="曇りがち",
                humidity=64, wind_speed=2.6, clouds=75, visibility=10000, condition="Clouds",
            ),
            "sapporo": WeatherSummary(
                location="Sapporo", temperature=-2.3, feels_like=-6.8, description="雪",
                humidity=88, wind_speed=4.2, clouds=100, visibility=3000, condition="Snow",
            ),
        }

    def fetch_weather(self, city: str, lang: Optional[str] = None) -> WeatherOutcome:
        summary = self._cities.get(city.strip().lower())
        if not summary:
            return WeatherOutcome.failure("city not found")
        return WeatherOutcome.success(summary)

"""Open-Meteo weather client."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import WeatherConfig
from .dates import parse_date
from .models import CurrentWeather, DailyForecast, WeeklyForecast
from .presentation import weather_description

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m"
DAILY_FIELDS = (
    "temperature_2m_max,temperature_2m_min,weather_code,precipitation_sum,wind_speed_10m_max"
)
FORECAST_DAYS = 7


class WeatherClient:
    """Current conditions and a seven day forecast for a coordinate pair.

    Every public method returns ``None`` instead of raising when the service
    is unreachable or answers with an unexpected payload.
    """

    def __init__(
        self,
        config: Optional[WeatherConfig] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.config = config or WeatherConfig()
        self.session = session or requests.Session()
        self.timeout = timeout

    def _coordinates(self, latitude: Optional[float], longitude: Optional[float]):
        return (
            self.config.latitude if latitude is None else latitude,
            self.config.longitude if longitude is None else longitude,
        )

    def _get_json(self, url: str, params: dict) -> Optional[dict]:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Weather request to %s failed: %s", url, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Weather response from %s is not an object", url)
            return None
        return data

    def current(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> Optional[CurrentWeather]:
        lat, lon = self._coordinates(latitude, longitude)
        data = self._get_json(
            self.config.forecast_url,
            {"latitude": lat, "longitude": lon, "current": CURRENT_FIELDS, "timezone": "auto"},
        )
        current = (data or {}).get("current")
        if not current:
            return None
        try:
            code = int(current["weather_code"])
            weather = CurrentWeather(
                temperature=float(current["temperature_2m"]),
                humidity=int(current["relative_humidity_2m"]),
                wind_speed=float(current["wind_speed_10m"]),
                weather_code=code,
                description=weather_description(code),
                location=self.location_name(),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unexpected current weather payload: %s", exc)
            return None
        logger.info("Current weather for %s: %s", weather.location, weather.description)
        return weather

    def weekly_forecast(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> Optional[WeeklyForecast]:
        lat, lon = self._coordinates(latitude, longitude)
        data = self._get_json(
            self.config.forecast_url,
            {
                "latitude": lat,
                "longitude": lon,
                "daily": DAILY_FIELDS,
                "timezone": "auto",
                "forecast_days": FORECAST_DAYS,
            },
        )
        daily = (data or {}).get("daily")
        if not daily:
            return None

        days = []
        try:
            for index, day in enumerate(daily["time"][:FORECAST_DAYS]):
                code = int(daily["weather_code"][index])
                days.append(
                    DailyForecast(
                        date=parse_date(day),
                        max_temperature=float(daily["temperature_2m_max"][index]),
                        min_temperature=float(daily["temperature_2m_min"][index]),
                        weather_code=code,
                        description=weather_description(code),
                        precipitation_sum=float(daily["precipitation_sum"][index]),
                        max_wind_speed=float(daily["wind_speed_10m_max"][index]),
                    )
                )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Unexpected forecast payload: %s", exc)
            return None
        return WeeklyForecast(location=self.location_name(), days=days)

    def location_name(self) -> str:
        """Display label for the configured coordinates.

        Open-Meteo offers no reverse geocoding, so the label comes from config.
        """
        return self.config.location_name

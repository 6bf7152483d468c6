"""
Current conditions from OpenWeatherMap, used to flavour the greeting.
Never raises: any failure yields an "unknown" reading.
"""

import logging
import math
from dataclasses import dataclass

import requests

from settings import Settings

log = logging.getLogger(__name__)

WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


@dataclass(frozen=True)
class Weather:
    condition: str
    temperature: int | None = None


UNKNOWN = Weather("unknown")


def get_current_weather(settings: Settings) -> Weather:
    """Primary condition (lowercased) and temperature in °F for the configured location."""
    if not settings.weather_api_key:
        log.warning("WEATHER_API_KEY not set; weather unknown.")
        return UNKNOWN
    try:
        r = requests.get(
            WEATHER_URL,
            params={
                "lat": settings.latitude,
                "lon": settings.longitude,
                "appid": settings.weather_api_key,
                "units": "imperial",
            },
            timeout=settings.http_timeout,
        )
        r.raise_for_status()
        data = r.json()
        return Weather(
            condition=data["weather"][0]["main"].lower(),
            temperature=math.floor(data["main"]["temp"] + 0.5),
        )
    except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as e:
        log.warning(f"Error fetching weather data: {e}")
        return UNKNOWN

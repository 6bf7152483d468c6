"""
Calls Anthropic Claude API to generate the standup greeting.
Falls back to a canned greeting plus a weather emoji whenever that fails.
"""

import logging
import random
from datetime import datetime

import anthropic

from briefing.prompt_builder import build_prompt
from settings import Settings
from sources.weather import Weather, UNKNOWN

log = logging.getLogger(__name__)

WEATHER_EMOJI = {
    "clear": "☀️",
    "clouds": "🌥️",
    "rain": "🌧️",
    "drizzle": "🌦️",
    "thunderstorm": "⛈️",
    "snow": "🌨️",
    "mist": "😶‍🌫️",
    "fog": "😶‍🌫️",
}
DEFAULT_WEATHER_EMOJI = "🌤️"

FALLBACK_GREETINGS = ["Good morning!", "Happy {weekday}!", "{weekday}!"]


def weather_emoji(condition: str) -> str:
    return WEATHER_EMOJI.get(condition, DEFAULT_WEATHER_EMOJI)


def fallback_greeting(weekday: str, condition: str, rng=random) -> str:
    greeting = rng.choice(FALLBACK_GREETINGS).format(weekday=weekday)
    return f"{greeting} {weather_emoji(condition)}"


def _llm_greeting(settings: Settings, weekday: str, weather: Weather) -> str:
    client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
    system_prompt, user_prompt = build_prompt(weekday, weather)
    message = client.messages.create(
        model=settings.greeting_model,
        max_tokens=settings.greeting_max_tokens,
        system=system_prompt,
        messages=[{"role": "user", "content": user_prompt}],
    )
    return message.content[0].text.strip()


def generate_greeting(settings: Settings, now: datetime, weather: Weather = UNKNOWN, rng=random) -> str:
    """A short cheerful greeting for `now`. Never raises."""
    weekday = now.strftime("%A")
    if not settings.anthropic_api_key:
        log.warning("ANTHROPIC_API_KEY not set; using fallback greeting.")
        return fallback_greeting(weekday, weather.condition, rng)
    try:
        greeting = _llm_greeting(settings, weekday, weather)
    except Exception as e:
        log.warning(f"Error generating greeting: {e}")
        return fallback_greeting(weekday, weather.condition, rng)
    if not greeting:
        log.warning("Empty greeting from model; using fallback greeting.")
        return fallback_greeting(weekday, weather.condition, rng)
    return greeting

from __future__ import annotations

"""Turn-to-turn weather as a four-state Markov chain."""

import random
from enum import Enum
from typing import Dict, List, Optional, Tuple


class WeatherType(Enum):
    CLEAR = "clear"
    RAIN = "rain"
    SNOW = "snow"
    STORM = "storm"


# Current weather -> cumulative (upper bound, next weather) bands.
# The last band of each row catches everything the others do not.
TRANSITIONS: Dict[WeatherType, List[Tuple[float, WeatherType]]] = {
    WeatherType.CLEAR: [
        (0.70, WeatherType.CLEAR),
        (0.90, WeatherType.RAIN),
        (0.95, WeatherType.SNOW),
        (1.00, WeatherType.STORM),
    ],
    WeatherType.RAIN: [
        (0.40, WeatherType.CLEAR),
        (0.80, WeatherType.RAIN),
        (1.00, WeatherType.STORM),
    ],
    WeatherType.SNOW: [
        (0.50, WeatherType.CLEAR),
        (0.90, WeatherType.SNOW),
        (1.00, WeatherType.STORM),
    ],
    WeatherType.STORM: [
        (0.30, WeatherType.CLEAR),
        (0.70, WeatherType.RAIN),
        (1.00, WeatherType.STORM),
    ],
}

WEATHER_EFFECTS: Dict[WeatherType, str] = {
    WeatherType.CLEAR: "Clear skies allow for optimal travel.",
    WeatherType.RAIN: "Rain increases Farm yields but slows movement.",
    WeatherType.SNOW: "Snow severely hampers movement and reduces lumber.",
    WeatherType.STORM: "Storms disrupt manufacturing and travel!",
}


def weather_for_roll(current: WeatherType, roll: float) -> WeatherType:
    bands = TRANSITIONS[current]
    for upper, nxt in bands:
        if roll < upper:
            return nxt
    return bands[-1][1]


def next_weather(current: WeatherType, rng: random.Random) -> WeatherType:
    """Advance the chain by one step using exactly one draw from ``rng``."""
    return weather_for_roll(current, rng.random())


class WeatherChain:
    """Holds the current weather and the RNG that drives it."""

    def __init__(self, current: WeatherType = WeatherType.CLEAR, rng: Optional[random.Random] = None) -> None:
        self.current = current
        self.rng = rng or random.Random()

    def advance(self) -> WeatherType:
        self.current = next_weather(self.current, self.rng)
        return self.current


__all__ = [
    "TRANSITIONS",
    "WEATHER_EFFECTS",
    "WeatherChain",
    "WeatherType",
    "next_weather",
    "weather_for_roll",
]

from __future__ import annotations

"""Configuration dataclass for world generation."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorldSettings:
    # None draws a fresh seed for every generated map
    seed: Optional[int] = None
    radius: int = 40
    # Spatial scale shared by every noise layer
    scale: float = 0.06
    elevation_octaves: int = 5
    climate_octaves: int = 3
    detail_frequency: float = 3.0
    detail_weight: float = 0.1
    # Moisture samples at +offset, temperature at -offset
    layer_offset: float = 500.0
    ocean_elev: float = 0.25
    coast_elev: float = 0.45
    mountain_elev: float = 0.88
    hill_elev: float = 0.75
    tundra_temp: float = 0.25
    desert_moisture: float = 0.20
    dry_moisture: float = 0.40
    wet_moisture: float = 0.75
    forest_moisture: float = 0.55
    # Latitude cooling: temp * (1 - dist * polar_damping) - dist * polar_chill
    polar_damping: float = 0.7
    polar_chill: float = 0.2
    wonder_count: int = 3


__all__ = ["WorldSettings"]

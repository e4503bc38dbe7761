"""Sustainable practice catalog, each list ordered by priority."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PracticeCatalog:
    water_conservation: tuple[str, ...]
    soil_health: tuple[str, ...]
    climate_adaptation: tuple[str, ...]


PRACTICES = PracticeCatalog(
    water_conservation=(
        "Drip irrigation (70% water savings)",
        "Mulching to reduce evaporation",
        "Rainwater harvesting systems",
        "Conservation tillage",
    ),
    soil_health=(
        "Composting and organic matter addition",
        "Crop rotation with legumes",
        "Cover cropping during off-season",
        "Reduced tillage practices",
    ),
    climate_adaptation=(
        "Agroforestry for microclimate regulation",
        "Diversified cropping systems",
        "Early warning system integration",
        "Weather-indexed insurance enrollment",
    ),
)

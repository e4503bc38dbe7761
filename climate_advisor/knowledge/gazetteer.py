"""Location gazetteer and challenge vocabulary used by the entity extractor.

Countries carry the coordinates of their capital so a live weather source can
resolve any keyword.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Place:
    keyword: str
    latitude: float
    longitude: float


_PLACES: tuple[Place, ...] = (
    Place("nairobi", -1.2864, 36.8172),
    Place("kenya", -1.2864, 36.8172),
    Place("mumbai", 19.0760, 72.8777),
    Place("india", 28.6139, 77.2090),
    Place("lagos", 6.5244, 3.3792),
    Place("nigeria", 9.0765, 7.3986),
    Place("dhaka", 23.8103, 90.4125),
    Place("bangladesh", 23.8103, 90.4125),
    Place("kampala", 0.3476, 32.5825),
    Place("uganda", 0.3476, 32.5825),
    Place("addis ababa", 9.0300, 38.7400),
    Place("ethiopia", 9.0300, 38.7400),
)

GAZETTEER: dict[str, Place] = {place.keyword: place for place in _PLACES}

CHALLENGES: tuple[str, ...] = ("drought", "flood", "pest", "soil", "water", "yield")


def location_keywords() -> tuple[str, ...]:
    return tuple(GAZETTEER)


def resolve_place(location: str | None) -> Place | None:
    if not location:
        return None
    return GAZETTEER.get(location.strip().lower())

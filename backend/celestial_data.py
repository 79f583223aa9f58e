"""Tracked near-Earth objects and distance unit helpers.

Distances on a CelestialBody are in millions of kilometers, velocities in
km/s and radii in km.
"""

from dataclasses import dataclass
from datetime import date

# kilometers per unit
KM_PER_UNIT = {
    "km": 1.0,
    "LD": 384_400.0,
    "AU": 149_597_870.7,
}


@dataclass(frozen=True)
class CelestialBody:
    """A tracked object as supplied to the scoring engine."""
    id: str
    name: str
    distance_from_earth: float
    velocity: float
    radius: float | None = None
    close_approach_date: date | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "distance_from_earth": self.distance_from_earth,
            "velocity": self.velocity,
            "radius": self.radius,
            "close_approach_date": (
                self.close_approach_date.isoformat() if self.close_approach_date else None
            ),
        }


CATALOG = [
    CelestialBody("asteroid-bennu", "Bennu (101955)", 18.6, 27.7, 0.12, date(2026, 2, 15)),
    CelestialBody("asteroid-apophis", "Apophis (99942)", 0.31, 30.7, 0.08, date(2026, 3, 1)),
    CelestialBody("asteroid-ryugu", "Ryugu (162173)", 39.7, 24.4, 0.11, date(2026, 3, 20)),
    CelestialBody("asteroid-eros", "Eros (433)", 68.5, 24.36, 0.17, date(2026, 4, 10)),
    CelestialBody("asteroid-itokawa", "Itokawa (25143)", 0.52, 31.2, 0.06, date(2026, 2, 28)),
    CelestialBody("asteroid-vesta", "Vesta (4)", 203.8, 19.34, 0.28, date(2026, 5, 15)),
    CelestialBody("asteroid-didymos", "Didymos (65803)", 45.9, 23.3, 0.09, date(2026, 4, 5)),
    CelestialBody("asteroid-psyche", "Psyche (16)", 229.0, 18.95, 0.25, date(2026, 6, 1)),
    CelestialBody("asteroid-pallas", "Pallas (2)", 264.9, 17.65, 0.27, date(2026, 6, 20)),
    CelestialBody("asteroid-ceres", "Ceres (1)", 264.1, 17.88, 0.3, date(2026, 6, 25)),
    CelestialBody("asteroid-2023xy", "Asteroid 2023 XY", 5.6, 29.4, 0.07, date(2026, 2, 20)),
    CelestialBody("asteroid-2024ab", "Asteroid 2024 AB", 23.2, 26.8, 0.13, date(2026, 3, 10)),
]


def get_body(body_id: str, bodies=CATALOG) -> CelestialBody | None:
    for body in bodies:
        if body.id == body_id:
            return body
    return None


def _km_per(unit: str) -> float:
    try:
        return KM_PER_UNIT[unit]
    except KeyError:
        raise ValueError(f"Unknown distance unit: {unit}") from None


def convert_distance(million_km: float, unit: str) -> float:
    """Express a distance in millions of km in the given unit."""
    return (million_km * 1_000_000) / _km_per(unit)


def filter_by_distance(bodies, max_distance: float, unit: str) -> list[CelestialBody]:
    """Keep bodies no farther than max_distance (given in unit)."""
    limit = max_distance * _km_per(unit) / 1_000_000
    return [body for body in bodies if body.distance_from_earth <= limit]


def sort_by_proximity(bodies) -> list[CelestialBody]:
    return sorted(bodies, key=lambda body: body.distance_from_earth)


def get_upcoming_approaches(bodies, today: date) -> list[CelestialBody]:
    upcoming = [
        body for body in bodies
        if body.close_approach_date and body.close_approach_date > today
    ]
    return sorted(upcoming, key=lambda body: body.close_approach_date)

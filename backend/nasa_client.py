# nasa_client.py -- NASA NeoWs feed, mapped onto CelestialBody records

from datetime import date

import requests
import structlog

import config
from celestial_data import CelestialBody

logger = structlog.get_logger(__name__)


class NasaFeedError(Exception):
    """Raised when the NeoWs feed cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def fetch_feed(start: date, end: date) -> dict:
    try:
        res = requests.get(
            f"{config.NASA_BASE_URL}/feed",
            params={
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "api_key": config.NASA_API_KEY,
            },
            timeout=config.NASA_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error("nasa_feed_unreachable", error=str(e))
        raise NasaFeedError(f"NASA API unreachable: {e}") from e

    if res.status_code != 200:
        logger.error("nasa_feed_failed", status_code=res.status_code)
        raise NasaFeedError("NASA API request failed", status_code=res.status_code)

    return res.json()


def neo_to_body(neo: dict) -> CelestialBody | None:
    """Convert one NeoWs object; None when its close approach data is missing or incomplete."""
    approaches = neo.get("close_approach_data") or []
    if not approaches:
        return None
    approach = approaches[0]

    miss_km = (approach.get("miss_distance") or {}).get("kilometers")
    speed = (approach.get("relative_velocity") or {}).get("kilometers_per_second")
    if miss_km is None or speed is None:
        return None

    diameter = (
        neo.get("estimated_diameter", {})
        .get("kilometers", {})
        .get("estimated_diameter_max")
    )
    approach_date = approach.get("close_approach_date")

    return CelestialBody(
        id=str(neo["id"]),
        name=neo["name"],
        distance_from_earth=float(miss_km) / 1_000_000,
        velocity=float(speed),
        radius=float(diameter) / 2 if diameter is not None else None,
        close_approach_date=date.fromisoformat(approach_date) if approach_date else None,
    )


def fetch_bodies(start: date, end: date) -> list[CelestialBody]:
    data = fetch_feed(start, end)
    bodies = []

    for day in data.get("near_earth_objects", {}):
        for neo in data["near_earth_objects"][day]:
            body = neo_to_body(neo)
            if body is None:
                logger.debug("neo_skipped", neo_id=neo.get("id"))
                continue
            bodies.append(body)

    logger.info("nasa_feed_fetched", start=str(start), end=str(end), count=len(bodies))
    return bodies

"""Rule-based risk scoring for near-Earth objects.

Each object gets three independently bucketed sub-scores:

    distance  (max 40)  closer is riskier
    velocity  (max 35)  faster is riskier
    size      (max 25)  larger is riskier

The total is their sum (0-100) and maps to a LOW / MEDIUM / HIGH level.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from operator import gt, lt

from celestial_data import CelestialBody


class RiskLevel(str, Enum):
    """Overall risk levels."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


LEVEL_COLORS = {
    RiskLevel.HIGH: "#ff006e",
    RiskLevel.MEDIUM: "#ffbe0b",
    RiskLevel.LOW: "#00f0ff",
}

LEVEL_EXPLANATIONS = {
    RiskLevel.HIGH: (
        "⚠️ HIGH RISK: This object requires immediate monitoring and potential deflection "
        "planning. Combination of close proximity, high velocity, and/or significant size "
        "creates substantial threat."
    ),
    RiskLevel.MEDIUM: (
        "⚡ MEDIUM RISK: This object warrants continued observation and tracking. While not "
        "immediately threatening, certain factors elevate it above routine monitoring."
    ),
    RiskLevel.LOW: (
        "✓ LOW RISK: This object poses minimal threat based on current trajectory and "
        "characteristics. Standard monitoring protocols apply."
    ),
}

# Inclusive lower bounds on the total score
HIGH_THRESHOLD = 66
MEDIUM_THRESHOLD = 31

NO_OBJECT_EXPLANATION = "No object selected"


@dataclass(frozen=True)
class Bucket:
    """One tier of a factor table.

    A value falls into the first bucket whose threshold it passes; the last
    bucket of every table has no threshold and catches everything else,
    including NaN and missing values.
    """
    threshold: float | None
    points: int
    label: str
    template: str


DISTANCE_MAX = 40
DISTANCE_BUCKETS = [
    Bucket(0.5, 40, "CRITICAL",
           "CRITICAL proximity at {value} M km - Extremely close approach requiring immediate attention"),
    Bucket(5, 30, "HIGH",
           "HIGH proximity at {value} M km - Close monitoring zone, potential near-miss"),
    Bucket(50, 20, "MEDIUM",
           "MEDIUM proximity at {value} M km - Standard tracking distance"),
    Bucket(None, 10, "LOW",
           "LOW proximity at {value} M km - Distant object, minimal immediate concern"),
]

VELOCITY_MAX = 35
VELOCITY_BUCKETS = [
    Bucket(35, 35, "CRITICAL",
           "CRITICAL velocity at {value} km/s - Extremely fast approach increases impact energy "
           "exponentially (KE = ½mv²)"),
    Bucket(30, 25, "HIGH",
           "HIGH velocity at {value} km/s - Fast approach significantly increases kinetic energy "
           "and damage potential"),
    Bucket(25, 15, "MEDIUM",
           "MEDIUM velocity at {value} km/s - Moderate speed within typical asteroid range"),
    Bucket(None, 5, "LOW",
           "LOW velocity at {value} km/s - Relatively slow approach reduces impact energy"),
]

# thresholds on estimated diameter in km
SIZE_MAX = 25
SIZE_BUCKETS = [
    Bucket(0.25, 25, "LARGE",
           "LARGE object (~{value} diameter) - City-scale destruction potential, mass extinction risk"),
    Bucket(0.15, 18, "MEDIUM",
           "MEDIUM object (~{value} diameter) - Regional impact potential, Tunguska-scale event"),
    Bucket(0.08, 10, "SMALL",
           "SMALL object (~{value} diameter) - Local impact, most would burn up in atmosphere"),
    Bucket(None, 5, "TINY",
           "TINY object (~{value} diameter) - Minimal threat, likely to disintegrate on entry"),
]

# impact energy assumptions
ASTEROID_DENSITY_KG_M3 = 2500
JOULES_PER_MEGATON = 4.184e15

TREND_BAND = 15


@dataclass
class RiskFactor:
    """Contribution of a single metric to the total score."""
    name: str
    score: int
    max: int
    explanation: str

    @property
    def percentage(self) -> float:
        return self.score / self.max * 100

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "max": self.max,
            "percentage": self.percentage,
            "explanation": self.explanation,
        }


@dataclass
class RiskAssessment:
    """Result of scoring one object. Freshly built on every call."""
    score: int
    level: RiskLevel
    color: str
    explanation: str
    factors: list[RiskFactor] = field(default_factory=list)
    details: dict | None = None

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "color": self.color,
            "explanation": self.explanation,
            "factors": [f.to_dict() for f in self.factors],
            "details": self.details,
        }


@dataclass
class RiskTrend:
    current: int
    average: int
    difference: int
    trend: str
    message: str

    def to_dict(self) -> dict:
        return {
            "current": self.current,
            "average": self.average,
            "difference": self.difference,
            "trend": self.trend,
            "message": self.message,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _classify(value, buckets: list[Bucket], passes) -> Bucket:
    for bucket in buckets:
        if bucket.threshold is None:
            return bucket
        if value is not None and passes(value, bucket.threshold):
            return bucket
    return buckets[-1]


def _factor(name: str, bucket: Bucket, max_points: int, value_text: str) -> RiskFactor:
    return RiskFactor(
        name=name,
        score=bucket.points,
        max=max_points,
        explanation=bucket.template.format(value=value_text),
    )


def score_to_level(score: int) -> RiskLevel:
    if score >= HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def estimated_diameter(radius: float | None) -> float | None:
    if radius is None:
        return None
    return radius * 2


def calculate_risk_score(body: CelestialBody | None) -> RiskAssessment:
    """Score an object on distance, velocity and size.

    Never raises for a body: out-of-range and NaN metrics fall through to
    the lowest bucket of their table. A missing radius scores as a TINY
    object and is reported with an unknown diameter.
    """
    if body is None:
        return RiskAssessment(
            score=0,
            level=RiskLevel.LOW,
            color=LEVEL_COLORS[RiskLevel.LOW],
            explanation=NO_OBJECT_EXPLANATION,
        )

    distance = body.distance_from_earth
    velocity = body.velocity
    diameter = estimated_diameter(body.radius)
    diameter_text = f"{diameter * 1000:.0f}m" if diameter is not None else "unknown"

    factors = [
        _factor("Distance", _classify(distance, DISTANCE_BUCKETS, lt), DISTANCE_MAX, f"{distance:.2f}"),
        _factor("Velocity", _classify(velocity, VELOCITY_BUCKETS, gt), VELOCITY_MAX, f"{velocity:.1f}"),
        _factor("Size", _classify(diameter, SIZE_BUCKETS, gt), SIZE_MAX, diameter_text),
    ]

    score = sum(f.score for f in factors)
    level = score_to_level(score)

    return RiskAssessment(
        score=score,
        level=level,
        color=LEVEL_COLORS[level],
        explanation=LEVEL_EXPLANATIONS[level],
        factors=factors,
        details={
            "distance": distance,
            "velocity": velocity,
            "diameter": diameter,
            "impact_energy": calculate_impact_energy(body.radius, velocity),
        },
    )


def impact_energy_megatons(radius: float | None, velocity: float) -> float | None:
    """Kinetic energy of a rocky sphere, in megatons of TNT.

    Args:
        radius: radius in km
        velocity: velocity in km/s

    Returns:
        Energy in megatons, or None when the radius is unknown
    """
    if radius is None:
        return None
    radius_m = radius * 1000
    volume_m3 = (4 / 3) * math.pi * radius_m ** 3
    mass_kg = volume_m3 * ASTEROID_DENSITY_KG_M3
    velocity_ms = velocity * 1000
    energy_joules = 0.5 * mass_kg * velocity_ms ** 2
    return energy_joules / JOULES_PER_MEGATON


def calculate_impact_energy(radius: float | None, velocity: float) -> str:
    megatons = impact_energy_megatons(radius, velocity)
    if megatons is None:
        return "unknown"
    if megatons < 0.001:
        return f"{megatons * 1000:.2f} kilotons"
    if megatons < 1:
        return f"{megatons:.3f} megatons"
    return f"{megatons:.1f} megatons"


def get_risk_trend(body: CelestialBody, bodies) -> RiskTrend:
    """Compare an object's score with the mean score of a collection."""
    current = calculate_risk_score(body).score
    scores = [calculate_risk_score(b).score for b in bodies]
    average = sum(scores) / len(scores) if scores else current
    difference = current - average
    delta = abs(round_half_up(difference))

    if difference > TREND_BAND:
        trend = "ABOVE_AVERAGE"
        message = f"{delta} points above fleet average - Priority monitoring"
    elif difference < -TREND_BAND:
        trend = "BELOW_AVERAGE"
        message = f"{delta} points below fleet average - Routine tracking"
    else:
        trend = "AVERAGE"
        message = "Within average risk range for tracked objects"

    return RiskTrend(
        current=current,
        average=round_half_up(average),
        difference=round_half_up(difference),
        trend=trend,
        message=message,
    )

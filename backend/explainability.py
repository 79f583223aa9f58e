# explainability.py -- plain-language text for metrics, risk levels and alerts

from risk_engine import RiskLevel, round_half_up

LUNAR_DISTANCE_MKM = 0.384
EARTH_DIAMETER_MKM = 0.01276
SPEED_OF_SOUND_KMH = 1234

RISK_LEVEL_TEXT = {
    RiskLevel.HIGH: (
        "This object requires close monitoring. It's either moving fast, passing nearby, "
        "or both. High risk doesn't mean impact is certain, it means we're watching it carefully."
    ),
    RiskLevel.MEDIUM: (
        "This object has some concerning factors but isn't immediately threatening. "
        "We track it regularly to ensure it stays on a safe path."
    ),
    RiskLevel.LOW: (
        "This object is either far away, moving slowly, or both. It poses minimal concern "
        "but we still keep tabs on it as part of our comprehensive monitoring program."
    ),
}
DEFAULT_RISK_LEVEL_TEXT = (
    "Risk level is calculated based on distance and speed to help prioritize monitoring efforts."
)

ACTION_RECOMMENDATIONS = {
    RiskLevel.HIGH: (
        "Continuous observation and trajectory refinement in progress. "
        "Our team is actively monitoring this object."
    ),
    RiskLevel.MEDIUM: (
        "Regular monitoring scheduled. We'll update calculations as we gather "
        "more observational data."
    ),
    RiskLevel.LOW: (
        "Standard tracking procedures apply. This object is part of our routine monitoring catalog."
    ),
}
DEFAULT_ACTION_RECOMMENDATION = "Monitoring status will be updated as new data becomes available."

MONITORING_STATUS = {
    RiskLevel.HIGH: "🔴 Intensive monitoring • Frequent observations • Trajectory refinement ongoing",
    RiskLevel.MEDIUM: "🟡 Regular monitoring • Periodic observations • Standard tracking protocols",
    RiskLevel.LOW: "🟢 Routine monitoring • Catalog maintenance • Long-term orbit tracking",
}
DEFAULT_MONITORING_STATUS = "Monitoring status updating..."

SUMMARY_SUFFIX = {
    RiskLevel.HIGH: "Intensive monitoring in progress.",
    RiskLevel.MEDIUM: "Regular monitoring continues.",
    RiskLevel.LOW: "Standard tracking procedures apply.",
}

# (upper bound in days, label)
FRIENDLY_TIMES = [
    (1, "TOMORROW"),
    (3, "THIS WEEK"),
    (7, "NEXT WEEK"),
    (14, "IN 2 WEEKS"),
    (21, "IN 3 WEEKS"),
]


def _lunar(distance: float) -> str:
    return f"{distance / LUNAR_DISTANCE_MKM:.1f}"


def _severity(contribution: float) -> str:
    if contribution > 70:
        return "high"
    if contribution > 40:
        return "medium"
    return "low"


# ---------------- METRIC EXPLANATIONS ----------------

def explain_velocity(velocity: float) -> str:
    if velocity > 30:
        return (
            "This object is moving extremely fast. Higher speed means more impact energy if it "
            "were to hit Earth. Think of it like a bullet vs. a baseball: faster objects are "
            "more dangerous."
        )
    if velocity > 25:
        return (
            "This object is moving quite fast through space. Speed affects how much energy would "
            "be released in an impact. Faster = more powerful."
        )
    if velocity > 20:
        return (
            "Moving at moderate speed. While not the fastest we track, it still carries "
            "significant kinetic energy."
        )
    return "Moving relatively slowly compared to other asteroids. Lower speed means less impact energy."


def explain_distance(distance: float) -> str:
    """Describe a distance (million km) using the Moon as a yardstick."""
    lunar = _lunar(distance)
    if distance < 0.1:
        return (
            f"Just {lunar} times the Moon's distance! This is extremely close in space terms. "
            "Objects this near get priority monitoring because small changes in their path "
            "could be significant."
        )
    if distance < 1:
        return (
            f"About {lunar} times farther than the Moon. This is considered a close approach. "
            "We carefully track objects at this distance to ensure they stay on safe paths."
        )
    if distance < 10:
        return (
            f"{lunar} lunar distances away. This is relatively close. Closer objects are easier "
            "to study but require more careful tracking."
        )
    if distance < 50:
        return (
            f"{distance:.1f} million km away. This is a comfortable distance, but we still "
            "monitor it. For context, the Moon is only 0.38 million km from Earth."
        )
    return (
        f"Very far at {distance:.1f} million km. Objects this distant pose minimal immediate "
        "concern, but we track them to understand their long-term orbits."
    )


def explain_risk_level(level) -> str:
    return RISK_LEVEL_TEXT.get(level, DEFAULT_RISK_LEVEL_TEXT)


# ---------------- RISK FACTOR EXPLANATIONS ----------------

def _velocity_detail(velocity: float, contribution: float) -> dict:
    if velocity > 30:
        text = (f"Very high speed ({velocity:.1f} km/s). Faster objects carry more kinetic energy, "
                "making them more dangerous if they were to collide.")
    elif velocity > 25:
        text = f"High speed ({velocity:.1f} km/s). This contributes significantly to the overall risk assessment."
    elif velocity > 20:
        text = (f"Moderate speed ({velocity:.1f} km/s). Not the fastest, but still something we "
                "factor into risk calculations.")
    else:
        text = f"Relatively low speed ({velocity:.1f} km/s). This reduces the overall risk level."
    return {
        "contribution": round_half_up(contribution),
        "explanation": text,
        "severity": _severity(contribution),
        "icon": "⚡",
        "comparison": f"That's about {velocity * 3600:.0f} km/hour, much faster than any human-made vehicle!",
    }


def _distance_detail(distance: float, contribution: float) -> dict:
    if distance < 1:
        text = f"Very close approach ({distance:.2f} M km). Objects passing this near get intensive monitoring."
    elif distance < 10:
        text = f"Close approach ({distance:.1f} M km). Close enough to warrant careful tracking."
    elif distance < 50:
        text = f"Moderate distance ({distance:.1f} M km). Not immediately concerning but still monitored."
    else:
        text = f"Far away ({distance:.1f} M km). Distance reduces risk significantly."
    return {
        "contribution": round_half_up(contribution),
        "explanation": text,
        "severity": _severity(contribution),
        "icon": "📏",
        "comparison": (
            f"For reference, the Moon is 0.38 M km away. This is {_lunar(distance)}x that distance."
        ),
    }


def _size_detail(radius: float | None, contribution: float) -> dict:
    if radius and radius > 0.2:
        text = f"Large object ({radius:.2f} km radius). Bigger objects would cause more damage in an impact scenario."
    elif radius and radius > 0.1:
        text = f"Medium-sized object ({radius:.2f} km radius). Size is a factor in potential impact effects."
    else:
        shown = f"{radius:.2f}" if radius else "unknown"
        text = f"Small object ({shown} km radius). Smaller size means less potential damage."

    if not radius:
        comparison = "Size data limited."
    else:
        if radius > 0.2:
            scale = "larger than most city blocks"
        elif radius > 0.1:
            scale = "similar to a large building"
        else:
            scale = "similar to a small building"
        comparison = f"About {radius * 1000:.0f} meters across, {scale}."

    return {
        "contribution": round_half_up(contribution),
        "explanation": text,
        "severity": _severity(contribution),
        "icon": "⚫",
        "comparison": comparison,
    }


def explain_risk_factors(body, assessment) -> dict | None:
    """Break an assessment down into normalised factor contributions.

    Contributions are on a 0-100 scale and independent of the bucketed
    sub-scores: velocity against 35 km/s, distance against 20 million km
    and radius against 0.5 km.

    Returns:
        Dict with overall/primary_factor/factors/risk_score/risk_level/summary,
        or None when either argument is missing
    """
    if body is None or assessment is None:
        return None

    velocity = body.velocity
    distance = body.distance_from_earth
    radius = body.radius
    level = assessment.level

    contributions = {
        "distance": min((20 - distance) / 20 * 100, 100),
        "velocity": min(velocity / 35 * 100, 100),
        "size": min(radius / 0.5 * 100, 100) if radius else 0,
    }

    # ties keep the earlier factor
    primary_factor = "distance"
    for name in ("velocity", "size"):
        if contributions[name] > contributions[primary_factor]:
            primary_factor = name

    if level == RiskLevel.HIGH:
        overall = f"{body.name} is classified as HIGH RISK because "
        reasons = []
        if contributions["velocity"] > 70:
            reasons.append("moving very fast")
        if contributions["distance"] > 70:
            reasons.append("passing quite close")
        if contributions["size"] > 70:
            reasons.append("relatively large")
        if len(reasons) > 1:
            overall += " and ".join(reasons) + ". "
        elif reasons:
            overall += f"it's {reasons[0]}. "
        overall += "This combination of factors means we're monitoring it very closely."
    elif level == RiskLevel.MEDIUM:
        concern = {
            "velocity": "its speed",
            "distance": "how close it passes",
            "size": "its size",
        }[primary_factor]
        overall = (
            f"{body.name} has MEDIUM RISK. While not immediately concerning, it has some factors "
            f"that warrant regular monitoring. The main concern is {concern}."
        )
    else:
        overall = f"{body.name} is LOW RISK. "
        if distance > 50:
            overall += "It's very far away, "
        if velocity < 20:
            overall += "moving relatively slowly, "
        overall += "so it poses minimal concern at this time."

    return {
        "overall": overall,
        "primary_factor": primary_factor,
        "factors": {
            "velocity": _velocity_detail(velocity, contributions["velocity"]),
            "distance": _distance_detail(distance, contributions["distance"]),
            "size": _size_detail(radius, contributions["size"]),
        },
        "risk_score": round_half_up(assessment.score),
        "risk_level": level.value,
        "summary": f"Risk is primarily driven by {primary_factor}. {SUMMARY_SUFFIX[level]}",
    }


# ---------------- NOTIFICATION EXPLANATIONS ----------------

def explain_notification_trigger(alert) -> str:
    days = alert.days_until_approach
    distance = alert.distance_from_earth
    velocity = alert.velocity

    reasons = []
    if days <= 7:
        reasons.append(f"approaching very soon ({days} day{'' if days == 1 else 's'})")
    elif days <= 14:
        reasons.append("approaching within two weeks")
    else:
        reasons.append("approaching within the next month")

    if distance < 1:
        reasons.append(f"will pass very close ({_lunar(distance)} lunar distances)")
    elif distance < 5:
        reasons.append("will pass relatively close to Earth")

    if velocity > 30:
        reasons.append(f"moving at high speed ({velocity:.1f} km/s)")
    elif velocity > 25:
        reasons.append("moving at notable speed")

    explanation = f"Alert triggered because this object is {' and '.join(reasons)}. "

    if alert.risk_level == RiskLevel.HIGH:
        explanation += "The combination of factors warrants close monitoring to ensure public safety."
    elif alert.risk_level == RiskLevel.MEDIUM:
        explanation += "While not immediately threatening, we track all close approaches carefully."
    else:
        explanation += (
            "This is a standard tracking alert. We monitor all nearby passes as part of our "
            "comprehensive NEO program."
        )
    return explanation


def get_action_recommendation(level) -> str:
    return ACTION_RECOMMENDATIONS.get(level, DEFAULT_ACTION_RECOMMENDATION)


# ---------------- CONTEXTUAL HELPERS ----------------

def get_everyday_comparison(metric: str, value: float) -> str:
    if metric == "velocity":
        km_per_hour = value * 3600
        return f"{km_per_hour:.0f} km/h (about Mach {km_per_hour / SPEED_OF_SOUND_KMH:.0f}), way faster than any jet!"

    if metric == "distance":
        moon = _lunar(value)
        if value < 1:
            return f"{moon} times the Earth-Moon distance, that's pretty close in space terms!"
        if value < 10:
            return f"{moon} lunar distances: imagine {moon} Moons stacked in a row."
        return f"{value / EARTH_DIAMETER_MKM:.0f} Earth diameters away."

    if metric == "size":
        meters = f"{value * 1000:.0f}"
        if value > 0.3:
            return f"{meters}m across, about the size of a large stadium!"
        if value > 0.1:
            return f"{meters}m across, similar to a large building or city block."
        return f"{meters}m across, roughly the size of a small building."

    return ""


def get_contribution_color(contribution: float) -> str:
    if contribution >= 70:
        return "#ff006e"
    if contribution >= 40:
        return "#ffbe0b"
    return "#00f0ff"


def get_friendly_time_description(days: int) -> str:
    for limit, label in FRIENDLY_TIMES:
        if days <= limit:
            return label
    return "THIS MONTH"


# ---------------- VERDICTS ----------------

def generate_risk_verdict(body, assessment) -> str:
    """One-line summary of what an assessment means overall."""
    if body is None or assessment is None:
        return ""

    distance = body.distance_from_earth
    velocity = body.velocity
    radius = body.radius

    very_close = distance < 1
    very_fast = velocity > 30
    large = bool(radius) and radius > 0.2
    small = bool(radius) and radius < 0.1

    if assessment.level == RiskLevel.HIGH:
        if very_close and very_fast:
            return "High monitoring priority: passing extremely close at high speed."
        if very_close:
            return "Close approach detected. Enhanced tracking protocols active."
        if very_fast:
            return "High velocity object. Continuous observation required."
        if large:
            return "Large object with notable risk factors. Active monitoring ongoing."
        return "Multiple risk factors warrant intensive monitoring."

    if assessment.level == RiskLevel.MEDIUM:
        if very_close:
            return "Close pass despite moderate speed. Regular tracking maintained."
        if very_fast:
            return "Fast-moving but at safe distance. Standard monitoring continues."
        if small and distance < 10:
            return "Small object with close approach. Risk remains manageable."
        return "Some concerning factors present. Routine observation in effect."

    if distance > 50:
        return "Distant object with minimal immediate concern. Long-term tracking only."
    if velocity < 20:
        return "Slow-moving with low risk profile. Standard catalog monitoring."
    if small:
        return "Small size and favorable trajectory. Minimal monitoring required."
    return "Low risk based on current trajectory. Routine observations continue."


def get_monitoring_status(level) -> str:
    return MONITORING_STATUS.get(level, DEFAULT_MONITORING_STATUS)

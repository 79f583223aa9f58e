# notification_service.py -- close approach alerts and their read/dismiss state

import json
import math
import threading
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

import structlog

from celestial_data import CelestialBody
from risk_engine import RiskLevel, calculate_risk_score

logger = structlog.get_logger(__name__)

DISMISSED_KEY = "dismissedNotifications"
LAST_VIEWED_KEY = "notificationsLastViewed"
ALERT_PREFIX = "alert-"

RISK_ORDER = {RiskLevel.HIGH: 3, RiskLevel.MEDIUM: 2, RiskLevel.LOW: 1}


@dataclass
class Alert:
    id: str
    object_id: str
    object_name: str
    close_approach_date: date
    days_until_approach: int
    distance_from_earth: float
    velocity: float
    risk_level: RiskLevel
    risk_score: int
    risk_color: str
    is_new: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "object_id": self.object_id,
            "object_name": self.object_name,
            "close_approach_date": self.close_approach_date.isoformat(),
            "days_until_approach": self.days_until_approach,
            "distance_from_earth": self.distance_from_earth,
            "velocity": self.velocity,
            "risk_level": self.risk_level.value,
            "risk_score": self.risk_score,
            "risk_color": self.risk_color,
            "is_new": self.is_new,
        }


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def approach_moment(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def build_alerts(
    bodies,
    dismissed_ids,
    last_viewed: datetime | None,
    now: datetime,
    days_threshold: int = 30,
    distance_threshold: float = 10,
) -> list[Alert]:
    """Alerts for objects approaching soon and close.

    An object qualifies when its close approach is in the future and no more
    than days_threshold days away, it passes nearer than distance_threshold
    million km, and it has not been dismissed. HIGH risk sorts first, then
    the soonest approach.
    """
    horizon = now + timedelta(days=days_threshold)
    dismissed = set(dismissed_ids)
    alerts = []

    for body in bodies:
        if not body.close_approach_date or body.id in dismissed:
            continue
        approach = approach_moment(body.close_approach_date)
        if not (now < approach <= horizon):
            continue
        if not body.distance_from_earth < distance_threshold:
            continue

        risk = calculate_risk_score(body)
        days_until = math.ceil((approach - now) / timedelta(days=1))

        alerts.append(Alert(
            id=f"{ALERT_PREFIX}{body.id}",
            object_id=body.id,
            object_name=body.name,
            close_approach_date=body.close_approach_date,
            days_until_approach=days_until,
            distance_from_earth=body.distance_from_earth,
            velocity=body.velocity,
            risk_level=risk.level,
            risk_score=risk.score,
            risk_color=risk.color,
            is_new=last_viewed is None or approach > last_viewed,
        ))

    alerts.sort(key=lambda a: (-RISK_ORDER[a.risk_level], a.days_until_approach))
    return alerts


class NotificationCenter:
    """Alert feed for one viewer, with state kept in an injected store.

    The app holds a single center, so the panel-viewed flag and the stored
    state are shared by every client. State changes hold the center's lock.
    """

    def __init__(self, store, bodies: list[CelestialBody], clock=utc_now,
                 days_threshold: int = 30, distance_threshold: float = 10):
        self.store = store
        self.bodies = bodies
        self.clock = clock
        self.days_threshold = days_threshold
        self.distance_threshold = distance_threshold
        self.has_viewed_panel = False
        self._lock = threading.Lock()

    # ---------------- STATE ----------------

    def dismissed_ids(self) -> list[str]:
        raw = self.store.get(DISMISSED_KEY)
        return json.loads(raw) if raw else []

    def last_viewed(self) -> datetime | None:
        raw = self.store.get(LAST_VIEWED_KEY)
        return datetime.fromisoformat(raw) if raw else None

    # ---------------- ALERTS ----------------

    def alerts(self) -> list[Alert]:
        alerts = build_alerts(
            self.bodies,
            self.dismissed_ids(),
            self.last_viewed(),
            self.clock(),
            days_threshold=self.days_threshold,
            distance_threshold=self.distance_threshold,
        )
        high = sum(1 for a in alerts if a.risk_level == RiskLevel.HIGH)
        if high:
            logger.info("high_priority_alerts_detected", count=high)
        return alerts

    def high_priority_alerts(self) -> list[Alert]:
        return [a for a in self.alerts() if a.risk_level == RiskLevel.HIGH]

    def unread_count(self) -> int:
        alerts = self.alerts()
        if not self.has_viewed_panel:
            return len(alerts)
        return sum(1 for a in alerts if a.is_new)

    def stats(self) -> dict:
        alerts = self.alerts()
        if self.has_viewed_panel:
            unread = sum(1 for a in alerts if a.is_new)
        else:
            unread = len(alerts)
        return {
            "total": len(alerts),
            "unread": unread,
            "high_priority": sum(1 for a in alerts if a.risk_level == RiskLevel.HIGH),
            "medium_priority": sum(1 for a in alerts if a.risk_level == RiskLevel.MEDIUM),
            "low_priority": sum(1 for a in alerts if a.risk_level == RiskLevel.LOW),
            "dismissed": len(self.dismissed_ids()),
        }

    # ---------------- ACTIONS ----------------

    def mark_as_viewed(self) -> datetime:
        with self._lock:
            now = self.clock()
            self.has_viewed_panel = True
            self.store.set(LAST_VIEWED_KEY, now.isoformat())
        return now

    def dismiss(self, alert_id: str) -> list[str]:
        object_id = alert_id.removeprefix(ALERT_PREFIX)
        with self._lock:
            dismissed = self.dismissed_ids()
            if object_id not in dismissed:
                dismissed.append(object_id)
                self.store.set(DISMISSED_KEY, json.dumps(dismissed))
        logger.info("alert_dismissed", object_id=object_id)
        return dismissed

    def clear_dismissed(self) -> None:
        with self._lock:
            self.store.delete(DISMISSED_KEY)

    def reset(self) -> None:
        with self._lock:
            self.has_viewed_panel = False
            self.store.delete(DISMISSED_KEY)
            self.store.delete(LAST_VIEWED_KEY)
        logger.info("notifications_reset")

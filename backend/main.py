from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta, timezone

import structlog
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

# ---- LOCAL IMPORTS ----
import config
from celestial_data import (
    CATALOG,
    filter_by_distance,
    get_body,
    get_upcoming_approaches,
    sort_by_proximity,
)
from explainability import (
    explain_notification_trigger,
    explain_risk_factors,
    explain_risk_level,
    generate_risk_verdict,
    get_action_recommendation,
    get_monitoring_status,
)
from nasa_client import NasaFeedError, fetch_bodies
from notification_service import NotificationCenter, utc_now
from notification_store import create_store
from risk_engine import RiskLevel, calculate_risk_score, get_risk_trend

logger = structlog.get_logger(__name__)


# ---------------- STARTUP ----------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("backend_online", catalog_size=len(app.state.bodies))
    yield
    logger.info("backend_shutdown")


def create_app(store=None, bodies=None, clock=utc_now) -> FastAPI:
    if store is None:
        store = create_store(
            config.NOTIFICATION_STORE,
            config.SUPABASE_URL,
            config.SUPABASE_KEY,
            config.SUPABASE_STATE_TABLE,
        )
    if bodies is None:
        bodies = CATALOG

    app = FastAPI(title="Cosmic Watch API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.state.bodies = bodies
    app.state.clock = clock
    app.state.notifications = NotificationCenter(
        store,
        bodies,
        clock=clock,
        days_threshold=config.ALERT_DAYS_THRESHOLD,
        distance_threshold=config.ALERT_DISTANCE_THRESHOLD,
    )

    register_routes(app)
    return app


def _lookup(request: Request, body_id: str):
    body = get_body(body_id, request.app.state.bodies)
    if body is None:
        raise HTTPException(404, f"Object {body_id} not found")
    return body


def _scored(body) -> dict:
    return {**body.to_dict(), "risk": calculate_risk_score(body).to_dict()}


def register_routes(app: FastAPI):

    # ---------------- ROOT ----------------
    @app.get("/")
    def root():
        return {"status": "Cosmic Watch Backend Running"}

    @app.get("/health")
    def health(request: Request):
        return {
            "success": True,
            "message": "Cosmic Watch Backend API is running",
            "catalog_size": len(request.app.state.bodies),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # ---------------- CATALOG ----------------
    @app.get("/bodies")
    def list_bodies(request: Request, max_distance: float | None = None, unit: str = "km"):
        bodies = request.app.state.bodies
        if max_distance is not None:
            try:
                bodies = filter_by_distance(bodies, max_distance, unit)
            except ValueError as e:
                raise HTTPException(400, str(e))
        return [_scored(body) for body in sort_by_proximity(bodies)]

    @app.get("/bodies/upcoming")
    def upcoming_bodies(request: Request):
        today = request.app.state.clock().date()
        return [_scored(body) for body in get_upcoming_approaches(request.app.state.bodies, today)]

    @app.get("/bodies/{body_id}")
    def get_body_endpoint(request: Request, body_id: str):
        return _scored(_lookup(request, body_id))

    # ---------------- RISK ENGINE ----------------
    @app.get("/bodies/{body_id}/risk")
    def body_risk(request: Request, body_id: str):
        body = _lookup(request, body_id)
        assessment = calculate_risk_score(body)

        return {
            "object": body.to_dict(),
            "assessment": assessment.to_dict(),
            "trend": get_risk_trend(body, request.app.state.bodies).to_dict(),
            "verdict": generate_risk_verdict(body, assessment),
            "level_explanation": explain_risk_level(assessment.level),
            "monitoring_status": get_monitoring_status(assessment.level),
            "recommendation": get_action_recommendation(assessment.level),
            "breakdown": explain_risk_factors(body, assessment),
        }

    @app.get("/risk/summary")
    def risk_summary(request: Request, top: int = Query(3, ge=0)):
        bodies = request.app.state.bodies
        scored = [(body, calculate_risk_score(body)) for body in bodies]
        by_level = {level.value: 0 for level in RiskLevel}
        for _, assessment in scored:
            by_level[assessment.level.value] += 1

        ranked = sorted(scored, key=lambda pair: pair[1].score, reverse=True)

        return {
            "total_neos": len(bodies),
            "close_approaches": sum(1 for body in bodies if body.close_approach_date),
            "high_risk": by_level[RiskLevel.HIGH.value],
            "by_level": by_level,
            "top": [
                {
                    "id": body.id,
                    "name": body.name,
                    "score": assessment.score,
                    "level": assessment.level.value,
                    "color": assessment.color,
                }
                for body, assessment in ranked[:top]
            ],
        }

    # ---------------- ALERTS ----------------
    @app.get("/alerts")
    def list_alerts(request: Request):
        center = request.app.state.notifications
        return {
            "alerts": [
                {**alert.to_dict(), "reason": explain_notification_trigger(alert)}
                for alert in center.alerts()
            ],
            "unread": center.unread_count(),
            "config": {
                "days_threshold": center.days_threshold,
                "distance_threshold": center.distance_threshold,
            },
        }

    @app.get("/alerts/stats")
    def alert_stats(request: Request):
        return request.app.state.notifications.stats()

    @app.post("/alerts/viewed")
    def mark_alerts_viewed(request: Request):
        # single-viewer deployment: the viewed flag is shared by all clients
        viewed_at = request.app.state.notifications.mark_as_viewed()
        return {"viewed_at": viewed_at.isoformat()}

    @app.post("/alerts/{alert_id}/dismiss")
    def dismiss_alert(request: Request, alert_id: str):
        dismissed = request.app.state.notifications.dismiss(alert_id)
        return {"status": "dismissed", "dismissed": dismissed}

    @app.delete("/alerts/dismissed")
    def clear_dismissed_alerts(request: Request):
        request.app.state.notifications.clear_dismissed()
        return {"status": "cleared"}

    @app.post("/alerts/reset")
    def reset_alerts(request: Request):
        request.app.state.notifications.reset()
        return {"status": "reset"}

    # ---------------- NEO FEED ----------------
    @app.get("/neo/feed")
    def get_neo_feed():
        today = date.today()
        try:
            bodies = fetch_bodies(today, today + timedelta(days=1))
        except NasaFeedError as e:
            raise HTTPException(
                502,
                {"error": str(e), "status_code": e.status_code},
            )
        return [_scored(body) for body in sort_by_proximity(bodies)]


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)

# config.py -- environment driven settings for the backend

import os

from dotenv import load_dotenv

# ---------------- LOAD ENV ----------------
load_dotenv()

# ---------------- NASA ----------------
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")
NASA_BASE_URL = os.getenv("NASA_BASE_URL", "https://api.nasa.gov/neo/rest/v1")
NASA_TIMEOUT = float(os.getenv("NASA_TIMEOUT", "10"))

# ---------------- FRONTEND ----------------
CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:5173")

# ---------------- NOTIFICATIONS ----------------
NOTIFICATION_STORE = os.getenv("NOTIFICATION_STORE", "memory")
ALERT_DAYS_THRESHOLD = int(os.getenv("ALERT_DAYS_THRESHOLD", "30"))
ALERT_DISTANCE_THRESHOLD = float(os.getenv("ALERT_DISTANCE_THRESHOLD", "10"))

# ---------------- SUPABASE ----------------
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
SUPABASE_STATE_TABLE = os.getenv("SUPABASE_STATE_TABLE", "notification_state")


def cors_origins() -> list[str]:
    return [origin.strip() for origin in CLIENT_URL.split(",") if origin.strip()]

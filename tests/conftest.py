"""Shared pytest fixtures for the Cosmic Watch backend test suite."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from celestial_data import CATALOG, CelestialBody, get_body
from notification_service import NotificationCenter
from notification_store import MemoryNotificationStore


# Fixed "now" for alert tests: Apophis, Itokawa and 2023 XY approach within 30 days
NOW = datetime(2026, 2, 10, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Sample bodies
# ---------------------------------------------------------------------------

@pytest.fixture
def apophis():
    return get_body("asteroid-apophis")


@pytest.fixture
def vesta():
    return get_body("asteroid-vesta")


@pytest.fixture
def itokawa():
    return get_body("asteroid-itokawa")


@pytest.fixture
def pebble():
    """Far, slow and tiny: the lowest possible score."""
    return CelestialBody(id="test-pebble", name="Pebble", distance_from_earth=120.0,
                         velocity=15.0, radius=0.01)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_store():
    return MemoryNotificationStore()


@pytest.fixture
def notification_center(memory_store):
    return NotificationCenter(memory_store, CATALOG, clock=lambda: NOW)


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

@pytest.fixture
def client(memory_store):
    from main import create_app

    return TestClient(create_app(store=memory_store, clock=lambda: NOW))

"""Shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from triage_desk.config import DeskConfig
from triage_desk.main import app
from triage_desk.services.desk import get_engine
from triage_desk.services.scheduling import SchedulingEngine


@pytest.fixture
def engine():
    """Fresh engine with default capacities."""
    return SchedulingEngine(DeskConfig())


@pytest.fixture
def clinic(engine):
    """Engine with doctor 1 (slots 1 and 2) and patients 1-3."""
    engine.add_doctor(1, "Rao", "General")
    engine.add_slot(1, 1, "10:00", "10:30")
    engine.add_slot(1, 2, "10:30", "11:00")
    engine.register_patient(1, "Alice", 30)
    engine.register_patient(2, "Bob", 45)
    engine.register_patient(3, "Charlie", 25)
    return engine


@pytest.fixture
def client(engine):
    """Test client bound to the engine fixture."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()

"""
Shared fixtures for the receptionist test suite.
Staggered replies are delivered without pacing so tests run instantly.
"""

import os

import pytest

# Must be set before receptionist.config is imported anywhere
os.environ.setdefault("REPLY_PACING", "0")
os.environ.setdefault("CLINIC_NAME", "Sehat")

from receptionist.config import Settings
from receptionist.intake.agent import ReceptionistAgent


@pytest.fixture
def settings():
    return Settings(reply_pacing=0, clinic_name="Sehat")


@pytest.fixture
def agent(settings):
    return ReceptionistAgent(settings)


@pytest.fixture
def conversation(agent):
    """Fresh conversation that has just been greeted."""
    state, _ = agent.start()
    return state


@pytest.fixture
def say(agent):
    """Submit a user message and release every staggered reply."""
    def _say(state, text):
        turns = agent.step(state, text)
        turns.extend(agent.drain(state))
        return turns
    return _say


@pytest.fixture
def texts():
    def _texts(turns):
        return [t.text for t in turns]
    return _texts


@pytest.fixture
def test_client():
    from fastapi.testclient import TestClient
    from receptionist.main import app

    with TestClient(app) as client:
        yield client

"""Shared fixtures: settings, a stand-in Canvas client and a Flask test client."""

from unittest.mock import MagicMock

import pytest

from api._helpers import CanvasClient
from app import create_app
from config import Settings

CANVAS_URL = "https://canvas.example.edu"


@pytest.fixture
def settings():
    return Settings(canvas_api_url=CANVAS_URL, canvas_api_key=None)


@pytest.fixture
def canvas():
    client = MagicMock(spec=CanvasClient)
    client.get.return_value = []
    return client


@pytest.fixture
def app(settings, canvas):
    return create_app(settings, canvas)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_courses():
    return [
        {
            "id": 1,
            "name": "Intro",
            "course_code": "CS101",
            "access_restricted_by_date": False,
            "total_students": 30,
        },
        {"id": 2, "name": "", "course_code": "CS102"},
        {"id": 3, "access_restricted_by_date": True},
        {"id": 4, "name": "Archived", "access_restricted_by_date": True},
        {"id": 5, "name": "Seminar"},
    ]

"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import json
import pytest
from unittest.mock import MagicMock

from tests.factories import CigarFactory


# ===================
# MOCK ANTHROPIC CLIENT
# ===================

class MockTextBlock:
    """Mock text content block of a Messages API response."""

    type = "text"

    def __init__(self, text: str):
        self.text = text


class MockMessage:
    """Mock Messages API response."""

    def __init__(self, text: str):
        self.content = [MockTextBlock(text)]


def make_anthropic_client(reply) -> MagicMock:
    """
    Build a mock Anthropic client whose messages.create returns `reply`.

    Dicts and lists are JSON-encoded; strings are returned verbatim.
    """
    text = reply if isinstance(reply, str) else json.dumps(reply)
    client = MagicMock()
    client.messages.create.return_value = MockMessage(text)
    return client


@pytest.fixture
def anthropic_client_factory():
    """
    Usage:
        def test_something(anthropic_client_factory):
            client = anthropic_client_factory({"brand": "Padrón"})
    """
    return make_anthropic_client


# ===================
# SAMPLE DATA
# ===================

@pytest.fixture(autouse=True)
def reset_factories():
    CigarFactory.reset_counter()
    yield


@pytest.fixture
def sample_inventory() -> list:
    """Small mixed collection."""
    return [
        CigarFactory.create(country="Nicaragua", wrapper="Maduro", strength="Full", quantity=5, price=12.5),
        CigarFactory.create(country="Cuba", wrapper="Colorado", strength="Medium", quantity=3, price=20),
        CigarFactory.create(country="dominican republic", wrapper="Connecticut", strength="Mild", quantity=2, price=8),
        CigarFactory.create(country="Peru", wrapper="Habano", strength="Medium", quantity=1, price=9),
        CigarFactory.create(country="", wrapper="", strength="Flavored", quantity=4, price=5),
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)

"""
Pytest configuration shared by all tests.

Points the parse client at a fake URL (mocked with respx) and gives every
test fresh capture/edit stages over an empty handoff store.
"""

import pytest
from fastapi.testclient import TestClient
from bill_parser.api import deps
from bill_parser.api.main import app
from bill_parser.core.config import settings
from bill_parser.services.storage.handoff_memory import MemoryHandoffStore

PARSE_URL = "https://parser.test/api/parse-bill"


@pytest.fixture(autouse=True)
def fresh_stages():
    """Reset the process-wide stages and store for each test"""
    original_url = settings.parse_bill_url
    original_key = settings.handoff_key
    settings.parse_bill_url = PARSE_URL
    settings.handoff_key = "billData"
    deps.reset_stages()
    yield
    settings.parse_bill_url = original_url
    settings.handoff_key = original_key
    deps.reset_stages()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def store():
    return MemoryHandoffStore()

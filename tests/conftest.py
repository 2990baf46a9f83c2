# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from staymodel.api.http import app


@pytest.fixture(scope="session")
def client():
    return TestClient(app)

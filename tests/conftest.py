import pytest
from fastapi.testclient import TestClient

import main
import metrics


@pytest.fixture
def fast_cpu(monkeypatch):
    monkeypatch.setattr(metrics, "CPU_INTERVAL", 0.05)


@pytest.fixture
def client():
    return TestClient(main.app)

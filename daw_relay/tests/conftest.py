from __future__ import annotations
from dataclasses import replace
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from daw_relay.config import Settings
from daw_relay.main import create_app

from .fakes import FakeModelClient


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", model="fake-model", timeout_seconds=None)


@pytest.fixture
def make_client(settings: Settings) -> Callable[..., TestClient]:
    def _make(fake: Optional[FakeModelClient] = None, **overrides) -> TestClient:
        cfg = replace(settings, **overrides)
        app = create_app(cfg, fake or FakeModelClient())
        return TestClient(app)

    return _make

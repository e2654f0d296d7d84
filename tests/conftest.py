"""
Pytest configuration and fixtures for MeliPro tests.
"""

from __future__ import annotations

import os

# config を import する前にインメモリ DB を指定
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from melipro.api.deps import get_repository
from melipro.main import app
from melipro.services.storage.blobstore import MemoryBlobStore
from melipro.services.storage.repository import HiveRepository


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def repo(store) -> HiveRepository:
    return HiveRepository(store)


@pytest.fixture
def client(repo):
    """TestClient backed by an in-memory repository."""
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()

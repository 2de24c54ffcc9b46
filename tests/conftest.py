"""
pytest configuration and fixtures
Every test gets its own SQLite database file, so no external server is needed
"""

import pytest
from fastapi.testclient import TestClient

from employee_api.app import create_app
from employee_api.config.settings import Settings
from employee_api.database.connection import create_pool
from employee_api.database.executor import BlockingExecutor


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'employees.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(database_url=database_url, pool_size=4, pool_timeout=5)


@pytest.fixture
def client(settings):
    """TestClient with the lifespan run, so pool and executor are live"""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def pool(database_url):
    """Two-connection pool with a short checkout timeout"""
    db_pool = create_pool(database_url, pool_size=2, pool_timeout=0.5)
    db_pool.init_schema()
    yield db_pool
    db_pool.dispose()


@pytest.fixture
def executor():
    blocking = BlockingExecutor(max_workers=4, thread_name_prefix="test-worker")
    yield blocking
    blocking.shutdown(wait=True)

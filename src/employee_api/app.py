"""
Employee API application
CRUD over the employees table plus protocol demonstration endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware

from employee_api.api.routes import demo, employees, health
from employee_api.config.settings import API_PREFIX, Settings, load_settings
from employee_api.database.connection import create_pool
from employee_api.database.executor import BlockingExecutor
from employee_api.services.employee_service import EmployeeService
from employee_api.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the executor, pool and service; tear them down on shutdown"""
    settings: Settings = app.state.settings
    executor = BlockingExecutor(settings.worker_count)

    try:
        # Pool creation connects to the database, so it is offloaded too
        pool = await executor.run(
            create_pool,
            settings.database_url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
            echo=settings.db_echo,
        )
        await executor.run(pool.init_schema)
    except Exception:
        executor.shutdown(wait=False)
        raise

    app.state.executor = executor
    app.state.pool = pool
    app.state.employee_service = EmployeeService(pool, executor)
    logger.info("Employee API ready")

    yield

    await executor.run(pool.dispose)
    executor.shutdown(wait=True)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application

    Settings are loaded from the environment when not given; a missing
    DATABASE_URL raises StartupError here, before anything listens.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Employee API",
        description="Employee CRUD service with a pooled database offloaded to worker threads",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware)
    setup_error_handling(app)

    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
    app.include_router(demo.router, prefix=API_PREFIX, tags=["Demo"])
    app.include_router(demo.json_users, prefix=API_PREFIX, tags=["Demo"])
    app.include_router(demo.text_resource, prefix=API_PREFIX, tags=["Demo"])
    app.include_router(employees.router, prefix=API_PREFIX, tags=["Employees"])

    return app

"""
Health check API routes
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException

from employee_api.api.dependencies import get_executor, get_pool
from employee_api.database.connection import DatabasePool
from employee_api.database.executor import BlockingExecutor
from employee_api.models.common import Envelope
from employee_api.utils.errors import EmployeeAPIError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=Envelope)
async def health_check():
    """Liveness - does not touch the database"""
    return Envelope.success("Server is running")


@router.get("/health/ready", response_model=Envelope)
async def readiness_check(
    pool: DatabasePool = Depends(get_pool),
    executor: BlockingExecutor = Depends(get_executor),
):
    """
    Readiness - checks out a pooled connection and runs SELECT 1

    The probe runs on the offload executor like any other database call.
    """
    try:
        await executor.run(pool.ping)
    except EmployeeAPIError as e:
        logger.warning(f"Readiness check failed: {e.error_type}")
        raise HTTPException(status_code=503, detail="Database unavailable")

    return Envelope.success("Database connected", json.dumps(pool.status()))

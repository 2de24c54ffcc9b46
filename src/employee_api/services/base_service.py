"""
Base service layer: runs pooled database work through the offload executor
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.engine import Connection

from employee_api.database.connection import DatabasePool
from employee_api.database.executor import BlockingExecutor
from employee_api.utils.errors import EmployeeAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Any = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, data: Any, count: int = 1) -> "ServiceResult":
        return cls(success=True, data=data, count=count)

    @classmethod
    def failed(cls, exc: EmployeeAPIError) -> "ServiceResult":
        return cls(
            success=False,
            error=exc.message,
            error_type=exc.error_type,
        )


class BaseService:
    """Pairs the connection pool with the executor that is allowed to block on it"""

    def __init__(self, pool: DatabasePool, executor: BlockingExecutor):
        self.pool = pool
        self.executor = executor

    def _with_connection(self, operation: Callable[..., T], *args: Any) -> T:
        # Runs on a worker thread: checkout, one statement, release
        with self.pool.acquire() as conn:
            return operation(conn, *args)

    async def run(self, operation: Callable[[Connection], T], *args: Any) -> T:
        """Acquire a connection and run operation(conn, *args) off the event loop"""
        return await self.executor.run(self._with_connection, operation, *args)

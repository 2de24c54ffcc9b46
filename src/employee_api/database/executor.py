"""
Blocking-call offload executor

Runs synchronous work (pool checkout, statement execution) on a dedicated
thread pool so the event loop keeps serving other requests while a database
call is in flight.
"""

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from employee_api.utils.errors import EmployeeAPIError, OffloadError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BlockingExecutor:
    """Bounded worker pool with a submit/await contract"""

    def __init__(self, max_workers: int, thread_name_prefix: str = "db-worker"):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix,
        )
        self._closed = False
        logger.info(f"Offload executor started with {max_workers} workers")

    @property
    def closed(self) -> bool:
        return self._closed

    async def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Run func(*args, **kwargs) on a worker thread and await its result

        API errors raised by func propagate unchanged. Anything else is
        logged and wrapped in OffloadError. If the awaiting task is
        cancelled the call still runs to completion on its worker; its
        result is discarded.
        """
        if self._closed:
            raise OffloadError("Executor has been shut down")

        loop = asyncio.get_running_loop()
        call = functools.partial(func, *args, **kwargs)
        try:
            return await loop.run_in_executor(self._pool, call)
        except EmployeeAPIError:
            raise
        except Exception as e:
            logger.error(f"Offloaded call {_describe(func)} failed: {e}", exc_info=True)
            raise OffloadError() from e

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for in-flight calls"""
        self._closed = True
        self._pool.shutdown(wait=wait)
        logger.info("Offload executor shut down")


def _describe(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or repr(func)

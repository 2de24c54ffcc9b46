"""
FastAPI dependencies for resources built at startup
"""

from fastapi import Request

from employee_api.database.connection import DatabasePool
from employee_api.database.executor import BlockingExecutor
from employee_api.services.employee_service import EmployeeService


def get_pool(request: Request) -> DatabasePool:
    return request.app.state.pool


def get_executor(request: Request) -> BlockingExecutor:
    return request.app.state.executor


def get_employee_service(request: Request) -> EmployeeService:
    return request.app.state.employee_service

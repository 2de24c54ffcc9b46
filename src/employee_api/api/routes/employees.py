"""
Employee API routes
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path

from employee_api.api.dependencies import get_employee_service
from employee_api.api.extractors import json_body
from employee_api.models.employee import Employee, NewEmployee
from employee_api.services.base_service import ServiceResult
from employee_api.services.employee_service import EmployeeService

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "RESOURCE_NOT_FOUND": 404,
}

EmployeeId = Annotated[int, Path(ge=-2_147_483_648, le=2_147_483_647, description="Employee primary key")]


def _unwrap(result: ServiceResult):
    """Return result data or raise the HTTP error its error_type maps to"""
    if not result.success:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error_type, 500),
            detail=result.error,
        )
    return result.data


@router.post("/employee", response_model=Employee)
async def create_employee(
    employee: NewEmployee = Depends(json_body(NewEmployee)),
    service: EmployeeService = Depends(get_employee_service),
):
    """Create a new employee; created_at defaults to now"""
    return _unwrap(await service.create_employee(employee))


@router.get("/employee/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: EmployeeId,
    service: EmployeeService = Depends(get_employee_service),
):
    return _unwrap(await service.get_employee(employee_id))


@router.get("/employees", response_model=List[Employee])
async def list_employees(service: EmployeeService = Depends(get_employee_service)):
    return _unwrap(await service.list_employees())


@router.put("/employee/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: EmployeeId,
    employee: NewEmployee = Depends(json_body(NewEmployee)),
    service: EmployeeService = Depends(get_employee_service),
):
    """Overwrite an employee's fields; created_at is kept when omitted"""
    return _unwrap(await service.update_employee(employee_id, employee))


@router.delete("/employee/{employee_id}", response_model=int)
async def delete_employee(
    employee_id: EmployeeId,
    service: EmployeeService = Depends(get_employee_service),
):
    """Delete an employee; returns the number of rows removed (0 or 1)"""
    return _unwrap(await service.delete_employee(employee_id))

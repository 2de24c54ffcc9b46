"""
Employee service - business logic for employee management
"""

import logging

from employee_api.models.employee import NewEmployee
from employee_api.services import employee_repository
from employee_api.services.base_service import BaseService, ServiceResult
from employee_api.utils.errors import EmployeeAPIError

logger = logging.getLogger(__name__)


class EmployeeService(BaseService):
    """Service for employee CRUD operations"""

    async def create_employee(self, new: NewEmployee) -> ServiceResult:
        try:
            employee = await self.run(employee_repository.create, new)
        except EmployeeAPIError as e:
            logger.error(f"Create employee failed: {e.message}")
            return ServiceResult.failed(e)

        logger.info(f"Created employee {employee.id}")
        return ServiceResult.ok(employee)

    async def get_employee(self, employee_id: int) -> ServiceResult:
        try:
            employee = await self.run(employee_repository.get_by_id, employee_id)
        except EmployeeAPIError as e:
            return ServiceResult.failed(e)
        return ServiceResult.ok(employee)

    async def list_employees(self) -> ServiceResult:
        try:
            employees = await self.run(employee_repository.get_all)
        except EmployeeAPIError as e:
            logger.error(f"List employees failed: {e.message}")
            return ServiceResult.failed(e)
        return ServiceResult.ok(employees, count=len(employees))

    async def update_employee(self, employee_id: int, employee: NewEmployee) -> ServiceResult:
        """
        Overwrite an existing employee

        Args:
            employee_id: primary key of the row to update
            employee: new field values; created_at is kept when omitted

        Returns:
            ServiceResult with the updated employee, or RESOURCE_NOT_FOUND
        """
        try:
            updated = await self.run(employee_repository.update_by_id, employee_id, employee)
        except EmployeeAPIError as e:
            return ServiceResult.failed(e)

        logger.info(f"Updated employee {employee_id}")
        return ServiceResult.ok(updated)

    async def delete_employee(self, employee_id: int) -> ServiceResult:
        """Delete by id; a missing id succeeds with count 0"""
        try:
            removed = await self.run(employee_repository.delete_by_id, employee_id)
        except EmployeeAPIError as e:
            return ServiceResult.failed(e)

        if removed:
            logger.info(f"Deleted employee {employee_id}")
        return ServiceResult.ok(removed, count=removed)

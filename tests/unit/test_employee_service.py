"""
Employee service: offloaded repository calls and error tagging
"""

import asyncio
import threading

import pytest

from employee_api.database.connection import create_pool
from employee_api.models.employee import NewEmployee
from employee_api.services.employee_service import EmployeeService


@pytest.fixture
def service(pool, executor):
    return EmployeeService(pool, executor)


class TestEmployeeService:

    @pytest.mark.asyncio
    async def test_crud_cycle(self, service):
        created = await service.create_employee(NewEmployee(name="Jane"))
        assert created.success
        employee = created.data

        fetched = await service.get_employee(employee.id)
        assert fetched.data == employee

        listed = await service.list_employees()
        assert listed.count == 1

        updated = await service.update_employee(employee.id, NewEmployee(name="Janet"))
        assert updated.data.name == "Janet"

        deleted = await service.delete_employee(employee.id)
        assert deleted.success and deleted.data == 1

        missing = await service.get_employee(employee.id)
        assert not missing.success
        assert missing.error_type == "RESOURCE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self, service):
        result = await service.delete_employee(777)
        assert result.success
        assert result.data == 0

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        result = await service.update_employee(777, NewEmployee(name="x"))
        assert result.error_type == "RESOURCE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_connections_released_after_calls(self, service, pool):
        await asyncio.gather(*(service.create_employee(NewEmployee(name=f"E{i}")) for i in range(6)))
        assert pool.status()["checked_out"] == 0

    @pytest.mark.asyncio
    async def test_pool_exhaustion_reported(self, database_url, executor):
        small_pool = create_pool(database_url, pool_size=1, pool_timeout=0.2)
        small_pool.init_schema()
        service = EmployeeService(small_pool, executor)
        held = threading.Event()
        release = threading.Event()

        def hold():
            with small_pool.acquire():
                held.set()
                release.wait(timeout=5)

        holder = asyncio.ensure_future(executor.run(hold))
        try:
            await asyncio.get_running_loop().run_in_executor(None, held.wait, 5)
            result = await service.list_employees()
        finally:
            release.set()
            await holder
            small_pool.dispose()

        assert not result.success
        assert result.error_type == "POOL_EXHAUSTED"

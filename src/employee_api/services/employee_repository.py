"""
Employee data access

Each function runs exactly one statement on a connection the caller has
already checked out of the pool. They block, so they are only ever called
from offloaded work.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import delete, insert, select, update
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Connection, CursorResult, Row
from sqlalchemy.sql import Executable

from employee_api.database.schema import employees
from employee_api.models.employee import Employee, NewEmployee
from employee_api.utils.errors import (
    DatabaseConnectionError,
    EmployeeNotFoundError,
    StatementError,
)
from employee_api.utils.helpers import to_naive_utc, utcnow

logger = logging.getLogger(__name__)


def _execute(conn: Connection, stmt: Executable) -> CursorResult:
    try:
        return conn.execute(stmt)
    except sa_exc.DBAPIError as e:
        if e.connection_invalidated:
            logger.error(f"Connection lost during statement: {e}")
            raise DatabaseConnectionError("Database connection lost") from e
        # Driver text stays in the logs, not in responses
        logger.error(f"Statement failed: {e}")
        raise StatementError() from e


def _to_employee(row: Row) -> Employee:
    return Employee(**row._mapping)


def create(conn: Connection, new: NewEmployee) -> Employee:
    """Insert a row and return it with its generated id"""
    created_at = to_naive_utc(new.created_at) if new.created_at else utcnow()
    stmt = (
        insert(employees)
        .values(name=new.name, created_at=created_at)
        .returning(*employees.c)
    )
    row = _execute(conn, stmt).one()
    return _to_employee(row)


def get_by_id(conn: Connection, employee_id: int) -> Employee:
    stmt = select(employees).where(employees.c.id == employee_id)
    row = _execute(conn, stmt).one_or_none()
    if row is None:
        raise EmployeeNotFoundError(employee_id)
    return _to_employee(row)


def get_all(conn: Connection) -> List[Employee]:
    rows = _execute(conn, select(employees)).all()
    return [_to_employee(row) for row in rows]


def update_by_id(conn: Connection, employee_id: int, employee: NewEmployee) -> Employee:
    """
    Overwrite the row's fields by primary key

    created_at is only replaced when supplied; the id never changes.
    """
    values: Dict[str, Any] = {"name": employee.name}
    if employee.created_at is not None:
        values["created_at"] = to_naive_utc(employee.created_at)

    stmt = (
        update(employees)
        .where(employees.c.id == employee_id)
        .values(**values)
        .returning(*employees.c)
    )
    row = _execute(conn, stmt).one_or_none()
    if row is None:
        raise EmployeeNotFoundError(employee_id)
    return _to_employee(row)


def delete_by_id(conn: Connection, employee_id: int) -> int:
    """Delete by primary key; returns the number of rows removed (0 or 1)"""
    result = _execute(conn, delete(employees).where(employees.c.id == employee_id))
    return result.rowcount

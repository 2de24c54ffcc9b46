"""
Error taxonomy for the Employee API

Every error raised by the service layer derives from EmployeeAPIError and
carries the HTTP status it maps to plus an error_type tag used by
ServiceResult and the centralized exception handlers.
"""

from typing import Optional


class EmployeeAPIError(Exception):
    """Base class for all errors surfaced to API clients"""

    status_code: int = 500
    error_type: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(EmployeeAPIError):
    status_code = 400
    error_type = "VALIDATION_ERROR"
    default_message = "Request validation failed"


class PayloadTooLargeError(EmployeeAPIError):
    """Request body exceeded the configured byte ceiling"""

    status_code = 400
    error_type = "PAYLOAD_TOO_LARGE"
    default_message = "overflow"


class RequestAbortedError(EmployeeAPIError):
    """Client disconnected while its body was being read"""

    status_code = 400
    error_type = "REQUEST_ABORTED"
    default_message = "Client disconnected before the request body was read"


class EmployeeNotFoundError(EmployeeAPIError):
    status_code = 404
    error_type = "RESOURCE_NOT_FOUND"
    default_message = "Employee not found"

    def __init__(self, employee_id: Optional[int] = None):
        self.employee_id = employee_id
        message = f"Employee {employee_id} not found" if employee_id is not None else None
        super().__init__(message)


class PoolExhaustedError(EmployeeAPIError):
    """No connection became available within the pool timeout"""

    status_code = 500
    error_type = "POOL_EXHAUSTED"
    default_message = "Database connection pool exhausted"


class DatabaseConnectionError(EmployeeAPIError):
    status_code = 500
    error_type = "CONNECTION_ERROR"
    default_message = "Could not connect to the database"


class StatementError(EmployeeAPIError):
    """The database rejected a statement"""

    status_code = 500
    error_type = "DATABASE_ERROR"
    default_message = "Database statement failed"


class OffloadError(EmployeeAPIError):
    """An offloaded call failed with an unexpected exception"""

    status_code = 500
    error_type = "EXECUTION_ERROR"
    default_message = "Background operation failed"


class StartupError(EmployeeAPIError):
    """Unrecoverable configuration or pool error; the server must not start"""

    error_type = "STARTUP_ERROR"
    default_message = "Service failed to start"


class DemoError(EmployeeAPIError):
    """Deliberate failure raised by the /error endpoint"""

    error_type = "DEMO_ERROR"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"my error: {name}")

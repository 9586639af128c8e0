# Service layer: the only code that talks to the database

from payroll_api.services.employee_service import EMPLOYEE_WRITABLE_FIELDS, EmployeeService

__all__ = [
    "EMPLOYEE_WRITABLE_FIELDS",
    "EmployeeService",
]

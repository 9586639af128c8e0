"""
Employee endpoints, scoped by organization.

Path segments are taken as raw strings and parsed here so that a malformed
identifier is answered with 400 before the service or the body is looked
at. Request bodies are validated explicitly for the same reason; failures
surface as 400 ``Validation failed`` with per-field details.
"""

import re
from typing import Any, List, Optional, Tuple

from fastapi import APIRouter, Body, Depends, Response, status

from payroll_api.api.deps import get_employee_service
from payroll_api.core.exceptions import EmployeeNotFoundError, InvalidIdentifierError
from payroll_api.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    validate_payload,
)
from payroll_api.services.employee_service import EmployeeService

router = APIRouter()

_INTEGER_RE = re.compile(r"-?[0-9]+")


def parse_int_param(value: str) -> Optional[int]:
    """Parse a base-10 path segment; None when it is not an integer."""
    if not _INTEGER_RE.fullmatch(value):
        return None
    return int(value, 10)


def parse_employee_path(organization_id: str, employee_id: str) -> Tuple[int, int]:
    org_id = parse_int_param(organization_id)
    emp_id = parse_int_param(employee_id)
    if org_id is None or emp_id is None:
        raise InvalidIdentifierError()
    return org_id, emp_id


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: Any = Body(None),
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """Create an employee. ``organization_id`` is fixed from here on."""
    data = validate_payload(EmployeeCreate, payload)
    return await service.create_employee(data)


@router.get("/organizations/{organization_id}", response_model=List[EmployeeResponse])
async def get_all_employees(
    organization_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """List an organization's employees, newest first."""
    org_id = parse_int_param(organization_id)
    if org_id is None:
        raise InvalidIdentifierError("Invalid organization ID")
    return await service.get_all_employees(org_id)


@router.get("/organizations/{organization_id}/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    organization_id: str,
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    org_id, emp_id = parse_employee_path(organization_id, employee_id)
    employee = await service.get_employee_by_id(emp_id, org_id)
    if employee is None:
        raise EmployeeNotFoundError()
    return employee


@router.put("/organizations/{organization_id}/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    organization_id: str,
    employee_id: str,
    payload: Any = Body(None),
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """
    Partially update an employee.

    Only the fields present in the body are written; an empty body returns
    the current record unchanged, as does a request with no body at all.
    """
    org_id, emp_id = parse_employee_path(organization_id, employee_id)
    data = validate_payload(EmployeeUpdate, {} if payload is None else payload)
    employee = await service.update_employee(emp_id, org_id, data)
    if employee is None:
        raise EmployeeNotFoundError()
    return employee


@router.delete(
    "/organizations/{organization_id}/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_employee(
    organization_id: str,
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> Response:
    org_id, emp_id = parse_employee_path(organization_id, employee_id)
    deleted = await service.delete_employee(emp_id, org_id)
    if not deleted:
        raise EmployeeNotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

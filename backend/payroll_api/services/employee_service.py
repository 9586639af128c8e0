"""
Persistence for employees.

Every statement is parameterized and every read, update and delete is scoped
by both the employee id and the organization id, so a record can never be
reached through another organization.

Column lists for INSERT and UPDATE come from ``EMPLOYEE_WRITABLE_FIELDS``:
only allow-listed fields the client actually sent are written, in the order
of that tuple. Absent fields are left to store defaults (insert) or left
untouched (update).
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.models.employee import Employee
from payroll_api.schemas.employee import EmployeeCreate, EmployeeFields, EmployeeUpdate

logger = logging.getLogger("payroll.employees")

EMPLOYEE_WRITABLE_FIELDS = (
    "organization_id",
    "first_name",
    "last_name",
    "email",
    "wallet_address",
    "status",
    "position",
    "department",
    "job_title",
    "hire_date",
    "date_of_birth",
    "phone",
    "address_line1",
    "address_line2",
    "city",
    "state_province",
    "postal_code",
    "country",
    "emergency_contact_name",
    "emergency_contact_phone",
    "withdrawal_preference",
    "bank_name",
    "bank_account_number",
    "bank_routing_number",
    "mobile_money_provider",
    "mobile_money_account",
    "notes",
)

# Validated as YYYY-MM-DD strings; the driver needs date objects
_DATE_FIELDS = frozenset({"hire_date", "date_of_birth"})


def column_values(data: EmployeeFields, exclude: frozenset = frozenset()) -> Dict[str, Any]:
    """
    Map a validated payload onto employee columns.

    Walks the allow-list in order and keeps the fields present on ``data``.
    A date that matches the shape but not the calendar raises ``ValueError``.
    """
    present = data.present_fields()
    values: Dict[str, Any] = {}
    for field in EMPLOYEE_WRITABLE_FIELDS:
        if field in exclude or field not in present:
            continue
        value = present[field]
        if field in _DATE_FIELDS:
            value = date.fromisoformat(value)
        values[field] = value
    return values


class EmployeeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _scope(employee_id: int, organization_id: int):
        return (Employee.id == employee_id, Employee.organization_id == organization_id)

    async def create_employee(self, data: EmployeeCreate) -> Employee:
        stmt = insert(Employee).values(column_values(data)).returning(Employee)
        result = await self.db.execute(stmt)
        employee = result.scalar_one()
        await self.db.commit()
        logger.info(f"Created employee {employee.id} in organization {employee.organization_id}")
        return employee

    async def get_employee_by_id(self, employee_id: int, organization_id: int) -> Optional[Employee]:
        return await self.db.scalar(
            select(Employee).where(*self._scope(employee_id, organization_id))
        )

    async def get_all_employees(self, organization_id: int) -> List[Employee]:
        result = await self.db.scalars(
            select(Employee)
            .where(Employee.organization_id == organization_id)
            .order_by(Employee.created_at.desc())
        )
        return list(result.all())

    async def update_employee(
        self,
        employee_id: int,
        organization_id: int,
        data: EmployeeUpdate,
    ) -> Optional[Employee]:
        """
        Apply a partial update and return the updated row.

        An update with no fields is a plain read: no statement is written and
        ``updated_at`` keeps its value. ``organization_id`` is never part of
        the SET clause.
        """
        values = column_values(data, exclude=frozenset({"organization_id"}))
        if not values:
            return await self.get_employee_by_id(employee_id, organization_id)

        stmt = (
            update(Employee)
            .where(*self._scope(employee_id, organization_id))
            .values(values)
            .returning(Employee)
        )
        result = await self.db.execute(stmt)
        employee = result.scalar_one_or_none()
        await self.db.commit()
        if employee is not None:
            logger.info(f"Updated employee {employee_id} in organization {organization_id}: {sorted(values)}")
        return employee

    async def delete_employee(self, employee_id: int, organization_id: int) -> bool:
        stmt = (
            delete(Employee)
            .where(*self._scope(employee_id, organization_id))
            .returning(Employee.id)
        )
        result = await self.db.execute(stmt)
        deleted_ids = result.scalars().all()
        await self.db.commit()
        deleted = len(deleted_ids) == 1
        if deleted:
            logger.info(f"Deleted employee {employee_id} in organization {organization_id}")
        return deleted

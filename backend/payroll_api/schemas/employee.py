"""
Request and response schemas for employees.

``EmployeeCreate`` and ``EmployeeUpdate`` share every field definition; the
create schema additionally requires ``organization_id``, ``first_name``,
``last_name`` and ``email``. Unknown keys are dropped, so an update can never
carry ``organization_id`` through to the store.

Dates are checked against the literal ``YYYY-MM-DD`` shape only; calendar
validity is left to the store.
"""

from datetime import date, datetime
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Type, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)

from payroll_api.core.exceptions import PayloadValidationError

EmployeeStatus = Literal["active", "inactive", "pending"]
WithdrawalPreference = Literal["bank", "mobile_money", "crypto"]

ISO_DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"


def _check_email(value: str) -> str:
    """Check the address shape and return it exactly as sent."""
    if value != value.strip() or "<" in value or ">" in value:
        raise ValueError("value is not a valid email address")
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from exc
    return value


Name = Annotated[str, StringConstraints(min_length=1, max_length=100)]
Email = Annotated[str, StringConstraints(max_length=255), AfterValidator(_check_email)]
IsoDate = Annotated[str, StringConstraints(pattern=ISO_DATE_PATTERN)]

Text20 = Annotated[str, StringConstraints(max_length=20)]
Text50 = Annotated[str, StringConstraints(max_length=50)]
Text56 = Annotated[str, StringConstraints(max_length=56)]
Text100 = Annotated[str, StringConstraints(max_length=100)]
Text200 = Annotated[str, StringConstraints(max_length=200)]
Text255 = Annotated[str, StringConstraints(max_length=255)]


class EmployeeFields(BaseModel):
    """Optional fields shared by the create and update payloads."""

    model_config = ConfigDict(extra="ignore")

    wallet_address: Optional[Text56] = None
    status: Optional[EmployeeStatus] = None
    position: Optional[Text100] = None
    department: Optional[Text100] = None
    job_title: Optional[Text100] = None
    hire_date: Optional[IsoDate] = None
    date_of_birth: Optional[IsoDate] = None
    phone: Optional[Text20] = None
    address_line1: Optional[Text255] = None
    address_line2: Optional[Text255] = None
    city: Optional[Text100] = None
    state_province: Optional[Text100] = None
    postal_code: Optional[Text20] = None
    country: Optional[Text100] = None
    emergency_contact_name: Optional[Text200] = None
    emergency_contact_phone: Optional[Text20] = None
    withdrawal_preference: Optional[WithdrawalPreference] = None
    bank_name: Optional[Text100] = None
    bank_account_number: Optional[Text50] = None
    bank_routing_number: Optional[Text50] = None
    mobile_money_provider: Optional[Text50] = None
    mobile_money_account: Optional[Text50] = None
    notes: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Omitting a field and sending null are different requests
        if value is None:
            raise ValueError("Field may be omitted but must not be null")
        return value

    def present_fields(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by name."""
        return self.model_dump(exclude_unset=True)


class EmployeeCreate(EmployeeFields):
    organization_id: int = Field(..., strict=True, gt=0)
    first_name: Name
    last_name: Name
    email: Email


class EmployeeUpdate(EmployeeFields):
    first_name: Optional[Name] = None
    last_name: Optional[Name] = None
    email: Optional[Email] = None


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int
    first_name: str
    last_name: str
    email: str
    wallet_address: Optional[str] = None
    status: str
    position: Optional[str] = None
    department: Optional[str] = None
    job_title: Optional[str] = None
    hire_date: Optional[date] = None
    date_of_birth: Optional[date] = None
    phone: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    withdrawal_preference: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_routing_number: Optional[str] = None
    mobile_money_provider: Optional[str] = None
    mobile_money_account: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


PayloadT = TypeVar("PayloadT", bound=BaseModel)


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into ``{field, message, type}`` entries."""
    details = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ()))
        details.append({
            "field": field or "body",
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })
    return details


def validate_payload(schema: Type[PayloadT], payload: Any) -> PayloadT:
    """
    Validate a raw request body against ``schema``.

    Raises:
        PayloadValidationError: with one detail entry per violated field
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise PayloadValidationError(details=format_validation_errors(exc.errors())) from exc

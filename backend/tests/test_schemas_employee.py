"""
Tests for payroll_api/schemas/employee.py - Payload validation.
"""
import pytest
from pydantic import ValidationError


class TestEmployeeCreate:
    """Test the create payload."""

    def test_minimal_payload(self, create_payload):
        from payroll_api.schemas.employee import EmployeeCreate

        data = EmployeeCreate.model_validate(create_payload)

        assert data.organization_id == 1
        assert data.present_fields() == create_payload

    def test_full_payload(self, create_payload):
        """Should accept every optional field at its maximum length."""
        from payroll_api.schemas.employee import EmployeeCreate

        payload = {
            **create_payload,
            "wallet_address": "G" * 56,
            "status": "pending",
            "position": "p" * 100,
            "department": "Engineering",
            "job_title": "Engineer",
            "hire_date": "2023-01-15",
            "date_of_birth": "1990-07-04",
            "phone": "1" * 20,
            "address_line1": "a" * 255,
            "address_line2": "Suite 4",
            "city": "Nairobi",
            "state_province": "Nairobi County",
            "postal_code": "00100",
            "country": "Kenya",
            "emergency_contact_name": "n" * 200,
            "emergency_contact_phone": "+254700000000",
            "withdrawal_preference": "crypto",
            "bank_name": "Equity",
            "bank_account_number": "0" * 50,
            "bank_routing_number": "021000021",
            "mobile_money_provider": "M-Pesa",
            "mobile_money_account": "0700000000",
            "notes": "x" * 5000,
        }

        data = EmployeeCreate.model_validate(payload)

        assert data.present_fields() == payload

    @pytest.mark.parametrize("missing", ["organization_id", "first_name", "last_name", "email"])
    def test_required_fields(self, create_payload, missing):
        from payroll_api.schemas.employee import EmployeeCreate

        create_payload.pop(missing)

        with pytest.raises(ValidationError) as exc_info:
            EmployeeCreate.model_validate(create_payload)

        assert exc_info.value.errors()[0]["loc"] == (missing,)

    @pytest.mark.parametrize("value", ["1", 1.5, -1, 0, True])
    def test_organization_id_must_be_positive_integer(self, create_payload, value):
        from payroll_api.schemas.employee import EmployeeCreate

        with pytest.raises(ValidationError):
            EmployeeCreate.model_validate({**create_payload, "organization_id": value})

    @pytest.mark.parametrize("field,value", [
        ("first_name", ""),
        ("first_name", "x" * 101),
        ("last_name", "x" * 101),
        ("email", "not-an-email"),
        ("email", "a" * 250 + "@example.com"),
        ("wallet_address", "G" * 57),
        ("phone", "1" * 21),
        ("postal_code", "1" * 21),
        ("emergency_contact_name", "n" * 201),
        ("bank_account_number", "0" * 51),
        ("address_line1", "a" * 256),
        ("status", "terminated"),
        ("withdrawal_preference", "paypal"),
        ("hire_date", "2023-1-15"),
        ("date_of_birth", "15/01/2023"),
        ("notes", 42),
    ])
    def test_field_constraints(self, create_payload, field, value):
        from payroll_api.schemas.employee import EmployeeCreate

        with pytest.raises(ValidationError) as exc_info:
            EmployeeCreate.model_validate({**create_payload, field: value})

        assert exc_info.value.errors()[0]["loc"][0] == field

    def test_calendar_check_is_not_done_here(self, create_payload):
        """Only the YYYY-MM-DD shape is checked."""
        from payroll_api.schemas.employee import EmployeeCreate

        data = EmployeeCreate.model_validate({**create_payload, "hire_date": "2024-02-30"})

        assert data.hire_date == "2024-02-30"

    def test_explicit_null_rejected(self, create_payload):
        """An optional field may be omitted but not sent as null."""
        from payroll_api.schemas.employee import EmployeeCreate

        with pytest.raises(ValidationError) as exc_info:
            EmployeeCreate.model_validate({**create_payload, "notes": None})

        assert "must not be null" in exc_info.value.errors()[0]["msg"]

    def test_unknown_keys_dropped(self, create_payload):
        from payroll_api.schemas.employee import EmployeeCreate

        data = EmployeeCreate.model_validate({**create_payload, "id": 5, "salary": 1000})

        assert "id" not in data.present_fields()
        assert not hasattr(data, "salary")

    @pytest.mark.parametrize("email", [
        "John.Doe@Example.COM",
        "jane+payroll@sub.example.org",
    ])
    def test_email_kept_verbatim(self, create_payload, email):
        """Valid addresses are not normalized."""
        from payroll_api.schemas.employee import EmployeeCreate

        data = EmployeeCreate.model_validate({**create_payload, "email": email})

        assert data.email == email

    @pytest.mark.parametrize("email", [
        "John Doe <john.doe@example.com>",
        "<john.doe@example.com>",
        "john.doe@example.com\n",
        "john.doe@",
        "@example.com",
    ])
    def test_email_rejected(self, create_payload, email):
        from payroll_api.schemas.employee import EmployeeCreate

        with pytest.raises(ValidationError) as exc_info:
            EmployeeCreate.model_validate({**create_payload, "email": email})

        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_non_object_body(self):
        from payroll_api.schemas.employee import EmployeeCreate

        with pytest.raises(ValidationError):
            EmployeeCreate.model_validate(["not", "an", "object"])


class TestEmployeeUpdate:
    """Test the update payload."""

    def test_empty_is_valid(self):
        from payroll_api.schemas.employee import EmployeeUpdate

        assert EmployeeUpdate.model_validate({}).present_fields() == {}

    def test_organization_id_not_a_field(self):
        """Reassigning an employee to another organization is impossible."""
        from payroll_api.schemas.employee import EmployeeUpdate

        data = EmployeeUpdate.model_validate({"organization_id": 2})

        assert "organization_id" not in EmployeeUpdate.model_fields
        assert data.present_fields() == {}

    def test_same_rules_as_create(self):
        from payroll_api.schemas.employee import EmployeeUpdate

        with pytest.raises(ValidationError):
            EmployeeUpdate.model_validate({"first_name": ""})
        with pytest.raises(ValidationError):
            EmployeeUpdate.model_validate({"email": None})


class TestValidatePayload:
    """Test validate_payload and error formatting."""

    def test_returns_model(self, create_payload):
        from payroll_api.schemas.employee import EmployeeCreate, validate_payload

        assert isinstance(validate_payload(EmployeeCreate, create_payload), EmployeeCreate)

    def test_raises_payload_validation_error(self):
        from payroll_api.core.exceptions import PayloadValidationError
        from payroll_api.schemas.employee import EmployeeCreate, validate_payload

        with pytest.raises(PayloadValidationError) as exc_info:
            validate_payload(EmployeeCreate, {"email": "bad"})

        error = exc_info.value
        assert error.status_code == 400
        assert error.error == "Validation failed"
        fields = {detail["field"] for detail in error.details}
        assert {"organization_id", "first_name", "last_name", "email"} <= fields

    def test_missing_body(self):
        """No create body at all is reported against the body itself."""
        from payroll_api.core.exceptions import PayloadValidationError
        from payroll_api.schemas.employee import EmployeeCreate, validate_payload

        with pytest.raises(PayloadValidationError) as exc_info:
            validate_payload(EmployeeCreate, None)

        assert exc_info.value.details[0]["field"] == "body"

    def test_format_validation_errors(self):
        from payroll_api.schemas.employee import format_validation_errors

        details = format_validation_errors([
            {"loc": ("body", 5), "msg": "JSON decode error", "type": "json_invalid"},
            {"loc": (), "msg": "Input should be an object", "type": "model_type"},
            {},
        ])

        assert details == [
            {"field": "body.5", "message": "JSON decode error", "type": "json_invalid"},
            {"field": "body", "message": "Input should be an object", "type": "model_type"},
            {"field": "body", "message": "Invalid value", "type": "value_error"},
        ]

"""
Client-facing error types.

Each carries the HTTP status and the ``error`` message rendered by the
application's ``APIError`` handler as ``{"error": ..., "details": [...]}``.
Anything that is not an ``APIError`` is treated as an internal failure.
"""

from typing import Any, Dict, List, Optional


class APIError(Exception):
    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, error: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class PayloadValidationError(APIError):
    status_code = 400
    error = "Validation failed"


class InvalidIdentifierError(APIError):
    status_code = 400
    error = "Invalid ID"


class EmployeeNotFoundError(APIError):
    status_code = 404
    error = "Employee not found"

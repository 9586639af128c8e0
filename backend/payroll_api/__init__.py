"""Organization-scoped employee management API for the payroll product."""

__version__ = "1.0.0"

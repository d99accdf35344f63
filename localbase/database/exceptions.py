"""
LocalBase Exception Hierarchy

Exception types raised by the in-memory store and its query builder.
"""

from typing import Optional, Dict, Any


class LocalBaseError(Exception):
    """
    Base exception for all LocalBase errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., 'QueryTypeError')
        details: Additional context (table, column, operator, etc.)
    """

    error_code: str = "LocalBaseError"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class QueryTypeError(LocalBaseError, TypeError):
    """
    Raised when values cannot be compared.

    Ordering filters (gt, lt, gte, lte) require a numeric operand and a
    numeric stored value; sorting requires mutually comparable values.
    """
    error_code = "QueryTypeError"

    def __init__(
        self,
        message: str,
        column: Optional[str] = None,
        operator: Optional[str] = None,
        value: Any = None
    ):
        details: Dict[str, Any] = {}
        if column is not None:
            details["column"] = column
        if operator is not None:
            details["operator"] = operator
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details=details)
        self.column = column
        self.operator = operator
        self.value = value


class SeedDataError(LocalBaseError):
    """Raised when seed data is not a mapping of table names to row lists."""
    error_code = "SeedDataError"

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message, details={"source": source} if source else None)
        self.source = source

"""
Exceptions Module.

Centralized exception definitions with:
- Error codes for client handling
- Structured error payloads
- Field-level detail for validation failures

The engines themselves raise nothing on documented inputs; these are
raised at the boundary (validation.py, service.py) before a call enters
the core.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


# ============================================================================
# ERROR CODES
# ============================================================================


class ErrorCode(str, Enum):
    """Error codes."""

    # General errors (1xxx)
    INTERNAL_ERROR = "E1000"
    VALIDATION_ERROR = "E1001"

    # Data errors (6xxx)
    INVALID_DATA = "E6000"
    NON_FINITE_VALUE = "E6001"
    NEGATIVE_VALUE = "E6002"


# ============================================================================
# BASE EXCEPTION
# ============================================================================


class DecisionCoreError(Exception):
    """Base exception for decisioncore."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.field = field
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a structured error payload."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "field": self.field,
                "details": self.details,
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


# ============================================================================
# SPECIFIC EXCEPTIONS
# ============================================================================


class ValidationError(DecisionCoreError):
    """Input rejected at the boundary before entering an engine."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            message=message,
            code=code,
            field=field,
            details=details,
        )

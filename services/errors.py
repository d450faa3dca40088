# services/errors.py
from typing import Any, Dict, Optional


class InterviewBankError(Exception):
    """
    Base for every failure surfaced to callers.

    Each subclass fixes a ``category`` and an HTTP ``status_code`` so the
    transport can shape a response without knowing the concrete type.
    """

    category = "internal_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.category, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(InterviewBankError):
    category = "validation_error"
    status_code = 400


class MissingParameterError(InterviewBankError):
    category = "missing_parameter"
    status_code = 400


class NotFoundError(InterviewBankError):
    category = "not_found"
    status_code = 404


class StoreUnavailableError(InterviewBankError):
    category = "store_unavailable"
    status_code = 503

"""
Ledger error taxonomy.

Every error raised by a service means the operation was rolled back as a
whole; the JSON handler reports it with ``applied: false``.
"""


class LedgerError(Exception):
    status_code = 400
    code = "ledger_error"

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload = {"error": self.message, "code": self.code, "applied": False}
        if self.details:
            payload["details"] = self.details
        return payload


class NotFoundError(LedgerError):
    status_code = 404
    code = "not_found"


class ValidationError(LedgerError):
    status_code = 400
    code = "validation"


class DuplicateError(LedgerError):
    status_code = 409
    code = "duplicate"


class ReferentialIntegrityError(LedgerError):
    status_code = 409
    code = "referential_integrity"

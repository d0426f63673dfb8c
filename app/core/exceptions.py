"""Ledger error taxonomy"""


class LedgerError(Exception):
    """Base class for ledger errors"""


class LedgerValidationError(LedgerError, ValueError):
    """User input was rejected; the message is safe to show to the user."""

    code = "VALIDATION_ERROR"


class CorrectionRejected(LedgerValidationError):
    """A balance correction could not be planned (missing reason, no difference, ...)"""

    code = "CORRECTION_REJECTED"


class RecordNotFoundError(LedgerError, LookupError):
    """A student, billing or payment referenced by id does not exist"""

    code = "RESOURCE_NOT_FOUND"

    def __init__(self, kind: str, record_id: object):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"The {kind} with ID {record_id} does not exist.")

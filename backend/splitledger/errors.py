"""Error taxonomy for the ledger core.

Every error carries a human-readable message and the HTTP status the
routes answer with.
"""


class LedgerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Request fields missing or inconsistent for the chosen split type."""


class InvalidStrategy(LedgerError):
    """Unrecognized split type."""


class InvalidIdentifier(LedgerError):
    """Identifier is not a well-formed ObjectId."""


class NotFound(LedgerError):
    status_code = 404


class StorageError(LedgerError):
    """Backing store failure; propagated, never retried here."""
    status_code = 500

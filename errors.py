class LedgerError(Exception):
    """Base class for ledger errors."""


class ValidationError(LedgerError):
    """A required transaction field is missing."""


class PersistenceError(LedgerError):
    """The transaction table could not be read or written."""


class NetworkError(LedgerError):
    """The ledger API could not be reached or answered with an error."""

class BulkJobError(Exception):
    """Base exception for all bulk job errors."""


class ConfigurationError(BulkJobError):
    """Raised when a job cannot run: missing collaborator or malformed persisted state."""


class ConcurrencyConflict(BulkJobError):
    """Raised when another step holds a live lock on the same job kind."""

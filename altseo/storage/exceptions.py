class StateStoreError(Exception):
    """Raised when the persisted key/value store cannot be read or written."""

"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class WriteFailure(AdapterError):
    """The record store rejected a write (network, permission, ...).

    Propagated to the caller unchanged; nothing in the engine retries.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Record store rejected {operation}: {reason}")

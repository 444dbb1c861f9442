"""Application layer errors."""


class ApplicationError(Exception):
    """Base application error."""

    pass


class SessionClosedError(ApplicationError):
    """Raised when an action targets a thread session that has been closed."""

    def __init__(self, scope_id: str):
        self.scope_id = scope_id
        super().__init__(f"Thread session for scope {scope_id} is closed")


class StreamFailedError(ApplicationError):
    """Raised when the record stream behind a thread session has died.

    The session's index no longer follows the record store; close it and
    open a new one.
    """

    def __init__(self, scope_id: str):
        self.scope_id = scope_id
        super().__init__(f"Record stream for scope {scope_id} has failed")

"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised before anything is written to the record store.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class OrphanReferenceError(DomainError):
    """A reply whose parent does not resolve in the current index.

    Soft error: the index records and logs it, then treats the reply as
    top-level. It is never raised.
    """

    def __init__(self, reply_id: str, parent_id: str):
        self.reply_id = reply_id
        self.parent_id = parent_id
        super().__init__(f"Reply {reply_id} references missing parent {parent_id}")

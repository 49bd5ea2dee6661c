class RecordsError(Exception):
    """Base class for every failure surfaced by the records layer.

    The message is meant to be shown to the user as is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(RecordsError):
    """No session, or the session/token is not valid."""


class Forbidden(RecordsError):
    """Authenticated, but the role or ownership does not allow the operation."""


class NotFound(RecordsError):
    pass


class ValidationFailed(RecordsError):
    pass


class TransportError(RecordsError):
    """Network or server failure, or a response that is not JSON."""


class StorageError(TransportError):
    pass

"""Domain-level exceptions.

Every failure the data layer can signal is a subclass of DomainException
so consumers (CLI, checkout) can catch them uniformly and display a
message naming the failed operation.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule was violated, locally or by a backend constraint."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class BackendUnavailableError(DomainException):
    """The hosted backend could not be reached or failed to answer."""


class UploadError(DomainException):
    """The storage backend rejected a file upload."""


class AuthenticationFailedError(DomainException):
    """Sign-in, sign-out or session lookup failed."""


class NotificationError(DomainException):
    """The order notification relay did not accept a notification."""

"""
Service Exceptions
Failure kinds raised by the service layer.

Services never build HTTP responses themselves. They raise one of the
exceptions below and the handlers registered in
cookbook_api.middleware.error_handler translate it into a status code
and a JSON body.
"""

from typing import Any, Optional


class ServiceError(Exception):
    """Base class for every failure raised by a service."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed input."""
    status_code = 400


class BadRequestError(ServiceError):
    """Input is well formed but semantically rejected (wrong password, failed upload)."""
    status_code = 400


class NotFoundError(ServiceError):
    """The requested entity does not exist."""
    status_code = 404


class ConflictError(ServiceError):
    """A unique constraint would be violated."""
    status_code = 409


class TransportError(ServiceError):
    """An upstream dependency (store or remote provider) failed."""
    status_code = 502


class ImageUploadError(TransportError):
    """The image host could not be reached or rejected the upload."""

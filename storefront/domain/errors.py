# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base for errors that map onto an HTTP status with a readable message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(StorefrontError):
    status_code = 400


class UnauthenticatedError(StorefrontError):
    status_code = 401


class PermissionDeniedError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    status_code = 409

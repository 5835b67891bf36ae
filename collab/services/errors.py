"""
Service-layer exceptions.

Services raise these instead of HTTP errors; `collab.api.main` maps each to a
`{"detail": message}` response with the carried status code.
"""


class ServiceError(Exception):
    """Base class for errors raised by services."""

    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    http_status = 404


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class TeamspaceNotFoundError(NotFoundError):
    def __init__(self, message: str = "Teamspace not found"):
        super().__init__(message)


class PermissionDeniedError(ServiceError):
    http_status = 403


class ConflictError(ServiceError):
    http_status = 409

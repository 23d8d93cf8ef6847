"""
Service-layer exceptions.

Each carries the HTTP status the routes answer with; create_app() registers a
single handler that renders them as {"error": message}.
"""


class ServiceError(Exception):
    """Base class for failures scoped to one user action."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    status_code = 400


class AuthError(ServiceError):
    status_code = 401


class PermissionDenied(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, entity, entity_id=None):
        message = f'{entity} not found' if entity_id is None else f'{entity} {entity_id} not found'
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransition(ServiceError):
    """Raised when a status change is not allowed from the current status."""
    status_code = 409

    def __init__(self, entity, current, action):
        super().__init__(f"Cannot {action} a {entity} with status '{current}'")
        self.entity = entity
        self.current = current
        self.action = action


class UpstreamError(ServiceError):
    """A remote procedure (scoring endpoint, LLM) failed."""
    status_code = 502

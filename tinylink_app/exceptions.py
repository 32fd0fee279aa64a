"""
Domain errors raised by the link store and services.

Each error carries the HTTP status it maps to; the API layer turns any
LinkError into a JSON body of the form {"error": message}.
"""

from fastapi import status


class LinkError(Exception):
    """Base class for link lifecycle errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str = None, code: str = None):
        self.message = message or self.default_message
        self.code = code
        super().__init__(self.message)


class LinkValidationError(LinkError):
    """Malformed URL or custom code"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class CodeConflictError(LinkError):
    """The requested code is already taken"""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Code already exists."


class LinkNotFoundError(LinkError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class CodeGenerationExhaustedError(LinkError):
    """Every generated candidate collided with an existing code"""

    default_message = "Failed to generate code."

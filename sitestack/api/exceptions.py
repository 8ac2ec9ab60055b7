"""
Custom exceptions for template synthesis and CloudFormation operations
"""

from sitestack.utils.validators import InvalidCredentialError, ValidationError


class APIError(Exception):
    """Base exception for all CloudFormation API errors"""

    def __init__(self, message: str, error_code: str = None, response_data: dict = None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data or {}
        super().__init__(self.message)

    def __str__(self):
        if self.error_code:
            return f"APIError ({self.error_code}): {self.message}"
        return f"APIError: {self.message}"


class StackAPIError(APIError):
    """Raised when a CloudFormation call fails"""
    pass


class ThrottlingError(StackAPIError):
    """Raised when CloudFormation throttles the request"""
    pass


class StackNotFoundError(StackAPIError):
    """Raised when the stack does not exist (or was deleted)"""
    pass


class StackAlreadyExistsError(StackAPIError):
    """Raised when a stack with the same name already exists"""
    pass


class NetworkError(StackAPIError):
    """Raised when the endpoint cannot be reached"""
    pass


class StackRollbackError(APIError):
    """Raised when the root stack reaches ROLLBACK_COMPLETE"""
    pass


class StackTimeoutError(APIError):
    """Raised when the root stack does not settle before the deadline"""
    pass


class TemplateIntegrityError(Exception):
    """Raised when a template references undeclared targets or has colliding names"""
    pass


__all__ = [
    "APIError",
    "StackAPIError",
    "ThrottlingError",
    "StackNotFoundError",
    "StackAlreadyExistsError",
    "NetworkError",
    "StackRollbackError",
    "StackTimeoutError",
    "TemplateIntegrityError",
    "InvalidCredentialError",
    "ValidationError",
]

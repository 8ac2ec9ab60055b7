"""
API Layer - CloudFormation client and shared exceptions
"""

# Exceptions
from sitestack.api.exceptions import (
    APIError,
    StackAPIError,
    ThrottlingError,
    StackNotFoundError,
    StackAlreadyExistsError,
    NetworkError,
    StackRollbackError,
    StackTimeoutError,
    TemplateIntegrityError,
    InvalidCredentialError,
)

# Boundary types
from sitestack.api.models import StackEvent

# Client
from sitestack.api.cloudformation_client import CloudFormationClient

__all__ = [
    # Client
    "CloudFormationClient",
    "StackEvent",

    # Exceptions
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
]

"""
Input validation utilities for domains, stack names and AWS credentials
"""

import re
from typing import Any, Mapping


class ValidationError(Exception):
    """Custom exception for validation errors"""
    pass


class InvalidCredentialError(ValidationError):
    """Raised when the AWS credential mapping is missing or malformed"""
    pass


class DomainValidator:
    """Validator for domain names"""

    # RFC-compliant domain regex
    DOMAIN_REGEX = re.compile(
        r'^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$'
    )

    @classmethod
    def validate(cls, domain: str) -> str:
        """
        Validate a domain name used as the site alias.

        Args:
            domain: Domain name to validate

        Returns:
            Cleaned domain name (lowercase, stripped)

        Raises:
            ValidationError: If domain is invalid
        """
        if not domain:
            raise ValidationError("Domain name cannot be empty")

        domain = domain.strip().lower()

        # Remove http(s):// if present
        domain = re.sub(r'^https?://', '', domain)

        # Remove trailing slash
        domain = domain.rstrip('/')

        if len(domain) > 253:  # RFC 1035
            raise ValidationError("Domain name too long (max 253 characters)")

        if not cls.DOMAIN_REGEX.match(domain):
            raise ValidationError(
                f"Invalid domain format: {domain}. "
                "Domain must contain only letters, numbers, hyphens and dots."
            )

        return domain


class StackNameValidator:
    """Validator for CloudFormation stack names"""

    # Letters, digits and hyphens; must start with a letter; max 128 chars
    STACK_NAME_REGEX = re.compile(r'^[a-zA-Z][-a-zA-Z0-9]{0,127}$')

    @classmethod
    def validate(cls, name: str) -> str:
        """
        Validate a stack name.

        Raises:
            ValidationError: If the name is rejected by CloudFormation rules
        """
        if not name:
            raise ValidationError("Stack name cannot be empty")

        name = name.strip()
        if not cls.STACK_NAME_REGEX.match(name):
            raise ValidationError(
                f"Invalid stack name: {name}. "
                "Use letters, numbers and hyphens, starting with a letter (max 128)."
            )
        return name

    @classmethod
    def from_domain(cls, domain: str) -> str:
        """
        Derive a stack name from a domain, e.g. 'blog.example.com' -> 'blog-example-com-site'
        """
        name = re.sub(r'[^a-zA-Z0-9]+', '-', domain.strip().lower()).strip('-')
        if not name or not name[0].isalpha():
            name = f"site-{name}"
        return cls.validate(f"{name[:123]}-site")


def validate_credentials(cred: Any) -> Mapping[str, str]:
    """
    Check the credential shape before any AWS call is made.

    Args:
        cred: Mapping with non-empty string ``access_key`` and ``secret_key``

    Returns:
        The same mapping

    Raises:
        InvalidCredentialError: If the shape is wrong
    """
    if not isinstance(cred, Mapping):
        raise InvalidCredentialError("AWS credentials must be a mapping")

    for key in ("access_key", "secret_key"):
        value = cred.get(key)
        if not isinstance(value, str) or not value.strip():
            raise InvalidCredentialError(
                f"AWS credential '{key}' is missing. "
                "Set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY in .env"
            )
    return cred


def validate_domain(domain: str) -> str:
    """Convenience function for domain validation"""
    return DomainValidator.validate(domain)


def validate_stack_name(name: str) -> str:
    """Convenience function for stack name validation"""
    return StackNameValidator.validate(name)

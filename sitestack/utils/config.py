"""
Configuration management using Pydantic Settings
Loads and validates environment variables from .env file
"""

from pathlib import Path
from typing import Optional, TypedDict
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sitestack.utils.logger import get_logger

logger = get_logger(__name__)


class AWSCredentials(TypedDict, total=False):
    """Credential shape handed to the CloudFormation client"""
    access_key: str
    secret_key: str
    region: str


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Everything except the AWS key pair has a usable default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # AWS Configuration
    aws_access_key_id: str = Field(
        default="",
        description="AWS Access Key ID used for CloudFormation calls"
    )
    aws_secret_access_key: str = Field(
        default="",
        description="AWS Secret Access Key used for CloudFormation calls"
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region the stack is created in"
    )

    # Stack Configuration
    dns_enabled: bool = Field(
        default=False,
        description="Create a Route53 hosted zone and alias record for the site"
    )
    stack_poll_interval: int = Field(
        default=15,
        ge=1,
        description="Seconds between stack event polls"
    )
    stack_timeout_minutes: int = Field(
        default=30,
        ge=1,
        description="Minutes to wait for the root stack to settle"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    @property
    def credentials(self) -> AWSCredentials:
        """
        Returns the credential mapping expected by CloudFormationClient
        """
        return {
            "access_key": self.aws_access_key_id,
            "secret_key": self.aws_secret_access_key,
            "region": self.aws_region,
        }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("aws_region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Regions are lower-case, e.g. eu-west-1"""
        v = v.strip().lower()
        if not v:
            raise ValueError("aws_region cannot be empty")
        return v

    def has_aws_config(self) -> bool:
        """Check if the AWS key pair is configured"""
        return bool(self.aws_access_key_id and self.aws_secret_access_key)


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the settings singleton instance.
    Reads the .env file when present, otherwise plain environment variables.

    Returns:
        Settings instance

    Raises:
        ValidationError: If environment variables are present but invalid
    """
    global _settings

    if _settings is None:
        if not Path(".env").exists():
            logger.debug(".env file not found, using environment variables only")

        _settings = Settings()

    return _settings


def reset_settings():
    """
    Reset the settings singleton (useful for testing)
    """
    global _settings
    _settings = None

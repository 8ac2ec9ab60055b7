"""
Business logic and service layer
"""

from sitestack.services.deployment_status import (
    DeploymentOutcome,
    classify,
    is_failed,
    is_succeeded,
)
from sitestack.services.site_deployment_service import SiteDeploymentService, SiteDeploymentError

__all__ = [
    # Status classification
    "DeploymentOutcome",
    "classify",
    "is_failed",
    "is_succeeded",
    # Pipeline
    "SiteDeploymentService",
    "SiteDeploymentError",
]

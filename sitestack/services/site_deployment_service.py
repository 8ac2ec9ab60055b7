"""
Site Deployment Service
Builds the static-site template, submits it to CloudFormation and polls
the stack event log until the root stack succeeds or rolls back.
"""

import time
from typing import Any, Dict, Optional

from sitestack.api.cloudformation_client import CloudFormationClient
from sitestack.api.exceptions import (
    APIError,
    StackRollbackError,
    StackTimeoutError,
    TemplateIntegrityError,
)
from sitestack.services.deployment_status import DeploymentOutcome, classify
from sitestack.template.composer import USER_DOMAIN, build_template, check_integrity
from sitestack.template.models import SiteConfig
from sitestack.utils.config import Settings, get_settings
from sitestack.utils.logger import get_logger
from sitestack.utils.validators import ValidationError, validate_domain, validate_stack_name

logger = get_logger(__name__)


class SiteDeploymentError(Exception):
    """Raised when any step of the site deployment fails"""
    pass


class SiteDeploymentService:
    """
    End-to-end static-site stack deployment.

    1. Validate the stack name and domain
    2. Build the template (with Route53 when dns_enabled)
    3. Check template integrity
    4. Create the stack (CAPABILITY_IAM)
    5. Poll stack events until CREATE_COMPLETE or ROLLBACK_COMPLETE
    6. Read stack outputs (bucket name, access key, CDN URL)
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        client: Optional[CloudFormationClient] = None,
    ):
        """
        Initialize the service with a shared configuration.

        Args:
            config: Optional Settings object. Defaults to get_settings().
            client: Optional CloudFormationClient. Built from config if None.
        """
        self.config = config or get_settings()
        self.client = client or CloudFormationClient(config=self.config)

    def deploy(
        self,
        stack_name: str,
        domain: str,
        dns_enabled: Optional[bool] = None,
        wait: bool = True,
        timeout_minutes: Optional[int] = None,
        poll_interval: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Create the site stack and (optionally) wait for it.

        Args:
            stack_name:      CloudFormation stack name
            domain:          Domain served by the CloudFront distribution
            dns_enabled:     Add hosted zone + alias record (default: config.dns_enabled)
            wait:            Block until the root stack settles (default True)
            timeout_minutes: Max wait (default: config.stack_timeout_minutes)
            poll_interval:   Seconds between polls (default: config.stack_poll_interval)

        Returns:
            Dict with keys:
              - stack_id  (str)
              - status    (DeploymentOutcome)
              - outputs   (dict, empty unless the stack succeeded)

        Raises:
            SiteDeploymentError: If validation, submission or the deployment fails
        """
        if dns_enabled is None:
            dns_enabled = self.config.dns_enabled

        try:
            stack_name = validate_stack_name(stack_name)
            domain = validate_domain(domain)

            logger.info(f"🚀 Deploying static site stack {stack_name} for {domain}")
            logger.info(f"   DNS: {'Route53 hosted zone' if dns_enabled else 'disabled'}")

            template = check_integrity(build_template(SiteConfig(dns_enabled=dns_enabled)))
            logger.info(f"   Template: {len(template.resources)} resources, {len(template.outputs)} outputs")

            stack_id = self.client.create_stack(
                stack_name=stack_name,
                template=template,
                parameters={USER_DOMAIN: domain},
            )

            if not wait:
                logger.info("⏳ Not waiting for completion (wait=False)")
                return {"stack_id": stack_id, "status": DeploymentOutcome.PENDING, "outputs": {}}

            status = self.wait_for_stack(
                stack_id,
                timeout_minutes=timeout_minutes,
                poll_interval=poll_interval,
            )
            outputs = self.client.get_stack_outputs(stack_id)

            logger.info(f"🎉 Stack {stack_name} is ready")
            return {"stack_id": stack_id, "status": status, "outputs": outputs}

        except (ValidationError, TemplateIntegrityError, APIError) as exc:
            logger.error(f"❌ Site deployment failed: {exc}")
            raise SiteDeploymentError(str(exc)) from exc

    def get_status(self, stack_id: str) -> DeploymentOutcome:
        """Classify the current event snapshot of a stack."""
        return classify(self.client.get_stack_events(stack_id))

    def wait_for_stack(
        self,
        stack_id: str,
        timeout_minutes: Optional[int] = None,
        poll_interval: Optional[int] = None,
    ) -> DeploymentOutcome:
        """
        Block until the root stack reaches a terminal status.

        Args:
            stack_id:        Stack name or id
            timeout_minutes: Max wait time (default: config.stack_timeout_minutes)
            poll_interval:   Seconds between polls (default: config.stack_poll_interval)

        Returns:
            DeploymentOutcome.SUCCEEDED

        Raises:
            StackRollbackError: If the root stack rolled back
            StackTimeoutError:  If not settled within timeout
        """
        if timeout_minutes is None:
            timeout_minutes = self.config.stack_timeout_minutes
        if poll_interval is None:
            poll_interval = self.config.stack_poll_interval

        logger.info(f"⏳ Waiting for stack {stack_id} to settle…")
        deadline = time.time() + timeout_minutes * 60

        while time.time() < deadline:
            outcome = self.get_status(stack_id)
            logger.info(f"  Stack status: {outcome.value}")

            if outcome is DeploymentOutcome.SUCCEEDED:
                logger.info("✅ Stack CREATE_COMPLETE")
                return outcome
            if outcome is DeploymentOutcome.FAILED:
                raise StackRollbackError(
                    f"Stack {stack_id} rolled back (ROLLBACK_COMPLETE)"
                )

            logger.info(f"  Waiting {poll_interval}s before next check…")
            time.sleep(poll_interval)

        raise StackTimeoutError(
            f"Stack {stack_id} not complete within {timeout_minutes} minutes"
        )

    def get_outputs(self, stack_id: str) -> Dict[str, Dict[str, str]]:
        return self.client.get_stack_outputs(stack_id)

    def delete(self, stack_id: str) -> None:
        self.client.delete_stack(stack_id)

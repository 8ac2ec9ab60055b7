"""
CloudFormation Client
Submits site templates and reads back stack events and outputs.
"""

from typing import Any, Dict, List, Mapping, Optional

import boto3
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)

from sitestack.api.exceptions import (
    NetworkError,
    StackAlreadyExistsError,
    StackAPIError,
    StackNotFoundError,
    ThrottlingError,
)
from sitestack.api.models import StackEvent
from sitestack.template.models import Template
from sitestack.template.parameters import to_parameter_bindings
from sitestack.template.serializer import render_template_body
from sitestack.utils.casing import from_wire
from sitestack.utils.config import AWSCredentials, Settings, get_settings
from sitestack.utils.logger import get_logger
from sitestack.utils.validators import validate_credentials

logger = get_logger(__name__)

# Required because the template creates an IAM user and access key
CAPABILITIES = ["CAPABILITY_IAM"]

THROTTLING_CODES = {"Throttling", "ThrottlingException", "RequestLimitExceeded"}

TRANSPORT_ERRORS = (EndpointConnectionError, ConnectionClosedError, ReadTimeoutError)


def _translate_error(e: Exception, action: str) -> StackAPIError:
    """Map a botocore failure to the package's exception hierarchy."""
    if isinstance(e, TRANSPORT_ERRORS):
        return NetworkError(f"{action} failed: {e}")
    if not isinstance(e, ClientError):
        return StackAPIError(f"{action} failed: {e}")

    error = e.response.get("Error", {})
    code = error.get("Code", "")
    message = error.get("Message", str(e))

    if code in THROTTLING_CODES:
        error_cls = ThrottlingError
    elif code == "AlreadyExistsException":
        error_cls = StackAlreadyExistsError
    elif code == "ValidationError" and "does not exist" in message:
        error_cls = StackNotFoundError
    else:
        error_cls = StackAPIError

    return error_cls(f"{action} failed: {message}", error_code=code, response_data=e.response)


# Read-only calls only; stack creation is never retried
retry_reads = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((ThrottlingError, NetworkError)),
    reraise=True
)


class CloudFormationClient:
    """
    Thin wrapper around the boto3 CloudFormation client.

    Credentials are checked before the boto3 client is built, so a missing
    key pair fails fast without any network traffic.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        credentials: Optional[AWSCredentials] = None,
    ):
        """
        Initialize the CloudFormation client.

        Args:
            config:      Optional Settings object. Defaults to get_settings().
            credentials: Optional credential mapping. Defaults to config.credentials.

        Raises:
            InvalidCredentialError: If the credential shape is invalid
        """
        self.config = config or get_settings()
        self.credentials = validate_credentials(
            credentials if credentials is not None else self.config.credentials
        )
        self.region = self.credentials.get("region") or self.config.aws_region

        self.client = boto3.client(
            "cloudformation",
            aws_access_key_id=self.credentials["access_key"],
            aws_secret_access_key=self.credentials["secret_key"],
            region_name=self.region,
        )

        logger.info(f"CloudFormationClient initialized (Region: {self.region})")

    def create_stack(
        self,
        stack_name: str,
        template: Template,
        parameters: Mapping[str, str],
    ) -> str:
        """
        Submit ``template`` as a new stack.

        Args:
            stack_name: Name of the stack to create
            template:   Template from build_template()
            parameters: Internal parameter names mapped to values,
                        e.g. {"user-domain": "example.com"}

        Returns:
            The stack id (ARN)

        Raises:
            StackAlreadyExistsError: If the name is taken
            StackAPIError: On any other CloudFormation failure
        """
        logger.info(f"Creating stack: {stack_name}")
        bindings = to_parameter_bindings(parameters)

        try:
            response = self.client.create_stack(
                StackName=stack_name,
                TemplateBody=render_template_body(template),
                Capabilities=CAPABILITIES,
                Parameters=[b.as_boto() for b in bindings],
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"create_stack failed: {e}")
            raise _translate_error(e, "create_stack") from e

        stack_id = response["StackId"]
        logger.info(f"✅ Stack creation started: {stack_id}")
        return stack_id

    @retry_reads
    def get_stack_events(self, stack_id: str) -> List[StackEvent]:
        """
        Fetch the full event log of a stack, oldest event first.

        Args:
            stack_id: Stack name or id

        Returns:
            List of StackEvent
        """
        logger.debug(f"Fetching events for {stack_id}")
        raw_events: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {"StackName": stack_id}

        try:
            while True:
                response = self.client.describe_stack_events(**kwargs)
                raw_events.extend(response.get("StackEvents", []))
                next_token = response.get("NextToken")
                if not next_token:
                    break
                kwargs["NextToken"] = next_token
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"describe_stack_events failed: {e}")
            raise _translate_error(e, "describe_stack_events") from e

        # CloudFormation returns newest first
        return [StackEvent.from_boto(event) for event in reversed(raw_events)]

    @retry_reads
    def get_stack_outputs(self, stack_id: str) -> Dict[str, Dict[str, str]]:
        """
        Fetch stack outputs keyed by internal output name.

        Returns:
            e.g. {"bucket-name": {"value": "...", "description": "..."}}
        """
        logger.debug(f"Fetching outputs for {stack_id}")
        try:
            response = self.client.describe_stacks(StackName=stack_id)
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"describe_stacks failed: {e}")
            raise _translate_error(e, "describe_stacks") from e

        stacks = response.get("Stacks", [])
        if not stacks:
            raise StackNotFoundError(f"Stack {stack_id} does not exist")

        return {
            from_wire(output["OutputKey"]): {
                "value": output.get("OutputValue", ""),
                "description": output.get("Description", ""),
            }
            for output in stacks[0].get("Outputs", [])
        }

    def delete_stack(self, stack_id: str) -> None:
        """Request deletion of a stack (returns immediately)."""
        logger.info(f"Deleting stack: {stack_id}")
        try:
            self.client.delete_stack(StackName=stack_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"delete_stack failed: {e}")
            raise _translate_error(e, "delete_stack") from e
        logger.info(f"✅ Deletion requested for {stack_id}")

"""
Tests for the CloudFormation client.
All AWS API calls are mocked; no real credentials or AWS resources needed.

Run:
    python -m pytest tests/test_cloudformation_client.py -v
"""

import json
from datetime import datetime
from unittest.mock import patch, MagicMock

import pytest
from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    ParamValidationError,
    ReadTimeoutError,
)

from sitestack.api.models import StackEvent
from sitestack.template import SiteConfig, build_template


# ---------------------------------------------------------------------------
# Helpers / fixtures
# ---------------------------------------------------------------------------

STACK_NAME = "my-app-com-site"
STACK_ID = "arn:aws:cloudformation:us-east-1:123456789012:stack/my-app-com-site/abc-123"
DOMAIN = "my-app.com"


def _make_client_error(code: str = "ValidationError", message: str = "Mocked AWS error") -> ClientError:
    return ClientError(
        {"Error": {"Code": code, "Message": message}},
        "TestOperation",
    )


def _mock_settings():
    """Return a minimal mock Settings object."""
    s = MagicMock()
    s.aws_access_key_id = "AKIATEST"
    s.aws_secret_access_key = "testsecret"
    s.aws_region = "us-east-1"
    s.credentials = {"access_key": "AKIATEST", "secret_key": "testsecret", "region": "us-east-1"}
    return s


def _raw_event(status, resource_type="AWS::CloudFormation::Stack", logical_id=STACK_NAME, minute=0):
    return {
        "StackId": STACK_ID,
        "EventId": f"{logical_id}-{status}-{minute}",
        "LogicalResourceId": logical_id,
        "ResourceType": resource_type,
        "ResourceStatus": status,
        "Timestamp": datetime(2026, 1, 1, 12, minute),
    }


# ===========================================================================
# 1. Credentials
# ===========================================================================

class TestCredentials:

    @patch("boto3.client")
    def test_missing_credentials_fail_fast(self, mock_boto):
        """An empty key pair raises before any boto3 client is created."""
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import InvalidCredentialError

        with pytest.raises(InvalidCredentialError):
            CloudFormationClient(config=_mock_settings(), credentials={"access_key": "", "secret_key": "x"})
        mock_boto.assert_not_called()

    @patch("boto3.client")
    def test_non_mapping_credentials_rejected(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import InvalidCredentialError

        with pytest.raises(InvalidCredentialError):
            CloudFormationClient(config=_mock_settings(), credentials=("AKIA", "secret"))
        mock_boto.assert_not_called()

    @patch("boto3.client")
    def test_uses_configured_credentials(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient

        CloudFormationClient(config=_mock_settings())

        mock_boto.assert_called_once_with(
            "cloudformation",
            aws_access_key_id="AKIATEST",
            aws_secret_access_key="testsecret",
            region_name="us-east-1",
        )


# ===========================================================================
# 2. create_stack
# ===========================================================================

class TestCreateStack:

    @patch("boto3.client")
    def test_create_submits_template_and_parameters(self, mock_boto):
        """create_stack should send the wire-cased body, CAPABILITY_IAM and parameters."""
        from sitestack.api.cloudformation_client import CloudFormationClient

        mock_cf = MagicMock()
        mock_cf.create_stack.return_value = {"StackId": STACK_ID}
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        template = build_template(SiteConfig(dns_enabled=True))
        stack_id = client.create_stack(STACK_NAME, template, {"user-domain": DOMAIN})

        assert stack_id == STACK_ID
        kwargs = mock_cf.create_stack.call_args[1]
        assert kwargs["StackName"] == STACK_NAME
        assert kwargs["Capabilities"] == ["CAPABILITY_IAM"]
        assert kwargs["Parameters"] == [{"ParameterKey": "UserDomain", "ParameterValue": DOMAIN}]

        body = json.loads(kwargs["TemplateBody"])
        assert "ZoneRecordSet" in body["Resources"]
        assert body["Outputs"]["BucketName"]["Value"] == {"Ref": "SiteBucket"}

    @patch("boto3.client")
    def test_create_raises_when_stack_exists(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import StackAlreadyExistsError

        mock_cf = MagicMock()
        mock_cf.create_stack.side_effect = _make_client_error("AlreadyExistsException", "Stack exists")
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with pytest.raises(StackAlreadyExistsError) as exc_info:
            client.create_stack(STACK_NAME, build_template(SiteConfig()), {"user-domain": DOMAIN})

        assert exc_info.value.error_code == "AlreadyExistsException"

    @patch("boto3.client")
    def test_create_is_not_retried(self, mock_boto):
        """Stack creation fails once and is not resubmitted, even when throttled."""
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import ThrottlingError

        mock_cf = MagicMock()
        mock_cf.create_stack.side_effect = _make_client_error("Throttling", "Rate exceeded")
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with pytest.raises(ThrottlingError):
            client.create_stack(STACK_NAME, build_template(SiteConfig()), {"user-domain": DOMAIN})
        assert mock_cf.create_stack.call_count == 1


# ===========================================================================
# 3. get_stack_events
# ===========================================================================

class TestGetStackEvents:

    @patch("boto3.client")
    def test_events_follow_pagination_oldest_first(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient

        mock_cf = MagicMock()
        mock_cf.describe_stack_events.side_effect = [
            {
                "StackEvents": [
                    _raw_event("CREATE_COMPLETE", minute=9),
                    _raw_event("CREATE_COMPLETE", "AWS::S3::Bucket", "SiteBucket", minute=5),
                ],
                "NextToken": "page-2",
            },
            {"StackEvents": [_raw_event("CREATE_IN_PROGRESS", minute=0)]},
        ]
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        events = client.get_stack_events(STACK_ID)

        assert [e.resource_status for e in events] == [
            "CREATE_IN_PROGRESS",
            "CREATE_COMPLETE",
            "CREATE_COMPLETE",
        ]
        assert all(isinstance(e, StackEvent) for e in events)
        assert events[1].resource_id == "SiteBucket"
        assert events[0].timestamp == datetime(2026, 1, 1, 12, 0)
        second_call = mock_cf.describe_stack_events.call_args_list[1][1]
        assert second_call == {"StackName": STACK_ID, "NextToken": "page-2"}

    @patch("boto3.client")
    def test_throttled_read_is_retried(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient

        mock_cf = MagicMock()
        mock_cf.describe_stack_events.side_effect = [
            _make_client_error("Throttling", "Rate exceeded"),
            {"StackEvents": [_raw_event("CREATE_COMPLETE")]},
        ]
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with patch("time.sleep"):
            events = client.get_stack_events(STACK_ID)

        assert len(events) == 1
        assert mock_cf.describe_stack_events.call_count == 2

    @patch("boto3.client")
    def test_connection_errors_give_up_after_three_attempts(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import NetworkError

        mock_cf = MagicMock()
        mock_cf.describe_stack_events.side_effect = EndpointConnectionError(
            endpoint_url="https://cloudformation.us-east-1.amazonaws.com"
        )
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with patch("time.sleep"):
            with pytest.raises(NetworkError):
                client.get_stack_events(STACK_ID)

        assert mock_cf.describe_stack_events.call_count == 3

    @patch("boto3.client")
    def test_missing_stack_is_not_retried(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import StackNotFoundError

        mock_cf = MagicMock()
        mock_cf.describe_stack_events.side_effect = _make_client_error(
            "ValidationError", f"Stack [{STACK_NAME}] does not exist"
        )
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with pytest.raises(StackNotFoundError):
            client.get_stack_events(STACK_NAME)
        assert mock_cf.describe_stack_events.call_count == 1

    @patch("boto3.client")
    def test_parameter_validation_is_not_a_network_error(self, mock_boto):
        """Client-side botocore errors fail once as plain StackAPIError."""
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import NetworkError, StackAPIError

        mock_cf = MagicMock()
        mock_cf.describe_stack_events.side_effect = ParamValidationError(
            report="Invalid type for parameter StackName"
        )
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with patch("time.sleep"):
            with pytest.raises(StackAPIError) as exc_info:
                client.get_stack_events(STACK_ID)

        assert not isinstance(exc_info.value, NetworkError)
        assert mock_cf.describe_stack_events.call_count == 1

    @patch("boto3.client")
    def test_read_timeout_is_retried_as_network_error(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient

        mock_cf = MagicMock()
        mock_cf.describe_stacks.side_effect = [
            ReadTimeoutError(endpoint_url="https://cloudformation.us-east-1.amazonaws.com"),
            {"Stacks": [{"StackName": STACK_NAME}]},
        ]
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with patch("time.sleep"):
            assert client.get_stack_outputs(STACK_ID) == {}
        assert mock_cf.describe_stacks.call_count == 2


# ===========================================================================
# 4. get_stack_outputs / delete_stack
# ===========================================================================

class TestOutputsAndDelete:

    @patch("boto3.client")
    def test_outputs_keyed_by_internal_name(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient

        mock_cf = MagicMock()
        mock_cf.describe_stacks.return_value = {
            "Stacks": [
                {
                    "StackName": STACK_NAME,
                    "Outputs": [
                        {"OutputKey": "BucketName", "OutputValue": "my-bucket-xyz", "Description": "Name of the S3 bucket"},
                        {"OutputKey": "SiteCdnUrl", "OutputValue": "d123.cloudfront.net"},
                        {"OutputKey": "HostedZoneId", "OutputValue": "Z123"},
                    ],
                }
            ]
        }
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        outputs = client.get_stack_outputs(STACK_ID)

        assert set(outputs) == {"bucket-name", "site-cdn-url", "hosted-zone-id"}
        assert outputs["bucket-name"] == {"value": "my-bucket-xyz", "description": "Name of the S3 bucket"}
        assert outputs["site-cdn-url"]["description"] == ""

    @patch("boto3.client")
    def test_outputs_of_stack_without_outputs(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient

        mock_cf = MagicMock()
        mock_cf.describe_stacks.return_value = {"Stacks": [{"StackName": STACK_NAME}]}
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        assert client.get_stack_outputs(STACK_ID) == {}

    @patch("boto3.client")
    def test_outputs_raise_when_no_stack(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import StackNotFoundError

        mock_cf = MagicMock()
        mock_cf.describe_stacks.return_value = {"Stacks": []}
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        with pytest.raises(StackNotFoundError):
            client.get_stack_outputs(STACK_ID)

    @patch("boto3.client")
    def test_delete_stack(self, mock_boto):
        from sitestack.api.cloudformation_client import CloudFormationClient
        from sitestack.api.exceptions import StackAPIError

        mock_cf = MagicMock()
        mock_boto.return_value = mock_cf

        client = CloudFormationClient(config=_mock_settings())
        client.delete_stack(STACK_ID)
        mock_cf.delete_stack.assert_called_once_with(StackName=STACK_ID)

        mock_cf.delete_stack.side_effect = _make_client_error("AccessDenied", "nope")
        with pytest.raises(StackAPIError):
            client.delete_stack(STACK_ID)

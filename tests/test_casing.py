"""
Tests for the internal-token <-> wire-key casing transform.
"""

import pytest

from sitestack.utils.casing import (
    from_wire,
    from_wire_set,
    is_wire_safe,
    to_wire,
    to_wire_set,
)

OUTPUT_KEYS = {
    "bucket-name",
    "access-key-id",
    "site-cdn-url",
    "secret-access-key",
    "website-url",
    "hosted-zone-id",
}

PARAMETER_NAMES = {"user-domain", "index-document", "s3-origin", "d-n-s-name", "x", "cache-ttl2"}


@pytest.mark.parametrize(
    "token, wire",
    [
        ("site-bucket", "SiteBucket"),
        ("bucket-user-access-key", "BucketUserAccessKey"),
        ("d-n-s-name", "DNSName"),
        ("s3-origin", "S3Origin"),
        ("user-domain", "UserDomain"),
    ],
)
def test_known_pairs(token, wire):
    assert to_wire(token) == wire
    assert from_wire(wire) == token


@pytest.mark.parametrize("tokens", [OUTPUT_KEYS, PARAMETER_NAMES, OUTPUT_KEYS | PARAMETER_NAMES])
def test_set_round_trip(tokens):
    """Converting to wire casing and back returns the original set."""
    assert all(is_wire_safe(t) for t in tokens)
    wire = to_wire_set(tokens)
    assert len(wire) == len(tokens)
    assert from_wire_set(wire) == tokens


def test_wire_keys_from_cloudformation():
    """Output keys as CloudFormation returns them map back to internal tokens."""
    assert from_wire_set({"BucketName", "SiteCdnUrl", "HostedZoneId"}) == {
        "bucket-name",
        "site-cdn-url",
        "hosted-zone-id",
    }


@pytest.mark.parametrize("token", ["", "Site-Bucket", "site_bucket", "site--bucket", "-site", "site-", "9lives", "cache-2x"])
def test_unsafe_tokens(token):
    assert not is_wire_safe(token)

"""
Resource catalog.

Each builder returns one ResourceDescriptor (or, for ``user_policy``, an
inline policy fragment) and cross-references siblings by rid. Builders do
not check that the rids they are given exist.
"""

from typing import Any, Dict

from sitestack.template import policies
from sitestack.template.models import ResourceDescriptor
from sitestack.template.references import attr, join, ref

# Route53 alias target zone shared by every CloudFront distribution.
# https://docs.aws.amazon.com/AWSCloudFormation/latest/UserGuide/aws-properties-route53-aliastarget.html
CLOUDFRONT_HOSTED_ZONE_ID = "Z2FDTNDATAQYW2"

INDEX_DOCUMENT = "index.html"
ERROR_DOCUMENT = "error.html"

HOSTED_ZONE_TAG = {"key": "sitestack", "value": "site"}


def bucket() -> ResourceDescriptor:
    """Public-read bucket with static website hosting."""
    return ResourceDescriptor(
        kind="AWS::S3::Bucket",
        properties={
            "access-control": "PublicRead",
            "website-configuration": {
                "error-document": ERROR_DOCUMENT,
                "index-document": INDEX_DOCUMENT,
            },
        },
    )


def bucket_policy(bucket_rid: str) -> ResourceDescriptor:
    return ResourceDescriptor(
        kind="AWS::S3::BucketPolicy",
        properties={
            "bucket": ref(bucket_rid),
            "policy-document": policies.bucket_policy(ref(bucket_rid)),
        },
    )


def user_policy(bucket_rid: str) -> Dict[str, Any]:
    """Inline policy fragment for ``user``; not a resource on its own."""
    return {
        "policy-name": join(ref(bucket_rid), "-S3-BucketFullAccess"),
        "policy-document": policies.user_policy(ref(bucket_rid)),
    }


def user(*inline_policies: Dict[str, Any]) -> ResourceDescriptor:
    return ResourceDescriptor(
        kind="AWS::IAM::User",
        properties={"policies": list(inline_policies)},
    )


def access_key(user_rid: str) -> ResourceDescriptor:
    return ResourceDescriptor(
        kind="AWS::IAM::AccessKey",
        properties={
            "status": "Active",
            "user-name": ref(user_rid),
        },
    )


def cdn_distribution(domain_rid: str, bucket_rid: str) -> ResourceDescriptor:
    """
    CloudFront distribution in front of the bucket.

    The bucket is a custom origin (its domain name doubles as origin id),
    plain HTTP is allowed and the user's domain is the single alias.
    """
    origin = attr(bucket_rid, "domain-name")
    return ResourceDescriptor(
        kind="AWS::CloudFront::Distribution",
        properties={
            "distribution-config": {
                "comment": "CDN for S3 backed website",
                "origins": [
                    {
                        "domain-name": origin,
                        "id": origin,
                        "custom-origin-config": {"origin-protocol-policy": "match-viewer"},
                    }
                ],
                "default-cache-behavior": {
                    "target-origin-id": origin,
                    "forwarded-values": {"query-string": "false"},
                    "viewer-protocol-policy": "allow-all",
                },
                "enabled": "true",
                "default-root-object": INDEX_DOCUMENT,
                "aliases": [ref(domain_rid)],
            }
        },
    )


def hosted_zone(domain_rid: str) -> ResourceDescriptor:
    return ResourceDescriptor(
        kind="AWS::Route53::HostedZone",
        properties={
            "hosted-zone-tags": [dict(HOSTED_ZONE_TAG)],
            "name": ref(domain_rid),
        },
    )


def zone_record_set(distribution_rid: str, hosted_zone_rid: str, domain_rid: str) -> ResourceDescriptor:
    """'A' alias record pointing the domain at the distribution."""
    return ResourceDescriptor(
        kind="AWS::Route53::RecordSet",
        properties={
            "alias-target": {
                "d-n-s-name": attr(distribution_rid, "domain-name"),
                "hosted-zone-id": CLOUDFRONT_HOSTED_ZONE_ID,
            },
            "hosted-zone-id": ref(hosted_zone_rid),
            "name": ref(domain_rid),
            "type": "A",
        },
    )

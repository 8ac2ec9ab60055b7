"""
IAM policy documents scoped to the site bucket.

The bucket name is only known once CloudFormation creates it, so every ARN
is a ``Join`` over a ``Ref`` to the bucket.
"""

from typing import Any, Dict

from sitestack.template.references import Reference, join

POLICY_VERSION = "2012-10-17"


def bucket_arn(bucket: Reference) -> Reference:
    return join("arn:aws:s3:::", bucket)


def objects_arn(bucket: Reference) -> Reference:
    return join("arn:aws:s3:::", bucket, "/*")


def bucket_policy(bucket: Reference) -> Dict[str, Any]:
    """Anyone may read objects; nothing else."""
    return {
        "version": POLICY_VERSION,
        "statement": [
            {
                "sid": "PublicReadForGetBucketObjects",
                "effect": "Allow",
                "principal": "*",
                "action": ["s3:GetObject"],
                "resource": [objects_arn(bucket)],
            }
        ],
    }


def user_policy(bucket: Reference) -> Dict[str, Any]:
    """Full access to the bucket and its objects, and to no other bucket."""
    return {
        "version": POLICY_VERSION,
        "statement": [
            {
                "effect": "Allow",
                "action": ["s3:*"],
                "resource": [bucket_arn(bucket), objects_arn(bucket)],
            }
        ],
    }

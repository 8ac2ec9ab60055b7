"""
sitestack - CloudFormation static-site stacks
Synthesizes the S3 + CloudFront (+ Route53) template, submits it and
tracks the deployment until the root stack settles.
"""

__version__ = "0.1.0"

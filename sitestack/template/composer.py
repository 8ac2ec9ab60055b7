"""
Template composer.

Builds the static-site template from the resource catalog. The base stack
is always present; the Route53 extension (resources plus the outputs that
point at them) is built as one disjoint piece and merged in a single step,
so no output can reference a resource that was left out.
"""

from typing import Dict, List, NamedTuple, Union

from sitestack.api.exceptions import TemplateIntegrityError
from sitestack.template import resources as catalog
from sitestack.template.models import Output, Parameter, ResourceDescriptor, SiteConfig, Template, iter_references
from sitestack.template.references import GetAttribute, Ref, attr, join, ref
from sitestack.utils.casing import to_wire

DESCRIPTION = "Static website: S3 bucket behind CloudFront"

# Resource identifiers
SITE_BUCKET = "site-bucket"
BUCKET_POLICY = "bucket-policy"
BUCKET_USER = "bucket-user"
BUCKET_USER_ACCESS_KEY = "bucket-user-access-key"
SITE_CDN = "site-cdn"
HOSTED_ZONE = "hosted-zone"
ZONE_RECORD_SET = "zone-record-set"

# Parameters
USER_DOMAIN = "user-domain"


class _Section(NamedTuple):
    resources: Dict[str, ResourceDescriptor]
    outputs: Dict[str, Output]


def _base_section() -> _Section:
    return _Section(
        resources={
            SITE_BUCKET: catalog.bucket(),
            BUCKET_POLICY: catalog.bucket_policy(SITE_BUCKET),
            BUCKET_USER: catalog.user(catalog.user_policy(SITE_BUCKET)),
            BUCKET_USER_ACCESS_KEY: catalog.access_key(BUCKET_USER),
            SITE_CDN: catalog.cdn_distribution(USER_DOMAIN, SITE_BUCKET),
        },
        outputs={
            "bucket-name": Output(
                value=ref(SITE_BUCKET),
                description="Name of the S3 bucket",
            ),
            "access-key-id": Output(
                value=ref(BUCKET_USER_ACCESS_KEY),
                description="AccessKey that can only access bucket",
            ),
            "site-cdn-url": Output(
                value=attr(SITE_CDN, "domain-name"),
                description="URL to access CloudFront distribution",
            ),
            "secret-access-key": Output(
                value=attr(BUCKET_USER_ACCESS_KEY, "secret-access-key"),
                description="Secret for AccessKey that can only access bucket",
            ),
        },
    )


def _dns_section() -> _Section:
    return _Section(
        resources={
            HOSTED_ZONE: catalog.hosted_zone(USER_DOMAIN),
            ZONE_RECORD_SET: catalog.zone_record_set(SITE_CDN, HOSTED_ZONE, USER_DOMAIN),
        },
        outputs={
            "website-url": Output(
                value=join("http://", ref(ZONE_RECORD_SET)),
                description="URL of your site",
            ),
            "hosted-zone-id": Output(
                value=ref(HOSTED_ZONE),
                description="ID of HostedZone",
            ),
        },
    )


def _merge(base: _Section, extension: _Section) -> _Section:
    overlap = (base.resources.keys() & extension.resources.keys()) | (
        base.outputs.keys() & extension.outputs.keys()
    )
    if overlap:
        raise TemplateIntegrityError(f"Template sections overlap: {sorted(overlap)}")
    return _Section(
        resources={**base.resources, **extension.resources},
        outputs={**base.outputs, **extension.outputs},
    )


def build_template(config: SiteConfig) -> Template:
    """
    Compose the stack template for ``config``.

    Returns the same structure for the same config on every call.
    """
    section = _base_section()
    if config.dns_enabled:
        section = _merge(section, _dns_section())

    return Template(
        description=DESCRIPTION,
        parameters={USER_DOMAIN: Parameter(type="String")},
        resources=section.resources,
        outputs=section.outputs,
    )


def dangling_references(template: Template) -> List[Union[Ref, GetAttribute]]:
    """
    References whose target is not declared by ``template``.

    ``GetAttribute`` needs a resource; ``Ref`` may also name a parameter.
    """
    resource_ids = set(template.resources)
    ref_targets = resource_ids | set(template.parameters)

    dangling = []
    for node in iter_references([template.resources, template.outputs]):
        known = ref_targets if isinstance(node, Ref) else resource_ids
        if node.target not in known:
            dangling.append(node)
    return dangling


def _collisions(names) -> List[str]:
    seen: Dict[str, str] = {}
    collisions = []
    for name in names:
        key = to_wire(name)
        if key in seen and seen[key] != name:
            collisions.append(name)
        seen.setdefault(key, name)
    return collisions


def wire_collisions(template: Template) -> List[str]:
    """Internal names that map to the same wire key as another name."""
    # Parameters and resources share the Ref namespace; outputs have their own
    return _collisions([*template.parameters, *template.resources]) + _collisions(template.outputs)


def check_integrity(template: Template) -> Template:
    """
    Raise TemplateIntegrityError if the template has dangling references or
    names that collide once wire cased; return it unchanged otherwise.
    """
    dangling = dangling_references(template)
    if dangling:
        raise TemplateIntegrityError(
            f"Template references undeclared targets: {sorted({n.target for n in dangling})}"
        )
    collisions = wire_collisions(template)
    if collisions:
        raise TemplateIntegrityError(f"Names collide after wire casing: {collisions}")
    return template

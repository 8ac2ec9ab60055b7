"""
Template synthesis: references, resource catalog, composer, parameters, serializer
"""

from sitestack.template.references import Ref, GetAttribute, Join, Reference, ref, attr, join
from sitestack.template.models import SiteConfig, ResourceDescriptor, Parameter, Output, Template, iter_references
from sitestack.template.composer import (
    build_template,
    check_integrity,
    dangling_references,
    wire_collisions,
)
from sitestack.template.parameters import ParameterBinding, to_parameter_bindings
from sitestack.template.serializer import render_template_body, template_to_wire

__all__ = [
    # References
    "Ref",
    "GetAttribute",
    "Join",
    "Reference",
    "ref",
    "attr",
    "join",
    "iter_references",
    # Models
    "SiteConfig",
    "ResourceDescriptor",
    "Parameter",
    "Output",
    "Template",
    # Composer
    "build_template",
    "check_integrity",
    "dangling_references",
    "wire_collisions",
    # Parameters
    "ParameterBinding",
    "to_parameter_bindings",
    # Serializer
    "render_template_body",
    "template_to_wire",
]

"""
Template serializer.

Turns a Template into the CloudFormation JSON body. This is the only place
internal kebab-case tokens are converted to wire casing; intrinsic
references are rendered as ``Ref`` / ``Fn::GetAtt`` / ``Fn::Join``.
"""

import json
from typing import Any, Dict, Mapping

from sitestack.template.models import Output, Parameter, ResourceDescriptor, Template
from sitestack.template.references import GetAttribute, Join, Ref
from sitestack.utils.casing import to_wire

TEMPLATE_FORMAT_VERSION = "2010-09-09"


def to_wire_value(value: Any) -> Any:
    """Recursively convert one template value to its wire form."""
    if isinstance(value, Ref):
        return {"Ref": to_wire(value.target)}
    if isinstance(value, GetAttribute):
        return {"Fn::GetAtt": [to_wire(value.target), to_wire(value.property)]}
    if isinstance(value, Join):
        return {"Fn::Join": ["", [to_wire_value(part) for part in value.parts]]}
    if isinstance(value, ResourceDescriptor):
        return {"Type": value.kind, "Properties": to_wire_value(value.properties)}
    if isinstance(value, Output):
        return {"Value": to_wire_value(value.value), "Description": value.description}
    if isinstance(value, Parameter):
        return {"Type": value.type}
    if isinstance(value, Mapping):
        return {to_wire(k): to_wire_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire_value(item) for item in value]
    return value


def template_to_wire(template: Template) -> Dict[str, Any]:
    return {
        "AWSTemplateFormatVersion": TEMPLATE_FORMAT_VERSION,
        "Description": template.description,
        "Parameters": to_wire_value(template.parameters),
        "Resources": to_wire_value(template.resources),
        "Outputs": to_wire_value(template.outputs),
    }


def render_template_body(template: Template, indent: Any = None) -> str:
    """JSON text for ``create_stack(TemplateBody=...)``."""
    return json.dumps(template_to_wire(template), indent=indent, sort_keys=indent is not None)

"""
Template value types.

Templates are built fresh for every deployment and never mutated. Property
values are frozen all the way down: mappings become read-only views and
lists become tuples.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union

from sitestack.template.references import GetAttribute, Join, Ref, Reference


def _frozen(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _frozen(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_frozen(item) for item in value)
    return value


@dataclass(frozen=True)
class SiteConfig:
    """Inputs that shape the template. ``dns_enabled`` adds Route53."""
    dns_enabled: bool = False


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    One CloudFormation resource.

    Attributes:
        kind:       Resource type tag, e.g. ``AWS::S3::Bucket``
        properties: Kebab-case property names mapped to literals,
                    references, tuples or nested mappings
    """
    kind: str
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "properties", _frozen(self.properties))


@dataclass(frozen=True)
class Parameter:
    type: str = "String"


@dataclass(frozen=True)
class Output:
    value: Reference
    description: str


@dataclass(frozen=True)
class Template:
    """
    A complete stack template.

    Keys of ``parameters``, ``resources`` and ``outputs`` are internal
    kebab-case tokens; they are wire cased only by the serializer.
    """
    description: str
    parameters: Mapping[str, Parameter]
    resources: Mapping[str, ResourceDescriptor]
    outputs: Mapping[str, Output]

    def __post_init__(self):
        object.__setattr__(self, "parameters", _frozen(self.parameters))
        object.__setattr__(self, "resources", _frozen(self.resources))
        object.__setattr__(self, "outputs", _frozen(self.outputs))


def iter_references(value: Any) -> Iterator[Union[Ref, GetAttribute]]:
    """
    Yield every Ref/GetAttribute node reachable from ``value``.

    Walks resource descriptors, outputs, Join parts, mappings and
    lists or tuples.
    """
    if isinstance(value, (Ref, GetAttribute)):
        yield value
    elif isinstance(value, Join):
        for part in value.parts:
            yield from iter_references(part)
    elif isinstance(value, ResourceDescriptor):
        yield from iter_references(value.properties)
    elif isinstance(value, Output):
        yield from iter_references(value.value)
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from iter_references(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_references(item)

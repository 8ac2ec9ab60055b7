"""
Intrinsic reference nodes.

``Ref``, ``GetAttribute`` and ``Join`` are symbolic: they are embedded in
resource properties and outputs and only CloudFormation resolves them.
Nothing here checks that a target exists; the composer guarantees that.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Ref:
    """Pointer to a resource's (or parameter's) identity."""
    target: str


@dataclass(frozen=True)
class GetAttribute:
    """Pointer to a named attribute of a resource, e.g. its domain name."""
    target: str
    property: str


@dataclass(frozen=True)
class Join:
    """Concatenation with an empty separator."""
    parts: Tuple[Union[str, "Ref", "GetAttribute", "Join"], ...]


Reference = Union[Ref, GetAttribute, Join]


def ref(target: str) -> Ref:
    return Ref(target)


def attr(target: str, property: str) -> GetAttribute:
    return GetAttribute(target, property)


def join(*parts: Union[str, Reference]) -> Join:
    return Join(tuple(parts))

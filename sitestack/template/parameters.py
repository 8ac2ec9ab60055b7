"""
Parameter mapping: internal key/value config -> CloudFormation parameter list.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping

from sitestack.utils.casing import to_wire


@dataclass(frozen=True)
class ParameterBinding:
    """One stack parameter; ``key`` is already wire cased."""
    key: str
    value: str

    def as_boto(self) -> Dict[str, str]:
        return {"ParameterKey": self.key, "ParameterValue": self.value}


def to_parameter_bindings(values: Mapping[str, str]) -> List[ParameterBinding]:
    """
    ``{"user-domain": "example.com"}`` -> ``[ParameterBinding("UserDomain", "example.com")]``

    CloudFormation matches parameters by key, so only the order of
    ``values`` is kept, not relied upon.
    """
    return [ParameterBinding(key=to_wire(k), value=str(v)) for k, v in values.items()]

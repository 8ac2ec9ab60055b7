"""
Boundary types returned by the CloudFormation client
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class StackEvent:
    """One entry of a stack's event log (DescribeStackEvents)."""
    resource_type: str
    resource_status: str
    resource_id: str = ""
    timestamp: Optional[datetime] = None
    status_reason: Optional[str] = None

    @classmethod
    def from_boto(cls, event: Mapping[str, Any]) -> "StackEvent":
        return cls(
            resource_type=event.get("ResourceType", ""),
            resource_status=event.get("ResourceStatus", ""),
            resource_id=event.get("LogicalResourceId", ""),
            timestamp=event.get("Timestamp"),
            status_reason=event.get("ResourceStatusReason"),
        )

"""
Deployment status classifier.

Reads a snapshot of a stack's event log and decides whether the root stack
finished creating, rolled back, or is still in progress. Only events whose
resource type is the root-stack marker count; nested resources reaching a
terminal status never decide the outcome.
"""

from enum import Enum
from typing import Any, Iterable, Mapping, Union

from sitestack.api.models import StackEvent

ROOT_STACK_TYPE = "AWS::CloudFormation::Stack"
CREATE_COMPLETE = "CREATE_COMPLETE"
ROLLBACK_COMPLETE = "ROLLBACK_COMPLETE"

EventLike = Union[StackEvent, Mapping[str, Any]]


class DeploymentOutcome(str, Enum):
    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not DeploymentOutcome.PENDING


def _as_event(event: EventLike) -> StackEvent:
    if isinstance(event, StackEvent):
        return event
    return StackEvent.from_boto(event)


def _has_root_status(events: Iterable[EventLike], status: str) -> bool:
    # The whole snapshot is scanned: the terminal event need not be the newest one
    for event in map(_as_event, events):
        if event.resource_type == ROOT_STACK_TYPE and event.resource_status == status:
            return True
    return False


def is_succeeded(events: Iterable[EventLike]) -> bool:
    """True if the root stack reported CREATE_COMPLETE."""
    return _has_root_status(events, CREATE_COMPLETE)


def is_failed(events: Iterable[EventLike]) -> bool:
    """True if the root stack reported ROLLBACK_COMPLETE."""
    return _has_root_status(events, ROLLBACK_COMPLETE)


def classify(events: Iterable[EventLike]) -> DeploymentOutcome:
    """
    Combine both predicates into one outcome.

    A log that satisfies both (e.g. a reused stack name) is FAILED.
    """
    events = list(events)
    if is_failed(events):
        return DeploymentOutcome.FAILED
    if is_succeeded(events):
        return DeploymentOutcome.SUCCEEDED
    return DeploymentOutcome.PENDING

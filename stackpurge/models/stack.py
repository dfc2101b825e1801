"""Stack and resource models.

Stacks are read-only snapshots of what the provider reports. Resources are
discovered per stack and classified once, when built, so cleanup dispatch
never compares provider type strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class StackType(Enum):
    """Stack category, taken from the stack's ``type`` tag."""

    ALL = "*"
    SCHEDULE = "schedule"
    SERVICE = "service"
    ENVIRONMENT = "environment"
    PIPELINE = "pipeline"
    BUCKET = "bucket"
    REPO = "repo"
    VPC = "vpc"
    IAM = "iam"

    # Environment tiers, removed by the environment teardown
    DATABASE = "database"
    LOADBALANCER = "loadbalancer"
    CONSUL = "consul"
    TARGET = "target"


class ResourceKind(Enum):
    """Resource classes that need cleanup around a stack delete."""

    BUCKET = "AWS::S3::Bucket"
    REPOSITORY = "AWS::ECR::Repository"
    ROLE = "AWS::IAM::Role"
    OTHER = "other"

    @classmethod
    def from_resource_type(cls, resource_type: str) -> "ResourceKind":
        for kind in cls:
            if kind.value == resource_type:
                return kind
        return cls.OTHER


def create_stack_name(namespace: str, stack_type: StackType, *names: str) -> str:
    """Build a stack name as ``<namespace>-<type>-<name...>``."""
    return "-".join([namespace, stack_type.value, *names])


@dataclass
class Stack:
    """Provider-tracked group of resources.

    Attributes:
        name: Unique stack name
        status: Provider lifecycle status (e.g. CREATE_COMPLETE)
        status_reason: Diagnostic text for the status
        tags: Stack tags (``type``, ``service``, ``environment``, ``namespace``)
        last_update_time: When the stack last changed
    """

    name: str
    status: str = ""
    status_reason: str = ""
    tags: Dict[str, str] = field(default_factory=dict)
    last_update_time: Optional[datetime] = None

    @property
    def stack_type(self) -> Optional[str]:
        """Raw ``type`` tag, None when the stack is untyped."""
        return self.tags.get("type") or None

    @classmethod
    def from_cloudformation(cls, data: Dict[str, Any]) -> "Stack":
        """Build a Stack from a CloudFormation ``describe_stacks`` entry."""
        tags = {tag["Key"]: tag["Value"] for tag in data.get("Tags", [])}
        # mu tags are written with a "mu:" prefix
        tags = {key.split(":", 1)[-1] if key.startswith("mu:") else key: value for key, value in tags.items()}

        return cls(
            name=data["StackName"],
            status=data.get("StackStatus", ""),
            status_reason=data.get("StackStatusReason", ""),
            tags=tags,
            last_update_time=data.get("LastUpdatedTime") or data.get("CreationTime"),
        )


@dataclass(frozen=True)
class Resource:
    """Single provisioned item belonging to a stack.

    Attributes:
        resource_type: Provider type string (e.g. AWS::S3::Bucket)
        physical_resource_id: Provider-assigned identifier
        kind: Cleanup classification derived from resource_type
    """

    resource_type: str
    physical_resource_id: str
    kind: ResourceKind = field(init=False)

    def __post_init__(self) -> None:
        if not self.physical_resource_id:
            raise ValueError(f"Resource of type {self.resource_type} has no physical resource id")
        object.__setattr__(self, "kind", ResourceKind.from_resource_type(self.resource_type))

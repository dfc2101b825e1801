"""Tests for stack and resource models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from stackpurge.models.purge_summary import PurgeSummary
from stackpurge.models.stack import Resource, ResourceKind, Stack, StackType, create_stack_name
from tests.fixtures.stacks import create_stack


class TestResource:
    """Tests for Resource classification."""

    @pytest.mark.parametrize(
        "resource_type,kind",
        [
            ("AWS::S3::Bucket", ResourceKind.BUCKET),
            ("AWS::ECR::Repository", ResourceKind.REPOSITORY),
            ("AWS::IAM::Role", ResourceKind.ROLE),
            ("AWS::EC2::VPC", ResourceKind.OTHER),
        ],
    )
    def test_kind_resolved_from_resource_type(self, resource_type: str, kind: ResourceKind) -> None:
        """Test kind is derived once from the provider type string."""
        resource = Resource(resource_type=resource_type, physical_resource_id="id-1")

        assert resource.kind == kind

    def test_requires_physical_resource_id(self) -> None:
        """Test a resource without a physical id is rejected."""
        with pytest.raises(ValueError, match="no physical resource id"):
            Resource(resource_type="AWS::S3::Bucket", physical_resource_id="")


class TestStack:
    """Tests for Stack."""

    def test_stack_type_from_tag(self) -> None:
        assert create_stack("mu-vpc-dev", "vpc").stack_type == "vpc"

    def test_untyped_stack(self) -> None:
        assert create_stack("other").stack_type is None
        assert Stack(name="blank", tags={"type": ""}).stack_type is None

    def test_from_cloudformation_strips_tag_prefix(self) -> None:
        """Test CloudFormation data maps to a Stack with unprefixed tags."""
        updated = datetime(2025, 2, 1, 12, 0, 0, tzinfo=timezone.utc)
        stack = Stack.from_cloudformation(
            {
                "StackName": "mu-service-api-dev",
                "StackStatus": "UPDATE_COMPLETE",
                "StackStatusReason": "done",
                "LastUpdatedTime": updated,
                "Tags": [
                    {"Key": "mu:type", "Value": "service"},
                    {"Key": "mu:service", "Value": "api"},
                    {"Key": "Owner", "Value": "team-a"},
                ],
            }
        )

        assert stack.name == "mu-service-api-dev"
        assert stack.status == "UPDATE_COMPLETE"
        assert stack.status_reason == "done"
        assert stack.last_update_time == updated
        assert stack.tags == {"type": "service", "service": "api", "Owner": "team-a"}

    def test_from_cloudformation_falls_back_to_creation_time(self) -> None:
        created = datetime(2025, 1, 1, tzinfo=timezone.utc)
        stack = Stack.from_cloudformation({"StackName": "s", "CreationTime": created})

        assert stack.last_update_time == created
        assert stack.tags == {}


def test_create_stack_name() -> None:
    assert create_stack_name("mu", StackType.SERVICE, "api", "dev") == "mu-service-api-dev"
    assert create_stack_name("mu", StackType.VPC, "dev") == "mu-vpc-dev"


def test_summary_skips_untyped_stacks() -> None:
    """Test the purge summary only counts stacks with a type tag."""
    stacks = [
        create_stack("mu-vpc-dev", "vpc", status_reason="ok"),
        create_stack("unmanaged"),
        create_stack("mu-bucket-codepipeline", "bucket"),
    ]

    summary = PurgeSummary.from_stacks(stacks)

    assert summary.stack_count == 2
    assert [c.name for c in summary.candidates] == ["mu-vpc-dev", "mu-bucket-codepipeline"]
    assert summary.candidates[0].stack_type == "vpc"
    assert summary.candidates[0].status_reason == "ok"

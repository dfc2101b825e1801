"""CloudFormation-backed stack management.

Implements the listing, deletion, waiting and cleanup capabilities the purge
workflows consume, using boto3 paginators throughout.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

from ..models.stack import Resource, Stack, StackType
from ..workflows.interfaces import (
    EcrRepoDeleter,
    RoleDeleter,
    S3StackDeleter,
    StackDeleter,
    StackLister,
    StackWaiter,
)
from .client import create_boto_client

logger = logging.getLogger(__name__)

# delete_objects accepts at most 1000 keys, batch_delete_image 100 image ids
S3_DELETE_BATCH = 1000
ECR_DELETE_BATCH = 100


def _chunks(items: List[Any], size: int) -> List[List[Any]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


class CloudFormationStackManager(
    StackLister, StackDeleter, StackWaiter, S3StackDeleter, EcrRepoDeleter, RoleDeleter
):
    """Stack manager for CloudFormation, S3, ECR and IAM.

    Attributes:
        region: AWS region (default: from the session)
        aws_profile: AWS profile name (optional)
        poll_interval: Seconds between status checks while waiting
    """

    def __init__(
        self,
        region: Optional[str] = None,
        aws_profile: Optional[str] = None,
        poll_interval: float = 10.0,
    ) -> None:
        self.region = region
        self.aws_profile = aws_profile
        self.poll_interval = poll_interval
        self._clients: Dict[str, Any] = {}

    def _client(self, service_name: str) -> Any:
        if service_name not in self._clients:
            self._clients[service_name] = create_boto_client(
                service_name=service_name,
                region_name=self.region,
                profile_name=self.aws_profile,
            )
        return self._clients[service_name]

    def list_stacks(self, stack_type: StackType) -> List[Stack]:
        paginator = self._client("cloudformation").get_paginator("describe_stacks")

        stacks = []
        for page in paginator.paginate():
            for data in page.get("Stacks", []):
                if data.get("StackStatus") == "DELETE_COMPLETE":
                    continue
                stack = Stack.from_cloudformation(data)
                if stack_type == StackType.ALL or stack.tags.get("type") == stack_type.value:
                    stacks.append(stack)

        logger.debug(f"Listed {len(stacks)} stacks of type {stack_type.value}")
        return stacks

    def get_resources_for_stack(self, stack: Stack) -> List[Resource]:
        paginator = self._client("cloudformation").get_paginator("list_stack_resources")

        resources = []
        for page in paginator.paginate(StackName=stack.name):
            for summary in page.get("StackResourceSummaries", []):
                physical_id = summary.get("PhysicalResourceId")
                if not physical_id:
                    # never created, nothing to clean up
                    continue
                resources.append(Resource(resource_type=summary["ResourceType"], physical_resource_id=physical_id))

        return resources

    def delete_stack(self, stack_name: str) -> None:
        logger.info(f"Deleting stack {stack_name}")
        self._client("cloudformation").delete_stack(StackName=stack_name)

    def await_final_status(self, stack_name: str) -> Optional[Stack]:
        client = self._client("cloudformation")

        while True:
            try:
                response = client.describe_stacks(StackName=stack_name)
            except ClientError as e:
                error_message = e.response.get("Error", {}).get("Message", "")
                if "does not exist" in error_message:
                    return None
                raise

            if not response.get("Stacks"):
                return None

            stack = Stack.from_cloudformation(response["Stacks"][0])
            if not stack.status.endswith("_IN_PROGRESS"):
                return stack

            logger.debug(f"Stack {stack_name} is {stack.status}, waiting")
            time.sleep(self.poll_interval)

    def delete_s3_bucket_objects(self, bucket_name: str) -> None:
        client = self._client("s3")
        paginator = client.get_paginator("list_object_versions")

        deleted = 0
        for page in paginator.paginate(Bucket=bucket_name):
            objects = [
                {"Key": version["Key"], "VersionId": version["VersionId"]}
                for version in page.get("Versions", []) + page.get("DeleteMarkers", [])
            ]
            for batch in _chunks(objects, S3_DELETE_BATCH):
                client.delete_objects(Bucket=bucket_name, Delete={"Objects": batch, "Quiet": True})
                deleted += len(batch)

        logger.debug(f"Deleted {deleted} objects from bucket {bucket_name}")

    def delete_s3_bucket(self, bucket_name: str) -> None:
        self._client("s3").delete_bucket(Bucket=bucket_name)

    def delete_images_from_ecr_repo(self, repo_name: str) -> None:
        client = self._client("ecr")
        paginator = client.get_paginator("list_images")

        image_ids = []
        for page in paginator.paginate(repositoryName=repo_name):
            image_ids.extend(page.get("imageIds", []))

        for batch in _chunks(image_ids, ECR_DELETE_BATCH):
            client.batch_delete_image(repositoryName=repo_name, imageIds=batch)

        logger.debug(f"Deleted {len(image_ids)} images from repository {repo_name}")

    def delete_roles_for_namespace(self, namespace: str) -> None:
        """Delete every IAM role named ``<namespace>-*``.

        A role that fails to delete is logged and skipped.

        Raises:
            ValueError: If namespace is empty
        """
        if not namespace:
            raise ValueError("Refusing to delete roles without a namespace")

        client = self._client("iam")
        prefix = f"{namespace}-"

        role_names = []
        for page in client.get_paginator("list_roles").paginate():
            role_names.extend(role["RoleName"] for role in page.get("Roles", []) if role["RoleName"].startswith(prefix))

        for role_name in role_names:
            try:
                self._delete_role(client, role_name)
                logger.info(f"Deleted role {role_name}")
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "Unknown")
                logger.warning(f"Couldn't delete role {role_name}: {error_code}")

    def _delete_role(self, client: Any, role_name: str) -> None:
        # a role can only be deleted once nothing references it
        for page in client.get_paginator("list_attached_role_policies").paginate(RoleName=role_name):
            for policy in page.get("AttachedPolicies", []):
                client.detach_role_policy(RoleName=role_name, PolicyArn=policy["PolicyArn"])

        for page in client.get_paginator("list_role_policies").paginate(RoleName=role_name):
            for policy_name in page.get("PolicyNames", []):
                client.delete_role_policy(RoleName=role_name, PolicyName=policy_name)

        for page in client.get_paginator("list_instance_profiles_for_role").paginate(RoleName=role_name):
            for profile in page.get("InstanceProfiles", []):
                client.remove_role_from_instance_profile(
                    InstanceProfileName=profile["InstanceProfileName"], RoleName=role_name
                )

        client.delete_role(RoleName=role_name)

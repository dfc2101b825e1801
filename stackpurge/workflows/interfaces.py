"""Capabilities the purge workflows consume.

Concrete implementations live in ``stackpurge.aws``; tests substitute mocks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.stack import Resource, Stack, StackType


class StackLister(ABC):
    """Lists stacks and the resources inside them."""

    @abstractmethod
    def list_stacks(self, stack_type: StackType) -> List[Stack]:
        """List stacks of a type (every stack for StackType.ALL).

        Raises:
            ClientError: If the provider call fails
        """

    @abstractmethod
    def get_resources_for_stack(self, stack: Stack) -> List[Resource]:
        """List the resources belonging to a stack.

        Raises:
            ClientError: If the provider call fails
        """


class StackDeleter(ABC):
    @abstractmethod
    def delete_stack(self, stack_name: str) -> None:
        """Request deletion of a stack by name."""


class StackWaiter(ABC):
    @abstractmethod
    def await_final_status(self, stack_name: str) -> Optional[Stack]:
        """Block until the stack reaches a terminal status.

        Returns:
            Terminal snapshot of the stack, None if it no longer exists
        """


class S3StackDeleter(ABC):
    @abstractmethod
    def delete_s3_bucket_objects(self, bucket_name: str) -> None:
        """Delete every object (and object version) in a bucket."""

    @abstractmethod
    def delete_s3_bucket(self, bucket_name: str) -> None:
        """Delete an empty bucket."""


class EcrRepoDeleter(ABC):
    @abstractmethod
    def delete_images_from_ecr_repo(self, repo_name: str) -> None:
        """Delete every image stored in a repository."""


class RoleDeleter(ABC):
    @abstractmethod
    def delete_roles_for_namespace(self, namespace: str) -> None:
        """Delete every IAM role belonging to a namespace."""


class RolesetDeleter(ABC):
    """Removes the IAM role sets provisioned for environments, services and pipelines."""

    @abstractmethod
    def delete_environment_roleset(self, environment_name: str) -> None:
        pass

    @abstractmethod
    def delete_service_roleset(self, environment_name: str, service_name: str) -> None:
        pass

    @abstractmethod
    def delete_pipeline_roleset(self, service_name: str) -> None:
        pass


class ParamGetter(ABC):
    @abstractmethod
    def get_param(self, name: str) -> Optional[str]:
        """Return a configuration parameter, None when unset."""

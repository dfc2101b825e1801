"""Single stack termination.

Tears down one stack in a fixed sequence:

    discover resources -> pre-delete cleanup -> delete -> await terminal
    status -> post-delete cleanup

Only resource discovery can fail the termination. Every later step logs its
problems and carries on, so the stack delete is always attempted and the
cleanup always runs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from botocore.exceptions import ClientError

from ..models.stack import Resource, ResourceKind, Stack
from .errors import StackTerminationError
from .executor import Executor
from .interfaces import EcrRepoDeleter, RoleDeleter, S3StackDeleter, StackDeleter, StackLister, StackWaiter

logger = logging.getLogger(__name__)


def describe_error(error: Exception) -> str:
    """Render an error with the provider's code and message when it has them."""
    if isinstance(error, ClientError):
        error_code = error.response.get("Error", {}).get("Code", "Unknown")
        error_message = error.response.get("Error", {}).get("Message", str(error))
        return f"{error_code}: {error_message}"
    return str(error)


class StackTerminateWorkflow:
    """Termination of a single stack and its type-specific side effects.

    Attributes:
        stack: Stack to terminate
        stack_lister: Resource discovery
        stack_deleter: Generic stack delete
        stack_waiter: Terminal status wait
        s3_deleter: Bucket emptying and deletion
        ecr_deleter: Repository image deletion
        role_deleter: Namespace role sweep
        logger: Logger for progress and problems
    """

    def __init__(
        self,
        stack: Stack,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        s3_deleter: S3StackDeleter,
        ecr_deleter: EcrRepoDeleter,
        role_deleter: RoleDeleter,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.stack = stack
        self.stack_lister = stack_lister
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.s3_deleter = s3_deleter
        self.ecr_deleter = ecr_deleter
        self.role_deleter = role_deleter
        self.logger = logger or logging.getLogger(__name__)

    def stack_terminator(self) -> Executor:
        """Build the executor that terminates this stack."""
        return Executor(f"terminate stack {self.stack.name}", self.terminate)

    def terminate(self) -> None:
        """Run the termination sequence.

        Raises:
            Exception: Whatever resource discovery raised; nothing else propagates
        """
        resources = self.stack_lister.get_resources_for_stack(self.stack)

        self._pre_delete(resources)
        self._delete()
        self._await()
        self._post_delete(resources)

    def _pre_delete(self, resources: List[Resource]) -> None:
        # buckets and repositories must be empty before the stack delete can remove them
        for resource in resources:
            if resource.kind == ResourceKind.BUCKET:
                self.logger.debug(f"Emptying bucket {resource.physical_resource_id}")
                try:
                    self.s3_deleter.delete_s3_bucket_objects(resource.physical_resource_id)
                except Exception as e:
                    self.logger.warning(
                        f"Couldn't empty S3 bucket {resource.physical_resource_id}: {describe_error(e)}"
                    )
            elif resource.kind == ResourceKind.REPOSITORY:
                self.logger.debug(f"Deleting images from repository {resource.physical_resource_id}")
                try:
                    self.ecr_deleter.delete_images_from_ecr_repo(resource.physical_resource_id)
                except Exception as e:
                    self.logger.warning(
                        f"Couldn't delete images from ECR repository {resource.physical_resource_id}: "
                        f"{describe_error(e)}"
                    )

    def _delete(self) -> None:
        try:
            self.stack_deleter.delete_stack(self.stack.name)
        except Exception as e:
            self.logger.error(f"DeleteStack {self.stack.name} {describe_error(e)}")

    def _await(self) -> None:
        try:
            final = self.stack_waiter.await_final_status(self.stack.name)
        except Exception as e:
            self.logger.error(f"AwaitFinalStatus {self.stack.name} {describe_error(e)}")
            return
        if final is not None and not final.status.endswith("_COMPLETE"):
            self.logger.error(f"Ended in failed status {final.status} {final.status_reason}")

    def _post_delete(self, resources: List[Resource]) -> None:
        for resource in resources:
            if resource.kind == ResourceKind.BUCKET:
                try:
                    self.s3_deleter.delete_s3_bucket(resource.physical_resource_id)
                except Exception as e:
                    self.logger.warning(
                        f"Couldn't delete S3 bucket {resource.physical_resource_id}: {describe_error(e)}"
                    )
            elif resource.kind == ResourceKind.ROLE:
                namespace = self.stack.tags.get("namespace", "")
                try:
                    self.role_deleter.delete_roles_for_namespace(namespace)
                except Exception as e:
                    self.logger.warning(f"Couldn't delete roles for namespace {namespace}: {describe_error(e)}")


def delete_stack_and_wait(
    stack_name: str,
    stack_deleter: StackDeleter,
    stack_waiter: StackWaiter,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Delete a stack by name and wait for it to finish.

    A stack that no longer exists counts as deleted.

    Raises:
        StackTerminationError: If the stack ends in a status other than *_COMPLETE
    """
    log = logger or logging.getLogger(__name__)

    log.info(f"Deleting stack {stack_name}")
    try:
        stack_deleter.delete_stack(stack_name)
    except Exception as e:
        log.error(f"DeleteStack {stack_name} {describe_error(e)}")

    final = stack_waiter.await_final_status(stack_name)
    if final is not None and not final.status.endswith("_COMPLETE"):
        raise StackTerminationError(f"{stack_name} ended in failed status {final.status} {final.status_reason}")

"""IAM role sets provisioned as stacks."""

from __future__ import annotations

import logging
from typing import Optional

from ..models.stack import StackType, create_stack_name
from ..workflows.interfaces import RolesetDeleter, StackDeleter, StackWaiter
from ..workflows.terminator import delete_stack_and_wait

logger = logging.getLogger(__name__)


class StackRolesetManager(RolesetDeleter):
    """Deletes the IAM stacks holding environment, service and pipeline roles.

    Role set stacks are named ``<namespace>-iam-<kind>-<names>``.
    """

    def __init__(
        self,
        namespace: str,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.namespace = namespace
        self.stack_deleter = stack_deleter
        self.stack_waiter = stack_waiter
        self.logger = logger or logging.getLogger(__name__)

    def _delete(self, *names: str) -> None:
        stack_name = create_stack_name(self.namespace, StackType.IAM, *names)
        delete_stack_and_wait(stack_name, self.stack_deleter, self.stack_waiter, self.logger)

    def delete_environment_roleset(self, environment_name: str) -> None:
        self._delete("environment", environment_name)

    def delete_service_roleset(self, environment_name: str, service_name: str) -> None:
        self._delete("service", service_name, environment_name)

    def delete_pipeline_roleset(self, service_name: str) -> None:
        self._delete("pipeline", service_name)

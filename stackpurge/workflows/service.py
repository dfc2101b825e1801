"""Service undeploy executors."""

from __future__ import annotations

import logging
from typing import Optional

from ..models.stack import StackType, create_stack_name
from .errors import StackTerminationError
from .executor import Executor
from .interfaces import RolesetDeleter, StackDeleter, StackWaiter
from .terminator import delete_stack_and_wait

logger = logging.getLogger(__name__)


class ServiceWorkflow:
    """Removes one service from one environment.

    The lookup executor resolves the service name; the undeploy executor
    depends on it and fails when the lookup did not succeed.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.service_name: Optional[str] = None
        self.logger = logger or logging.getLogger(__name__)

    def service_input(self, service_name: Optional[str]) -> Executor:
        """Build the executor that resolves the service to undeploy."""

        def run() -> None:
            if not service_name:
                raise StackTerminationError("Service stack has no 'service' tag")
            self.service_name = service_name

        return Executor(f"lookup service {service_name or '<untagged>'}", run)

    def service_undeployer(
        self,
        namespace: str,
        environment_name: str,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        roleset_deleter: RolesetDeleter,
    ) -> Executor:
        """Build the executor that deletes the service stack and its role set."""

        def run() -> None:
            if not self.service_name:
                raise StackTerminationError(f"No service resolved to undeploy from {environment_name}")

            self.logger.info(f"Undeploying service '{self.service_name}' from '{environment_name}'")
            stack_name = create_stack_name(namespace, StackType.SERVICE, self.service_name, environment_name)
            delete_stack_and_wait(stack_name, stack_deleter, stack_waiter, self.logger)
            roleset_deleter.delete_service_roleset(environment_name, self.service_name)

        return Executor(f"undeploy service from {environment_name}", run)

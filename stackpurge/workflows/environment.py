"""Environment teardown executors.

An environment is removed tier by tier, in this order:

    services, databases, ECS cluster, consul, role set, load balancer, VPC

Each tier is a separate executor, so a failed tier does not stop the rest
of the purge.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..models.stack import Stack, StackType, create_stack_name
from .errors import StackTerminationError
from .executor import Executor
from .filters import filter_stacks_by_type
from .interfaces import RolesetDeleter, StackDeleter, StackLister, StackWaiter
from .terminator import delete_stack_and_wait, describe_error

logger = logging.getLogger(__name__)


class EnvironmentWorkflow:
    """Builds the teardown executors for environments."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def _stacks_in_environment(
        self, stack_lister: StackLister, stack_type: StackType, environment_name: str
    ) -> List[Stack]:
        stacks = filter_stacks_by_type(stack_lister.list_stacks(stack_type), stack_type)
        return [stack for stack in stacks if stack.tags.get("environment") == environment_name]

    def _delete_all(
        self, stacks: List[Stack], stack_deleter: StackDeleter, stack_waiter: StackWaiter
    ) -> List[Stack]:
        """Request every delete first, then wait on each.

        Returns:
            Stacks that did not reach a *_COMPLETE status
        """
        for stack in stacks:
            self.logger.info(f"Deleting stack {stack.name}")
            try:
                stack_deleter.delete_stack(stack.name)
            except Exception as e:
                self.logger.error(f"DeleteStack {stack.name} {describe_error(e)}")

        failed = []
        for stack in stacks:
            final = stack_waiter.await_final_status(stack.name)
            if final is not None and not final.status.endswith("_COMPLETE"):
                self.logger.error(f"Ended in failed status {final.status} {final.status_reason}")
                failed.append(stack)
        return failed

    def environment_service_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
        roleset_deleter: RolesetDeleter,
    ) -> Executor:
        def run() -> None:
            stacks = self._stacks_in_environment(stack_lister, StackType.SERVICE, environment_name)
            failed = self._delete_all(stacks, stack_deleter, stack_waiter)

            for stack in stacks:
                service_name = stack.tags.get("service")
                if service_name and stack not in failed:
                    roleset_deleter.delete_service_roleset(environment_name, service_name)

            if failed:
                names = ", ".join(stack.name for stack in failed)
                raise StackTerminationError(f"Services in {environment_name} failed to delete: {names}")

        return Executor(f"terminate services in environment {environment_name}", run)

    def environment_db_terminator(
        self,
        environment_name: str,
        stack_lister: StackLister,
        stack_deleter: StackDeleter,
        stack_waiter: StackWaiter,
    ) -> Executor:
        def run() -> None:
            stacks = self._stacks_in_environment(stack_lister, StackType.DATABASE, environment_name)
            failed = self._delete_all(stacks, stack_deleter, stack_waiter)

            if failed:
                names = ", ".join(stack.name for stack in failed)
                raise StackTerminationError(f"Databases in {environment_name} failed to delete: {names}")

        return Executor(f"terminate databases in environment {environment_name}", run)

    def environment_ecs_terminator(
        self, namespace: str, environment_name: str, stack_deleter: StackDeleter, stack_waiter: StackWaiter
    ) -> Executor:
        def run() -> None:
            self.logger.info(f"Terminating ECS environment '{environment_name}'")
            stack_name = create_stack_name(namespace, StackType.ENVIRONMENT, environment_name)
            delete_stack_and_wait(stack_name, stack_deleter, stack_waiter, self.logger)

        return Executor(f"terminate ECS cluster for environment {environment_name}", run)

    def environment_consul_terminator(
        self, namespace: str, environment_name: str, stack_deleter: StackDeleter, stack_waiter: StackWaiter
    ) -> Executor:
        def run() -> None:
            self.logger.info(f"Terminating consul for environment '{environment_name}'")
            stack_name = create_stack_name(namespace, StackType.CONSUL, environment_name)
            delete_stack_and_wait(stack_name, stack_deleter, stack_waiter, self.logger)

        return Executor(f"terminate consul for environment {environment_name}", run)

    def environment_roleset_terminator(self, roleset_deleter: RolesetDeleter, environment_name: str) -> Executor:
        def run() -> None:
            roleset_deleter.delete_environment_roleset(environment_name)

        return Executor(f"terminate role set for environment {environment_name}", run)

    def environment_elb_terminator(
        self, namespace: str, environment_name: str, stack_deleter: StackDeleter, stack_waiter: StackWaiter
    ) -> Executor:
        def run() -> None:
            self.logger.info(f"Terminating ELB for environment '{environment_name}'")
            stack_name = create_stack_name(namespace, StackType.LOADBALANCER, environment_name)
            delete_stack_and_wait(stack_name, stack_deleter, stack_waiter, self.logger)

        return Executor(f"terminate load balancer for environment {environment_name}", run)

    def environment_vpc_terminator(
        self, namespace: str, environment_name: str, stack_deleter: StackDeleter, stack_waiter: StackWaiter
    ) -> Executor:
        def run() -> None:
            self.logger.info(f"Terminating VPC for environment '{environment_name}'")
            # environments on an existing VPC only have a target stack
            for stack_type in (StackType.VPC, StackType.TARGET):
                stack_name = create_stack_name(namespace, stack_type, environment_name)
                delete_stack_and_wait(stack_name, stack_deleter, stack_waiter, self.logger)

        return Executor(f"terminate VPC for environment {environment_name}", run)

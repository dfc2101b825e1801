"""Pipeline teardown executors."""

from __future__ import annotations

import logging
from typing import Optional

from ..models.stack import StackType, create_stack_name
from .errors import StackTerminationError
from .executor import Executor
from .interfaces import RolesetDeleter, StackDeleter, StackWaiter
from .terminator import delete_stack_and_wait

logger = logging.getLogger(__name__)


class PipelineWorkflow:
    """Removes the pipeline of one service and the roles it runs under."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.service_name: Optional[str] = None
        self.logger = logger or logging.getLogger(__name__)

    def service_finder(self, service_name: Optional[str]) -> Executor:
        def run() -> None:
            if not service_name:
                raise StackTerminationError("Pipeline stack has no 'service' tag")
            self.service_name = service_name

        return Executor(f"find service {service_name or '<untagged>'} for pipeline", run)

    def pipeline_terminator(self, namespace: str, stack_deleter: StackDeleter, stack_waiter: StackWaiter) -> Executor:
        def run() -> None:
            if not self.service_name:
                raise StackTerminationError("No service resolved for pipeline teardown")

            self.logger.info(f"Terminating pipeline for service '{self.service_name}'")
            stack_name = create_stack_name(namespace, StackType.PIPELINE, self.service_name)
            delete_stack_and_wait(stack_name, stack_deleter, stack_waiter, self.logger)

        return Executor("terminate pipeline", run)

    def pipeline_roleset_terminator(self, roleset_deleter: RolesetDeleter) -> Executor:
        def run() -> None:
            if not self.service_name:
                raise StackTerminationError("No service resolved for pipeline role set teardown")
            roleset_deleter.delete_pipeline_roleset(self.service_name)

        return Executor("terminate pipeline role set", run)

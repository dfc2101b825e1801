"""Purge orchestration.

Removes every stack in an account, category by category, in an order that
respects how the platform's stacks depend on each other:

    schedules, services, environments, pipelines, buckets, repos, VPCs, IAM

The whole plan is built before anything is deleted, shown to the operator,
and then run without stopping at failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..models.purge_summary import PurgeSummary
from ..models.stack import Stack, StackType
from .errors import PurgeAbortedError
from .executor import Executor, PipelineResult, run_pipeline_no_stop
from .environment import EnvironmentWorkflow
from .filters import filter_stacks_by_type
from .interfaces import ParamGetter, RolesetDeleter
from .pipeline import PipelineWorkflow
from .service import ServiceWorkflow
from .terminator import StackTerminateWorkflow, describe_error

logger = logging.getLogger(__name__)

CONFIRMATION_PHRASE = "Yes, I want to purge everything."

# categories torn down by the generic stack terminator, besides schedules
TERMINATOR_CATEGORIES = (StackType.BUCKET, StackType.REPO, StackType.VPC, StackType.IAM)


@dataclass
class PurgeContext:
    """Collaborators a purge runs against.

    Attributes:
        namespace: Namespace prefixing every stack name
        stack_manager: Implements StackLister, StackDeleter, StackWaiter,
            S3StackDeleter, EcrRepoDeleter and RoleDeleter
        roleset_manager: Removes IAM role sets
        param_manager: Configuration parameters (``suppressConfirmation``)
    """

    namespace: str
    stack_manager: object
    roleset_manager: RolesetDeleter
    param_manager: ParamGetter


class PurgeWorkflow:
    """Purge orchestrator.

    Attributes:
        context: Collaborators for listing, deleting and cleanup
        confirm: Asked with the summary before anything runs, True to proceed
        render: Displays the summary to the operator
        logger: Logger for progress and problems
    """

    def __init__(
        self,
        context: PurgeContext,
        confirm: Callable[[PurgeSummary], bool],
        render: Optional[Callable[[PurgeSummary], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.context = context
        self.confirm = confirm
        self.render = render
        self.logger = logger or logging.getLogger(__name__)

    def list_stacks(self) -> List[Stack]:
        """Fetch the full inventory, treating a listing failure as empty."""
        try:
            return self.context.stack_manager.list_stacks(StackType.ALL)
        except Exception as e:
            self.logger.warning(f"Couldn't list stacks (all): {describe_error(e)}")
            return []

    def build_plan(self, stacks: List[Stack]) -> List[Executor]:
        """Build the ordered list of executors that removes ``stacks``.

        Stacks without a ``type`` tag never match a category and are left alone.
        """
        ctx = self.context
        manager = ctx.stack_manager
        executors: List[Executor] = []

        # scheduled tasks are attached to services, so they must be deleted first
        for stack in filter_stacks_by_type(stacks, StackType.SCHEDULE):
            executors.append(self._terminator(stack))

        for stack in filter_stacks_by_type(stacks, StackType.SERVICE):
            svc_workflow = ServiceWorkflow(logger=self.logger)
            executors.append(svc_workflow.service_input(stack.tags.get("service")))
            executors.append(
                svc_workflow.service_undeployer(
                    ctx.namespace, stack.tags.get("environment", ""), manager, manager, ctx.roleset_manager
                )
            )

        env_workflow = EnvironmentWorkflow(logger=self.logger)
        for stack in filter_stacks_by_type(stacks, StackType.ENVIRONMENT):
            env_name = stack.tags.get("environment", "")
            executors.extend(
                [
                    env_workflow.environment_service_terminator(
                        env_name, manager, manager, manager, ctx.roleset_manager
                    ),
                    env_workflow.environment_db_terminator(env_name, manager, manager, manager),
                    env_workflow.environment_ecs_terminator(ctx.namespace, env_name, manager, manager),
                    env_workflow.environment_consul_terminator(ctx.namespace, env_name, manager, manager),
                    env_workflow.environment_roleset_terminator(ctx.roleset_manager, env_name),
                    env_workflow.environment_elb_terminator(ctx.namespace, env_name, manager, manager),
                    env_workflow.environment_vpc_terminator(ctx.namespace, env_name, manager, manager),
                ]
            )

        for stack in filter_stacks_by_type(stacks, StackType.PIPELINE):
            pipeline_workflow = PipelineWorkflow(logger=self.logger)
            executors.append(pipeline_workflow.service_finder(stack.tags.get("service")))
            executors.append(pipeline_workflow.pipeline_terminator(ctx.namespace, manager, manager))
            executors.append(pipeline_workflow.pipeline_roleset_terminator(ctx.roleset_manager))

        for stack_type in TERMINATOR_CATEGORIES:
            for stack in filter_stacks_by_type(stacks, stack_type):
                self.logger.info(f"{stack.name} {stack.tags}")
                executors.append(self._terminator(stack))

        return executors

    def _terminator(self, stack: Stack) -> Executor:
        manager = self.context.stack_manager
        workflow = StackTerminateWorkflow(
            stack=stack,
            stack_lister=manager,
            stack_deleter=manager,
            stack_waiter=manager,
            s3_deleter=manager,
            ecr_deleter=manager,
            role_deleter=manager,
            logger=self.logger,
        )
        return workflow.stack_terminator()

    def is_confirmed(self, summary: PurgeSummary) -> bool:
        if self.context.param_manager.get_param("suppressConfirmation") == "yes":
            return True
        return self.confirm(summary)

    def run(self) -> PipelineResult:
        """Run the purge.

        Returns:
            PipelineResult of the plan; failures are logged, never raised

        Raises:
            PurgeAbortedError: If the operator did not confirm (nothing was deleted)
        """
        stacks = self.list_stacks()

        summary = PurgeSummary.from_stacks(stacks)
        if self.render is not None:
            self.render(summary)

        executors = self.build_plan(stacks)
        self.logger.info(f"Total of {summary.stack_count} stacks to purge")

        if not self.is_confirmed(summary):
            self.logger.error("Aborting at user request")
            raise PurgeAbortedError("Purge not confirmed")

        return run_pipeline_no_stop(executors, log=self.logger)

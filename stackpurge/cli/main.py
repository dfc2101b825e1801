"""Main CLI entry point using Typer."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..models.purge_summary import PurgeSummary
from ..reporting.reporter import PurgeReporter
from ..utils.logging import setup_logging
from ..workflows.errors import PurgeAbortedError
from .config import Config, ConfigError

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="stackpurge",
    help="Stack Purge - dependency-ordered teardown of every stack in a namespace",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace of the stacks to purge"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Config file (default: ~/.stackpurge/config.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Stack Purge - dependency-ordered teardown of every stack in a namespace."""
    global config

    # Load configuration
    try:
        config = Config.load(config_file)
    except ConfigError as e:
        console.print(f"✗ {escape(str(e))}", style="bold red")
        raise typer.Exit(code=2)

    # Override with CLI options
    if profile:
        config.aws_profile = profile
    if region:
        config.region = region
    if namespace:
        config.namespace = namespace

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"stack-purge version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


def prompt_confirmation(summary: PurgeSummary) -> bool:
    """Ask the operator to type the confirmation phrase."""
    from ..workflows.purge import CONFIRMATION_PHRASE

    console.print(f"\n[yellow]⚠️  About to purge {summary.stack_count} stack(s)[/yellow]")
    answer = typer.prompt(
        f"Are you sure you want to purge the above resources? (use '{CONFIRMATION_PHRASE}' to confirm)",
        default="",
        show_default=False,
    )
    return answer == CONFIRMATION_PHRASE


@app.command()
def purge(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Delete every stack in the namespace, in dependency order.

    Stacks are removed by category: schedules, services, environments,
    pipelines, buckets, repositories, VPCs and IAM. A failure in one stack
    is logged and the purge carries on with the rest.

    Examples:
        # Preview the stacks and confirm interactively
        stackpurge purge

        # Purge without prompting
        stackpurge --namespace mu purge --yes
    """
    from ..aws.roleset import StackRolesetManager
    from ..aws.stack_manager import CloudFormationStackManager
    from ..workflows.purge import PurgeContext, PurgeWorkflow

    if yes:
        config.set_param("suppressConfirmation", "yes")

    try:
        stack_manager = CloudFormationStackManager(region=config.region, aws_profile=config.aws_profile)
        context = PurgeContext(
            namespace=config.namespace,
            stack_manager=stack_manager,
            roleset_manager=StackRolesetManager(config.namespace, stack_manager, stack_manager),
            param_manager=config,
        )
        workflow = PurgeWorkflow(
            context=context,
            confirm=prompt_confirmation,
            render=PurgeReporter(console).render,
        )

        result = workflow.run()

        console.print(f"\n✓ Purge finished: {result.executed} step(s) run", style="green")
        if result.failures:
            console.print(f"  {result.failed_count} step(s) failed, see log for details:", style="yellow")
            for description, error in result.failures:
                console.print(f"  • {escape(description)}: {escape(str(error))}", style="yellow")

    except PurgeAbortedError:
        console.print("Aborting at user request", style="bold red")
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"✗ Error during purge: {escape(str(e))}", style="bold red")
        logger.exception("Error in purge command")
        raise typer.Exit(code=2)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()

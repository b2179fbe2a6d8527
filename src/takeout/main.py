from typing import List, Optional

import typer
from docker.errors import DockerException
from rich.console import Console
from rich.table import Table

from .catalog import ServiceCatalog, default_catalog
from .console import RichConsole, configure_logging
from .docker_runtime import DockerRuntime
from .environment import LocalEnvironment
from .exceptions import UnknownServiceError
from .interfaces import ContainerRuntime
from .lifecycle import LifecycleController
from .settings import get_settings

console = Console()

app = typer.Typer(help="Enable and disable containerized development dependencies.", no_args_is_help=True)


class Context:
    """Collaborators shared by every command of one invocation."""

    def __init__(self, catalog: ServiceCatalog, runtime: ContainerRuntime, controller: LifecycleController):
        self.catalog = catalog
        self.runtime = runtime
        self.controller = controller


def build_context() -> Context:
    rich_console = RichConsole(console)
    runtime = DockerRuntime()
    controller = LifecycleController(rich_console, LocalEnvironment(), runtime)
    return Context(default_catalog(), runtime, controller)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
):
    configure_logging("DEBUG" if verbose else get_settings().LOG_LEVEL)
    if ctx.obj is None:
        ctx.obj = build_context()


@app.command()
def enable(ctx: typer.Context, services: Optional[List[str]] = typer.Argument(None, help="Services to enable.")):
    """Enable one or more services."""
    context: Context = ctx.obj

    if not services:
        names = [definition.name for definition in context.catalog.all()]
        choice = context.controller.console.choose("Takeout containers to enable", names)
        definitions = [context.catalog.find_by_name(choice)]
    else:
        try:
            definitions = [context.catalog.get(service) for service in services]
        except UnknownServiceError as e:
            console.print(f"[bold red]{e}.[/bold red] Run [cyan]takeout services[/cyan] to see what is available.")
            raise typer.Exit(code=2)

    failures = 0
    for definition in definitions:
        result = context.controller.enable(definition)
        if not result.ok:
            failures += 1
        else:
            console.print(f"   [dim]↳ {result.container_name}[/dim]")

    if failures:
        raise typer.Exit(code=1)


@app.command()
def disable(
    ctx: typer.Context,
    selector: Optional[str] = typer.Argument(None, help="Container name or service short name."),
):
    """Disable an enabled service."""
    context: Context = ctx.obj

    try:
        result = context.controller.disable(selector)
    except DockerException as e:
        console.print(f"[bold red]CRITICAL: Could not connect to Docker Daemon.[/] {e}")
        raise typer.Exit(code=1)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command("list")
def list_containers(ctx: typer.Context):
    """List containers created by takeout."""
    context: Context = ctx.obj

    try:
        containers = context.runtime.takeout_containers()
    except DockerException as e:
        console.print(f"[bold red]CRITICAL: Could not connect to Docker Daemon.[/] {e}")
        raise typer.Exit(code=1)

    if not containers:
        console.print("[dim]No Takeout containers are enabled.[/dim]")
        return

    table = Table(title="Takeout containers")
    table.add_column("Container")
    table.add_column("Status")
    for name, status in containers:
        table.add_row(name, f"[green]{status}[/green]" if status == "running" else status)
    console.print(table)


@app.command()
def services(ctx: typer.Context):
    """List the services that can be enabled."""
    context: Context = ctx.obj

    table = Table(title="Available services")
    table.add_column("Service")
    table.add_column("Name")
    table.add_column("Image")
    table.add_column("Default port", justify="right")
    for definition in context.catalog.all():
        table.add_row(
            definition.identifier,
            definition.name,
            f"{definition.organization}/{definition.image_name}",
            str(definition.default_port),
        )
    console.print(table)


if __name__ == "__main__":
    app()

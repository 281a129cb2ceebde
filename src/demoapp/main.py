"""
demoapp - demo service with hot configuration reload

Orchestrates the Clean Architecture components: settings, DI container,
FastAPI application, listening sockets and the lifecycle run group.

Usage:
    demoapp [--config.file FILE] [--web.listen-address ADDR ...]
            [--web.read-timeout DURATION] [--web.max-connections N]
            [--web.enable-lifecycle | --web.disable-lifecycle]
            [--web.shutdown-timeout DURATION]
            [--log.level LEVEL] [--log.format FORMAT] [--log.file FILE]
"""

import asyncio
import sys
from typing import Optional

import click
from click.core import ParameterSource
from pydantic import ValidationError

from demoapp.config.settings import Settings, load_settings
from demoapp.di import Container
from demoapp.domain.build_info import BuildInfo
from demoapp.domain.exceptions import TransportError
from demoapp.infrastructure.lifecycle import LifecycleOrchestrator
from demoapp.infrastructure.web import bind_sockets, build_server
from demoapp.presentation.app import create_app


class DemoappApp:
    """
    demoapp application orchestrator.

    Thin coordination layer that initializes and connects
    all Clean Architecture components.

    Responsibilities:
        - Initialize DI container and register config subscribers
        - Setup FastAPI application
        - Bind listening sockets
        - Run the lifecycle orchestrator and report its exit code
    """

    def __init__(self, settings: Settings, build_info: Optional[BuildInfo] = None):
        """
        Initialize demoapp application.

        Args:
            settings: Process settings
            build_info: Optional build metadata (read from the environment otherwise)
        """
        self.settings = settings
        self.container = Container(settings, build_info=build_info)
        self.reporter = self.container.reporter

        self.container.register_subscribers()
        self.app = create_app(self.container)

        self.orchestrator: Optional[LifecycleOrchestrator] = None

    async def serve(self) -> int:
        """
        Bind listeners and run until shutdown.

        Returns:
            Process exit code
        """
        build_info = self.container.build_info
        self.reporter.info(
            f"Starting {self.settings.app_name} {build_info.summary()}",
            context="Main",
        )
        self.reporter.info(
            f"Build context (python={build_info.python_version}, "
            f"user={build_info.build_user}, date={build_info.build_date})",
            context="Main",
        )

        try:
            sockets = bind_sockets(self.settings.listen_addresses)
        except TransportError as e:
            self.reporter.error(f"Unable to start web listener: {e}", context="Main")
            return 1

        for address in self.settings.listen_addresses:
            self.reporter.info(
                f"Start listening for connections (address={address})",
                context="Main",
            )

        server = build_server(
            self.app,
            read_timeout=self.settings.read_timeout,
            max_connections=self.settings.max_connections,
            shutdown_timeout=self.settings.shutdown_timeout,
        )
        self.orchestrator = LifecycleOrchestrator(
            coordinator=self.container.coordinator,
            gateway=self.container.gateway,
            readiness_gate=self.container.readiness_gate,
            reload_ready=self.container.reload_ready,
            quit_latch=self.container.quit_latch,
            server=server,
            sockets=sockets,
            reporter=self.reporter,
        )

        try:
            return await self.orchestrator.run()
        finally:
            for sock in sockets:
                sock.close()

    def start(self) -> int:
        """
        Start demoapp.

        Blocks until the service stops.

        Returns:
            Process exit code
        """
        return asyncio.run(self.serve())


def _explicit_params(ctx: click.Context) -> dict:
    """Parameters given on the command line, keyed by settings field."""
    explicit = {}
    for name, value in ctx.params.items():
        if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE:
            explicit[name] = list(value) if isinstance(value, tuple) else value
    return explicit


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config.file",
    "config_file",
    help="Configuration file path. [default: config.yaml]",
)
@click.option(
    "--web.listen-address",
    "listen_addresses",
    multiple=True,
    help="Address to listen on for the web interface. Repeatable. "
    "[default: 0.0.0.0:8080]",
)
@click.option(
    "--web.read-timeout",
    "read_timeout",
    help="Maximum duration before timing out idle connections. [default: 5m]",
)
@click.option(
    "--web.max-connections",
    "max_connections",
    type=int,
    help="Maximum number of simultaneous connections. [default: 512]",
)
@click.option(
    "--web.enable-lifecycle/--web.disable-lifecycle",
    "enable_lifecycle",
    help="Enable shutdown and reload via HTTP request. [default: enabled]",
)
@click.option(
    "--web.shutdown-timeout",
    "shutdown_timeout",
    help="Maximum duration to drain requests on shutdown. [default: 30s]",
)
@click.option(
    "--log.level",
    "log_level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    help="Only log messages with the given severity or above. [default: info]",
)
@click.option(
    "--log.format",
    "log_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    help="Output format of log messages. [default: text]",
)
@click.option(
    "--log.file",
    "log_file",
    help="Also write log messages to this file.",
)
@click.option(
    "--env-file",
    "env_file",
    default=".env",
    show_default=True,
    help="Environment file loaded before reading DEMOAPP_* variables.",
)
@click.option("--version", "show_version", is_flag=True, help="Show build info and exit.")
@click.pass_context
def cli(ctx: click.Context, env_file: str, show_version: bool, **_):
    """demoapp - demo service with hot configuration reload."""
    if show_version:
        build_info = BuildInfo.from_environment()
        click.echo(f"demoapp, version {build_info.version} {build_info.summary()}")
        click.echo(f"  build user:  {build_info.build_user}")
        click.echo(f"  build date:  {build_info.build_date}")
        click.echo(f"  python:      {build_info.python_version}")
        return

    overrides = _explicit_params(ctx)
    overrides.pop("env_file", None)
    overrides.pop("show_version", None)

    try:
        settings = load_settings(env_file=env_file, **overrides)
    except ValidationError as e:
        click.echo(f"Error parsing command-line arguments: {e}", err=True)
        sys.exit(2)

    app = DemoappApp(settings)
    sys.exit(app.start())


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()

import asyncio
import inspect
import logging
import sys
from importlib import import_module

import click
import structlog

# Sub-packages that contribute a `cli` command group
COMMAND_MODULES = ("pipeline",)


def configure_logging(level: int) -> None:
    """
    Send log events to stderr, so command output on stdout stays clean.
    """

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # Looked up per logger, stderr may be swapped after configuration
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
    )


class AsyncAwareContext(click.Context):
    """
    Commands may be coroutine functions, each invocation gets its own
    event loop.
    """

    def invoke(self, *args, **kwargs):
        result = super().invoke(*args, **kwargs)
        if not inspect.isawaitable(result):
            return result
        return asyncio.run(result)


click.Command.context_class = AsyncAwareContext


@click.group()
@click.option("--debug", is_flag=True, help="Log debug events to stderr")
def cli(*, debug: bool) -> None:
    configure_logging(logging.DEBUG if debug else logging.INFO)


def register_commands(group: click.Group) -> None:
    for name in COMMAND_MODULES:
        module = import_module(f".{name}.cli", package=__package__)
        group.add_command(module.cli)


configure_logging(logging.INFO)
register_commands(cli)

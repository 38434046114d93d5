"""Run logging for sequelize-pg-generator.

Configures stderr logging for the CLI verbosity flags and times a generation
run, reporting success or failure when it ends.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

PACKAGE_LOGGER = "sequelize_pg_generator"


def verbosity_to_level(verbosity: int) -> int:
    """Map ``-v`` repetitions to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0, quiet: bool = False, console: Optional[Console] = None) -> None:
    """Send package logs to stderr at the level selected by the CLI flags.

    ``-v`` shows progress messages, ``-vv`` also the catalog queries. With
    ``quiet`` only errors are logged.
    """
    level = logging.ERROR if quiet else verbosity_to_level(verbosity)
    handler = RichHandler(
        console=console or err_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


@dataclass
class RunContext:
    """Counters for one generation run."""

    database: Optional[str] = None
    schema: Optional[str] = None
    start_time: float = field(default_factory=time.time)

    # Populated during the run
    tables_count: int = 0
    columns_count: int = 0
    relations_count: int = 0
    files_written: List[str] = field(default_factory=list)
    status: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def elapsed_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)


@contextmanager
def log_run(
    database: Optional[str] = None,
    schema: Optional[str] = None,
    quiet: bool = False,
    console: Optional[Console] = None,
) -> Iterator[RunContext]:
    """Time a generation run.

    Example usage:
        with log_run(database="blog", schema="public") as ctx:
            ctx.tables_count = 3
            ctx.files_written.append("models/post.js")

    On exit prints ``success in <n>ms`` or ``failure in <n>ms`` to stderr
    unless ``quiet``; exceptions are re-raised after being recorded.
    """
    out = console or err_console
    ctx = RunContext(database=database, schema=schema)
    try:
        yield ctx
    except BaseException as e:
        ctx.status = "failure"
        ctx.error_message = str(e)
        raise
    else:
        ctx.status = "success"
    finally:
        _report(ctx, out, quiet)


def _report(ctx: RunContext, out: Console, quiet: bool) -> None:
    if not quiet:
        out.print(f"{ctx.status} in {ctx.elapsed_ms}ms", markup=False, highlight=False)
    if ctx.error_message is not None:
        logger.debug("run failed after %dms: %s", ctx.elapsed_ms, ctx.error_message)
    else:
        logger.debug(
            "run finished: %d tables, %d columns, %d relations, %d files",
            ctx.tables_count, ctx.columns_count, ctx.relations_count, len(ctx.files_written),
        )

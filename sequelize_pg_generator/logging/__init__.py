"""Run logging module for sequelize-pg-generator.

Provides stderr logging setup for the CLI flags and timing of generation
runs.
"""

from sequelize_pg_generator.logging.cli_service import (
    RunContext,
    configure_logging,
    log_run,
    verbosity_to_level,
)

__all__ = [
    "RunContext",
    "configure_logging",
    "log_run",
    "verbosity_to_level",
]

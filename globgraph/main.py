#!/usr/bin/env python3

import logging
import os
import sys
from typing import Optional

import click

from .compiler import compile_pattern
from .config import Settings, load_settings
from .matcher import match_graph
from .normalize import normalize

__all__ = [
    "EXIT_MATCH",
    "EXIT_NO_MATCH",
    "EXIT_ERROR",
    "cli",
    "configure_logging",
    "run",
]

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2

log = logging.getLogger(__name__)


def configure_logging(
    settings: Optional[Settings] = None, log_file: str = "globgraph.log"
) -> None:
    """Configure logging to write to stderr and, optionally, to a file.

    The log level is taken from ``settings`` (loaded from the config file
    when not given). It can be overridden by setting the
    GLOBGRAPH_DEBUG_LEVEL environment variable, and GLOBGRAPH_DEBUG forces
    DEBUG.
    Example: GLOBGRAPH_DEBUG=1 python -m globgraph /etc/passwd /etc/

    A log file is only written when ``settings.log_path`` names a directory.

    Raises:
        OSError: If the log directory or file cannot be created
    """
    if settings is None:
        settings = load_settings()

    log_level_str = os.environ.get("GLOBGRAPH_DEBUG_LEVEL") or settings.verbosity

    # Map string log level to logging constants
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    # Convert string to logging level, default to WARNING if invalid
    log_level = log_level_map.get(log_level_str.upper(), logging.WARNING)

    if os.environ.get("GLOBGRAPH_DEBUG"):
        log_level = logging.DEBUG

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_path = None
    if settings.log_path:
        os.makedirs(settings.log_path, exist_ok=True)
        log_path = os.path.join(settings.log_path, log_file)
        handlers.append(logging.FileHandler(log_path))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_path:
        logging.debug(f"Logging configured. Log file: {log_path}")
    logging.debug(f"Log level set to: {logging.getLevelName(log_level)}")


def run(path: str, pattern: str, *, explain: bool = False, memoize: bool = True) -> int:
    """Match one path against one pattern and return the process exit code.

    Args:
        path: The path to test
        pattern: The glob pattern
        explain: Print the normalized inputs and transition table to stderr
        memoize: Skip already explored search states

    Returns:
        EXIT_MATCH, EXIT_NO_MATCH, or EXIT_ERROR if compiling or matching
        failed unexpectedly
    """
    normalized_pattern, normalized_path = normalize(pattern, path)
    log.debug("Normalized pattern %r, path %r", normalized_pattern, normalized_path)

    if not normalized_pattern or not normalized_path:
        log.info("Empty pattern or path, reporting no match")
        return EXIT_NO_MATCH

    try:
        graph = compile_pattern(normalized_pattern)
        if explain:
            click.echo(f"pattern: {normalized_pattern}", err=True)
            click.echo(f"path:    {normalized_path}", err=True)
            click.echo(graph.describe(), err=True)
        matched = match_graph(graph, normalized_path, memoize=memoize)
    except Exception:
        log.exception(f"Failed to match {path!r} against {pattern!r}")
        return EXIT_ERROR

    return EXIT_MATCH if matched else EXIT_NO_MATCH


# Unknown options such as "-x.txt" are kept as positional arguments
@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("path", type=str)
@click.argument("pattern", type=str)
@click.option(
    "--explain",
    is_flag=True,
    help="Print the normalized pattern and its transition table to stderr",
)
@click.pass_context
def cli(ctx: click.Context, path: str, pattern: str, explain: bool) -> None:
    """Match PATH against the glob PATTERN.

    PATTERN understands `*` (any characters within one path segment), `**`
    (any number of segments), `?` (one character within a segment) and both
    `/` and `\\` as separators. A pattern that does not start with a
    separator matches at any depth; one that ends with a separator matches
    everything below that directory.

    Exits with 0 on a match, 1 on no match and 2 on a usage or internal error.
    Put `--` before PATH if PATH or PATTERN could be read as `--explain` or
    `--help`.

    Examples:
        globgraph /project/src/core/engine.cpp '/project/src/**/*.cpp'
        globgraph /var/log/app.log '*.log'
        globgraph -- /a/--help.txt '*.txt'
    """
    try:
        settings = load_settings()
        configure_logging(settings)
    except Exception as e:
        click.echo(f"globgraph: cannot set up logging: {e}", err=True)
        exit_code = EXIT_ERROR
    else:
        exit_code = run(path, pattern, explain=explain, memoize=settings.memoize)
    ctx.exit(exit_code)

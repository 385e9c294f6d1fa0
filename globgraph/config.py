"""User settings for the globgraph command line.

Settings live in a TOML file, found at the first of:
1. $GLOBGRAPH_CONFIG_DIR/globgraphrc
2. $XDG_CONFIG_HOME/globgraph/globgraphrc
3. $HOME/.globgraphrc (used even when absent, meaning "all defaults")

Example:

    [logger]
    verbosity = "DEBUG"
    path = "~/.cache/globgraph"

    [matcher]
    memoize = false

Values of the wrong type are reported and replaced by their default, so a
bad file never stops a match from running.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomli

__all__ = [
    "LOG_LEVELS",
    "Settings",
    "get_config_path",
    "read_config_file",
    "load_settings",
]

log = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    verbosity: str = "WARNING"
    # Directory for globgraph.log; None logs to stderr only
    log_path: Optional[str] = None
    # Skip (node, position) pairs the matcher already explored
    memoize: bool = True


def get_config_path() -> Path:
    """Return the config file to read, which may not exist."""
    config_dir = os.environ.get("GLOBGRAPH_CONFIG_DIR")
    if config_dir:
        path = Path(config_dir) / "globgraphrc"
        if path.exists():
            return path

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        path = Path(xdg_home) / "globgraph" / "globgraphrc"
        if path.exists():
            return path

    return Path.home() / ".globgraphrc"


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse ``path`` as TOML.

    A missing file is an empty config. An unreadable or malformed one is
    logged and also treated as empty.
    """
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        log.warning(f"Ignoring config file {path}: {e}")
        return {}


def _table(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    table = config.get(name, {})
    if not isinstance(table, dict):
        log.warning(f"Config [{name}] must be a table, ignoring it")
        return {}
    return table


def _value(table: Dict[str, Any], section: str, key: str, kinds: tuple, default):
    if key not in table:
        return default
    value = table[key]
    # bool is an int subclass; only accept it where bool is asked for
    if isinstance(value, bool) and bool not in kinds:
        value_ok = False
    else:
        value_ok = isinstance(value, kinds)
    if not value_ok:
        log.warning(
            f"Config {section}.{key} = {value!r} has the wrong type, "
            f"using {default!r}"
        )
        return default
    return value


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read and validate the config file once.

    Args:
        path: Config file to read; defaults to :func:`get_config_path`

    Returns:
        Settings with every invalid or missing value set to its default
    """
    if path is None:
        path = get_config_path()
    config = read_config_file(path)
    defaults = Settings()

    logger = _table(config, "logger")
    verbosity = _value(logger, "logger", "verbosity", (str,), defaults.verbosity)
    if verbosity.upper() not in LOG_LEVELS:
        log.warning(
            f"Config logger.verbosity = {verbosity!r} is not one of "
            f"{', '.join(LOG_LEVELS)}, using {defaults.verbosity!r}"
        )
        verbosity = defaults.verbosity

    log_path = _value(logger, "logger", "path", (str,), defaults.log_path)
    if log_path:
        log_path = os.path.expanduser(log_path)

    matcher = _table(config, "matcher")
    for key in matcher:
        if key != "memoize":
            log.warning(f"Unknown config key matcher.{key}")
    memoize = _value(matcher, "matcher", "memoize", (bool,), defaults.memoize)

    return Settings(
        verbosity=verbosity.upper(),
        log_path=log_path,
        memoize=memoize,
    )

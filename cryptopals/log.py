"""
Logging setup driven by the CRYPTOPALS_LOG filter.

The filter is a comma-separated list of directives:

    debug                               -> cryptopals at DEBUG
    cryptopals=debug                    -> same thing, spelled out
    info,cryptopals.analysis=debug      -> INFO everywhere in the package,
                                           DEBUG for the analysis modules
    cryptopals=info,urllib3=debug       -> any logger can be targeted

Without a filter only warnings and errors are shown. Records are rendered
on stderr by rich so they never mix with challenge results on stdout.
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler


ROOT_TARGET = "cryptopals"
DEFAULT_LEVEL = logging.WARNING

LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}

logger = logging.getLogger(__name__)


def parse_log_filter(spec: Optional[str]) -> Dict[str, int]:
    """
    Parse a logging filter into logger names and levels.

    Args:
        spec: Filter string, e.g. "cryptopals=debug" (None or empty allowed)

    Returns:
        Mapping of logger name to logging level; later directives win.
        Invalid directives are skipped with a warning.
    """
    levels: Dict[str, int] = {}
    if not spec:
        return levels

    for directive in spec.split(","):
        directive = directive.strip()
        if not directive:
            continue

        if "=" in directive:
            target, _, level_name = directive.partition("=")
            target = target.strip()
        else:
            target, level_name = ROOT_TARGET, directive

        level = LEVELS.get(level_name.strip().lower())
        if not target or level is None:
            logger.warning("Ignoring invalid log directive %r", directive)
            continue

        levels[target] = level

    return levels


def setup_logging(spec: Optional[str] = None, console: Optional[Console] = None) -> Dict[str, int]:
    """
    Set up rich logging and apply the filter.

    Args:
        spec: Filter string, usually Settings.log
        console: Console to render to (stderr by default)

    Returns:
        The parsed filter that was applied
    """
    if console is None:
        console = Console(stderr=True)

    logging.basicConfig(
        level=DEFAULT_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )

    levels = parse_log_filter(spec)
    logging.getLogger(ROOT_TARGET).setLevel(levels.get(ROOT_TARGET, logging.NOTSET))
    for target, level in levels.items():
        logging.getLogger(target).setLevel(level)

    return levels

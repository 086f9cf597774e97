import logging
from typing import List, Optional

import typer

from .challenges.set1 import CHALLENGES, ChallengeContext, run_challenges
from .config import Settings
from .errors import ConfigError
from .log import setup_logging

app = typer.Typer(help="Solutions to the Cryptopals crypto challenges, Set 1")

logger = logging.getLogger(__name__)


@app.command()
def main(
    challenges: Optional[List[int]] = typer.Argument(
        None, help=f"Challenges to run (default: all of {min(CHALLENGES)}-{max(CHALLENGES)})"
    ),
):
    """Run Set 1 challenges and print their results.

    Set CRYPTOPALS_LOG=cryptopals=debug for diagnostic output.
    """
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(2)

    setup_logging(settings.log)

    numbers = challenges or sorted(CHALLENGES)
    unknown = [n for n in numbers if n not in CHALLENGES]
    if unknown:
        typer.echo(f"Unknown challenge(s): {', '.join(map(str, unknown))}", err=True)
        raise typer.Exit(2)

    logger.debug("Settings: %s", settings)
    failed = run_challenges(numbers, ChallengeContext(settings=settings))

    if failed:
        logger.warning("%d challenge(s) failed: %s", len(failed), ", ".join(map(str, failed)))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

"""
Runtime configuration read from the environment.

Variables:
- CRYPTOPALS_LOG: logging filter (see cryptopals.log)
- CRYPTOPALS_CACHE_DIR: where downloaded corpora and challenge files are cached
- CRYPTOPALS_CORPUS_URL: Project Gutenberg book used as English reference
- CRYPTOPALS_DATA_URL: base URL of the challenge data files
- CRYPTOPALS_TIMEOUT: HTTP timeout in seconds
"""

import tempfile
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


# Alice's Adventures in Wonderland
GUTENBERG_CORPUS_URL = "https://www.gutenberg.org/files/11/11-0.txt"
CHALLENGE_DATA_URL = "https://cryptopals.com/static/challenge-data"
DEFAULT_TIMEOUT = 30.0

ENV_PREFIX = "CRYPTOPALS_"


class Settings(BaseSettings):
    """
    Settings shared by every challenge of a run.

    Every field is bound to the CRYPTOPALS_<FIELD> environment variable;
    empty variables fall back to the defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    log: Optional[str] = Field(
        default=None,
        description="Logging filter, e.g. cryptopals=debug",
    )
    cache_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Directory for cached downloads",
    )
    corpus_url: str = Field(
        default=GUTENBERG_CORPUS_URL,
        description="Project Gutenberg book used as English reference",
    )
    data_url: str = Field(
        default=CHALLENGE_DATA_URL,
        description="Base URL of the challenge data files",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="HTTP timeout in seconds",
    )

    @field_validator("log")
    @classmethod
    def _blank_log_is_unset(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("data_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> 'Settings':
        """
        Build settings from the environment.

        Raises:
            ConfigError: If a variable has an invalid value
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigError(f"Invalid {ENV_PREFIX}* setting: {e}") from e

    def data_file_url(self, name: str) -> str:
        """URL of a challenge data file such as '4.txt'."""
        return f"{self.data_url}/{name}"

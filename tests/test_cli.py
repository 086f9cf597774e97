"""
Tests for configuration, logging setup and the command line.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from cryptopals.cli import app
from cryptopals.config import Settings, GUTENBERG_CORPUS_URL, CHALLENGE_DATA_URL, DEFAULT_TIMEOUT
from cryptopals.errors import ConfigError
from cryptopals.log import parse_log_filter, setup_logging


runner = CliRunner()

ENV_VARS = [
    "CRYPTOPALS_LOG",
    "CRYPTOPALS_CACHE_DIR",
    "CRYPTOPALS_CORPUS_URL",
    "CRYPTOPALS_DATA_URL",
    "CRYPTOPALS_TIMEOUT",
]


@pytest.fixture(autouse=True)
def reset_loggers():
    """Undo logger levels set by setup_logging."""
    names = ["cryptopals", "cryptopals.analysis", "urllib3"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def environ(monkeypatch):
    """Clean CRYPTOPALS_* environment; returns a setter."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    def setenv(values):
        for name, value in values.items():
            monkeypatch.setenv(name, value)
    return setenv


class TestSettings:
    """Tests for environment configuration."""

    def test_defaults(self, environ):
        """Without variables every setting has its default."""
        settings = Settings.from_env()
        assert settings.log is None
        assert settings.corpus_url == GUTENBERG_CORPUS_URL
        assert settings.data_url == CHALLENGE_DATA_URL
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_overrides(self, environ, tmp_path):
        """Each CRYPTOPALS_* variable overrides its setting."""
        environ({
            "CRYPTOPALS_LOG": "cryptopals=debug",
            "CRYPTOPALS_CACHE_DIR": str(tmp_path),
            "CRYPTOPALS_CORPUS_URL": "https://example.invalid/book.txt",
            "CRYPTOPALS_DATA_URL": "https://example.invalid/data/",
            "CRYPTOPALS_TIMEOUT": "2.5",
        })
        settings = Settings.from_env()
        assert settings.log == "cryptopals=debug"
        assert settings.cache_dir == Path(tmp_path)
        assert settings.corpus_url == "https://example.invalid/book.txt"
        assert settings.data_file_url("4.txt") == "https://example.invalid/data/4.txt"
        assert settings.timeout == 2.5

    def test_blank_values_use_defaults(self, environ):
        """Empty or blank variables are treated as unset."""
        environ({"CRYPTOPALS_LOG": "  ", "CRYPTOPALS_TIMEOUT": ""})
        settings = Settings.from_env()
        assert settings.log is None
        assert settings.timeout == DEFAULT_TIMEOUT

    @pytest.mark.parametrize("timeout", ["soon", "0", "-3"])
    def test_invalid_timeout(self, environ, timeout):
        """A timeout must be a positive number."""
        environ({"CRYPTOPALS_TIMEOUT": timeout})
        with pytest.raises(ConfigError) as excinfo:
            Settings.from_env()
        assert isinstance(excinfo.value.__cause__, ValidationError)

    def test_keyword_arguments(self, environ, tmp_path):
        """Settings can be built directly, without the environment."""
        settings = Settings(cache_dir=tmp_path, data_url="https://example.invalid/data/")
        assert settings.cache_dir == tmp_path
        assert settings.data_url == "https://example.invalid/data"

    def test_frozen(self, environ):
        """Settings cannot be changed once built."""
        settings = Settings.from_env()
        with pytest.raises(ValidationError):
            settings.timeout = 1.0


class TestLogFilter:
    """Tests for CRYPTOPALS_LOG parsing."""

    def test_empty(self):
        """No filter means no directives."""
        assert parse_log_filter(None) == {}
        assert parse_log_filter("") == {}

    def test_target_and_level(self):
        """A target=level directive sets that logger."""
        assert parse_log_filter("cryptopals=debug") == {"cryptopals": logging.DEBUG}

    def test_bare_level_targets_package(self):
        """A bare level applies to the package logger."""
        assert parse_log_filter("info") == {"cryptopals": logging.INFO}

    def test_multiple_directives(self):
        """Directives are comma separated; spaces and case are ignored."""
        levels = parse_log_filter("warn, cryptopals.analysis=TRACE ,urllib3=error")
        assert levels == {
            "cryptopals": logging.WARNING,
            "cryptopals.analysis": logging.DEBUG,
            "urllib3": logging.ERROR,
        }

    def test_off(self):
        """'off' silences even critical records."""
        assert parse_log_filter("cryptopals=off")["cryptopals"] > logging.CRITICAL

    def test_invalid_directives_ignored(self):
        """Unknown levels and empty targets are skipped."""
        assert parse_log_filter("cryptopals=loud,=debug,,info") == {"cryptopals": logging.INFO}


class TestSetupLogging:
    """Tests for logger configuration."""

    def test_debug_enabled(self):
        """cryptopals=debug enables debug in every submodule."""
        setup_logging("cryptopals=debug")
        assert logging.getLogger("cryptopals.attacks.xor_attacks").isEnabledFor(logging.DEBUG)

    def test_default_is_quiet(self):
        """Without a filter only warnings and errors are logged."""
        setup_logging(None)
        logger = logging.getLogger("cryptopals.analysis.english")
        assert not logger.isEnabledFor(logging.INFO)
        assert logger.isEnabledFor(logging.WARNING)

    def test_submodule_filter(self):
        """A subpackage filter leaves its siblings alone."""
        setup_logging("cryptopals.analysis=debug")
        assert logging.getLogger("cryptopals.analysis.english").isEnabledFor(logging.DEBUG)
        assert not logging.getLogger("cryptopals.attacks").isEnabledFor(logging.DEBUG)


class TestCli:
    """Tests for the command line entry point."""

    def test_runs_selected_challenges(self, environ):
        """Only the requested challenges run."""
        result = runner.invoke(app, ["1", "2", "5"], env={"CRYPTOPALS_LOG": ""})
        assert result.exit_code == 0
        assert "| Set 1 / Challenge 1 |" in result.stdout
        assert "the kid don't play" in result.stdout
        assert "Challenge 3" not in result.stdout

    def test_unknown_challenge(self, environ):
        """An unknown challenge number is a usage error."""
        result = runner.invoke(app, ["42"])
        assert result.exit_code == 2

    def test_invalid_configuration(self, environ):
        """A bad CRYPTOPALS_TIMEOUT is a usage error."""
        result = runner.invoke(app, ["1"], env={"CRYPTOPALS_TIMEOUT": "never"})
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_failures_set_exit_code(self, environ):
        """Any failed challenge makes the exit code 1."""
        with patch("cryptopals.cli.run_challenges", return_value=[4]) as run:
            result = runner.invoke(app, ["4"])
        assert run.call_args[0][0] == [4]
        assert result.exit_code == 1

    def test_defaults_to_all_challenges(self, environ):
        """Without arguments every challenge runs."""
        with patch("cryptopals.cli.run_challenges", return_value=[]) as run:
            result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert run.call_args[0][0] == list(range(1, 9))

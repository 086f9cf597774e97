"""
Exception hierarchy for the cryptopals solutions.

Every error raised on purpose by this package derives from
CryptopalsError, so the challenge runner can report it and move on to
the next challenge. Input validation errors also derive from ValueError.
"""


class CryptopalsError(Exception):
    """Base class for all errors raised by this package."""
    pass


class InvalidHexString(CryptopalsError, ValueError):
    """Raised when a string is not a valid hexadecimal encoding."""

    def __init__(self, message: str = "invalid hexadecimal string"):
        super().__init__(message)


class InvalidBase64String(CryptopalsError, ValueError):
    """Raised when a string is not a valid Base64 encoding."""
    pass


class ConfigError(CryptopalsError, ValueError):
    """Raised when an environment setting cannot be parsed."""
    pass


class CorpusError(CryptopalsError):
    """Raised when an English corpus cannot be extracted."""
    pass


class DownloadError(CryptopalsError):
    """Raised when a remote resource cannot be fetched."""
    pass


class NoCandidateError(CryptopalsError):
    """Raised when no key candidate yields a valid decoding."""
    pass


class ChallengeFailed(CryptopalsError):
    """Raised when a challenge computes something other than the expected answer."""

    def __init__(self, challenge: str, expected, actual):
        self.challenge = challenge
        self.expected = expected
        self.actual = actual
        super().__init__(f"{challenge}: expected {expected!r}, got {actual!r}")

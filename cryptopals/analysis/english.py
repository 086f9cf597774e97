"""
English Text Scoring

Scores candidate plaintexts by comparing their character frequencies with
those of a reference English corpus (a Project Gutenberg book).

Components:
- Character frequency table over the 128 ASCII codes (case-folded)
- Euclidean distance between two frequency tables
- Gutenberg corpus download, caching and body extraction
- EnglishScorer: frequency reference bundled with scoring methods

Lower Euclidean distance means "more English". The Pearson correlation is
reported alongside for diagnostics.
"""

import logging
import math
import re
from pathlib import Path
from typing import List, Optional, Sequence

from . import stats
from ..config import DEFAULT_TIMEOUT, GUTENBERG_CORPUS_URL
from ..errors import CorpusError
from ..helper import fetch_text


ASCII_SIZE = 128

GUTENBERG_START_MARKER = re.compile(r"\*\*\*\s*START OF (?:THIS|THE) PROJECT GUTENBERG EBOOK", re.IGNORECASE)
GUTENBERG_END_MARKER = re.compile(r"\*\*\*\s*END OF (?:THIS|THE) PROJECT GUTENBERG EBOOK", re.IGNORECASE)

logger = logging.getLogger(__name__)


def calc_frequencies(text: str) -> List[float]:
    """
    Compute the character frequencies of a text.

    Only ASCII characters are counted, upper-cased; anything else is
    ignored and does not count towards the total.

    Args:
        text: Text to analyze

    Returns:
        128 frequencies indexed by ASCII code, summing to 1 (all zeros for
        a text without ASCII characters)
    """
    frequencies = [0.0] * ASCII_SIZE
    total = 0

    for c in text:
        if c.isascii():
            frequencies[ord(c.upper())] += 1.0
            total += 1

    if total:
        frequencies = [f / total for f in frequencies]

    logger.debug("Character frequencies: %s", frequencies)
    return frequencies


def euclidean_distance(freq1: Sequence[float], freq2: Sequence[float]) -> float:
    """
    Euclidean distance between two frequency series.

    Raises:
        ValueError: If the series differ in length

    Example:
        >>> euclidean_distance([1.0, 0.0, 3.0, 0.0], [0.0, 2.0, 0.0, 4.0]) == math.sqrt(30)
        True
    """
    if len(freq1) != len(freq2):
        raise ValueError("bytes array differ in size")
    return math.sqrt(sum((f1 - f2) ** 2 for f1, f2 in zip(freq1, freq2)))


def extract_gutenberg_text(body: str) -> str:
    """
    Extract the book text from a Project Gutenberg file.

    The text starts on the line following the START marker and stops right
    before the END marker.

    Raises:
        CorpusError: If a marker or the end of the START marker line is missing
    """
    start_marker = GUTENBERG_START_MARKER.search(body)
    if start_marker is None:
        raise CorpusError("Gutenberg start marker not found")

    end_of_line = body.find("\n", start_marker.end())
    if end_of_line == -1:
        raise CorpusError("Missing end of line")
    start_text = end_of_line + 1

    end_marker = GUTENBERG_END_MARKER.search(body, start_text)
    if end_marker is None:
        raise CorpusError("Gutenberg end marker not found")

    logger.debug("Body len: %d", len(body))
    logger.debug("Start text: %d, end text: %d", start_text, end_marker.start())

    return body[start_text:end_marker.start()]


def get_gutenberg_corpus(url: str = GUTENBERG_CORPUS_URL, cache_dir: Optional[Path] = None,
                         timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Read an English corpus formatted in Project Gutenberg's style.

    The raw file is cached in cache_dir so later runs work offline.
    """
    logger.debug("Using %s as English corpus", url)
    body = fetch_text(url, cache_dir, prefix="cryptopals-corpus", timeout=timeout)
    return extract_gutenberg_text(body)


class EnglishScorer:
    """
    Scores texts against a reference frequency table.

    Example:
        >>> scorer = EnglishScorer.from_text("The quick brown fox jumps over the lazy dog")
        >>> scorer.score("the lazy dog") < scorer.score("#$%&!@")
        True
    """

    def __init__(self, frequencies: Sequence[float]):
        if len(frequencies) != ASCII_SIZE:
            raise ValueError(f"Expected {ASCII_SIZE} frequencies, got {len(frequencies)}")
        self._frequencies = list(frequencies)

    @classmethod
    def from_text(cls, corpus: str) -> 'EnglishScorer':
        """Build a scorer from a reference text."""
        return cls(calc_frequencies(corpus))

    @classmethod
    def from_gutenberg(cls, url: str = GUTENBERG_CORPUS_URL, cache_dir: Optional[Path] = None,
                       timeout: float = DEFAULT_TIMEOUT) -> 'EnglishScorer':
        """Build a scorer from a (cached) Project Gutenberg book."""
        return cls.from_text(get_gutenberg_corpus(url, cache_dir, timeout))

    @property
    def frequencies(self) -> List[float]:
        """Reference frequencies."""
        return self._frequencies.copy()

    def score(self, text: str) -> float:
        """Euclidean distance to the reference; lower is better."""
        return euclidean_distance(self._frequencies, calc_frequencies(text))

    def pearson(self, text: str) -> float:
        """Pearson correlation with the reference; higher is better."""
        return stats.pearson(self._frequencies, calc_frequencies(text))

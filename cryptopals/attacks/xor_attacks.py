"""
Attacks on XOR Ciphers

Breaks the XOR constructions from cryptopals.core_crypto.xor using
English frequency analysis.

Components:
- Single-byte XOR key recovery (try all 256 keys, keep the most English)
- Detection of the single-byte XOR ciphertext among many candidates
- Key size estimation from normalized Hamming distances
- Repeating-key XOR key recovery by transposing into single-byte problems

Candidates that do not decode as UTF-8 are rejected before scoring.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..analysis.english import EnglishScorer
from ..core_crypto.xor import hamming_distance, repeating_key_xor, single_byte_xor
from ..errors import NoCandidateError


MIN_KEY_SIZE = 2
MAX_KEY_SIZE = 40
KEY_SIZE_CANDIDATES = 5

logger = logging.getLogger(__name__)


@dataclass
class XorCandidate:
    """A decryption attempt and how English it looks."""
    key: bytes
    plaintext: bytes
    text: str
    score: float            # Euclidean distance to the reference, lower is better
    pearson: float          # Pearson correlation with the reference
    ciphertext: bytes = b""

    def __lt__(self, other: 'XorCandidate') -> bool:
        return (self.score, len(self.key)) < (other.score, len(other.key))


def _decode(plaintext: bytes) -> Optional[str]:
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError:
        return None


def break_single_byte_xor(ciphertext: bytes, scorer: EnglishScorer) -> XorCandidate:
    """
    Recover the key of a single-byte XOR ciphertext.

    Every key from 0 to 255 is tried; the decoding with the lowest
    Euclidean score wins (the first key wins a tie).

    Args:
        ciphertext: Non-empty ciphertext
        scorer: English reference

    Returns:
        Best candidate

    Raises:
        NoCandidateError: If the ciphertext is empty or no key yields valid UTF-8
    """
    if not ciphertext:
        raise NoCandidateError("Cannot break an empty ciphertext")

    best: Optional[XorCandidate] = None
    for key in range(256):
        plaintext = single_byte_xor(ciphertext, key)
        text = _decode(plaintext)
        if text is None:
            logger.debug("input xor %d is an invalid string!", key)
            continue

        candidate = XorCandidate(
            key=bytes([key]),
            plaintext=plaintext,
            text=text,
            score=scorer.score(text),
            pearson=scorer.pearson(text),
            ciphertext=ciphertext,
        )
        logger.debug("input xor %d = %r", key, text)
        logger.debug(" - Euclidean score: %f", candidate.score)
        logger.debug(" - Pearson: %f", candidate.pearson)

        if best is None or candidate.score < best.score:
            best = candidate
            logger.debug(" - Best Euclidean score!")

    if best is None:
        raise NoCandidateError("No single-byte key produces a valid string")
    return best


def detect_single_byte_xor(ciphertexts: Sequence[bytes], scorer: EnglishScorer) -> XorCandidate:
    """
    Find which ciphertext was encrypted with single-byte XOR.

    Returns:
        The best candidate over all ciphertexts; its ciphertext field tells
        which input it came from

    Raises:
        NoCandidateError: If no ciphertext yields any valid candidate
    """
    best: Optional[XorCandidate] = None
    for ciphertext in ciphertexts:
        logger.debug("Analyzing candidate %s", ciphertext.hex())
        try:
            candidate = break_single_byte_xor(ciphertext, scorer)
        except NoCandidateError:
            logger.debug("No valid decoding for %s", ciphertext.hex())
            continue
        if best is None or candidate.score < best.score:
            best = candidate

    if best is None:
        raise NoCandidateError("No ciphertext decodes with a single-byte key")
    return best


def normalized_key_distance(ciphertext: bytes, keysize: int, max_blocks: Optional[int] = None) -> float:
    """
    Mean Hamming distance between consecutive keysize blocks, per byte.

    The correct key size tends to minimize this value, as blocks encrypted
    with the same key bytes keep the (low) distance of their plaintexts.

    Args:
        ciphertext: Repeating-key XOR ciphertext
        keysize: Candidate key size
        max_blocks: Number of blocks to compare (all full blocks if None)

    Raises:
        ValueError: If fewer than two full blocks are available
    """
    if keysize < 1:
        raise ValueError("Key size must be positive")

    blocks = [ciphertext[i:i + keysize] for i in range(0, len(ciphertext) - keysize + 1, keysize)]
    if max_blocks is not None:
        blocks = blocks[:max_blocks]
    if len(blocks) < 2:
        raise ValueError(f"Ciphertext too short for key size {keysize}")

    distances = [hamming_distance(a, b) for a, b in zip(blocks, blocks[1:])]
    return sum(distances) / len(distances) / keysize


def guess_key_sizes(ciphertext: bytes, min_size: int = MIN_KEY_SIZE, max_size: int = MAX_KEY_SIZE,
                    count: int = KEY_SIZE_CANDIDATES) -> List[int]:
    """
    Most likely key sizes, best first.

    Key sizes longer than half the ciphertext are not considered.
    """
    scored = []
    for keysize in range(min_size, min(max_size, len(ciphertext) // 2) + 1):
        distance = normalized_key_distance(ciphertext, keysize)
        logger.debug("Key size %d: normalized distance %f", keysize, distance)
        scored.append((distance, keysize))

    scored.sort()
    return [keysize for _, keysize in scored[:count]]


def smallest_period(key: bytes) -> bytes:
    """
    Shortest key that repeats into the given key.

    Example:
        >>> smallest_period(b"ICEICE")
        b'ICE'
    """
    length = len(key)
    for period in range(1, length):
        if length % period == 0 and key[:period] * (length // period) == key:
            return key[:period]
    return key


def transpose(ciphertext: bytes, keysize: int) -> List[bytes]:
    """Column i holds every byte encrypted with key byte i."""
    return [ciphertext[i::keysize] for i in range(keysize)]


def break_repeating_key_xor(ciphertext: bytes, scorer: EnglishScorer,
                            min_size: int = MIN_KEY_SIZE, max_size: int = MAX_KEY_SIZE,
                            candidates: int = KEY_SIZE_CANDIDATES) -> XorCandidate:
    """
    Recover the key of a repeating-key XOR ciphertext.

    Args:
        ciphertext: Ciphertext, at least two key lengths long
        scorer: English reference
        min_size: Smallest key size to consider
        max_size: Largest key size to consider
        candidates: Number of key sizes to fully attack

    Returns:
        Best candidate; its key is reduced to its smallest period

    Raises:
        NoCandidateError: If no key size yields a valid decryption
    """
    best: Optional[XorCandidate] = None

    for keysize in guess_key_sizes(ciphertext, min_size, max_size, candidates):
        try:
            key = bytes(
                break_single_byte_xor(column, scorer).key[0]
                for column in transpose(ciphertext, keysize)
            )
        except NoCandidateError:
            logger.debug("Key size %d: a column has no valid decoding", keysize)
            continue

        key = smallest_period(key)
        plaintext = repeating_key_xor(ciphertext, key)
        text = _decode(plaintext)
        if text is None:
            logger.debug("Key size %d: key %r gives an invalid string", keysize, key)
            continue

        candidate = XorCandidate(
            key=key,
            plaintext=plaintext,
            text=text,
            score=scorer.score(text),
            pearson=scorer.pearson(text),
            ciphertext=ciphertext,
        )
        logger.debug("Key size %d: key %r, score %f", keysize, key, candidate.score)

        if best is None or candidate < best:
            best = candidate

    if best is None:
        raise NoCandidateError("No key size yields a valid decryption")
    return best

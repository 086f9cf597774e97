"""
Set 1: Basics

Solutions to https://cryptopals.com/sets/1, one function per challenge.
Each function prints its result and raises ChallengeFailed when the
computed answer is not the expected one.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

import requests

from .. import helper
from ..analysis.english import EnglishScorer
from ..attacks.xor_attacks import (
    break_repeating_key_xor, break_single_byte_xor, detect_single_byte_xor
)
from ..config import Settings
from ..core_crypto.aes_ecb import (
    BLOCK_SIZE, aes_ecb_decrypt, count_repeated_blocks, detect_ecb
)
from ..core_crypto.encoding import (
    base64_decode, base64_encode, bytes_to_hex, hex_to_bytes, hex_to_string
)
from ..core_crypto.xor import fixed_xor, hamming_distance, repeating_key_xor
from ..errors import ChallengeFailed, CryptopalsError, NoCandidateError


CHALLENGE1_INPUT = ("49276d206b696c6c696e6720796f757220627261696e206c696b65206120706f69736f"
                    "6e6f7573206d757368726f6f6d")
CHALLENGE1_OUTPUT = "SSdtIGtpbGxpbmcgeW91ciBicmFpbiBsaWtlIGEgcG9pc29ub3VzIG11c2hyb29t"

CHALLENGE2_INPUT1 = "1c0111001f010100061a024b53535009181c"
CHALLENGE2_INPUT2 = "686974207468652062756c6c277320657965"
CHALLENGE2_OUTPUT = "746865206b696420646f6e277420706c6179"

CHALLENGE3_INPUT = "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"
CHALLENGE3_OUTPUT = "Cooking MC's like a pound of bacon"

CHALLENGE4_FILE = "4.txt"
CHALLENGE4_OUTPUT = "Now that the party is jumping\n"

CHALLENGE5_INPUT = ("Burning 'em, if you ain't quick and nimble\n"
                    "I go crazy when I hear a cymbal")
CHALLENGE5_KEY = "ICE"
CHALLENGE5_OUTPUT = ("0b3637272a2b2e63622c2e69692a23693a2a3c6324202d623d63343c2a26226324"
                     "272765272a282b2f20430a652e2c652a3124333a653e2b2027630c692b20283165"
                     "286326302e27282f")

CHALLENGE6_FILE = "6.txt"
CHALLENGE6_TEXT1 = "this is a test"
CHALLENGE6_TEXT2 = "wokka wokka!!!"
CHALLENGE6_HAMMING = 37
CHALLENGE6_KEY = "Terminator X: Bring the noise"

CHALLENGE7_FILE = "7.txt"
CHALLENGE7_KEY = "YELLOW SUBMARINE"
CHALLENGE7_FIRST_LINE = "I'm back and I'm ringin' the bell "

CHALLENGE8_FILE = "8.txt"
CHALLENGE8_PREFIX = "d880619740a8a19b7840a8a31c810a3d"

logger = logging.getLogger(__name__)


@dataclass
class ChallengeContext:
    """
    Shared state for a run: settings and a lazily built English scorer.

    The scorer needs the Gutenberg corpus, so it is only fetched when a
    challenge asks for it.
    """
    settings: Settings = field(default_factory=Settings.from_env)
    _scorer: Optional[EnglishScorer] = field(default=None, init=False, repr=False)

    @property
    def scorer(self) -> EnglishScorer:
        if self._scorer is None:
            self._scorer = EnglishScorer.from_gutenberg(
                self.settings.corpus_url, self.settings.cache_dir, self.settings.timeout
            )
        return self._scorer

    def read_data(self, name: str) -> str:
        """Text of a challenge data file such as '4.txt'."""
        return helper.read_from_url(
            self.settings.data_file_url(name), self.settings.cache_dir, self.settings.timeout
        )


def _check(challenge: str, expected, actual):
    if expected != actual:
        raise ChallengeFailed(challenge, expected, actual)


def challenge1(context: ChallengeContext):
    """Convert hex to base64"""
    helper.section("Set 1 / Challenge 1")

    output = base64_encode(hex_to_bytes(CHALLENGE1_INPUT))

    print(f"Base64({CHALLENGE1_INPUT}) = {output}")
    print(f"String translation: {hex_to_string(CHALLENGE1_INPUT)}")
    _check("Challenge 1", CHALLENGE1_OUTPUT, output)


def challenge2(context: ChallengeContext):
    """Fixed XOR"""
    helper.section("Set 1 / Challenge 2")
    print("Solving https://cryptopals.com/sets/1/challenges/2:\nFixed XOR\n")

    output = bytes_to_hex(fixed_xor(hex_to_bytes(CHALLENGE2_INPUT1), hex_to_bytes(CHALLENGE2_INPUT2)))

    print(f"{CHALLENGE2_INPUT1} ^ {CHALLENGE2_INPUT2} = {output}")
    print(f"String translation = {hex_to_string(output)}")
    _check("Challenge 2", CHALLENGE2_OUTPUT, output)


def challenge3(context: ChallengeContext):
    """Single-byte XOR cipher"""
    helper.section("Set 1 / Challenge 3")
    print("Solving https://cryptopals.com/sets/1/challenges/3:\nSingle-byte XOR cipher\n")

    best = break_single_byte_xor(hex_to_bytes(CHALLENGE3_INPUT), context.scorer)

    print(f"XOR character = {chr(best.key[0])!r}, Euclidean score = {best.score:.4f}.")
    print(f"Output = {best.text}")
    _check("Challenge 3", CHALLENGE3_OUTPUT, best.text)


def challenge4(context: ChallengeContext):
    """Detect single-character XOR"""
    helper.section("Set 1 / Challenge 4")
    print("Solving https://cryptopals.com/sets/1/challenges/4:\nDetect single-character XOR\n")

    inputs = [hex_to_bytes(line.strip()) for line in context.read_data(CHALLENGE4_FILE).splitlines()
              if line.strip()]
    best = detect_single_byte_xor(inputs, context.scorer)

    print(f"Input = '{bytes_to_hex(best.ciphertext)}', XOR character = {chr(best.key[0])!r}.")
    print(f"Output = {best.text}")
    _check("Challenge 4", CHALLENGE4_OUTPUT, best.text)


def challenge5(context: ChallengeContext):
    """Implement repeating-key XOR"""
    helper.section("Set 1 / Challenge 5")
    print("Solving https://cryptopals.com/sets/1/challenges/5:\nImplement repeating-key XOR\n")

    output = bytes_to_hex(repeating_key_xor(CHALLENGE5_INPUT.encode(), CHALLENGE5_KEY.encode()))

    print(f"Input:\n{CHALLENGE5_INPUT}")
    print(f"{CHALLENGE5_KEY} xored output:\n{output}")
    _check("Challenge 5", CHALLENGE5_OUTPUT, output)


def challenge6(context: ChallengeContext):
    """Break repeating-key XOR"""
    helper.section("Set 1 / Challenge 6")
    print("Solving https://cryptopals.com/sets/1/challenges/6:\nBreak repeating-key XOR\n")

    hamming = hamming_distance(CHALLENGE6_TEXT1.encode(), CHALLENGE6_TEXT2.encode())
    print(f"The Hamming distance between '{CHALLENGE6_TEXT1}' and '{CHALLENGE6_TEXT2}' is {hamming}.")
    _check("Challenge 6 (Hamming distance)", CHALLENGE6_HAMMING, hamming)

    ciphertext = base64_decode(context.read_data(CHALLENGE6_FILE))
    best = break_repeating_key_xor(ciphertext, context.scorer)
    key = best.key.decode("utf-8", errors="replace")

    helper.subsection("Decrypted text")
    print(f"Key = {key!r} ({len(best.key)} bytes)\n")
    print(best.text)
    _check("Challenge 6", CHALLENGE6_KEY, key)


def challenge7(context: ChallengeContext):
    """AES in ECB mode"""
    helper.section("Set 1 / Challenge 7")
    print("Solving https://cryptopals.com/sets/1/challenges/7:\nAES in ECB mode\n")

    ciphertext = base64_decode(context.read_data(CHALLENGE7_FILE))
    plaintext = aes_ecb_decrypt(ciphertext, CHALLENGE7_KEY.encode()).decode("utf-8")

    print(f"Decrypted AES ECB ciphertext:\n{plaintext}")
    _check("Challenge 7", CHALLENGE7_FIRST_LINE, plaintext.splitlines()[0] if plaintext else "")


def challenge8(context: ChallengeContext):
    """Detect AES in ECB mode"""
    helper.section("Set 1 / Challenge 8")
    print("Solving https://cryptopals.com/sets/1/challenges/8:\nDetect AES in ECB mode\n")

    lines = [line.strip() for line in context.read_data(CHALLENGE8_FILE).splitlines() if line.strip()]
    ciphertexts = [hex_to_bytes(line) for line in lines]
    index = detect_ecb(ciphertexts)
    if index < 0:
        raise NoCandidateError("No ciphertext has repeated blocks")

    repeated = count_repeated_blocks(ciphertexts[index], BLOCK_SIZE)
    print(f"Line {index + 1} has {repeated} repeated {BLOCK_SIZE}-byte blocks:\n{lines[index]}")
    _check("Challenge 8", CHALLENGE8_PREFIX, lines[index][:len(CHALLENGE8_PREFIX)])


CHALLENGES: Dict[int, Callable[[ChallengeContext], None]] = {
    1: challenge1,
    2: challenge2,
    3: challenge3,
    4: challenge4,
    5: challenge5,
    6: challenge6,
    7: challenge7,
    8: challenge8,
}


def run_challenges(numbers: Optional[Iterable[int]] = None,
                   context: Optional[ChallengeContext] = None) -> List[int]:
    """
    Run challenges in order, reporting failures without stopping.

    Args:
        numbers: Challenge numbers to run (all of them if None)
        context: Shared run state (built from the environment if None)

    Returns:
        Numbers of the challenges that failed

    Raises:
        KeyError: For an unknown challenge number, before anything runs
    """
    numbers = list(CHALLENGES) if numbers is None else list(numbers)
    unknown = [n for n in numbers if n not in CHALLENGES]
    if unknown:
        raise KeyError(f"Unknown challenge(s): {', '.join(map(str, unknown))}")

    if context is None:
        context = ChallengeContext()

    failed = []
    for number in numbers:
        logger.debug("Running challenge %d", number)
        try:
            CHALLENGES[number](context)
        except (CryptopalsError, requests.RequestException, ValueError, OSError) as error:
            logger.debug("Challenge %d failed", number, exc_info=True)
            print(f"An error happened: {error}", file=sys.stderr)
            failed.append(number)
    return failed

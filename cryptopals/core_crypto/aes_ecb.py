"""
AES in ECB Mode

Block-level AES is delegated to the cryptography library; this module
wires it up in Electronic Codebook mode and adds the tooling needed to
spot ECB in the wild.

Components:
- PKCS#7 padding and unpadding
- AES-ECB encryption/decryption (128, 192 or 256-bit keys)
- Repeated-block counting and ECB detection

Security Note:
    ECB encrypts identical plaintext blocks to identical ciphertext blocks.
    That repetition is what detect_ecb() looks for.
"""

from collections import Counter
from typing import List, Sequence

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend


BLOCK_SIZE = 16             # AES block size in bytes
VALID_KEY_SIZES = (16, 24, 32)


def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Pad data to a multiple of block_size with PKCS#7.

    A full block of padding is added when data is already aligned.
    """
    padder = padding.PKCS7(block_size * 8).padder()
    return padder.update(data) + padder.finalize()


def pkcs7_unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Strip PKCS#7 padding.

    Raises:
        ValueError: If the padding is invalid
    """
    unpadder = padding.PKCS7(block_size * 8).unpadder()
    return unpadder.update(data) + unpadder.finalize()


def _ecb_cipher(key: bytes) -> Cipher:
    if len(key) not in VALID_KEY_SIZES:
        raise ValueError(f"Invalid AES key length {len(key)}, expected one of {VALID_KEY_SIZES}")
    return Cipher(algorithms.AES(key), modes.ECB(), backend=default_backend())


def aes_ecb_encrypt(plaintext: bytes, key: bytes, pad: bool = True) -> bytes:
    """
    Encrypt with AES in ECB mode.

    Args:
        plaintext: Data to encrypt
        key: 16, 24 or 32-byte AES key
        pad: Apply PKCS#7 padding first (otherwise plaintext must be aligned)

    Returns:
        Ciphertext
    """
    if pad:
        plaintext = pkcs7_pad(plaintext)
    elif len(plaintext) % BLOCK_SIZE:
        raise ValueError(f"Plaintext length must be a multiple of {BLOCK_SIZE}")

    encryptor = _ecb_cipher(key).encryptor()
    return encryptor.update(plaintext) + encryptor.finalize()


def aes_ecb_decrypt(ciphertext: bytes, key: bytes, unpad: bool = True) -> bytes:
    """
    Decrypt with AES in ECB mode.

    Args:
        ciphertext: Data to decrypt (multiple of 16 bytes)
        key: 16, 24 or 32-byte AES key
        unpad: Strip PKCS#7 padding from the result

    Returns:
        Plaintext

    Raises:
        ValueError: On a bad key, unaligned ciphertext or invalid padding
    """
    if len(ciphertext) % BLOCK_SIZE:
        raise ValueError(f"Ciphertext length must be a multiple of {BLOCK_SIZE}")

    decryptor = _ecb_cipher(key).decryptor()
    plaintext = decryptor.update(ciphertext) + decryptor.finalize()
    return pkcs7_unpad(plaintext) if unpad else plaintext


def split_blocks(data: bytes, block_size: int = BLOCK_SIZE) -> List[bytes]:
    """Split data into block_size chunks (the last one may be shorter)."""
    return [data[i:i + block_size] for i in range(0, len(data), block_size)]


def count_repeated_blocks(data: bytes, block_size: int = BLOCK_SIZE) -> int:
    """Number of blocks that duplicate an earlier block."""
    counts = Counter(split_blocks(data, block_size))
    return sum(n - 1 for n in counts.values())


def detect_ecb(ciphertexts: Sequence[bytes], block_size: int = BLOCK_SIZE) -> int:
    """
    Find the ciphertext most likely encrypted with ECB.

    Args:
        ciphertexts: Candidate ciphertexts

    Returns:
        Index of the ciphertext with the most repeated blocks, or -1 if no
        ciphertext has any repetition
    """
    best_index, best_count = -1, 0
    for index, ciphertext in enumerate(ciphertexts):
        repeated = count_repeated_blocks(ciphertext, block_size)
        if repeated > best_count:
            best_index, best_count = index, repeated
    return best_index

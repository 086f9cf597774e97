"""
XOR Ciphers and Bit Distance

XOR primitives used by the Set 1 challenges.

Components:
- Fixed XOR of two buffers
- Single-byte XOR
- Repeating-key XOR (Vigenère over bytes)
- Hamming distance (number of differing bits)

Security Note:
    A repeating XOR key leaks the plaintext statistics at every key-length
    offset. The attacks in cryptopals.attacks exploit exactly that.
"""

from itertools import cycle


def fixed_xor(data: bytes, other: bytes) -> bytes:
    """
    XOR two buffers byte by byte.

    The result is as long as the shorter input.

    Example:
        >>> fixed_xor(bytes([0b10101010, 0b11111111]), bytes([0b01010101, 0b10010011]))
        b'\\xffl'
    """
    return bytes(a ^ b for a, b in zip(data, other))


def single_byte_xor(data: bytes, key: int) -> bytes:
    """
    XOR every byte of data with the same key byte.

    Args:
        data: Data to encrypt/decrypt
        key: Key byte (0-255)

    Returns:
        XOR result
    """
    if not 0 <= key <= 255:
        raise ValueError(f"Key must be a byte value, got {key}")
    return bytes(b ^ key for b in data)


def repeating_key_xor(data: bytes, key: bytes) -> bytes:
    """
    XOR data with a key repeated as many times as needed.

    Since XOR is symmetric, decryption is identical to encryption.

    Args:
        data: Data to encrypt/decrypt
        key: Non-empty key

    Returns:
        XOR result, same length as data
    """
    if not key:
        raise ValueError("Key must not be empty")
    return bytes(d ^ k for d, k in zip(data, cycle(key)))


def hamming_distance(data: bytes, other: bytes) -> int:
    """
    Count the bits that differ between two equal-length buffers.

    Raises:
        ValueError: If the buffers differ in length

    Example:
        >>> hamming_distance(b"this is a test", b"wokka wokka!!!")
        37
    """
    if len(data) != len(other):
        raise ValueError("bytes arrays differ in size")
    return sum(bin(a ^ b).count("1") for a, b in zip(data, other))

"""
Hex and Base64 Encoding (From Scratch)

Implements the conversions used throughout the challenges without relying
on binascii or the base64 module.

Components:
- Hex decoding with strict validation (non-empty, even length, hex digits)
- Hex encoding (lowercase, two digits per byte)
- Base64 encoding with '=' padding (RFC 4648 standard alphabet)
- Base64 decoding tolerant of line breaks, as found in the challenge files
"""

from typing import Dict

from ..errors import InvalidHexString, InvalidBase64String


BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
BASE64_PAD = "="

HEX_DIGITS = "0123456789abcdef"

# Reverse lookup tables
_BASE64_VALUES: Dict[str, int] = {c: i for i, c in enumerate(BASE64_ALPHABET)}
_HEX_VALUES: Dict[str, int] = {c: i for i, c in enumerate(HEX_DIGITS)}
_HEX_VALUES.update({c.upper(): i for c, i in list(_HEX_VALUES.items()) if c.isalpha()})


def hex_to_bytes(text: str) -> bytes:
    """
    Convert a hex string to bytes.

    Args:
        text: Hexadecimal string, upper or lower case

    Returns:
        Decoded bytes

    Raises:
        InvalidHexString: If the string is empty, has odd length or
                          contains a non-hex character

    Example:
        >>> hex_to_bytes("102030")
        b'\\x10 0'
    """
    length = len(text)
    if length == 0 or length & 1:
        raise InvalidHexString()

    result = bytearray()
    for i in range(0, length, 2):
        high = _HEX_VALUES.get(text[i])
        low = _HEX_VALUES.get(text[i + 1])
        if high is None or low is None:
            raise InvalidHexString()
        result.append((high << 4) | low)
    return bytes(result)


def hex_to_string(text: str) -> str:
    """
    Convert a hex string to a string, one character per decoded byte.

    Example:
        >>> hex_to_string("746865206b696420646f6e277420706c6179")
        "the kid don't play"
    """
    return "".join(chr(b) for b in hex_to_bytes(text))


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to a lowercase hex string."""
    return "".join(HEX_DIGITS[b >> 4] + HEX_DIGITS[b & 0x0F] for b in data)


def base64_encode(data: bytes) -> str:
    """
    Encode bytes to Base64.

    Every 3-byte group becomes 4 characters; a trailing group of 1 or 2
    bytes is completed with '=' padding.

    Example:
        >>> base64_encode(b"Hello, world!")
        'SGVsbG8sIHdvcmxkIQ=='
    """
    out = []
    for i in range(0, len(data), 3):
        chunk = data[i:i + 3]
        value = int.from_bytes(chunk.ljust(3, b"\x00"), "big")
        sextets = [(value >> shift) & 0x3F for shift in (18, 12, 6, 0)]

        # n input bytes produce n + 1 significant characters
        significant = len(chunk) + 1
        out.extend(BASE64_ALPHABET[s] for s in sextets[:significant])
        out.append(BASE64_PAD * (4 - significant))
    return "".join(out)


def base64_decode(text: str) -> bytes:
    """
    Decode a Base64 string to bytes.

    Whitespace (including line breaks) is ignored.

    Args:
        text: Base64 string

    Returns:
        Decoded bytes

    Raises:
        InvalidBase64String: On a character outside the alphabet, a length
                             that is not a multiple of 4, or misplaced padding
    """
    cleaned = "".join(text.split())
    if len(cleaned) % 4:
        raise InvalidBase64String(f"invalid Base64 length {len(cleaned)}")

    result = bytearray()
    for i in range(0, len(cleaned), 4):
        group = cleaned[i:i + 4]
        stripped = group.rstrip(BASE64_PAD)
        padding = len(group) - len(stripped)
        if padding > 2 or (padding and i + 4 != len(cleaned)):
            raise InvalidBase64String("misplaced Base64 padding")

        value = 0
        for c in stripped:
            sextet = _BASE64_VALUES.get(c)
            if sextet is None:
                raise InvalidBase64String(f"invalid Base64 character {c!r}")
            value = (value << 6) | sextet
        value <<= 6 * padding

        result.extend(value.to_bytes(3, "big")[:3 - padding])
    return bytes(result)


# Self-test when run directly
if __name__ == "__main__":
    test_cases = [
        (b"", ""),
        (b"A", "QQ=="),
        (b"AB", "QUI="),
        (b"ABC", "QUJD"),
        (b"Hello, world!", "SGVsbG8sIHdvcmxkIQ=="),
    ]

    print("Encoding Self-Test")
    print("=" * 60)

    all_passed = True
    for data, expected in test_cases:
        encoded = base64_encode(data)
        passed = encoded == expected and base64_decode(encoded) == data
        all_passed = all_passed and passed
        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"  {data!r:20} -> {encoded:24} {status}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")

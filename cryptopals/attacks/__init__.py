# Attacks Module
"""
Attacks on the XOR ciphers:
- Single-byte XOR key recovery and detection
- Key size estimation and repeating-key XOR key recovery
"""

from .xor_attacks import (
    XorCandidate,
    break_single_byte_xor,
    detect_single_byte_xor,
    normalized_key_distance,
    guess_key_sizes,
    break_repeating_key_xor,
)

__all__ = [
    'XorCandidate',
    'break_single_byte_xor',
    'detect_single_byte_xor',
    'normalized_key_distance',
    'guess_key_sizes',
    'break_repeating_key_xor',
]

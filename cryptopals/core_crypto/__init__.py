# Core Cryptography Module
"""
Core cryptographic implementations including:
- Hex and Base64 encoding (from scratch)
- Fixed, single-byte and repeating-key XOR
- Hamming distance
- AES-ECB with PKCS#7 padding
"""

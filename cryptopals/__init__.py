"""
Cryptopals - solutions to the Cryptopals crypto challenges.

Packages:
- core_crypto: encodings, XOR ciphers, AES-ECB
- analysis: statistics and English frequency scoring
- attacks: breaking XOR ciphers
- challenges: the challenge solutions themselves
"""

__version__ = "0.1.0"

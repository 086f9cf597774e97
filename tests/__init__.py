# Cryptopals Test Suite
"""
Test suite including:
- Unit tests for the primitives and the analysis helpers
- Attack tests against ciphertexts built on the fly
- Challenge and command line tests (network calls are mocked)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""

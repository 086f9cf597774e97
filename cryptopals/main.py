"""
Cryptopals - Main Entry Point
Solutions to the Cryptopals crypto challenges.
"""

from .cli import app


def main():
    """Main entry point for the cryptopals console script."""
    app(prog_name="cryptopals")


if __name__ == "__main__":
    main()

"""Main entry point for the Larder CLI.

Usage:
    python -m larder --help
    larder --help  # If installed via pip
"""

from larder.cli import main

if __name__ == "__main__":
    main()

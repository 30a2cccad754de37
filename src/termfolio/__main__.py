"""
termfolio CLI entry point.

Usage:
    python -m termfolio serve --port 2222
    python -m termfolio local
    python -m termfolio snapshot --page projects
"""

from termfolio.cli import main

if __name__ == "__main__":
    main()

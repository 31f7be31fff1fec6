"""
Package entry point.

Allows running the application via:

    python -m repy

This simply forwards execution to repy.cli.main().
"""

from repy.cli import main

if __name__ == "__main__":
    main()

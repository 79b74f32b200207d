"""
Package entry point.

Allows running the application via:

    python -m teamcal

This simply forwards execution to teamcal.cli.main().
"""

from teamcal.cli import main

if __name__ == "__main__":
    main()

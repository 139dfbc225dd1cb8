"""
Package entry point.

Allows running the application via:

    python -m routineplanner

This simply forwards execution to routineplanner.cli.main().
"""

from routineplanner.cli import main

if __name__ == "__main__":
    main()

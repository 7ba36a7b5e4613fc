"""Main entry point for galscript CLI when run as a module."""

from galscript.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()

"""Entry point for running spotmeta as a module."""

from spotmeta.cli import main

if __name__ == "__main__":
    main()

"""Entry point for python -m repofind."""

from .cli import main

if __name__ == "__main__":
    # Pass command line arguments excluding the module name
    import sys

    main(sys.argv[1:])

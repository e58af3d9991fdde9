"""Entry point for 'python -m playerpath'."""

from playerpath.cli import main

if __name__ == "__main__":
    main()

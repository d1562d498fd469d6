"""Allow running cattocol as ``python -m cattocol``."""

from cattocol.cli.cli import main

if __name__ == "__main__":
    main()

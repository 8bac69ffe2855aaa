"""Allow ``python -m protog``."""

from protog.cli import main

if __name__ == "__main__":
    main()

"""Allow ``python -m wavelab``."""

from .cli import main

if __name__ == "__main__":
    main()

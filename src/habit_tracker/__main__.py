"""Allow ``python -m habit_tracker``."""

from .cli import main

if __name__ == "__main__":
    main()

"""Allow ``python -m checklist``."""

from .cli import main

if __name__ == "__main__":
    main()

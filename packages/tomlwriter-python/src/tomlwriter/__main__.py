"""Allow ``python -m tomlwriter``."""

from .cli import main

if __name__ == "__main__":
    main()

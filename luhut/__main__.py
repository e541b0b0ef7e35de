"""Module entrypoint for ``python -m luhut``."""

from .cli import main


if __name__ == "__main__":
    main()

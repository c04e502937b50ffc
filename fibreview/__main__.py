"""Module entrypoint for ``python -m fibreview``."""

from fibreview.cli import main

if __name__ == "__main__":
    main()

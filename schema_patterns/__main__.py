"""Module entrypoint for `python -m schema_patterns`.

Delegates to the CLI implementation.
"""

from .run_resolve import main


if __name__ == "__main__":
    main()

"""Run the userql command-line interface from a source checkout."""

from userql.cli import main

if __name__ == "__main__":
    raise SystemExit(main())

"""Development entrypoint for the dipgame command line."""

from __future__ import annotations

from dipgame.cli import main

if __name__ == "__main__":
    raise SystemExit(main())

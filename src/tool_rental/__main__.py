"""Module entry point for python -m tool_rental."""

from __future__ import annotations

from tool_rental.app import main


if __name__ == "__main__":
    raise SystemExit(main())

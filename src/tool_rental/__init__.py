"""ToolRental Manager desktop application."""

from tool_rental.version import __version__

__all__ = ["__version__"]

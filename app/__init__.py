"""Desk Commands bridge - HTTP surface the UI shell invokes commands through."""

from desk_commands import __version__

__all__ = ["__version__"]

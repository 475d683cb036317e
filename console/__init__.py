"""Terminal driver: holds the game snapshot and feeds moves into the engine."""

from .session import TableSession, describe_event, render_table

__all__ = ["TableSession", "describe_event", "render_table"]

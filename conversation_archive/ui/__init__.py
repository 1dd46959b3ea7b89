"""UI."""

from conversation_archive.ui.reporter import Reporter

__all__ = ["Reporter"]

"""Utility modules for notesbridge.

Provides:
- logger: get_logger for namespaced logging
"""

from notesbridge.utils.logger import get_logger

__all__ = ["get_logger"]

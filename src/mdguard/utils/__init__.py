"""Utility modules for mdguard.

Provides:
- text: escape_text, escape_attribute for re-serializing HTML
- logger: get_logger for logging
"""

from mdguard.utils.logger import get_logger
from mdguard.utils.text import escape_attribute, escape_text

__all__ = [
    "escape_attribute",
    "escape_text",
    "get_logger",
]

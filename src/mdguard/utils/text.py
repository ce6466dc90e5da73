"""Escaping helpers for re-serializing parsed HTML.

The tokenizer decodes character references in text and attribute values,
so everything written back out has to be escaped again.

Example:
    >>> from mdguard.utils.text import escape_attribute, escape_text
    >>> escape_text("1 < 2 & 3")
    '1 &lt; 2 &amp; 3'
    >>> escape_attribute('say "hi"')
    'say &quot;hi&quot;'
"""

from __future__ import annotations

import html as html_module


def escape_text(text: str) -> str:
    """Escape &, < and > for use as element content.

    Quotes are left alone; they are harmless outside attribute values.
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute.

    Examples:
        >>> escape_attribute("<a href='x'>")
        '&lt;a href=&#x27;x&#x27;&gt;'
    """
    if not value:
        return ""
    return html_module.escape(value, quote=True)

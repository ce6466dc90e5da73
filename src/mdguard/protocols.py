"""Types and protocols for the mdguard pipeline.

The pipeline is two stages joined by an untrusted-HTML string:

    MarkdownText --render--> UntrustedHtml --sanitize--> SanitizedHtml

The NewTypes cost nothing at runtime but keep the trust boundary visible to
type checkers: only the sanitizer produces SanitizedHtml.
"""

from __future__ import annotations

from typing import NewType, Protocol

MarkdownText = NewType("MarkdownText", str)
UntrustedHtml = NewType("UntrustedHtml", str)
SanitizedHtml = NewType("SanitizedHtml", str)


class MarkdownRenderer(Protocol):
    """Protocol for the markdown stage.

    Any object with ``render(source) -> str`` can replace the built-in
    markdown-it-py stage. Its output is treated as untrusted regardless.

    Thread Safety:
        Implementations are shared across calls and must not keep per-call
        state on the instance.

    """

    def render(self, source: str) -> str:
        """Render markdown source to (unsanitized) HTML."""
        ...


__all__ = [
    "MarkdownRenderer",
    "MarkdownText",
    "SanitizedHtml",
    "UntrustedHtml",
]

"""
mdguard — Markdown to allowlist-sanitized HTML

Renders untrusted markdown (dataset descriptions, author-supplied notes) to
HTML that can be embedded directly in a page. The pipeline has two stages:

    markdown --render_markdown--> untrusted HTML --sanitize_html--> safe HTML

Only tags and attributes on a fixed allowlist survive. Disallowed elements
are removed with their whole subtree. Inline SVG is supported; script,
style and foreignObject are not.

Quick Start:
    >>> from mdguard import sanitize
    >>> sanitize("Hello **world**<script>alert(1)</script>")
    '<p>Hello <strong>world</strong></p>\\n'

    >>> # Or bind a configuration once
    >>> from mdguard import MarkdownSanitizer
    >>> clean = MarkdownSanitizer(tables_enabled=False)
    >>> clean("*hi*")
    '<p><em>hi</em></p>\\n'

Attribute values are not inspected: an allowed ``href`` keeps whatever URL
it carries, including ``javascript:`` URLs written as raw HTML.
"""

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from mdguard.allowlist import (
    ALLOWED_ATTRIBUTES,
    ALLOWED_TAGS,
    DEFAULT_ALLOWLIST,
    Allowlist,
)
from mdguard.config import (
    SanitizeConfig,
    get_sanitize_config,
    reset_sanitize_config,
    sanitize_config_context,
    set_sanitize_config,
)
from mdguard.errors import ConfigError, MdguardError, RenderError
from mdguard.protocols import MarkdownRenderer, MarkdownText, SanitizedHtml, UntrustedHtml
from mdguard.renderers.markdown import MarkdownItRenderer, render_markdown
from mdguard.sanitizer import HtmlSanitizer, sanitize_html

__version__ = "0.1.0"


def sanitize(markdown: str, *, config: SanitizeConfig | None = None) -> SanitizedHtml:
    """Render markdown and restrict the result to the allowlists.

    Args:
        markdown: Markdown source text (may be empty)
        config: Sanitizer config (uses the context-local config if None)

    Returns:
        HTML safe for direct embedding

    Raises:
        TypeError: If markdown is not a string

    Example:
        >>> sanitize("")
        ''
        >>> sanitize('<svg><circle cx="1" fill="red"/></svg>')
        '<p><svg><circle cx="1" fill="red" /></svg></p>\\n'

    """
    config = config or get_sanitize_config()
    return sanitize_html(render_markdown(markdown, config=config), config=config)


# Name used by page code that renders dataset descriptions
parse_markdown = sanitize


class MarkdownSanitizer:
    """Markdown-to-safe-HTML processor bound to one configuration.

    Usage:
        >>> md = MarkdownSanitizer()
        >>> md("# Title")
        '<h1>Title</h1>\\n'

        >>> # Stages are available separately; disallowed <b> goes with its text
        >>> raw = md.render('<b onclick="x()">hi</b> there')
        >>> md.clean(raw)
        '<p> there</p>\\n'

        >>> # Override single fields of the active config
        >>> md = MarkdownSanitizer(strict=True)

    Thread Safety:
        Holds only a frozen config and a stateless renderer. Safe to share
        one instance across threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        config: SanitizeConfig | None = None,
        *,
        renderer: MarkdownRenderer | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Base config (uses the context-local config if None)
            renderer: Alternative markdown stage (uses markdown-it-py if None)
            **overrides: SanitizeConfig fields to replace on the base config

        Raises:
            ConfigError: If an override names an unknown field or has an
                invalid value
        """
        base = config or get_sanitize_config()
        if overrides:
            try:
                base = replace(base, **overrides)
            except TypeError as e:
                raise ConfigError(", ".join(sorted(overrides)), str(e)) from e
        self._config = base
        self._renderer = renderer or MarkdownItRenderer(base)

    @property
    def config(self) -> SanitizeConfig:
        """The configuration this processor is bound to."""
        return self._config

    def __call__(self, markdown: str) -> SanitizedHtml:
        """Render and sanitize in one call."""
        return self.clean(self.render(markdown))

    def render(self, markdown: str) -> UntrustedHtml:
        """Markdown stage only. The result is NOT safe to embed."""
        return render_markdown(markdown, config=self._config, renderer=self._renderer)

    def clean(self, html: str) -> SanitizedHtml:
        """Sanitizer stage only."""
        return sanitize_html(html, config=self._config)

    def sanitize_many(self, sources: Iterable[str]) -> list[SanitizedHtml]:
        """Render and sanitize a batch of markdown strings, preserving order.

        Example:
            >>> MarkdownSanitizer().sanitize_many(["a", "**b**"])
            ['<p>a</p>\\n', '<p><strong>b</strong></p>\\n']
        """
        return [self(source) for source in sources]


__all__ = [  # noqa: RUF022 grouped by category
    # Version
    "__version__",
    # Core API
    "sanitize",
    "parse_markdown",
    "render_markdown",
    "sanitize_html",
    # High-level
    "MarkdownSanitizer",
    # Stages
    "HtmlSanitizer",
    "MarkdownItRenderer",
    "MarkdownRenderer",
    # Allowlists
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_TAGS",
    "DEFAULT_ALLOWLIST",
    "Allowlist",
    # Types
    "MarkdownText",
    "SanitizedHtml",
    "UntrustedHtml",
    # Configuration (ContextVar-based)
    "SanitizeConfig",
    "get_sanitize_config",
    "set_sanitize_config",
    "reset_sanitize_config",
    "sanitize_config_context",
    # Errors
    "MdguardError",
    "ConfigError",
    "RenderError",
]

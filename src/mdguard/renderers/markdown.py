"""Markdown stage: markdown source to untrusted HTML.

Uses markdown-it-py with the CommonMark preset plus GFM tables and
strikethrough. Raw HTML in the source passes through verbatim; the sanitizer
stage decides what survives.

Thread Safety:
    MarkdownIt instances are built once per SanitizeConfig and shared. Each
    render() call keeps its parse state local, so concurrent calls are safe.

Degradation:
    If the engine raises, the source is emitted as a single escaped
    paragraph and a warning is logged. With ``strict=True`` the failure is
    raised as RenderError instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from markdown_it import MarkdownIt

from mdguard.config import SanitizeConfig, get_sanitize_config
from mdguard.errors import RenderError
from mdguard.protocols import MarkdownRenderer, UntrustedHtml
from mdguard.utils.logger import get_logger
from mdguard.utils.text import escape_text

if TYPE_CHECKING:
    from markdown_it.token import Token
    from markdown_it.utils import EnvType, OptionsDict

logger = get_logger(__name__)


def _render_del(
    self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
) -> str:
    # markdown-it-py writes <s>; the allowlist only knows <del>
    return "<del>" if tokens[idx].nesting == 1 else "</del>"


@lru_cache(maxsize=32)
def get_markdown_engine(config: SanitizeConfig) -> MarkdownIt:
    """Return the shared MarkdownIt instance for a config.

    Only the markdown-related fields matter, but keying on the whole frozen
    config keeps the cache trivially correct.
    """
    engine = MarkdownIt("commonmark", {"html": config.html_enabled})
    if config.tables_enabled:
        engine.enable("table")
    if config.strikethrough_enabled:
        engine.enable("strikethrough")
        engine.add_render_rule("s_open", _render_del)
        engine.add_render_rule("s_close", _render_del)
    return engine


class MarkdownItRenderer:
    """Markdown stage backed by markdown-it-py.

    Usage:
        >>> renderer = MarkdownItRenderer()
        >>> renderer.render("Hello **world**")
        '<p>Hello <strong>world</strong></p>\\n'

    Thread Safety:
        Holds only the frozen config; the engine is looked up per call.

    """

    __slots__ = ("_config",)

    def __init__(self, config: SanitizeConfig | None = None) -> None:
        self._config = config or get_sanitize_config()

    def render(self, source: str) -> str:
        """Render markdown to HTML. Engine errors propagate."""
        return get_markdown_engine(self._config).render(source)


def escaped_paragraph(source: str) -> str:
    """Fallback rendering: the whole source as one escaped paragraph."""
    if not source:
        return ""
    return f"<p>{escape_text(source)}</p>\n"


def render_markdown(
    source: str,
    *,
    config: SanitizeConfig | None = None,
    renderer: MarkdownRenderer | None = None,
) -> UntrustedHtml:
    """Render markdown to HTML that still needs sanitizing.

    Args:
        source: Markdown source text (may be empty)
        config: Sanitizer config (uses the context-local config if None)
        renderer: Alternative markdown stage (uses markdown-it-py if None)

    Returns:
        Untrusted HTML string

    Raises:
        TypeError: If source is not a string
        RenderError: If the renderer fails and config.strict is set

    """
    if not isinstance(source, str):
        raise TypeError(f"markdown source must be str, not {type(source).__name__}")
    config = config or get_sanitize_config()
    stage = renderer or MarkdownItRenderer(config)

    try:
        return UntrustedHtml(stage.render(source))
    except Exception as e:
        if config.strict:
            raise RenderError("markdown", str(e) or type(e).__name__) from e
        logger.warning(
            "Markdown rendering failed for %d chars of input; emitting escaped text",
            len(source),
            exc_info=True,
        )
        return UntrustedHtml(escaped_paragraph(source))

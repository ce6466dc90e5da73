"""Allowlist sanitizer: untrusted HTML to sanitized HTML.

Walks the HTML token stream once and re-serializes only what the allowlist
permits:

- An element whose tag is not allowlisted is dropped together with its whole
  subtree (not unwrapped).
- Attributes not on the allowlist are dropped from surviving elements.
- Text survives when "#text" is allowlisted and its container survives.
- Comments, doctypes, processing instructions and CDATA are dropped.

Attribute values are not inspected: ``href="javascript:..."`` on an allowed
tag passes through unchanged.

The output is balanced. Allowed elements left open are closed at the end,
a closing tag implicitly closes everything opened after its match, and
stray closing tags are discarded.

Self-closing syntax follows the HTML rules: ``<x/>`` is kept as a complete
element only for void elements and inside ``<svg>``. Elsewhere the slash is
ignored, so ``<div/>`` opens a div and ``<span/>`` drops what follows it
up to the enclosing end tag.

Thread Safety:
    Each call builds its own HtmlSanitizer. Allowlists are frozen.
"""

from __future__ import annotations

from html.parser import HTMLParser

from mdguard.allowlist import VOID_ELEMENTS, Allowlist
from mdguard.config import SanitizeConfig, get_sanitize_config
from mdguard.errors import RenderError
from mdguard.protocols import SanitizedHtml
from mdguard.stringbuilder import StringBuilder
from mdguard.utils.logger import get_logger
from mdguard.utils.text import escape_attribute, escape_text

logger = get_logger(__name__)


class HtmlSanitizer(HTMLParser):
    """Single-use streaming sanitizer.

    Tracks open elements as (tokenizer name, emitted name) pairs; the emitted
    name is None for elements inside a dropped subtree. While ``_drop_depth``
    is set, nothing is written until the element at that depth closes.

    Usage:
        >>> from mdguard.allowlist import DEFAULT_ALLOWLIST
        >>> s = HtmlSanitizer(DEFAULT_ALLOWLIST)
        >>> s.feed('<p onclick="x()">Hi<script>alert(1)</script></p>')
        >>> s.finish()
        '<p>Hi</p>'

    """

    def __init__(self, allowlist: Allowlist) -> None:
        super().__init__(convert_charrefs=True)
        self._allowlist = allowlist
        self._keep_text = allowlist.allows_text
        self._out = StringBuilder()
        self._open: list[tuple[str, str | None]] = []
        self._drop_depth: int | None = None
        self._svg_depth = 0

    @property
    def dropping(self) -> bool:
        """True while inside a dropped subtree."""
        return self._drop_depth is not None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in VOID_ELEMENTS:
            self._emit_start(tag, attrs, "")
            return
        if self.dropping:
            self._push(tag, None)
            return

        name = self._allowlist.tag(tag)
        if name is None:
            logger.debug("Dropping <%s> and its contents", tag)
            self._drop_depth = len(self._open)
            self._push(tag, None)
            return

        self._out.append(f"<{name}{self._attributes(tag, attrs)}>")
        self._push(tag, name)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # The slash only closes void and SVG elements; HTML treats <div/> as <div>
        if tag in VOID_ELEMENTS or tag == "svg" or self._svg_depth:
            self._emit_start(tag, attrs, " /")
        else:
            self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        for index in range(len(self._open) - 1, -1, -1):
            if self._open[index][0] == tag:
                break
        else:
            return

        self._close_to(index)
        if self._drop_depth is not None and len(self._open) <= self._drop_depth:
            self._drop_depth = None

    def handle_data(self, data: str) -> None:
        if self._keep_text and not self.dropping:
            self._out.append(escape_text(data))

    def handle_comment(self, data: str) -> None:
        """Comments never reach the output."""

    def finish(self, *, complete: bool = True) -> str:
        """Flush the tokenizer, close open elements and return the HTML.

        Args:
            complete: Flush buffered input first. Pass False after the
                tokenizer raised; unparsed input is then discarded.
        """
        if complete:
            self.close()
        self._close_to(0)
        self._drop_depth = None
        return self._out.build()

    def _emit_start(self, tag: str, attrs: list[tuple[str, str | None]], slash: str) -> None:
        """Write a tag that opens no subtree (void or self-closing)."""
        if self.dropping:
            return
        name = self._allowlist.tag(tag)
        if name is None:
            logger.debug("Dropping <%s>", tag)
            return
        self._out.append(f"<{name}{self._attributes(tag, attrs)}{slash}>")

    def _attributes(self, tag: str, attrs: list[tuple[str, str | None]]) -> str:
        sb = StringBuilder()
        seen: set[str] = set()
        for key, value in attrs:
            name = self._allowlist.attribute(key)
            if name is None:
                logger.debug("Dropping attribute %r on <%s>", key, tag)
                continue
            # First occurrence wins, as in browsers
            if name in seen:
                continue
            seen.add(name)
            if value is None:
                sb.append(f" {name}")
            else:
                sb.append(f' {name}="{escape_attribute(value)}"')
        return sb.build()

    def _push(self, tag: str, name: str | None) -> None:
        if tag == "svg":
            self._svg_depth += 1
        self._open.append((tag, name))

    def _close_to(self, depth: int) -> None:
        while len(self._open) > depth:
            tag, name = self._open.pop()
            if tag == "svg":
                self._svg_depth -= 1
            if name is not None:
                self._out.append(f"</{name}>")


def sanitize_html(html: str, *, config: SanitizeConfig | None = None) -> SanitizedHtml:
    """Restrict HTML to the configured tag and attribute allowlists.

    Never raises on string input: if the tokenizer fails on pathological
    markup, whatever was emitted so far is closed off and returned.

    Args:
        html: Untrusted HTML
        config: Sanitizer config (uses the context-local config if None)

    Returns:
        HTML containing only allowlisted tags and attributes

    Raises:
        TypeError: If html is not a string
        RenderError: If the tokenizer fails and config.strict is set

    Example:
        >>> sanitize_html('<svg viewbox="0 0 1 1"><circle r="1" onload="x()"/></svg>')
        '<svg viewBox="0 0 1 1"><circle r="1" /></svg>'

    """
    if not isinstance(html, str):
        raise TypeError(f"html must be str, not {type(html).__name__}")
    config = config or get_sanitize_config()

    sanitizer = HtmlSanitizer(config.allowlist)
    try:
        sanitizer.feed(html)
        return SanitizedHtml(sanitizer.finish())
    except Exception as e:
        if config.strict:
            raise RenderError("sanitize", str(e) or type(e).__name__) from e
        logger.warning(
            "HTML tokenizer failed for %d chars of input; returning partial output",
            len(html),
            exc_info=True,
        )
        return SanitizedHtml(sanitizer.finish(complete=False))

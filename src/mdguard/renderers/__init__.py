"""mdguard renderers.

Renderers implement the markdown stage of the pipeline: markdown source in,
untrusted HTML out.

Available Renderers:
- MarkdownItRenderer: CommonMark + GFM tables/strikethrough via markdown-it-py

"""

from mdguard.renderers.markdown import MarkdownItRenderer, get_markdown_engine, render_markdown

__all__ = ["MarkdownItRenderer", "get_markdown_engine", "render_markdown"]

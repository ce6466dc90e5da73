"""Render untrusted Markdown to safe HTML in 3 lines."""

from mdguard import sanitize

html = sanitize("# Hello **World**<script>alert('hi')</script>")
print(html)

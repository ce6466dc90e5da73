"""Render the description fields of a dataset listing.

Narrative and dataset listings carry author-written markdown. Each
description is sanitized before it goes into the page, with DEBUG logging
on so the dropped tags and attributes are visible.
"""

import json
import logging

from mdguard import MarkdownSanitizer

LISTING = json.loads("""
[
  {"name": "flu/seasonal/h3n2",
   "description": "Seasonal **H3N2** phylogeny. See [the docs](https://docs.nextstrain.org)."},
  {"name": "ncov/gisaid/global",
   "description": "<svg width=\\"12\\" height=\\"12\\" viewBox=\\"0 0 12 12\\"><circle cx=\\"6\\" cy=\\"6\\" r=\\"5\\" fill=\\"#4C90C0\\" onclick=\\"track()\\"/></svg> Global sample"},
  {"name": "zika",
   "description": "<iframe src=\\"https://example.com/ad\\"></iframe>~~Old build~~ Updated weekly"}
]
""")

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

clean = MarkdownSanitizer()
rendered = dict(zip(
    (entry["name"] for entry in LISTING),
    clean.sanitize_many(entry["description"] for entry in LISTING),
    strict=True,
))

for name, html in rendered.items():
    print(f"--- {name}")
    print(html)

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Link expansion
==============
Rewrites server-relative ``<a href>`` targets to absolute (protocol-relative
by default) URLs, for output that will be served outside the wiki.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Optional

from wikiout.core.config import get_settings


# -----------------------------------------------------------------------------

_ANCHOR_HREF_RE = re.compile(
    r'(<a\s[^>]*?\bhref\s*=\s*)(["\'])(.*?)\2',
    re.IGNORECASE | re.DOTALL,
)


def expand_url(url: str, server: str) -> str:
    """Prefix *server* to a server-relative *url*; leave anything else alone."""
    if url.startswith("/") and not url.startswith("//"):
        return server.rstrip("/") + url
    return url


def expand_local_links(html: str, server: Optional[str] = None) -> str:
    """Expand every server-relative link target in *html*."""
    if server is None:
        server = get_settings().server

    def _patch(m: re.Match) -> str:
        prefix, quote, href = m.groups()
        return f"{prefix}{quote}{expand_url(href, server)}{quote}"

    return _ANCHOR_HREF_RE.sub(_patch, html)


# -----------------------------------------------------------------------------

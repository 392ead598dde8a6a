#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tidy
====
Light normaliser for generated fragments (the TOC block).  Not an HTML
parser: it splits the fragment into tags and text runs, lets a caller
filter the text runs, and tidies whitespace.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Callable, Optional, Protocol


# -----------------------------------------------------------------------------

TextFilter = Callable[[str], str]

_TAG_SPLIT_RE = re.compile(r"(<!--.*?-->|<[^>]*>)", re.DOTALL)
_TRAILING_WS_RE = re.compile(r"[ \t]+\n")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


class TidyDriver(Protocol):
    def tidy(self, text: str, text_filter: Optional[TextFilter] = None) -> str: ...


# -----------------------------------------------------------------------------

class Tidy:
    """Default ``TidyDriver``."""

    def tidy(self, text: str, text_filter: Optional[TextFilter] = None) -> str:
        if text_filter is not None:
            pieces = _TAG_SPLIT_RE.split(text)
            # split() with one capture group alternates text, tag, text, ...
            for i in range(0, len(pieces), 2):
                if pieces[i]:
                    pieces[i] = text_filter(pieces[i])
            text = "".join(pieces)
        text = _TRAILING_WS_RE.sub("\n", text)
        text = _BLANK_LINES_RE.sub("\n\n", text)
        return text


# -----------------------------------------------------------------------------

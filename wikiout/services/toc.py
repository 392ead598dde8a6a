#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Table of contents
=================
``generate_toc()`` renders the TOC block from the section list the parser
collected; ``replace_toc_marker()`` swaps the marker the parser left in the
body for that block (or for nothing).
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Optional, Sequence

from wikiout.models import SectionMetadata
from .sanitizer import escape_attr
from .skin import Language


# -----------------------------------------------------------------------------

# Current marker form, plus the legacy element older cached output carries.
TOC_PLACEHOLDER = '<meta property="mw:PageProp/toc" />'

_TOC_MARKER_RE = re.compile(
    r'<meta\b[^>]*?\sproperty\s*=\s*["\']mw:PageProp/toc["\'][^>]*>'
    r'|<mw:tocplace>\s*</mw:tocplace>',
    re.IGNORECASE,
)

MAX_TOC_LEVEL = 999


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------

def _toc_line(section: SectionMetadata) -> str:
    return (
        f'<li class="toclevel-{section.toc_level} tocsection-{escape_attr(section.index)}">'
        f'<a href="#{escape_attr(section.link_anchor or "")}">'
        f'<span class="tocnumber">{section.number}</span> '
        f'<span class="toctext">{section.line}</span></a>'
    )


def _toc_unindent(levels: int) -> str:
    return "</li>\n" + "</ul>\n</li>\n" * max(levels, 0)


def generate_toc(
    sections: Sequence[SectionMetadata],
    lang: Optional[Language] = None,
    max_toc_level: int = MAX_TOC_LEVEL,
) -> str:
    """Render the TOC block for *sections*.

    Nesting follows ``toc_level``; the parser guarantees each section is at
    most one level deeper than the previous one.  Sections at or beyond
    *max_toc_level* are left out.
    """
    lang = lang or Language.default()
    parts: list[str] = []
    last_level = 0

    for section in sections:
        level = section.toc_level
        if level >= max_toc_level:
            continue
        if level > last_level:
            parts.append("\n<ul>\n")
        elif level < last_level:
            if last_level < max_toc_level:
                parts.append(_toc_unindent(last_level - level))
            else:
                parts.append("</li>\n")
        else:
            parts.append("</li>\n")
        parts.append(_toc_line(section))
        last_level = level

    if 0 < last_level < max_toc_level:
        parts.append(_toc_unindent(last_level - 1))

    heading = lang.msg("toc")
    return (
        '<div id="toc" class="toc" role="navigation" aria-labelledby="mw-toc-heading">'
        '<input type="checkbox" role="button" id="toctogglecheckbox" class="toctogglecheckbox" style="display:none" />'
        f'<div class="toctitle" lang="{escape_attr(lang.code)}" dir="{escape_attr(lang.dir)}">'
        f'<h2 id="mw-toc-heading">{heading}</h2>'
        '<span class="toctogglespan"><label class="toctogglelabel" for="toctogglecheckbox"></label></span>'
        '</div>\n'
        + "".join(parts)
        + "</ul>\n</div>\n"
    )


# -----------------------------------------------------------------------------
# Marker replacement
# -----------------------------------------------------------------------------

def replace_toc_marker(text: str, toc: str) -> str:
    """Replace the first TOC marker in *text* with *toc*; drop any others.

    Dropping the extra markers keeps the pass idempotent.
    """
    replaced = False

    def _replace(m: re.Match) -> str:
        nonlocal replaced
        if replaced:
            return ""
        replaced = True
        return toc

    return _TOC_MARKER_RE.sub(_replace, text)


def has_toc_marker(text: str) -> bool:
    return _TOC_MARKER_RE.search(text) is not None


# -----------------------------------------------------------------------------

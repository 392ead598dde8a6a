#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Rendered document records
=========================
The parser hands us a ``RenderedDocument``: raw HTML-ish text plus the bits
of metadata the output transform needs (sections for the TOC, redirect
header, debug report, wrapper class).  The transform only ever matches
regexes against the text; it never interprets it further.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------

@dataclass
class SectionMetadata:
    """One heading's TOC entry."""
    toc_level: int
    line: str                       # heading inner HTML
    number: str = ""                # e.g. "1.2"
    index: str = ""                 # "3", or "T-1" for transcluded sections
    level: int = 2                  # h-level of the heading
    anchor: str = ""
    link_anchor: Optional[str] = None
    from_title: Optional[str] = None

    def __post_init__(self) -> None:
        if self.link_anchor is None:
            self.link_anchor = self.anchor


# -----------------------------------------------------------------------------

@dataclass
class RenderedDocument:
    raw_text: str
    title_text: str = ""
    redirect_header: Optional[str] = None
    debug_report: Optional[str] = None
    limit_report: dict[str, Any] = field(default_factory=dict)
    wrapper_div_class: str = ""
    sections: list[SectionMetadata] = field(default_factory=list)
    has_page_bundle: bool = False
    text: Optional[str] = None

    def get_text(self) -> str:
        """Transformed text if the document has been through the pipeline, else raw."""
        return self.text if self.text is not None else self.raw_text

    def set_transformed_text(self, text: str) -> None:
        self.text = text

    @property
    def is_transformed(self) -> bool:
        return self.text is not None

    def render_debug_info(self) -> str:
        """Build the HTML comment appended when ``includeDebugInfo`` is set.

        The limit report comes first (``key: value`` per line), followed by
        the free-form debug report.  Returns an empty string when there is
        nothing to report.
        """
        out = ""
        if self.limit_report:
            lines = [f"{key}: {_comment_safe(str(value))}" for key, value in self.limit_report.items()]
            out += "\n<!-- \nNewPP limit report\n" + "\n".join(lines) + "\n-->\n"
        if self.debug_report:
            out += "<!--\n" + _comment_safe(self.debug_report) + "\n-->\n"
        return out


# -----------------------------------------------------------------------------

def _comment_safe(text: str) -> str:
    # "--" would let the value terminate the surrounding comment
    return text.replace("--", "\u2010\u2010")


# -----------------------------------------------------------------------------

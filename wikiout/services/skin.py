#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Skin and language
=================
The narrow slice of a skin the output transform needs: the interface
language and the section edit link renderer.

Messages come from an English default bundle that a caller can override
per ``Language`` instance.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from wikiout.core.config import get_settings
from .sanitizer import decode_char_references, escape_attr
from .titles import Title


# -----------------------------------------------------------------------------

DEFAULT_MESSAGES: dict[str, str] = {
    "editsection": "edit",
    "editsectionhint": "Edit section: $1",
    "toc": "Contents",
    "word-separator": " ",
}

_STRIP_TAGS_RE = re.compile(r"<[^>]+>")
_PARAM_RE = re.compile(r"\$(\d+)")


# -----------------------------------------------------------------------------

@dataclass
class Language:
    code: str = "en"
    dir: str = "ltr"
    messages: dict[str, str] = field(default_factory=dict)

    def msg(self, key: str, *params: str) -> str:
        """Look up *key* and substitute ``$1``, ``$2`` ... with *params*."""
        text = self.messages.get(key, DEFAULT_MESSAGES.get(key, f"⧼{key}⧽"))

        def _param(m: re.Match) -> str:
            idx = int(m.group(1)) - 1
            return params[idx] if 0 <= idx < len(params) else m.group(0)

        return _PARAM_RE.sub(_param, text)

    @classmethod
    def default(cls) -> "Language":
        settings = get_settings()
        return cls(code=settings.language_code, dir=settings.language_dir)


# -----------------------------------------------------------------------------

class Skin:
    """Renders section edit links in a given interface language."""

    def __init__(self, language: Optional[Language] = None) -> None:
        self.language = language or Language.default()

    def do_edit_section_link(
        self,
        title: Title,
        section: str,
        tooltip: Optional[str],
        lang: Language,
    ) -> str:
        """Return the ``[edit]`` affordance for one section of *title*.

        Sections transcluded from a template carry a ``T-`` prefixed index;
        the link then edits the template page at the bare index.
        """
        query = {"action": "edit", "section": section}
        if section.startswith("T-"):
            query["section"] = section[2:]

        attrs = ""
        if tooltip:
            plain = decode_char_references(_STRIP_TAGS_RE.sub("", tooltip)).strip()
            if plain:
                hint = lang.msg("editsectionhint", plain)
                attrs = f' title="{escape_attr(hint)}"'

        href = escape_attr(title.local_url(query))
        label = lang.msg("editsection")
        return (
            '<span class="mw-editsection">'
            '<span class="mw-editsection-bracket">[</span>'
            f'<a href="{href}"{attrs}>{label}</a>'
            '<span class="mw-editsection-bracket">]</span>'
            '</span>'
        )


# -----------------------------------------------------------------------------

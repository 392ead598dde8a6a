#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page titles
===========
``Title.new_from_text()`` turns user- or parser-supplied text into a
normalised page title, or returns ``None`` when the text cannot name a page.
Used to resolve the ``page="..."`` attribute of section edit placeholders.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlencode

from wikiout.core.config import get_settings
from .sanitizer import decode_char_references, wf_urlencode


# -----------------------------------------------------------------------------

MAX_TITLE_BYTES = 255

_ILLEGAL_RE = re.compile(r"[<>\[\]|{}\x00-\x1f\x7f\ufffd]")
_PERCENT_RE = re.compile(r"%[0-9A-Fa-f]{2}")
_RELATIVE_RE = re.compile(r"^\.\.?(?:/|$)|/\.\.?(?:/|$)")
_DIRECTION_MARK_RE = re.compile(r"[\u200e\u200f\u202a-\u202e]")
_WHITESPACE_RE = re.compile(r"[ _\xa0\u1680\u180e\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")


def _ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Title:
    namespace: str          # "" for the main namespace
    text: str               # title without namespace, spaces not underscores
    fragment: str = ""

    # ── construction ───────────────────────────────────────────────────────

    @classmethod
    def new_from_text(
        cls,
        text: Optional[str],
        namespaces: Optional[Iterable[str]] = None,
    ) -> Optional["Title"]:
        """Return a normalised ``Title`` for *text*, or ``None`` if invalid."""
        if text is None:
            return None
        if namespaces is None:
            namespaces = get_settings().namespaces

        text = decode_char_references(text)
        text = _DIRECTION_MARK_RE.sub("", text)
        text = _WHITESPACE_RE.sub(" ", text).strip()

        fragment = ""
        if "#" in text:
            text, fragment = text.split("#", 1)
            text = text.rstrip()
            fragment = fragment.strip()

        # A single leading colon forces the main namespace.
        force_main = text.startswith(":")
        if force_main:
            text = text[1:].lstrip()

        namespace = ""
        if not force_main and ":" in text:
            prefix, rest = text.split(":", 1)
            known = {_ucfirst(ns.replace("_", " ")).lower(): _ucfirst(ns.replace("_", " ")) for ns in namespaces}
            canonical = known.get(prefix.strip().lower())
            if canonical is not None:
                namespace = canonical
                text = rest.strip()
                if not text:
                    return None

        if not text:
            return None
        if _ILLEGAL_RE.search(text) or _PERCENT_RE.search(text):
            return None
        if _RELATIVE_RE.search(text) or "~~~" in text:
            return None
        if text.startswith(":"):
            return None

        title = cls(namespace=namespace, text=_ucfirst(text), fragment=fragment)
        if len(title.prefixed_text.encode("utf-8")) > MAX_TITLE_BYTES:
            return None
        return title

    # ── accessors ──────────────────────────────────────────────────────────

    @property
    def db_key(self) -> str:
        return self.text.replace(" ", "_")

    @property
    def prefixed_text(self) -> str:
        return f"{self.namespace}:{self.text}" if self.namespace else self.text

    @property
    def prefixed_db_key(self) -> str:
        return self.prefixed_text.replace(" ", "_")

    def local_url(self, query: Optional[dict[str, str]] = None) -> str:
        """Server-relative URL for the page, with an optional query string."""
        settings = get_settings()
        if query:
            return (
                f"{settings.script_path}?title={wf_urlencode(self.prefixed_db_key)}"
                f"&{urlencode(query)}"
            )
        return settings.article_path.replace("$1", wf_urlencode(self.prefixed_db_key))

    def __str__(self) -> str:
        return self.prefixed_text


# -----------------------------------------------------------------------------

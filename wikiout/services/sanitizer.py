#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Sanitizer helpers
=================
Small, regex-based decoding and escaping helpers used by the output
transform.  They operate on the constrained markup the parser emits, not on
arbitrary HTML.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import re
from html.entities import html5 as _HTML5_ENTITIES
from urllib.parse import quote_plus


# -----------------------------------------------------------------------------
# Entity decoding
# -----------------------------------------------------------------------------

_SPECIALCHARS = {
    "amp": "&",
    "quot": '"',
    "lt": "<",
    "gt": ">",
}
_SPECIALCHARS_RE = re.compile(r"&(amp|quot|lt|gt|#0*39);")


def htmlspecialchars_decode(text: str) -> str:
    """Undo the five-character escape (``& " ' < >``) and nothing else."""
    def _replace(m: re.Match) -> str:
        name = m.group(1)
        return _SPECIALCHARS.get(name, "'")
    return _SPECIALCHARS_RE.sub(_replace, text)


_CHAR_REF_RE = re.compile(
    r"&(?:([A-Za-z][A-Za-z0-9]*);|#([0-9]+);|#[xX]([0-9A-Fa-f]+);)"
)
_REPLACEMENT_CHAR = "\ufffd"


def _valid_codepoint(cp: int) -> bool:
    return (
        cp in (0x09, 0x0A, 0x0D)
        or 0x20 <= cp <= 0xD7FF
        or 0xE000 <= cp <= 0xFFFD
        or 0x10000 <= cp <= 0x10FFFF
    )


def decode_char_references(text: str) -> str:
    """Decode named, decimal and hex character references.

    Only references terminated by ``;`` are recognised.  Numeric references
    to codepoints that are not valid in XML decode to U+FFFD; unknown named
    references are left as they are.
    """
    def _replace(m: re.Match) -> str:
        name, dec, hexa = m.groups()
        if name is not None:
            return _HTML5_ENTITIES.get(name + ";", m.group(0))
        cp = int(dec) if dec is not None else int(hexa, 16)
        return chr(cp) if _valid_codepoint(cp) else _REPLACEMENT_CHAR
    return _CHAR_REF_RE.sub(_replace, text)


# -----------------------------------------------------------------------------
# Attributes
# -----------------------------------------------------------------------------

_ATTRIB_RE = re.compile(
    r"""([^\s/>="'\x00]+)                # name
        (?:\s*=\s*
            (?:"([^"]*)"|'([^']*)'|([^\s"'>]+))
        )?""",
    re.VERBOSE,
)
_ATTRIB_NAME_RE = re.compile(r"^[:_\w][:_.\-\w]*$")


def decode_tag_attributes(text: str) -> dict[str, str]:
    """Parse the attribute portion of a start tag into a name → value dict.

    Names are lower-cased, values have character references decoded.  The
    first occurrence of an attribute wins; names that are not valid XML-ish
    identifiers are skipped.  Attributes without a value map to ``""``.
    """
    attribs: dict[str, str] = {}
    if not text or not text.strip():
        return attribs
    for m in _ATTRIB_RE.finditer(text):
        name = m.group(1).lower()
        if not _ATTRIB_NAME_RE.match(name) or name in attribs:
            continue
        value = next((g for g in m.groups()[1:] if g is not None), "")
        attribs[name] = decode_char_references(value)
    return attribs


def escape_attr(value: str) -> str:
    return _html.escape(value, quote=True)


# -----------------------------------------------------------------------------
# URLs
# -----------------------------------------------------------------------------

# Characters that stay literal in wiki URLs even though RFC 3986 would
# percent-encode them in a path segment.
_URL_SAFE = ";@$!*(),/~:"


def wf_urlencode(text: str) -> str:
    """Percent-encode *text* the way wiki URLs are encoded; spaces become ``+``."""
    return quote_plus(text, safe=_URL_SAFE)


# -----------------------------------------------------------------------------
# French spacing
# -----------------------------------------------------------------------------

_FRENCH_BEFORE_RE = re.compile(r" (?=[?:;!%»›](?!\w))")
_FRENCH_AFTER_RE = re.compile(r"([«‹]) ")


def armor_french_spaces(text: str, space: str = "&#160;") -> str:
    """Replace the breakable space around French punctuation with *space*.

    A space before ``? : ; ! % » ›`` (when not followed by a word character)
    and after ``« ‹`` becomes non-breaking.
    """
    text = _FRENCH_BEFORE_RE.sub(lambda m: space, text)
    return _FRENCH_AFTER_RE.sub(lambda m: m.group(1) + space, text)


# -----------------------------------------------------------------------------

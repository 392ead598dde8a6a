#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Output transform
================
Post-cache pipeline that turns a parsed page's rendered markup into the HTML
served to readers.

Stages run in a fixed order; later stages assume the normalisations of the
earlier ones:

   1. body extraction        (full documents only)
   2. redirect header
   3. debug info
   4. post-cache hook
   5. wrapper div
   6. section edit links
   7. table of contents
   8. inline style deduplication
   9. absolute URL expansion
  10. slot header hydration

Every stage except the hook and slot headers is toggled by a
``TransformOptions`` field.  The pipeline works on a constrained, trusted
markup subset: it matches regexes, it never parses the DOM.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional, Sequence

from wikiout.models import RenderedDocument, SectionMetadata
from .links import expand_local_links
from .sanitizer import (
    armor_french_spaces,
    decode_char_references,
    decode_tag_attributes,
    escape_attr,
    htmlspecialchars_decode,
    wf_urlencode,
)
from .skin import Language, Skin
from .tidy import Tidy, TidyDriver
from .titles import Title
from .toc import generate_toc, replace_toc_marker

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Collaborator signatures
# -----------------------------------------------------------------------------

PostCacheHook = Callable[[RenderedDocument, str, "TransformOptions"], str]
TitleFactory = Callable[[str], Optional[Title]]
TocRenderer = Callable[[Sequence[SectionMetadata], Language], str]
LinkExpander = Callable[[str], str]


def _identity_hook(doc: RenderedDocument, text: str, options: "TransformOptions") -> str:
    return text


# -----------------------------------------------------------------------------
# Placeholders
# -----------------------------------------------------------------------------

EDITSECTION_RE = re.compile(
    r'<(?:mw:)?editsection page="(.*?)" section="(.*?)"'
    r'(?:/>|>(.*?)(</(?:mw:)?editsection>))',
    re.DOTALL,
)
_BODY_START_RE = re.compile(r"^.*?<body[^>]*>", re.DOTALL)
_BODY_END_RE = re.compile(r"</body>\s*</html>\s*$")
_DEDUP_STYLE_RE = re.compile(
    r"<style\s+([^>]*data-mw-deduplicate\s*=[^>]*)>.*?</style>",
    re.DOTALL,
)
_SLOTHEADER_RE = re.compile(r"<mw:slotheader>(.*?)</mw:slotheader>")

DEDUP_ATTRIBUTE = "data-mw-deduplicate"
BAD_TITLE_TAG = "editsection-bad-title"


# -----------------------------------------------------------------------------
# Options
# -----------------------------------------------------------------------------

@dataclass
class TransformOptions:
    """Per-call switches for ``OutputTransform.transform()``.

    ``wrapper_div_class`` of ``None`` means "use the document's class";
    an empty string suppresses the wrapper just like ``unwrap``.
    """
    allow_toc: bool = True
    inject_toc: bool = True
    enable_section_edit_links: bool = True
    user_lang: Optional[Language] = None
    skin: Optional[Skin] = None
    unwrap: bool = False
    wrapper_div_class: Optional[str] = None
    deduplicate_styles: bool = True
    absolute_urls: bool = False
    include_debug_info: bool = False
    body_content_only: bool = True

    # Public (camelCase) option names → attribute names
    KEYS = {
        "allowTOC": "allow_toc",
        "injectTOC": "inject_toc",
        "enableSectionEditLinks": "enable_section_edit_links",
        "userLang": "user_lang",
        "skin": "skin",
        "unwrap": "unwrap",
        "wrapperDivClass": "wrapper_div_class",
        "deduplicateStyles": "deduplicate_styles",
        "absoluteURLs": "absolute_urls",
        "includeDebugInfo": "include_debug_info",
        "bodyContentOnly": "body_content_only",
    }

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None) -> "TransformOptions":
        """Build options from a mapping of public or attribute names.

        Unknown keys are ignored and missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = cls.KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


# -----------------------------------------------------------------------------
# Transform
# -----------------------------------------------------------------------------

class OutputTransform:
    """The default output transformation pipeline.

    All collaborators are injected; each has a default so the pipeline can be
    used standalone.  Instances hold no per-call state and may be shared
    between threads as long as the collaborators can.
    """

    def __init__(
        self,
        hook: Optional[PostCacheHook] = None,
        tidy: Optional[TidyDriver] = None,
        logger: Optional[logging.Logger] = None,
        title_factory: Optional[TitleFactory] = None,
        toc_renderer: Optional[TocRenderer] = None,
        link_expander: Optional[LinkExpander] = None,
        skin: Optional[Skin] = None,
        language: Optional[Language] = None,
    ) -> None:
        self._hook = hook or _identity_hook
        self._tidy = tidy or Tidy()
        self._log = logger or log
        self._title_factory = title_factory or Title.new_from_text
        self._toc_renderer = toc_renderer or generate_toc
        self._link_expander = link_expander or expand_local_links
        self._language = language or Language.default()
        self._skin = skin or Skin(self._language)

    # ── entry point ────────────────────────────────────────────────────────

    def transform(
        self,
        doc: RenderedDocument,
        options: TransformOptions | Mapping[str, Any] | None = None,
    ) -> RenderedDocument:
        """Transform *doc* in place and return it.

        Never raises for malformed markup: unresolvable section edit
        placeholders are logged and dropped.
        """
        if isinstance(options, TransformOptions):
            options = replace(options)
        else:
            options = TransformOptions.from_mapping(options)
        if options.wrapper_div_class is None:
            options.wrapper_div_class = doc.wrapper_div_class

        text = doc.raw_text

        if options.body_content_only and doc.has_page_bundle:
            text = extract_body(text)

        if doc.redirect_header:
            text = doc.redirect_header + text

        if options.include_debug_info:
            text += doc.render_debug_info()

        text = self._hook(doc, text, options)

        if options.wrapper_div_class != "" and not options.unwrap:
            text = f'<div class="{escape_attr(options.wrapper_div_class)}">{text}</div>'

        if options.enable_section_edit_links:
            text = self._add_section_edit_links(doc, text, options)
        else:
            text = EDITSECTION_RE.sub("", text)

        if options.allow_toc:
            if options.inject_toc:
                text = replace_toc_marker(text, self._build_toc(doc, options))
        else:
            text = replace_toc_marker(text, "")

        if options.deduplicate_styles:
            text = deduplicate_styles(text)

        if options.absolute_urls and text:
            text = self._link_expander(text)

        text = hydrate_slot_headers(text)

        doc.set_transformed_text(text)
        return doc

    # ── stages needing collaborators ───────────────────────────────────────

    def _add_section_edit_links(
        self,
        doc: RenderedDocument,
        text: str,
        options: TransformOptions,
    ) -> str:
        skin = options.skin or self._skin

        def _replace(m: re.Match) -> str:
            page = self._title_factory(htmlspecialchars_decode(m.group(1)))
            section = htmlspecialchars_decode(m.group(2))
            heading = decode_char_references(m.group(3) or "")

            if page is None:
                self._log.error(
                    "OutputTransform.transform: bad title in editsection placeholder",
                    extra={"context": {
                        "placeholder": m.group(0),
                        "editsection_page": m.group(1),
                        "titletext": doc.title_text,
                        "tag": BAD_TITLE_TAG,
                    }},
                )
                return ""

            return skin.do_edit_section_link(page, section, heading, skin.language)

        return EDITSECTION_RE.sub(_replace, text)

    def _build_toc(self, doc: RenderedDocument, options: TransformOptions) -> str:
        if not doc.sections:
            return ""
        lang = options.user_lang
        if lang is None and options.skin is not None:
            lang = options.skin.language
        if lang is None:
            lang = self._language
        toc = self._toc_renderer(doc.sections, lang)
        return self._tidy.tidy(toc, armor_french_spaces)


# -----------------------------------------------------------------------------
# Stateless stages
# -----------------------------------------------------------------------------

def extract_body(text: str) -> str:
    """Strip a full HTML document down to the contents of its ``<body>``."""
    text = _BODY_START_RE.sub("", text, count=1)
    return _BODY_END_RE.sub("", text, count=1)


def deduplicate_styles(text: str) -> str:
    """Keep the first ``<style>`` per dedup key; link the rest.

    Every later block with an already-seen ``data-mw-deduplicate`` value is
    replaced by ``<link rel="mw-deduplicated-inline-style" href="mw-data:KEY"/>``
    where KEY is percent-encoded.  The seen-set lives only for this call.
    """
    seen: set[str] = set()

    def _replace(m: re.Match) -> str:
        attrs = decode_tag_attributes(m.group(1))
        key = attrs.get(DEDUP_ATTRIBUTE)
        if key is None:
            return m.group(0)
        if key not in seen:
            seen.add(key)
            return m.group(0)
        href = escape_attr("mw-data:" + wf_urlencode(key))
        return f'<link rel="mw-deduplicated-inline-style" href="{href}"/>'

    return _DEDUP_STYLE_RE.sub(_replace, text)


def hydrate_slot_headers(text: str) -> str:
    """Replace ``<mw:slotheader>role</mw:slotheader>`` with the role's label."""
    def _replace(m: re.Match) -> str:
        role = htmlspecialchars_decode(m.group(1))
        # TODO: map the role to a localised message in the interface language
        return role
    return _SLOTHEADER_RE.sub(_replace, text)


# -----------------------------------------------------------------------------
# Module-level convenience
# -----------------------------------------------------------------------------

_default_transform: Optional[OutputTransform] = None


def _get_default_transform() -> OutputTransform:
    global _default_transform
    if _default_transform is None:
        _default_transform = OutputTransform()
    return _default_transform


def transform(
    doc: RenderedDocument,
    options: TransformOptions | Mapping[str, Any] | None = None,
) -> RenderedDocument:
    """Run *doc* through a shared default ``OutputTransform``."""
    return _get_default_transform().transform(doc, options)


# -----------------------------------------------------------------------------

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the decoding helpers, page titles and skin messages."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from wikiout.services.sanitizer import (
    armor_french_spaces,
    decode_char_references,
    decode_tag_attributes,
    htmlspecialchars_decode,
    wf_urlencode,
)
from wikiout.services.skin import Language
from wikiout.services.tidy import Tidy
from wikiout.services.titles import Title


# =============================================================================
# Entity decoding
# =============================================================================

def test_htmlspecialchars_decode_only_special_chars():
    assert htmlspecialchars_decode("&lt;a&gt; &amp; &quot;b&quot; &#039;c&#39;") == "<a> & \"b\" 'c'"
    assert htmlspecialchars_decode("&eacute; &#65;") == "&eacute; &#65;"


def test_htmlspecialchars_decode_is_single_pass():
    assert htmlspecialchars_decode("&amp;lt;") == "&lt;"


@pytest.mark.parametrize("text, expected", [
    ("&eacute;", "é"),
    ("&#65;&#x42;&#X43;", "ABC"),
    ("&#0;", "\ufffd"),
    ("&#xD800;", "\ufffd"),
    ("&bogus;", "&bogus;"),
    ("&amp", "&amp"),
    ("a &amp; b", "a & b"),
])
def test_decode_char_references(text, expected):
    assert decode_char_references(text) == expected


# =============================================================================
# Attributes
# =============================================================================

def test_decode_tag_attributes_quoting_styles():
    attrs = decode_tag_attributes('a="1" b=\'2\' c=3 d')
    assert attrs == {"a": "1", "b": "2", "c": "3", "d": ""}


def test_decode_tag_attributes_lowercases_and_decodes():
    attrs = decode_tag_attributes('DATA-Key="x&amp;y" data-key="ignored"')
    assert attrs == {"data-key": "x&y"}


def test_decode_tag_attributes_empty():
    assert decode_tag_attributes("") == {}
    assert decode_tag_attributes("   ") == {}


# =============================================================================
# URL encoding / French spacing
# =============================================================================

@pytest.mark.parametrize("text, expected", [
    ("Foo bar", "Foo+bar"),
    ("1+1", "1%2B1"),
    ("a&b=c", "a%26b%3Dc"),
    ("Template:X/y;z@(1),~!*$", "Template:X/y;z@(1),~!*$"),
    ("é", "%C3%A9"),
])
def test_wf_urlencode(text, expected):
    assert wf_urlencode(text) == expected


def test_armor_french_spaces():
    assert armor_french_spaces("Quoi ? « Oui » : non !") == "Quoi&#160;? «&#160;Oui&#160;»&#160;: non&#160;!"


def test_armor_french_spaces_ignores_word_after_punctuation():
    assert armor_french_spaces("a :b") == "a :b"


def test_tidy_filters_text_not_tags():
    html = '<span title="a ?">b ?</span>  \n'
    assert Tidy().tidy(html, armor_french_spaces) == '<span title="a ?">b&#160;?</span>\n'


# =============================================================================
# Titles
# =============================================================================

def test_title_normalisation():
    title = Title.new_from_text("  main_page  ")
    assert title == Title(namespace="", text="Main page")
    assert title.db_key == "Main_page"


def test_title_namespace_split():
    title = Title.new_from_text("template:Info box")
    assert title.namespace == "Template"
    assert title.text == "Info box"
    assert title.prefixed_db_key == "Template:Info_box"


def test_title_unknown_prefix_stays_in_text():
    title = Title.new_from_text("Foo: bar")
    assert title.namespace == ""
    assert title.text == "Foo: bar"


def test_title_leading_colon_forces_main_namespace():
    title = Title.new_from_text(":Template:X")
    assert title.namespace == ""
    assert title.text == "Template:X"


def test_title_fragment():
    title = Title.new_from_text("Page#Section one")
    assert title.text == "Page"
    assert title.fragment == "Section one"


def test_title_decodes_entities():
    assert Title.new_from_text("A&#95;B").text == "A B"


@pytest.mark.parametrize("text", ["a\u200eb", "a\u200fb", "\u202aab\u202c", "a&#x200E;b"])
def test_title_strips_direction_marks(text):
    assert Title.new_from_text(text).text == "Ab"


def test_title_direction_marks_only_is_invalid():
    assert Title.new_from_text("\u200e\u200f") is None


@pytest.mark.parametrize("text", [
    None, "", "   ", "#only-fragment", "A<b", "A]b", "a{b}", "x\x07y",
    "A%41", ".", "..", "./x", "a/../b", "a~~~", "Talk:", "::x",
    "x" * 256,
])
def test_invalid_titles(text):
    assert Title.new_from_text(text) is None


def test_title_local_urls():
    title = Title.new_from_text("Foo bar")
    assert title.local_url() == "/wiki/Foo_bar"
    assert title.local_url({"action": "edit"}) == "/index.php?title=Foo_bar&action=edit"


def test_title_namespaces_override():
    title = Title.new_from_text("Proj:Rules", namespaces=["Proj"])
    assert title.namespace == "Proj"


# =============================================================================
# Language
# =============================================================================

def test_language_message_params():
    assert Language().msg("editsectionhint", "Intro") == "Edit section: Intro"


def test_language_message_override():
    lang = Language(code="fr", messages={"editsection": "modifier"})
    assert lang.msg("editsection") == "modifier"
    assert lang.msg("toc") == "Contents"


def test_language_unknown_message():
    assert Language().msg("nope") == "⧼nope⧽"

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the HTTP endpoints."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from httpx import AsyncClient

from wikiout.services.toc import TOC_PLACEHOLDER


# -----------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


# =============================================================================
# /transform
# =============================================================================

@pytest.mark.asyncio
async def test_transform_wraps_with_configured_class(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={"text": "<p>Hi</p>"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["html"] == '<div class="mw-parser-output"><p>Hi</p></div>'


@pytest.mark.asyncio
async def test_transform_options_passed_through(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        "text": '<p>a</p><style data-mw-deduplicate="k">x</style><style data-mw-deduplicate="k">x</style>',
        "options": {"unwrap": True, "deduplicateStyles": False},
    })
    assert resp.json()["html"].count("<style") == 2
    assert not resp.json()["html"].startswith("<div")


@pytest.mark.asyncio
async def test_transform_renders_toc_and_edit_links(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        "text": TOC_PLACEHOLDER + '<h2>Alpha<mw:editsection page="Main Page" section="1">Alpha</mw:editsection></h2>',
        "wrapper_div_class": "",
        "user_lang": "fr",
        "sections": [{"toc_level": 1, "line": "Alpha", "number": "1", "index": "1", "anchor": "Alpha"}],
    })
    html = resp.json()["html"]
    assert 'id="toc"' in html
    assert 'lang="fr"' in html
    assert 'class="mw-editsection"' in html


@pytest.mark.asyncio
async def test_transform_ignores_object_options(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        "text": "<p>x</p>",
        "wrapper_div_class": "",
        "options": {"skin": "vector", "userLang": "de"},
    })
    assert resp.status_code == 200
    assert resp.json()["html"] == "<p>x</p>"


@pytest.mark.asyncio
async def test_transform_rejects_bad_section(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        "text": "x", "sections": [{"toc_level": 0, "line": "A"}],
    })
    assert resp.status_code == 422


# =============================================================================
# /forms
# =============================================================================

@pytest.mark.asyncio
async def test_condition_endpoint(client: AsyncClient):
    resp = await client.post("/api/v1/forms/condition", json={
        "condition": ["NAND", ["===", "a", "1"], ["===", "b", "1"]],
        "values": {"a": "1", "b": True},
    })
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"result": False}


@pytest.mark.asyncio
async def test_condition_endpoint_invalid(client: AsyncClient):
    resp = await client.post("/api/v1/forms/condition", json={
        "condition": [">", "a", "1"],
    })
    assert resp.status_code == 422
    assert "unknown operation" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_form_state_endpoint(client: AsyncClient):
    resp = await client.post("/api/v1/forms/state", json={
        "fields": {
            "check1": {"type": "check"},
            "text1": {"type": "text", "hide-if": ["===", "check1", "1"]},
        },
        "request_data": {"wpcheck1": "1"},
    })
    assert resp.status_code == 200, resp.text
    assert resp.json()["fields"]["text1"] == {"hidden": True, "disabled": True}
    assert resp.json()["fields"]["check1"] == {"hidden": False, "disabled": False}


@pytest.mark.asyncio
async def test_form_state_endpoint_invalid(client: AsyncClient):
    resp = await client.post("/api/v1/forms/state", json={
        "fields": {"text1": {"hide-if": ["NOT", "===", "check1", "1"]}},
    })
    assert resp.status_code == 422
    assert "NOT takes exactly one parameter" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_condition_endpoint_nested_deeper_than_call_stack(client: AsyncClient):
    condition = ["===", "a", "1"]
    for _ in range(600):
        condition = ["NOT", condition]
    resp = await client.post("/api/v1/forms/condition", json={
        "condition": condition, "values": {"a": "1"},
    })
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"result": True}


# =============================================================================
# Option types
# =============================================================================

_TOC_BODY = {
    "text": TOC_PLACEHOLDER + "<p>x</p>",
    "wrapper_div_class": "",
    "sections": [{"toc_level": 1, "line": "Alpha", "number": "1", "index": "1", "anchor": "Alpha"}],
}


@pytest.mark.asyncio
async def test_transform_option_strings_coerced_to_bool(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        **_TOC_BODY, "options": {"allowTOC": "false", "unwrap": True},
    })
    assert resp.status_code == 200, resp.text
    assert resp.json()["html"] == "<p>x</p>"


@pytest.mark.asyncio
async def test_transform_option_snake_case_names(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        **_TOC_BODY, "options": {"allow_toc": False},
    })
    assert resp.json()["html"] == "<p>x</p>"


@pytest.mark.asyncio
async def test_transform_option_rejects_non_bool(client: AsyncClient):
    resp = await client.post("/api/v1/transform", json={
        **_TOC_BODY, "options": {"allowTOC": "maybe"},
    })
    assert resp.status_code == 422

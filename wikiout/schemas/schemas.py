#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Output transform
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SectionSchema(BaseModel):
    toc_level: int = Field(..., ge=1)
    line: str
    number: str = ""
    index: str = ""
    level: int = Field(default=2, ge=1, le=6)
    anchor: str = ""
    link_anchor: Optional[str] = None
    from_title: Optional[str] = None


# -----------------------------------------------------------------------------

class TransformOptionsSchema(BaseModel):
    """Switches accepted under ``options``; object-valued options (skin,
    user language) and unknown keys are ignored."""
    model_config = {"populate_by_name": True, "extra": "ignore"}

    allow_toc: bool = Field(default=True, alias="allowTOC")
    inject_toc: bool = Field(default=True, alias="injectTOC")
    enable_section_edit_links: bool = Field(default=True, alias="enableSectionEditLinks")
    unwrap: bool = False
    wrapper_div_class: Optional[str] = Field(default=None, alias="wrapperDivClass")
    deduplicate_styles: bool = Field(default=True, alias="deduplicateStyles")
    absolute_urls: bool = Field(default=False, alias="absoluteURLs")
    include_debug_info: bool = Field(default=False, alias="includeDebugInfo")
    body_content_only: bool = Field(default=True, alias="bodyContentOnly")


class TransformRequest(BaseModel):
    text: str = Field(default="", max_length=5_000_000)
    title_text: str = ""
    redirect_header: Optional[str] = None
    debug_report: Optional[str] = None
    limit_report: dict[str, Any] = Field(default_factory=dict)
    wrapper_div_class: Optional[str] = None     # None → configured default
    sections: list[SectionSchema] = Field(default_factory=list)
    has_page_bundle: bool = False
    user_lang: Optional[str] = None             # language code
    options: TransformOptionsSchema = Field(default_factory=TransformOptionsSchema)


class TransformResponse(BaseModel):
    html: str


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Conditions / forms
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConditionRequest(BaseModel):
    condition: Any
    values: dict[str, Optional[str | bool]] = Field(default_factory=dict)


class ConditionResponse(BaseModel):
    result: bool


# -----------------------------------------------------------------------------

class FormStateRequest(BaseModel):
    fields: dict[str, dict[str, Any]]
    request_data: dict[str, str] = Field(default_factory=dict)
    submit_attempt: bool = False


class FieldState(BaseModel):
    hidden: bool
    disabled: bool


class FormStateResponse(BaseModel):
    fields: dict[str, FieldState]

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Transform endpoint — preview of the reader-facing HTML for rendered markup.

POST /api/v1/transform
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter

from wikiout.core.config import get_settings
from wikiout.models import RenderedDocument, SectionMetadata
from wikiout.schemas import TransformRequest, TransformResponse
from wikiout.services.output_transform import OutputTransform, TransformOptions
from wikiout.services.skin import Language


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/transform", tags=["transform"])


# -----------------------------------------------------------------------------

@router.post("", response_model=TransformResponse)
async def transform_preview(body: TransformRequest):
    """Run rendered markup through the output transform and return the HTML."""
    settings = get_settings()

    doc = RenderedDocument(
        raw_text=body.text,
        title_text=body.title_text,
        redirect_header=body.redirect_header,
        debug_report=body.debug_report,
        limit_report=body.limit_report,
        wrapper_div_class=(
            settings.wrapper_div_class if body.wrapper_div_class is None else body.wrapper_div_class
        ),
        sections=[SectionMetadata(**s.model_dump()) for s in body.sections],
        has_page_bundle=body.has_page_bundle,
    )

    options = TransformOptions.from_mapping(body.options.model_dump(exclude_unset=True))
    if body.user_lang:
        options.user_lang = Language(code=body.user_lang)

    OutputTransform().transform(doc, options)
    return TransformResponse(html=doc.get_text())


# -----------------------------------------------------------------------------

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for wikiout tests.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wikiout.main import create_app
from wikiout.models import RenderedDocument, SectionMetadata
from wikiout.services.output_transform import OutputTransform
from wikiout.services.skin import Language


# -----------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def client():
    """HTTP test client wired to a fresh app instance."""
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def transformer() -> OutputTransform:
    return OutputTransform(language=Language(code="en", dir="ltr"))


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

def make_doc(raw_text: str, **kwargs) -> RenderedDocument:
    return RenderedDocument(raw_text=raw_text, **kwargs)


def sample_sections() -> list[SectionMetadata]:
    return [
        SectionMetadata(toc_level=1, line="Alpha", number="1", index="1", anchor="Alpha"),
        SectionMetadata(toc_level=2, line="Beta", number="1.1", index="2", level=3, anchor="Beta"),
        SectionMetadata(toc_level=1, line="Gamma", number="2", index="3", anchor="Gamma"),
    ]


# -----------------------------------------------------------------------------

"""Plain data records shared by the transform pipeline."""

from wikiout.models.document import RenderedDocument, SectionMetadata

__all__ = ["RenderedDocument", "SectionMetadata"]

"""wikiout — post-cache output transform and form condition engine."""

from wikiout._version import __version__

__all__ = ["__version__"]

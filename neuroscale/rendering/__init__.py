"""Plain-text rendering of score results."""

from neuroscale.rendering.text import render_details, render_text

__all__ = [
    "render_text",
    "render_details",
]

"""Graphics helpers for SKYHOP."""

from .primitives import fill, draw_rect, draw_circle, blend_rect

__all__ = ["fill", "draw_rect", "draw_circle", "blend_rect"]

"""Bubble layout."""
from .bubbles import bubble_diameter, layout, layout_from_config, spiral_position

__all__ = ["bubble_diameter", "layout", "layout_from_config", "spiral_position"]

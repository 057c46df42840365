"""Deterministic spiral bubble layout — no I/O.

Bubbles are sized by balance relative to the displayed set and placed on a
spiral keyed by rank index. Positions are clamped into the padded canvas.
Overlap between neighbouring bubbles is possible; there is no collision pass.
"""
from __future__ import annotations

import math
from typing import Sequence

from ..config import LayoutConfig
from ..models import BubblePosition, HolderRecord

ANGLE_STEP = 2.4
RADIUS_DIVISOR = 2.5


def bubble_diameter(
    balance: float,
    min_balance: float,
    max_balance: float,
    min_diameter: float = 40.0,
    max_diameter: float = 180.0,
    default_diameter: float = 100.0,
) -> float:
    """Linear interpolation of ``balance`` between the diameter bounds."""
    if max_balance == min_balance:
        return default_diameter
    normalized = (balance - min_balance) / (max_balance - min_balance)
    return min_diameter + normalized * (max_diameter - min_diameter)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def spiral_position(
    index: int,
    total: int,
    canvas_width: float,
    canvas_height: float,
    padding: float,
    angle_step: float = ANGLE_STEP,
    radius_divisor: float = RADIUS_DIVISOR,
) -> tuple[float, float]:
    """Return the clamped ``(left, top)`` center for bubble ``index`` of ``total``."""
    angle = index * angle_step
    radius = (index / total) * min(canvas_width, canvas_height) / radius_divisor
    x = canvas_width / 2 + radius * math.cos(angle)
    y = canvas_height / 2 + radius * math.sin(angle)
    return (
        _clamp(x, padding, canvas_width - padding),
        _clamp(y, padding, canvas_height - padding),
    )


def layout(
    holders: Sequence[HolderRecord],
    canvas_width: float = 800.0,
    canvas_height: float = 600.0,
    padding: float = 100.0,
    *,
    min_diameter: float = 40.0,
    max_diameter: float = 180.0,
    default_diameter: float = 100.0,
    angle_step: float = ANGLE_STEP,
    radius_divisor: float = RADIUS_DIVISOR,
) -> list[BubblePosition]:
    """Compute one :class:`BubblePosition` per holder, index-aligned.

    Raises:
        ValueError: if the canvas is empty or the padding does not fit.
    """
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError("Canvas dimensions must be positive")
    if padding < 0 or 2 * padding > min(canvas_width, canvas_height):
        raise ValueError(f"Padding {padding} does not fit a {canvas_width}x{canvas_height} canvas")

    if not holders:
        return []

    balances = [h.balance_major_units for h in holders]
    low, high = min(balances), max(balances)
    total = len(holders)

    positions: list[BubblePosition] = []
    for index, holder in enumerate(holders):
        left, top = spiral_position(
            index, total, canvas_width, canvas_height, padding,
            angle_step=angle_step, radius_divisor=radius_divisor,
        )
        diameter = bubble_diameter(
            holder.balance_major_units, low, high,
            min_diameter, max_diameter, default_diameter,
        )
        positions.append(BubblePosition(left=left, top=top, diameter=diameter))
    return positions


def layout_from_config(
    holders: Sequence[HolderRecord], config: LayoutConfig
) -> list[BubblePosition]:
    """Run :func:`layout` with canvas and diameter settings from config."""
    return layout(
        holders,
        config.canvas_width,
        config.canvas_height,
        config.padding,
        min_diameter=config.min_diameter,
        max_diameter=config.max_diameter,
        default_diameter=config.default_diameter,
    )

from __future__ import annotations

from ..models.grid import Placement


def compute_placement(source_w: float, source_h: float, target_w: float, target_h: float) -> Placement:
    """Object-fit for the surface: match one axis exactly, centre on the other."""
    if min(source_w, source_h, target_w, target_h) <= 0:
        raise ValueError(
            f"dimensions must be positive: source={source_w}x{source_h} target={target_w}x{target_h}"
        )

    if source_h > source_w:
        height = float(target_h)
        width = source_w * (height / source_h)
        x = (target_w - width) / 2
        y = 0.0
    else:
        width = float(target_w)
        height = source_h * (width / source_w)
        x = 0.0
        y = (target_h - height) / 2

    return Placement(x=x, y=y, width=width, height=height)

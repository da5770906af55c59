"""
canvas.py — SVG Array Renderer
===============================
Pure rendering function: values (+ optional Frame) → SVG string.

The renderer consumes:
  • values  – the array to draw when no run is in progress
  • frame   – the current Frame snapshot (array, active / sorted indices)
  • view    – "bar" or "circle"
  • config  – visual config (canvas size, colors, fonts, …)

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets
    back a string.
  - State-based coloring is a dict lookup.  ACTIVE wins over SORTED,
    SORTED wins over default (red / green / blue).
  - Bars are scaled to the largest value so any integer range fits;
    circles wrap onto as many rows as the width needs.
"""

import math
from typing import Dict, List, Optional, Sequence

from algorithms.frame import Frame


VIEWS = ("bar", "circle")


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 420
    bg:     str = "#0d1117"
    margin: int = 30

    # element state → fill
    colors: Dict[str, str] = {
        "default": "#3b82f6",   # blue
        "active":  "#ef4444",   # red — being compared / moved
        "sorted":  "#22c55e",   # green — verified in order
    }

    # bar view
    bar_gap:          int = 4
    bar_label_size:   int = 12
    bar_label_color:  str = "#e6edf3"

    # circle view
    circle_radius:      int   = 26
    circle_gap:         int   = 16
    circle_active_grow: float = 1.1
    circle_label_size:  int   = 16
    circle_label_color: str   = "#ffffff"

    # status line
    status_color: str = "#7d8590"
    status_size:  int = 13


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    values: Sequence[int] = (),
    frame: Optional[Frame] = None,
    view: str = "bar",
    config: CanvasConfig = CONFIG,
    show_status: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        values      : Array to draw when `frame` is None.
        frame       : Current Frame (its array takes precedence over `values`).
        view        : "bar" or "circle".  Unknown views draw bars.
        config      : Visual config.
        show_status : If True, draw the comparisons / swaps line.
    """
    array = list(frame.array) if frame is not None else list(values)
    states = [element_state(i, frame) for i in range(len(array))]

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    if view == "circle":
        svg_parts.extend(_render_circles(array, states, config))
    else:
        svg_parts.extend(_render_bars(array, states, config))

    if show_status and frame is not None:
        svg_parts.append(_render_status(frame, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def element_state(index: int, frame: Optional[Frame]) -> str:
    """'active', 'sorted' or 'default' for one index."""
    if frame is None:
        return "default"
    if index in frame.active_indices:
        return "active"
    if index in frame.sorted_indices:
        return "sorted"
    return "default"


# ---------------------------------------------------------------------------
# Bar View
# ---------------------------------------------------------------------------
def _render_bars(array: List[int], states: List[str], config: CanvasConfig) -> List[str]:
    n = len(array)
    if n == 0:
        return []

    usable_w = config.width - 2 * config.margin
    usable_h = config.height - 2 * config.margin - 30
    bar_w    = max(2.0, (usable_w - config.bar_gap * (n - 1)) / n)
    top      = max(max(array), 1)
    baseline = config.height - config.margin

    parts = []
    for i, (val, state) in enumerate(zip(array, states)):
        h = max(2.0, usable_h * max(val, 0) / top)
        x = config.margin + i * (bar_w + config.bar_gap)
        y = baseline - h
        parts.append(
            f'<g class="bar {state}" data-index="{i}">'
            f'<rect x="{x:.1f}" y="{y:.1f}" width="{bar_w:.1f}" height="{h:.1f}" '
            f'rx="2" fill="{config.colors[state]}"/>'
            f'<text x="{x + bar_w / 2:.1f}" y="{y - 6:.1f}" text-anchor="middle" '
            f'font-size="{config.bar_label_size}" fill="{config.bar_label_color}">{val}</text>'
            f'</g>'
        )
    return parts


# ---------------------------------------------------------------------------
# Circle View
# ---------------------------------------------------------------------------
def _render_circles(array: List[int], states: List[str], config: CanvasConfig) -> List[str]:
    n = len(array)
    if n == 0:
        return []

    r    = config.circle_radius
    step = 2 * r + config.circle_gap
    per_row = max(1, int((config.width - 2 * config.margin + config.circle_gap) // step))
    rows    = math.ceil(n / per_row)
    top     = (config.height - rows * step) / 2 + r

    parts = []
    for i, (val, state) in enumerate(zip(array, states)):
        row, col = divmod(i, per_row)
        in_row   = min(per_row, n - row * per_row)
        left     = (config.width - in_row * step + config.circle_gap) / 2 + r
        cx = left + col * step
        cy = top + row * step
        radius = r * config.circle_active_grow if state == "active" else r
        parts.append(
            f'<g class="circle {state}" data-index="{i}">'
            f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="{radius:.1f}" fill="{config.colors[state]}"/>'
            f'<text x="{cx:.1f}" y="{cy + config.circle_label_size / 3:.1f}" text-anchor="middle" '
            f'font-size="{config.circle_label_size}" font-weight="700" '
            f'fill="{config.circle_label_color}">{val}</text>'
            f'</g>'
        )
    return parts


# ---------------------------------------------------------------------------
# Status line
# ---------------------------------------------------------------------------
def _render_status(frame: Frame, config: CanvasConfig) -> str:
    m = frame.metrics
    text = (
        f"frame {frame.step_number} · {frame.kind} · "
        f"comparisons {m.get('comparisons', 0)} · swaps {m.get('swaps', 0)} · "
        f"writes {m.get('writes', 0)}"
    )
    if frame.done:
        text += " · done"
    return (
        f'<text class="status" x="{config.margin}" y="{config.margin - 8}" '
        f'font-size="{config.status_size}" fill="{config.status_color}">{text}</text>'
    )

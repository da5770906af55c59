"""
ui/
---
Turns arrays and Frames into markup for the browser.

    svg  = render_canvas(frame=frame, view="circle")   # bars or circles
    html = array_controls(size=12, is_sorting=True)    # panels are plain HTML strings

Nothing here holds state; main.py decides what to draw and when.
"""

from ui.canvas import render_canvas, element_state, CanvasConfig, VIEWS

from ui.controls import (
    playback_controls,
    algorithm_selector,
    array_controls,
    view_selector,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    mode_toggle,
)

__all__ = [
    "render_canvas",
    "element_state",
    "CanvasConfig",
    "VIEWS",
    "playback_controls",
    "algorithm_selector",
    "array_controls",
    "view_selector",
    "analytics_panel",
    "comparison_panel",
    "pseudocode_viewer",
    "explanation_panel",
    "mode_toggle",
]

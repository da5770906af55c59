"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – rewind/prev/play/next/end + speed
  • algorithm_selector  – dropdown + Start Sorting button
  • array_controls      – size slider, Reset Array, import box
  • view_selector       – bar / circle
  • analytics_panel     – comparisons, swaps, frames, …
  • comparison_panel    – two algorithms, same array, side by side
  • pseudocode_viewer   – with live line highlighting
  • explanation_panel   – Learning Mode "why this frame happened"
  • mode_toggle         – Learning Mode on / off

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings; main.py stitches them together.
  - Controls that start or change a run render `disabled` while a
    run is being played back.
"""

from typing import List, Optional

from algorithms import AlgoInfo
from engine import ComparisonResult, RunMetrics, SPEED_PRESETS


def _disabled(flag: bool) -> str:
    return "disabled" if flag else ""


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    current_frame: int = 0,
    total_frames: int = 0,
    speed: str = "medium",
    is_finished: bool = False,
) -> str:
    play_icon  = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"

    options = []
    for name in SPEED_PRESETS:
        sel = "selected" if name == speed else ""
        options.append(f'<option value="{name}" {sel}>{name.capitalize()}</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-rewind" title="Back to the first frame">⏮</button>
        <button id="btn-prev" title="Previous frame">◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next frame">▶</button>
        <button id="btn-end" title="Jump to the sorted array">⏭</button>
      </div>
      <div class="step-info">
        Frame <span id="current-frame">{current_frame}</span> / <span id="total-frames">{total_frames}</span>
        {' <span class="finished-badge">SORTED</span>' if is_finished else ''}
      </div>
      <label>Speed:</label>
      <select id="speed-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
    is_sorting: bool = False,
) -> str:
    options = []
    description = ""
    for algo in algorithms:
        sel = "selected" if algo.key == selected_key else ""
        if sel:
            stable = "stable" if algo.stable else "not stable"
            description = f"{algo.description} <em>{algo.complexity_time}, {stable}.</em>"
        options.append(f'<option value="{algo.key}" {sel}>{algo.label}</option>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector" {_disabled(is_sorting)}>
        {''.join(options)}
      </select>
      <p class="hint">{description}</p>
      <button id="btn-run" class="btn-primary" {_disabled(is_sorting)}>▶ Start Sorting</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Controls
# ---------------------------------------------------------------------------
def array_controls(
    size: int = 10,
    min_size: int = 5,
    max_size: int = 30,
    is_sorting: bool = False,
) -> str:
    return f"""
    <div class="panel array-controls">
      <h3>📊 Array</h3>
      <label>Array Size: <span id="size-val">{size}</span></label>
      <input type="range" id="size-slider" min="{min_size}" max="{max_size}" value="{size}" {_disabled(is_sorting)}>
      <div class="button-row">
        <button id="btn-reset" class="btn-secondary" {_disabled(is_sorting)}>Reset Array</button>
      </div>
      <label>Or type your own ({min_size}–{max_size} integers):</label>
      <textarea id="import-text" rows="3" placeholder="5, 3, 8, 1, 9" {_disabled(is_sorting)}></textarea>
      <button id="btn-import" class="btn-secondary" {_disabled(is_sorting)}>Use These Values</button>
    </div>
    """


# ---------------------------------------------------------------------------
# View Selector
# ---------------------------------------------------------------------------
def view_selector(view: str = "circle", is_sorting: bool = False) -> str:
    return f"""
    <div class="panel view-selector">
      <h3>👁 View Mode</h3>
      <select id="view-selector" {_disabled(is_sorting)}>
        <option value="circle" {'selected' if view == 'circle' else ''}>Circle View</option>
        <option value="bar" {'selected' if view == 'bar' else ''}>Bar Chart View</option>
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📈 Analytics</h3>
          <p class="placeholder">Start sorting to see metrics.</p>
        </div>
        """

    status = "✅ Sorted" if metrics.is_sorted else "⏳ Incomplete"

    return f"""
    <div class="panel analytics-panel">
      <h3>📈 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Values:</td><td><strong>{metrics.length}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Writes:</td><td><strong>{metrics.writes}</strong></td></tr>
        <tr><td>Frames:</td><td><strong>{metrics.total_frames}</strong></td></tr>
        <tr><td>Animation:</td><td><strong>{metrics.animation_ms / 1000:.1f} s</strong></td></tr>
        <tr><td>Stable:</td><td><strong>{'yes' if metrics.stable else 'no'}</strong></td></tr>
        <tr><td>Result:</td><td><strong>{status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(
    comp: Optional[ComparisonResult] = None,
    algorithms: Optional[List[AlgoInfo]] = None,
) -> str:
    pickers = ""
    if algorithms:
        opts = "".join(f'<option value="{a.key}">{a.label}</option>' for a in algorithms)
        pickers = f"""
      <select id="compare-left">{opts}</select>
      <select id="compare-right">{opts}</select>
      <button id="btn-compare" class="btn-secondary">Compare on this array</button>
        """

    if not comp:
        return f"""
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison</h3>
          <p class="placeholder">Run two algorithms on the same array to compare.</p>
          {pickers}
        </div>
        """

    left, right = comp.left, comp.right

    def badge(winner_label: str) -> str:
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ {left.algo_label} vs {right.algo_label}</h3>
      <table class="comparison-table">
        <thead>
          <tr><th>Metric</th><th>{left.algo_label}</th><th>{right.algo_label}</th><th>Winner</th></tr>
        </thead>
        <tbody>
          <tr><td>Comparisons</td><td>{left.comparisons}</td><td>{right.comparisons}</td><td>{badge(comp.winner_comparisons)}</td></tr>
          <tr><td>Array updates</td><td>{left.updates}</td><td>{right.updates}</td><td>{badge(comp.winner_updates)}</td></tr>
          <tr><td>Frames</td><td>{left.total_frames}</td><td>{right.total_frames}</td><td>{badge(comp.winner_frames)}</td></tr>
        </tbody>
      </table>
      {pickers}
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = "highlight" if i == current_line else ""
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{_escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel (Learning Mode)
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "", show: bool = True) -> str:
    if not show:
        return '<div class="explanation-text muted">Learning mode disabled</div>'

    if not explanation:
        return (
            '<div class="explanation-text">▶ Click <strong>Start Sorting</strong> to see '
            "what the algorithm is doing at every comparison and swap.</div>"
        )
    return f'<div class="explanation-text">{_escape(explanation)}</div>'


# ---------------------------------------------------------------------------
# Mode Toggle (Learning vs Expert)
# ---------------------------------------------------------------------------
def mode_toggle(learning_mode: bool = True) -> str:
    return f"""
    <div class="panel mode-toggle">
      <h3>🎓 Mode</h3>
      <label>
        <input type="checkbox" id="learning-mode-toggle" {'checked' if learning_mode else ''}>
        Learning Mode (pseudocode + explanations)
      </label>
    </div>
    """

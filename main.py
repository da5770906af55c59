"""
main.py — Sorting Algorithm Visualizer Flask App
=================================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/state              – current session state
  POST /api/array/generate     – new random array (size, seed?)
  POST /api/array/import       – array from text
  POST /api/run                – record a sort run over the current array
  POST /api/step/next          – advance one frame
  POST /api/step/prev          – rewind one frame
  POST /api/step/goto          – jump to frame N
  POST /api/step/play          – toggle play/pause
  POST /api/config/algo        – select algorithm
  POST /api/config/view        – bar / circle
  POST /api/config/speed       – speed preset
  POST /api/config/size        – array size (regenerates the array)
  POST /api/config/learning    – Learning Mode on / off
  POST /api/compare            – compare two algorithms on the current array

State management:
  Small per-user state lives in the Flask session.  Recorded runs are
  too big for a cookie, so they live in the in-process RUNS store and
  the session only holds the run id.  RUNS keeps at most
  Config.max_stored_runs entries; the least recently used run is evicted.

While a run is playing, everything that would start a new run or
change the array is refused with 409: one active run at a time.
"""

import logging
import secrets
import uuid
from collections import OrderedDict
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import get_algorithm, list_algorithms, normalise_key, resolve_algorithm
from config import Config
from dataset import Dataset
from engine import SPEED_PRESETS, Recorder, compare
from ui import (
    VIEWS,
    algorithm_selector,
    analytics_panel,
    array_controls,
    comparison_panel,
    explanation_panel,
    mode_toggle,
    playback_controls,
    pseudocode_viewer,
    render_canvas,
    view_selector,
)

logger = logging.getLogger(__name__)

Config.load_from_env()

app = Flask(__name__)
app.secret_key = Config.secret_key or secrets.token_hex(32)

# run_id → completed Recorder, least recently used first
RUNS: "OrderedDict[str, Recorder]" = OrderedDict()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_dataset() -> Dataset:
    """Deserialise the array from session, or create a fresh random one."""
    if "dataset" not in session:
        session["dataset"] = Dataset.generate_random(Config.default_length).to_dict()
    return Dataset.from_dict(session["dataset"])


def save_dataset(ds: Dataset) -> None:
    session["dataset"] = ds.to_dict()
    # a new array invalidates the recorded run
    drop_run()


def get_state() -> Dict[str, Any]:
    return {
        "selected_algo": session.get("selected_algo", Config.default_algorithm),
        "view":          session.get("view", Config.default_view),
        "speed":         session.get("speed", Config.default_speed),
        "learning_mode": session.get("learning_mode", True),
        "current_frame": session.get("current_frame", 0),
        "total_frames":  session.get("total_frames", 0),
        "is_playing":    session.get("is_playing", False),
    }


def set_state(**kwargs) -> None:
    for k, v in kwargs.items():
        session[k] = v


def get_run() -> Optional[Recorder]:
    run_id = session.get("run_id")
    if not run_id or run_id not in RUNS:
        return None
    RUNS.move_to_end(run_id)
    return RUNS[run_id]


def store_run(rec: Recorder) -> str:
    """Keep `rec` for this session, evicting the least recently used runs."""
    run_id = uuid.uuid4().hex
    RUNS[run_id] = rec
    session["run_id"] = run_id
    while len(RUNS) > max(Config.max_stored_runs, 1):
        evicted, _ = RUNS.popitem(last=False)
        logger.debug("Evicted stored run %s", evicted)
    return run_id


def drop_run() -> None:
    run_id = session.pop("run_id", None)
    if run_id:
        RUNS.pop(run_id, None)
    set_state(current_frame=0, total_frames=0, is_playing=False)


def is_sorting() -> bool:
    """A run is in progress while it is playing and not on its last frame."""
    state = get_state()
    return bool(
        get_run() is not None
        and state["is_playing"]
        and state["current_frame"] < state["total_frames"] - 1
    )


def busy_response():
    return jsonify({"error": "A sort is already running. Pause it or wait for it to finish."}), 409


def frame_payload(rec: Recorder, idx: int) -> Dict[str, Any]:
    """Everything the page needs to show frame `idx` of a recorded run."""
    state = get_state()
    frame = rec.frames[idx]
    info  = rec.algo_info
    return {
        "svg":           render_canvas(frame=frame, view=state["view"]),
        "pseudocode":    pseudocode_viewer(info.pseudocode if info else [], frame.pseudocode_line),
        "explanation":   explanation_panel(frame.explanation, show=state["learning_mode"]),
        "current_frame": idx,
        "total_frames":  len(rec.frames),
        "done":          frame.done,
        "delay":         frame.delay * SPEED_PRESETS.get(state["speed"], 1.0),
        "frame":         frame.to_dict(),
    }


def static_payload(ds: Dataset) -> Dict[str, Any]:
    return {
        "svg":    render_canvas(ds.values, view=get_state()["view"]),
        "values": list(ds.values),
    }


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ds    = get_dataset()
    state = get_state()
    algos = list_algorithms()
    info  = resolve_algorithm(state["selected_algo"])
    rec   = get_run()

    if rec and rec.frames:
        idx     = min(state["current_frame"], len(rec.frames) - 1)
        frame   = rec.frames[idx]
        svg     = render_canvas(frame=frame, view=state["view"])
        line    = frame.pseudocode_line
        explain = frame.explanation
    else:
        svg, line, explain = render_canvas(ds.values, view=state["view"]), -1, ""

    sorting = is_sorting()
    html = render_template_string(
        INDEX_TEMPLATE,
        algo_label=info.label,
        svg=svg,
        mode_toggle=mode_toggle(state["learning_mode"]),
        algo_selector=algorithm_selector(algos, info.key, is_sorting=sorting),
        array_controls=array_controls(len(ds), Config.min_length, Config.max_length, is_sorting=sorting),
        view_selector=view_selector(state["view"], is_sorting=sorting),
        playback=playback_controls(
            is_playing=state["is_playing"],
            current_frame=state["current_frame"],
            total_frames=state["total_frames"],
            speed=state["speed"],
            is_finished=bool(rec and state["current_frame"] >= state["total_frames"] - 1),
        ),
        analytics=analytics_panel(rec.metrics if rec else None),
        comparison=comparison_panel(None, algos),
        pseudocode=pseudocode_viewer(info.pseudocode, line),
        explanation=explanation_panel(explain, show=state["learning_mode"]),
    )
    return html


@app.route("/api/state")
def api_state():
    state = get_state()
    state["values"] = list(get_dataset().values)
    state["is_sorting"] = is_sorting()
    return jsonify(state)


# ---------------------------------------------------------------------------
# API: Array
# ---------------------------------------------------------------------------
@app.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    if is_sorting():
        return busy_response()
    data = request.get_json(silent=True) or {}
    try:
        size = int(data.get("size", len(get_dataset()) or Config.default_length))
    except (TypeError, ValueError):
        return jsonify({"error": "size must be an integer"}), 400

    ds = Dataset.generate_random(size, seed=data.get("seed"))
    save_dataset(ds)
    return jsonify(static_payload(ds))


@app.route("/api/array/import", methods=["POST"])
def api_array_import():
    if is_sorting():
        return busy_response()
    data = request.get_json(silent=True) or {}
    try:
        ds = Dataset.from_text(str(data.get("text", "")))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    save_dataset(ds)
    return jsonify(static_payload(ds))


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = request.get_json(silent=True) or {}
    if is_sorting() and not data.get("force"):
        return busy_response()

    ds    = get_dataset()
    state = get_state()

    drop_run()
    rec = Recorder()
    rec.start(state["selected_algo"], ds.values)
    rec.run_to_completion()

    store_run(rec)
    set_state(current_frame=0, total_frames=len(rec.frames), is_playing=bool(data.get("play", True)))

    payload = frame_payload(rec, 0)
    payload["analytics"]  = analytics_panel(rec.metrics)
    payload["is_playing"] = get_state()["is_playing"]
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Frame Navigation
# ---------------------------------------------------------------------------
def _goto(idx: int):
    rec = get_run()
    if rec is None:
        return jsonify({"error": "Start sorting first"}), 400
    if not (0 <= idx < len(rec.frames)):
        return jsonify({"error": "Invalid frame index"}), 400

    set_state(current_frame=idx)
    if idx == len(rec.frames) - 1:
        set_state(is_playing=False)
    payload = frame_payload(rec, idx)
    payload["is_playing"] = get_state()["is_playing"]
    return jsonify(payload)


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    state = get_state()
    if state["total_frames"] and state["current_frame"] >= state["total_frames"] - 1:
        return jsonify({"error": "Already at last frame"}), 400
    return _goto(state["current_frame"] + 1)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    state = get_state()
    if state["current_frame"] <= 0:
        return jsonify({"error": "Already at first frame"}), 400
    return _goto(state["current_frame"] - 1)


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    data = request.get_json(silent=True) or {}
    try:
        idx = int(data.get("index", 0))
    except (TypeError, ValueError):
        return jsonify({"error": "index must be an integer"}), 400
    return _goto(idx)


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    state = get_state()
    at_end = state["current_frame"] >= state["total_frames"] - 1
    playing = not state["is_playing"] and get_run() is not None and not at_end
    set_state(is_playing=playing)
    return jsonify({"is_playing": playing})


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    if is_sorting():
        return busy_response()
    data = request.get_json(silent=True) or {}
    info = resolve_algorithm(data.get("algo_key"))
    set_state(selected_algo=info.key)
    drop_run()

    return jsonify({
        "algo_key":      info.key,
        "algo_label":    info.label,
        "algo_selector": algorithm_selector(list_algorithms(), info.key),
        "pseudocode":    pseudocode_viewer(info.pseudocode, -1),
    })


@app.route("/api/config/view", methods=["POST"])
def api_config_view():
    data = request.get_json(silent=True) or {}
    view = data.get("view", Config.default_view)
    if view not in VIEWS:
        return jsonify({"error": f"Unknown view {view!r}"}), 400
    set_state(view=view)

    rec   = get_run()
    state = get_state()
    if rec and rec.frames:
        svg = render_canvas(frame=rec.frames[state["current_frame"]], view=view)
    else:
        svg = render_canvas(get_dataset().values, view=view)
    return jsonify({"view": view, "svg": svg})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = request.get_json(silent=True) or {}
    speed = data.get("speed", Config.default_speed)
    if speed not in SPEED_PRESETS:
        return jsonify({"error": f"Unknown speed {speed!r}"}), 400
    set_state(speed=speed)
    return jsonify({"speed": speed})


@app.route("/api/config/size", methods=["POST"])
def api_config_size():
    if is_sorting():
        return busy_response()
    data = request.get_json(silent=True) or {}
    try:
        size = int(data.get("size", Config.default_length))
    except (TypeError, ValueError):
        return jsonify({"error": "size must be an integer"}), 400
    if not (Config.min_length <= size <= Config.max_length):
        return jsonify({
            "error": f"size must be between {Config.min_length} and {Config.max_length}"
        }), 400

    ds = Dataset.generate_random(size)
    save_dataset(ds)
    return jsonify(static_payload(ds))


@app.route("/api/config/learning", methods=["POST"])
def api_config_learning():
    data = request.get_json(silent=True) or {}
    enabled = bool(data.get("enabled", True))
    set_state(learning_mode=enabled)
    return jsonify({"learning_mode": enabled})


# ---------------------------------------------------------------------------
# API: Comparison
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data  = request.get_json(silent=True) or {}
    left_key, right_key = data.get("left"), data.get("right")
    for key in (left_key, right_key):
        if get_algorithm(key) is None:
            return jsonify({"error": f"Unknown algorithm {key!r}"}), 400

    values = get_dataset().values
    left, right = Recorder(), Recorder()
    left.start(normalise_key(left_key), values)
    right.start(normalise_key(right_key), values)
    left.run_to_completion()
    right.run_to_completion()

    result = compare(left, right)
    return jsonify({
        "comparison": comparison_panel(result, list_algorithms()),
        "winner_comparisons": result.winner_comparisons,
        "winner_updates":     result.winner_updates,
        "winner_frames":      result.winner_frames,
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Algorithm Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg: #010409; --panel: #161b22; --border: #30363d;
      --text: #e6edf3; --muted: #7d8590; --accent: #0ea5e9; --ok: #22c55e;
    }
    body { font-family: -apple-system, BlinkMacSystemFont, sans-serif; background: var(--bg);
           color: var(--text); display: flex; height: 100vh; overflow: hidden; }
    #sidebar { width: 320px; overflow-y: auto; padding: 20px 14px; border-right: 1px solid var(--border); }
    #main { flex: 1; display: flex; flex-direction: column; }
    #title { padding: 16px 20px; border-bottom: 1px solid var(--border); }
    #title h2 { font-size: 14px; color: var(--muted); font-weight: 500; margin-top: 4px; }
    #canvas-container { flex: 1; display: flex; align-items: center; justify-content: center; }
    #bottom-panel { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; padding: 16px;
                    border-top: 1px solid var(--border); max-height: 300px; }
    .panel, #pseudocode-container, #explanation-container {
      background: var(--panel); border: 1px solid var(--border); border-radius: 10px;
      padding: 14px; margin-bottom: 14px; overflow: auto; }
    .panel h3, #bottom-panel h3 { font-size: 12px; text-transform: uppercase; letter-spacing: .5px;
                                  margin-bottom: 10px; color: var(--accent); }
    .button-row { display: flex; gap: 6px; margin: 8px 0; }
    button { background: var(--accent); color: #fff; border: none; padding: 8px 14px;
             border-radius: 6px; cursor: pointer; font-weight: 600; }
    button:disabled, select:disabled, input:disabled, textarea:disabled { opacity: .5; cursor: not-allowed; }
    .btn-primary { background: var(--ok); }
    .btn-secondary { background: #21262d; border: 1px solid var(--border); }
    select, input[type="range"], textarea { width: 100%; margin: 6px 0; padding: 6px;
             background: var(--bg); color: var(--text); border: 1px solid var(--border); border-radius: 6px; }
    label { display: block; margin-top: 8px; font-size: 12px; color: var(--muted); }
    .step-info { font-family: monospace; font-size: 13px; color: var(--muted); margin: 8px 0; }
    .finished-badge { background: var(--ok); color: #fff; padding: 2px 8px; border-radius: 4px; font-size: 11px; }
    .code-block { font-family: monospace; font-size: 13px; line-height: 1.6; }
    .code-line { padding: 2px 8px; border-radius: 4px; white-space: pre; }
    .code-line.highlight { background: rgba(14, 165, 233, .18); border-left: 3px solid var(--accent); }
    .explanation-text { color: var(--muted); line-height: 1.7; font-size: 14px; }
    .hint, .placeholder { font-size: 12px; color: var(--muted); margin-top: 6px; }
    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; font-family: monospace; color: var(--accent); }
    #error { color: #f43f5e; font-size: 13px; min-height: 18px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="mode-toggle">{{ mode_toggle|safe }}</div>
    <div id="algo-panel">{{ algo_selector|safe }}</div>
    <div id="array-panel">{{ array_controls|safe }}</div>
    <div id="view-panel">{{ view_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>

  <div id="main">
    <div id="title">
      <h1>Sorting Algorithm Visualizer</h1>
      <h2>Currently visualizing: <span id="algo-label">{{ algo_label }}</span></h2>
      <div id="error"></div>
    </div>
    <div id="canvas-container"><div id="canvas-svg">{{ svg|safe }}</div></div>
    <div id="bottom-panel">
      <div id="pseudocode-container"><h3>Pseudocode</h3><div id="pseudocode">{{ pseudocode|safe }}</div></div>
      <div id="explanation-container"><h3>What is happening</h3><div id="explanation">{{ explanation|safe }}</div></div>
    </div>
  </div>

  <script>
    let timer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      const body = await res.json();
      document.getElementById('error').textContent = res.ok ? '' : (body.error || 'Request failed');
      return res.ok ? body : null;
    }

    function setDisabled(flag) {
      ['algo-selector', 'btn-run', 'size-slider', 'btn-reset', 'import-text', 'btn-import', 'view-selector']
        .forEach(id => { const el = document.getElementById(id); if (el) el.disabled = flag; });
    }

    function showFrame(data) {
      if (!data) return;
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      if (data.current_frame !== undefined) document.getElementById('current-frame').textContent = data.current_frame;
      if (data.total_frames !== undefined) document.getElementById('total-frames').textContent = data.total_frames;
    }

    function schedule(data) {
      clearTimeout(timer);
      const playing = data && data.is_playing && !data.done;
      setDisabled(playing);
      if (playing) timer = setTimeout(advance, data.delay * 1000);
    }

    async function advance() {
      const data = await post('/api/step/next');
      showFrame(data);
      schedule(data);
    }

    const on = (id, evt, fn) => document.getElementById(id)?.addEventListener(evt, fn);

    on('btn-run', 'click', async () => { const d = await post('/api/run', {play: true}); showFrame(d); schedule(d); });
    on('btn-next', 'click', async () => showFrame(await post('/api/step/next')));
    on('btn-prev', 'click', async () => showFrame(await post('/api/step/prev')));
    on('btn-rewind', 'click', async () => showFrame(await post('/api/step/goto', {index: 0})));
    on('btn-end', 'click', async () => {
      const total = +document.getElementById('total-frames').textContent;
      showFrame(await post('/api/step/goto', {index: Math.max(total - 1, 0)}));
      schedule(null);
    });
    on('btn-play', 'click', async () => {
      const d = await post('/api/step/play');
      if (d && d.is_playing) advance(); else schedule(null);
    });

    on('btn-reset', 'click', async () => showFrame(await post('/api/array/generate', {
      size: +document.getElementById('size-slider').value })));
    on('size-slider', 'input', (e) => { document.getElementById('size-val').textContent = e.target.value; });
    on('size-slider', 'change', async (e) => showFrame(await post('/api/config/size', {size: +e.target.value})));
    on('btn-import', 'click', async () => showFrame(await post('/api/array/import', {
      text: document.getElementById('import-text').value })));

    on('algo-selector', 'change', async (e) => {
      const d = await post('/api/config/algo', {algo_key: e.target.value});
      if (!d) return;
      document.getElementById('algo-panel').innerHTML = d.algo_selector;
      document.getElementById('algo-label').textContent = d.algo_label;
      document.getElementById('pseudocode').innerHTML = d.pseudocode;
      window.location.reload();
    });
    on('view-selector', 'change', async (e) => showFrame(await post('/api/config/view', {view: e.target.value})));
    on('speed-selector', 'change', async (e) => post('/api/config/speed', {speed: e.target.value}));
    on('learning-mode-toggle', 'change', async (e) => post('/api/config/learning', {enabled: e.target.checked}));
    on('btn-compare', 'click', async () => {
      const d = await post('/api/compare', {
        left: document.getElementById('compare-left').value,
        right: document.getElementById('compare-right').value,
      });
      if (d) document.getElementById('comparison').innerHTML = d.comparison;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=Config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Sorting Algorithm Visualizer on http://localhost:5000")
    app.run(host="127.0.0.1", port=5000)

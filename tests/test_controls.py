from algorithms import list_algorithms
from engine import Recorder, compare
from ui import (
    algorithm_selector,
    analytics_panel,
    array_controls,
    comparison_panel,
    explanation_panel,
    playback_controls,
    pseudocode_viewer,
    view_selector,
)


def test_controls_disable_while_sorting():
    algos = list_algorithms()

    assert "disabled" not in algorithm_selector(algos, "bubble")
    assert algorithm_selector(algos, "bubble", is_sorting=True).count("disabled") == 2
    assert array_controls(is_sorting=True).count("disabled") == 4
    assert "disabled" in view_selector(is_sorting=True)


def test_algorithm_selector_marks_selection():
    html = algorithm_selector(list_algorithms(), "merge")

    assert '<option value="merge" selected>Merge Sort</option>' in html
    assert "O(n log n)" in html


def test_playback_controls():
    html = playback_controls(is_playing=True, current_frame=3, total_frames=9, speed="fast", is_finished=True)

    assert '<span id="current-frame">3</span>' in html
    assert '<span id="total-frames">9</span>' in html
    assert '<option value="fast" selected>' in html
    assert "SORTED" in html


def test_pseudocode_highlight_and_escape():
    html = pseudocode_viewer(["a < b", "swap"], current_line=1)

    assert "a &lt; b" in html
    assert '<div class="code-line highlight" data-line="1">swap</div>' in html


def test_explanation_panel_modes():
    assert "disabled" in explanation_panel("x", show=False)
    assert "Start Sorting" in explanation_panel("")
    assert "compare 1 &amp; 2" in explanation_panel("compare 1 & 2")


def test_analytics_and_comparison_panels():
    assert "Start sorting" in analytics_panel(None)

    left, right = Recorder(), Recorder()
    left.start("bubble", [3, 2, 1, 5, 4])
    right.start("merge", [3, 2, 1, 5, 4])
    left.run_to_completion()
    right.run_to_completion()

    assert "Bubble Sort" in analytics_panel(left.metrics)
    html = comparison_panel(compare(left, right), list_algorithms())
    assert "Bubble Sort vs Merge Sort" in html
    assert 'id="btn-compare"' in html

import json

import pytest

from engine import Recorder, compare


def recorded(algo, values):
    rec = Recorder()
    rec.start(algo, values)
    rec.run_to_completion()
    return rec


def test_run_to_completion_requires_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_bubble_metrics():
    rec = recorded("bubble", [5, 3, 8, 1])
    m = rec.get_metrics()

    assert m.algo_key == "bubble"
    assert m.algo_label == "Bubble Sort"
    assert m.length == 4
    assert m.comparisons == 6
    assert m.swaps == 4
    assert m.updates == 4
    assert m.total_frames == len(rec.frames)
    assert m.is_sorted
    assert m.stable
    assert m.animation_ms > 0
    assert m.memory_bytes > 0


def test_merge_counts_writes():
    m = recorded("merge", [2, 1]).metrics

    assert m.writes == 2
    assert m.swaps == 0
    assert m.updates == 2


def test_unknown_key_records_bubble():
    rec = recorded("shell", [2, 1, 3, 4, 5])

    assert rec.algo_info.key == "bubble"
    assert rec.metrics.is_sorted


def test_export_is_json_serialisable():
    rec = recorded("selection", [4, 2, 5, 1, 3])

    data = json.loads(json.dumps(rec.export()))

    assert data["algo_key"] == "selection"
    assert data["array"] == [4, 2, 5, 1, 3]
    assert data["frames"][-1]["done"] is True
    assert data["metrics"]["total_frames"] == len(data["frames"])


def test_compare_picks_fewer_comparisons():
    values = [1, 2, 3, 4, 5, 6]
    insertion = recorded("insertion", values)
    selection = recorded("selection", values)

    result = compare(insertion, selection)

    assert insertion.metrics.comparisons == 5
    assert selection.metrics.comparisons == 15
    assert result.winner_comparisons == "Insertion Sort"
    assert result.winner_updates == "tie"


def test_compare_same_algorithm_ties():
    values = [3, 1, 2, 5, 4]

    result = compare(recorded("merge", values), recorded("merge", values))

    assert result.winner_comparisons == "tie"
    assert result.winner_frames == "tie"

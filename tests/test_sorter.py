import asyncio
import logging

import pytest

from engine import CancelToken, SortEngine, run


def test_run_sorts_a_copy():
    values = [5, 3, 8, 1]

    frames = list(run(values, "bubble"))

    assert values == [5, 3, 8, 1]
    assert frames[-1].array == (1, 3, 5, 8)
    assert frames[-1].done


def test_engine_is_idle_before_first_pull():
    engine = SortEngine(delay_scale=0)
    stream = engine.run([2, 1])

    assert not engine.is_running
    next(stream)
    assert engine.is_running
    assert engine.array == [2, 1]


def test_running_flag_clears_after_done_frame():
    engine = SortEngine(delay_scale=0)

    frames = list(engine.run([3, 1, 2], "insertion"))

    assert frames[-1].done
    assert not engine.is_running
    assert engine.array is None


def test_engine_is_idle_while_done_frame_is_held():
    engine = SortEngine(delay_scale=0)
    running_at_done = None
    chained = []

    for frame in engine.run([3, 1, 2], "bubble"):
        if frame.done:
            running_at_done = engine.is_running
            chained = list(engine.run([2, 1], "merge"))

    assert running_at_done is False
    assert chained[-1].array == (1, 2)
    assert not engine.is_running


def test_finished_stream_does_not_release_a_newer_run():
    engine = SortEngine(delay_scale=0)
    first = engine.run([2, 1], "insertion")
    frames = []

    for frame in first:
        frames.append(frame)
        if frame.done:
            second = engine.run([3, 2, 1], "selection")
            next(second)

    # the first stream has now returned; the second run still owns the engine
    assert frames[-1].done
    assert engine.is_running
    assert engine.array == [3, 2, 1]
    assert list(second)[-1].array == (1, 2, 3)
    assert not engine.is_running


def test_async_stream_is_idle_at_done_frame():
    async def scenario():
        engine = SortEngine(delay_scale=0)
        async for frame in engine.stream([2, 1], "merge"):
            if frame.done:
                return engine.is_running

    assert asyncio.run(scenario()) is False


def test_cancel_during_pause_leaves_array_untouched():
    token = CancelToken()
    engine = SortEngine(delay_scale=1.0, sleep=lambda seconds: token.cancel())
    stream = engine.run([2, 1], "bubble", token)

    first = next(stream)
    array = engine.array
    rest = list(stream)

    # the next bubble step would have swapped the pair in place
    assert first.kind == "compare"
    assert rest == []
    assert array == [2, 1]
    assert not engine.is_running


def test_second_run_while_running_is_ignored(caplog):
    engine = SortEngine(delay_scale=0)
    first = engine.run([4, 3, 2, 1], "bubble")
    next(first)
    in_progress = engine.array
    snapshot = list(in_progress)

    with caplog.at_level(logging.WARNING):
        second = list(engine.run([9, 8, 7], "merge"))

    assert second == []
    assert engine.is_running
    assert engine.array is in_progress
    assert engine.array == snapshot
    assert "already in progress" in caplog.text

    rest = list(first)
    assert rest[-1].array == (1, 2, 3, 4)
    assert not engine.is_running


def test_engine_accepts_a_new_run_after_finishing():
    engine = SortEngine(delay_scale=0)
    list(engine.run([2, 1]))

    frames = list(engine.run([3, 2, 1], "selection"))

    assert frames[-1].array == (1, 2, 3)


def test_cancel_ends_stream_without_done_frame():
    engine = SortEngine(delay_scale=0)
    token = CancelToken()
    stream = engine.run([5, 4, 3, 2, 1], "bubble", token)
    first = next(stream)

    token.cancel()
    rest = list(stream)

    assert not first.done
    assert rest == []
    assert not engine.is_running


def test_engine_cancel_targets_active_run():
    engine = SortEngine(delay_scale=0)
    assert engine.cancel() is False

    stream = engine.run([3, 2, 1])
    next(stream)
    assert engine.cancel() is True
    assert list(stream) == []
    assert not engine.is_running


def test_closing_stream_releases_engine():
    engine = SortEngine(delay_scale=0)
    stream = engine.run([3, 2, 1])
    next(stream)

    stream.close()

    assert not engine.is_running


def test_delays_are_scaled():
    slept = []
    engine = SortEngine(delay_scale=2.0, sleep=slept.append)

    frames = list(engine.run([2, 1], "bubble"))

    # compare, swap, mark, mark, done (no pause after the done frame)
    assert [f.kind for f in frames] == ["compare", "swap", "mark", "mark", "done"]
    assert slept == pytest.approx([0.6, 1.0, 0.2, 0.2])


def test_zero_delay_scale_never_sleeps():
    slept = []
    engine = SortEngine(delay_scale=0.0, sleep=slept.append)

    list(engine.run([4, 1, 3, 2], "merge"))

    assert slept == []


def test_unknown_algorithm_runs_bubble():
    fallback = list(run([3, 1, 2], "bogo"))
    bubble = list(run([3, 1, 2], "bubble"))

    assert fallback == bubble


def test_async_stream_matches_sync_run():
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    async def collect():
        engine = SortEngine(delay_scale=1.0, async_sleep=fake_sleep)
        return [f async for f in engine.stream([4, 2, 3, 1], "merge")]

    frames = asyncio.run(collect())

    assert frames == list(run([4, 2, 3, 1], "merge"))
    assert len(slept) == len(frames) - 1


def test_async_stream_respects_reentrancy():
    async def scenario():
        engine = SortEngine(delay_scale=0)
        first = engine.stream([3, 2, 1])
        await first.__anext__()
        second = [f async for f in engine.stream([2, 1])]
        rest = [f async for f in first]
        return second, rest, engine.is_running

    second, rest, running = asyncio.run(scenario())

    assert second == []
    assert rest[-1].done
    assert not running

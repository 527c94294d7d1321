"""
Tests for the stroke replay state machine.

Timestamps are synthetic; the animator never reads the real clock here.
"""

import pytest

import sketchreplay.animator as animator_module
from sketchreplay.animator import AnimatorState, ReplayAnimator
from sketchreplay.errors import ReplayStateError
from sketchreplay.model import Drawing, Ink, Stroke


def replay_all(animator, drawing, step=1.0 / 60, limit=10000):
    """Ticks until finished, recording cursor after each tick."""
    assert animator.start(drawing, now=0.0)
    cursors = [animator.cursor]
    now = 0.0
    for _ in range(limit):
        if animator.state is AnimatorState.FINISHED:
            break
        now += step
        animator.tick(now)
        cursors.append(animator.cursor)
    return cursors


def test_replay_reconstructs_drawing(three_strokes):
    animator = ReplayAnimator()
    replay_all(animator, three_strokes)

    assert animator.state is AnimatorState.FINISHED
    assert animator.visible == three_strokes


def test_replay_reconstructs_with_large_steps(three_strokes):
    animator = ReplayAnimator()
    replay_all(animator, three_strokes, step=5.0)

    assert animator.state is AnimatorState.FINISHED
    assert animator.visible == three_strokes


def test_cursor_monotonic_and_resets_on_advance(three_strokes):
    animator = ReplayAnimator()
    cursors = replay_all(animator, three_strokes, step=0.03)

    for before, after in zip(cursors, cursors[1:]):
        assert after.stroke_index in (before.stroke_index, before.stroke_index + 1)
        if after.stroke_index == before.stroke_index:
            assert after.parametric_value >= before.parametric_value
        else:
            assert after.parametric_value == 0.0
    assert cursors[-1].stroke_index == len(three_strokes)


def test_tick_truncates_current_stroke(make_stroke):
    stroke = make_stroke(5, rate=0.1)
    animator = ReplayAnimator()
    animator.start(Drawing((stroke,)), now=10.0)

    visible = animator.tick(10.25)  # parametric value 2.5

    assert animator.cursor.parametric_value == pytest.approx(2.5)
    assert animator.cursor.last_tick_time == 10.25
    assert len(visible) == 1
    partial = visible.strokes[0]
    assert partial.points == stroke.points[:2]
    assert partial.ink == stroke.ink
    assert partial.created_at == stroke.created_at


def test_visible_snapshots_are_not_mutated(make_stroke):
    snapshots = []
    animator = ReplayAnimator(sink=snapshots.append)
    animator.start(Drawing((make_stroke(5), make_stroke(4))), now=0.0)
    first = animator.tick(0.15)
    first_strokes = first.strokes

    animator.tick(10.0)
    animator.tick(20.0)

    assert first.strokes is first_strokes
    assert len(first) == 1
    # cleared drawing on start plus one per tick
    assert len(snapshots) == 4
    assert snapshots[0] == Drawing()
    assert snapshots[-1] is animator.visible


def test_start_clears_visible_drawing(make_stroke, three_strokes):
    animator = ReplayAnimator()
    replay_all(animator, three_strokes)

    other = Drawing((make_stroke(3),))
    assert animator.start(other, now=0.0)
    assert animator.visible == Drawing()
    assert animator.source is other
    assert animator.cursor.stroke_index == 0
    assert animator.state is AnimatorState.RUNNING


def test_start_empty_drawing_is_noop(three_strokes):
    animator = ReplayAnimator()
    assert animator.start(Drawing(), now=0.0) is False
    assert animator.state is AnimatorState.IDLE
    assert animator.visible == Drawing()
    assert animator.cursor is None

    # Also leaves an earlier replay's output alone
    replay_all(animator, three_strokes)
    animator.stop()
    assert animator.start(Drawing(), now=0.0) is False
    assert animator.state is AnimatorState.IDLE
    assert animator.visible == three_strokes


def test_start_while_running_restarts(three_strokes, make_stroke):
    animator = ReplayAnimator()
    animator.start(three_strokes, now=0.0)
    animator.tick(0.2)
    assert len(animator.visible) == 1

    replacement = Drawing((make_stroke(2),))
    animator.start(replacement, now=5.0)
    assert animator.visible == Drawing()
    assert animator.cursor.last_tick_time == 5.0
    animator.run_to_completion()
    assert animator.visible == replacement


def test_stop_keeps_partial_progress(three_strokes):
    animator = ReplayAnimator()
    animator.start(three_strokes, now=0.0)
    partial = animator.tick(0.25)

    animator.stop()

    assert animator.state is AnimatorState.IDLE
    assert animator.cursor is None
    assert animator.visible is partial


def test_stop_is_idempotent(three_strokes):
    animator = ReplayAnimator()
    animator.stop()
    animator.stop()
    assert animator.state is AnimatorState.IDLE

    replay_all(animator, three_strokes)
    animator.stop()
    animator.stop()
    assert animator.state is AnimatorState.IDLE
    assert animator.visible == three_strokes


def test_tick_outside_running_raises(three_strokes):
    animator = ReplayAnimator()
    with pytest.raises(ReplayStateError):
        animator.tick(1.0)

    replay_all(animator, three_strokes)
    with pytest.raises(ReplayStateError):
        animator.tick(100.0)


def test_empty_stroke_is_skipped(make_stroke, monkeypatch):
    empty = Stroke(Ink(), (), 7.0)
    drawing = Drawing((make_stroke(4), empty, make_stroke(3)))

    sampled = []
    real_sampler = animator_module.PathSampler

    def recording_sampler(path):
        sampled.append(path)
        return real_sampler(path)

    monkeypatch.setattr(animator_module, "PathSampler", recording_sampler)

    animator = ReplayAnimator()
    animator.start(drawing, now=0.0)
    animator.tick(10.0)  # finishes stroke 0
    assert animator.cursor.stroke_index == 1

    animator.tick(10.01)  # skips the empty stroke
    assert animator.cursor.stroke_index == 2
    assert animator.visible.strokes[1] == empty

    animator.tick(20.0)
    assert animator.state is AnimatorState.FINISHED
    assert animator.visible == drawing
    assert all(path.points for path in sampled)


def test_single_point_strokes(make_stroke):
    drawing = Drawing((make_stroke(1), make_stroke(1, x0=30)))
    animator = ReplayAnimator()
    animator.start(drawing, now=0.0)

    animator.tick(0.0)
    animator.tick(0.0)

    assert animator.state is AnimatorState.FINISHED
    assert animator.visible == drawing


def test_uses_clock_when_no_timestamp(make_stroke):
    times = iter([1.0, 1.1, 1.2])
    animator = ReplayAnimator(clock=lambda: next(times))
    animator.start(Drawing((make_stroke(5, rate=0.1),)))
    animator.tick()
    assert animator.cursor.last_tick_time == 1.1
    assert animator.cursor.parametric_value == pytest.approx(1.0)


@pytest.mark.parametrize("step", [0.0, -0.5])
def test_run_to_completion_rejects_non_positive_step(make_stroke, step):
    animator = ReplayAnimator()
    animator.start(Drawing((make_stroke(3),)), now=0.0)
    with pytest.raises(ValueError):
        animator.run_to_completion(step)
    assert animator.cursor.stroke_index == 0

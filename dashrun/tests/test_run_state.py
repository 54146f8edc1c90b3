# dashrun/tests/test_run_state.py
"""
Tick orchestration: ordering-sensitive scenarios, run invariants, game over
and reset.

Usage (from repo root):
  pytest dashrun/tests/test_run_state.py
"""
from __future__ import annotations
from typing import List, Tuple

from dashrun.game.config import (
    WIDTH, GAME_SPEED, PLAYER_SIZE, PLAYER_X, JUMP_FORCE, PLATFORM_JUMP_FORCE,
    DOUBLE_JUMP_FORCE, JUMP_PITCH, PLATFORM_JUMP_PITCH, DOUBLE_JUMP_PITCH, BOUNCE_PITCH,
)
from dashrun.game.level import Platform, SpikeGroup
from dashrun.game.run_state import RunState


class RecordingAudio:
    def __init__(self):
        self.events: List[Tuple[str, float]] = []

    def jumped(self, pitch_hint: float) -> None:
        self.events.append(("jumped", pitch_hint))

    def collided(self) -> None:
        self.events.append(("collided", 0.0))


def clear_track(state: RunState) -> None:
    """Replace the terrain ahead with a single far-away platform."""
    top = state.oscillator.ground_top
    state.obstacles = [Platform(x=20 * WIDTH, y=top - 40.0, width=100.0, height=40.0)]


def ground_covers_view(state: RunState) -> bool:
    segs = sorted(state.ground, key=lambda s: s.x)
    if segs[0].x > 0:
        return False
    reach = segs[0].right
    for s in segs[1:]:
        if s.x > reach:
            return False
        reach = s.right
    return reach >= WIDTH


def test_fresh_run_starting_values():
    state = RunState(seed=1)
    snap = state.snapshot()
    assert snap.score == 0
    assert not snap.is_game_over and not state.is_over()
    assert snap.game_speed == GAME_SPEED
    assert snap.player.x == PLAYER_X
    assert snap.player.y == snap.ground_top - PLAYER_SIZE
    assert snap.player.vy == 0.0 and not snap.player.is_jumping
    assert snap.obstacles and snap.ground and len(snap.cats) > 0


def test_score_increments_by_one_per_running_tick():
    state = RunState(seed=2)
    clear_track(state)
    for i in range(1, 301):
        snap = state.tick()
        assert snap.score == i


def test_grounded_player_rides_the_oscillating_ground():
    state = RunState(seed=3)
    clear_track(state)
    for _ in range(300):
        snap = state.tick()
        assert snap.player.y == snap.ground_top - PLAYER_SIZE, "no sinking through the ground"
        assert snap.player.vy == 0.0
        # all obstacles move with the ground
        for o in snap.obstacles:
            assert o.y == snap.ground_top - o.height


def test_jump_arc_lands_back_on_the_ground():
    state = RunState(seed=4)
    clear_track(state)
    assert state.jump()
    assert state.player.vy == JUMP_FORCE
    assert state.player.is_jumping

    landed_after = None
    for t in range(1, 120):
        snap = state.tick()
        if not snap.player.is_jumping:
            landed_after = t
            break
        assert snap.player.rotation > 0.0
    assert landed_after is not None and 40 <= landed_after <= 50
    assert snap.player.vy == 0.0
    assert snap.player.y == snap.ground_top - PLAYER_SIZE
    assert snap.player.rotation == 0.0


def test_double_jump_then_no_more():
    audio = RecordingAudio()
    state = RunState(seed=5, audio=audio)
    clear_track(state)
    assert state.jump()
    state.tick()
    assert state.jump()
    assert state.player.vy == DOUBLE_JUMP_FORCE
    assert not state.jump()
    assert audio.events == [("jumped", JUMP_PITCH), ("jumped", DOUBLE_JUMP_PITCH)]


def test_overlapping_spikes_end_the_run_once():
    audio = RecordingAudio()
    state = RunState(seed=6, audio=audio)
    top = state.oscillator.ground_top
    state.obstacles = [SpikeGroup(x=float(PLAYER_X), y=top - 30.0, width=20.0, height=30.0,
                                  spike_heights=(30.0,))]
    snap = state.tick()
    assert snap.is_game_over and state.is_over()
    assert audio.events == [("collided", 0.0)]

    # frozen: ticking and jumping change nothing
    for _ in range(5):
        assert state.tick() == snap
    assert not state.jump()
    assert state.snapshot() == snap
    assert audio.events == [("collided", 0.0)]


def test_platform_landing_enables_the_stronger_jump():
    audio = RecordingAudio()
    state = RunState(seed=7, audio=audio)
    top0 = state.oscillator.ground_top
    plat = Platform(x=50.0, y=top0 - 40.0, width=200.0, height=40.0)
    state.obstacles = [plat, Platform(x=20 * WIDTH, y=top0 - 40.0, width=100.0, height=40.0)]
    state.player.y = plat.y - PLAYER_SIZE - 1.0
    state.player.vy = 2.0
    state.player.is_jumping = True

    snap = state.tick()
    assert snap.player.on_platform
    assert snap.player.y == state.obstacles[0].y - PLAYER_SIZE
    assert not snap.player.is_jumping

    # still standing on it next tick
    snap = state.tick()
    assert snap.player.on_platform

    assert state.jump()
    assert state.player.vy == PLATFORM_JUMP_FORCE
    assert audio.events[-1] == ("jumped", PLATFORM_JUMP_PITCH)


def test_side_bounce_plays_the_bounce_sound():
    audio = RecordingAudio()
    state = RunState(seed=8, audio=audio)
    top0 = state.oscillator.ground_top
    # after one tick of scrolling its left edge sits at x=125
    plat = Platform(x=125.0 + GAME_SPEED, y=top0 - 40.0, width=100.0, height=40.0)
    state.obstacles = [plat, Platform(x=20 * WIDTH, y=top0 - 40.0, width=100.0, height=40.0)]
    state.player.y = top0 - 50.0
    state.player.vy = -3.0
    state.player.is_jumping = True

    snap = state.tick()
    assert snap.player.x == 125.0 - PLAYER_SIZE
    assert audio.events == [("jumped", BOUNCE_PITCH)]


def test_run_invariants_hold_over_a_long_run():
    state = RunState(seed=1234)
    prev_score = 0
    for t in range(3000):
        if t % 37 == 0:
            state.jump()
        snap = state.tick()
        if snap.is_game_over:
            break
        assert snap.score == prev_score + 1
        prev_score = snap.score
        assert ground_covers_view(state)
        assert max(o.x for o in snap.obstacles) >= WIDTH - GAME_SPEED
        assert all(o.x + o.width >= 0 for o in snap.obstacles)
        xs = [o.x for o in snap.obstacles]
        assert xs == sorted(xs), "obstacles stay ordered left to right"


def test_reset_matches_a_fresh_run():
    fresh = RunState(seed=99)
    state = RunState(seed=99)
    for t in range(200):
        if t % 20 == 0:
            state.jump()
        state.tick()
    state.reset_run(99)
    assert state.snapshot() == fresh.snapshot()


def test_reset_without_seed_keeps_start_values_but_new_terrain():
    fresh = RunState(seed=5).snapshot()
    state = RunState(seed=5)
    for _ in range(50):
        state.tick()
    state.reset_run()
    snap = state.snapshot()
    assert snap.player == fresh.player
    assert snap.score == 0 and not snap.is_game_over
    assert snap.ground_offset == 0.0
    assert snap.ground == fresh.ground
    assert snap.obstacles != fresh.obstacles


def test_reset_after_game_over_resumes_ticking():
    state = RunState(seed=6)
    top = state.oscillator.ground_top
    state.obstacles = [SpikeGroup(x=float(PLAYER_X), y=top - 30.0, width=20.0, height=30.0,
                                  spike_heights=(30.0,))]
    state.tick()
    assert state.is_over()
    state.reset_run()
    assert not state.is_over()
    assert state.tick().score == 1


def test_snapshot_is_detached():
    state = RunState(seed=10)
    snap = state.snapshot()
    snap.obstacles[0].x = -999.0
    snap.ground[0].y = -999.0
    assert state.obstacles[0].x != -999.0
    assert state.ground[0].y != -999.0

import pytest

from grid_raycast import CasterConfig, FrameInput, SimulationState, update


def test_create_centres_origin_in_view():
    state = SimulationState.create()
    assert state.grid.shape == (80, 80)
    assert state.grid.cell_size == 20.0
    assert state.origin == (400.0, 400.0)

    cfg = CasterConfig(view_width=300.0, view_height=100.0)
    assert SimulationState.create(cfg).origin == (150.0, 50.0)


def test_movement_keys():
    state = SimulationState.create()
    result = update(state, FrameInput(target=(0.0, 0.0), right=True, down=True))
    assert state.origin == (408.0, 408.0)
    assert result.origin == (408.0, 408.0)
    update(state, FrameInput(target=(0.0, 0.0), up=True, left=True))
    update(state, FrameInput(target=(0.0, 0.0), up=True, left=True))
    assert state.origin == (392.0, 392.0)


def test_paint_then_cast_in_same_frame():
    state = SimulationState.create()
    result = update(state, FrameInput(target=(610.0, 400.0), paint=True))
    assert state.grid[20, 30]
    assert result.direction == pytest.approx((1.0, 0.0))
    assert result.distance == pytest.approx(200.0)
    assert result.hit_point == pytest.approx((600.0, 400.0))


def test_erase_restores_full_budget():
    state = SimulationState.create()
    update(state, FrameInput(target=(610.0, 400.0), paint=True))
    result = update(state, FrameInput(target=(610.0, 400.0), erase=True))
    assert not state.grid[20, 30]
    assert result.distance == 1000.0
    assert result.hit_point == pytest.approx((1400.0, 400.0))


def test_paint_wins_over_erase():
    state = SimulationState.create()
    update(state, FrameInput(target=(5.0, 5.0), paint=True, erase=True))
    assert state.grid[0, 0]


def test_paint_outside_grid_is_ignored():
    state = SimulationState.create()
    update(state, FrameInput(target=(-30.0, 5.0), paint=True))
    assert state.grid.occupied_count() == 0


def test_clear():
    state = SimulationState.create()
    update(state, FrameInput(target=(5.0, 5.0), paint=True))
    update(state, FrameInput(target=(45.0, 5.0), paint=True))
    assert state.grid.occupied_count() == 2
    update(state, FrameInput(target=(85.0, 5.0), paint=True, clear=True))
    assert state.grid.occupied_count() == 0


def test_target_on_origin():
    state = SimulationState.create()
    result = update(state, FrameInput(target=state.origin))
    assert result.distance == 0.0
    assert result.direction == (0.0, 0.0)
    assert result.hit_point == state.origin
    assert list(result.overlay_segments()) == []


def test_overlay_continues_past_target():
    cfg = CasterConfig(rows=10, cols=10, cell_size=10.0, max_distance=20.0,
                       dash_length=4.0, overlay_scale=2.0,
                       view_width=100.0, view_height=100.0)
    state = SimulationState.create(cfg)
    result = update(state, FrameInput(target=(60.0, 50.0)))
    segs = list(result.overlay_segments())
    # 40 units past the target: five steps, three dashes
    assert len(segs) == 3
    assert segs[0][0] == pytest.approx((64.0, 50.0))
    assert segs[-1][1] == pytest.approx((84.0, 50.0))


def test_independent_states():
    a = SimulationState.create()
    b = SimulationState.create()
    update(a, FrameInput(target=(5.0, 5.0), paint=True, right=True))
    assert b.grid.occupied_count() == 0
    assert b.origin == (400.0, 400.0)

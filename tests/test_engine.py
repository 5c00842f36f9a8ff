"""Tests for the GridSnakeEngine module."""

import json

import numpy as np
import pytest

from eat_playlist.engine import GridSnakeEngine
from eat_playlist.snake import Direction, Point, RotationDirection

CW = RotationDirection.CLOCKWISE
NONE = RotationDirection.NO_ROTATION


def _engine_with_snake(
    indices: list[int],
    direction: Direction = Direction.RIGHT,
    rows: int = 4,
    columns: int = 4,
    cell_size: float = 10.0,
) -> GridSnakeEngine:
    """Build an engine whose snake occupies *indices*, head first."""
    engine = GridSnakeEngine(seed=0)
    engine.initialize(rows, columns, cell_size)
    engine.segments = [
        engine._build_segment(i, direction, direction, f"seg-{n}")
        for n, i in enumerate(indices)
    ]
    engine.heading = direction
    return engine


def _place_target(engine: GridSnakeEngine, index: int, content="art") -> None:
    engine.target = engine._build_segment(
        index, Direction.RIGHT, Direction.RIGHT, content,
    )


class TestEngineInit:
    def test_single_head_at_origin(self):
        engine = GridSnakeEngine(seed=0)
        engine.initialize(4, 4, 10.0)
        assert len(engine.segments) == 1
        assert engine.head.index == 0
        assert engine.head.direction == Direction.RIGHT
        assert engine.heading == Direction.RIGHT
        assert engine.target is None
        assert engine.tick_count == 0

    @pytest.mark.parametrize(
        ("rows", "columns", "cell_size"),
        [(0, 4, 10.0), (4, 0, 10.0), (4, 4, 0.0), (-3, 4, 10.0)],
    )
    def test_invalid_config_rejected(self, rows, columns, cell_size):
        engine = GridSnakeEngine()
        with pytest.raises(ValueError):
            engine.initialize(rows, columns, cell_size)
        assert not engine.initialized

    def test_operations_require_initialize(self):
        engine = GridSnakeEngine()
        with pytest.raises(RuntimeError, match="not initialized"):
            engine.tick()
        with pytest.raises(RuntimeError):
            engine.set_heading(Direction.UP)
        with pytest.raises(RuntimeError):
            engine.set_target_content("art")
        with pytest.raises(RuntimeError):
            engine.snapshot()

    def test_reinitialize_discards_state(self):
        engine = _engine_with_snake([5, 4])
        _place_target(engine, 6)
        engine.set_heading(Direction.DOWN)
        engine.tick()
        engine.initialize(6, 6, 20.0)
        assert len(engine.segments) == 1
        assert engine.head.index == 0
        assert engine.target is None
        assert engine.heading == Direction.RIGHT
        assert engine.tick_count == 0
        assert engine.grid.rows == 6


class TestEngineMovement:
    def test_first_tick_moves_right(self):
        engine = GridSnakeEngine(seed=0)
        engine.initialize(4, 4, 10.0)
        result = engine.tick()
        assert result.snapshot.head.index == 1
        assert result.snapshot.tick == 1
        assert not result.consumed

    def test_down_at_column_boundary(self):
        engine = GridSnakeEngine(seed=0)
        engine.initialize(4, 4, 10.0)
        for _ in range(3):
            engine.tick()
        assert engine.head.index == 3
        engine.set_heading(Direction.DOWN)
        engine.tick()
        assert engine.head.index == 7

    def test_right_wraps_to_row_start(self):
        engine = _engine_with_snake([3])
        engine.tick()
        assert engine.head.index == 0

    def test_up_wraps_to_last_row(self):
        engine = _engine_with_snake([1], Direction.UP)
        engine.tick()
        assert engine.head.index == 13

    def test_head_follows_wrap_formula(self):
        engine = GridSnakeEngine(seed=3)
        engine.initialize(5, 7, 1.0)
        rng = np.random.default_rng(3)
        directions = list(Direction)
        for _ in range(200):
            engine.set_heading(directions[int(rng.integers(4))])
            old = engine.head.index
            row, col = divmod(old, 7)
            dr, dc = engine.heading.value
            engine.tick()
            assert engine.head.index == ((row + dr) % 5) * 7 + (col + dc) % 7

    def test_body_follows_leader(self):
        engine = _engine_with_snake(
            [9, 8, 7, 6, 5], rows=6, columns=6, cell_size=1.0,
        )
        rng = np.random.default_rng(11)
        directions = list(Direction)
        for _ in range(100):
            engine.set_heading(directions[int(rng.integers(4))])
            before = [(s.index, s.direction) for s in engine.segments]
            engine.tick()
            after = [(s.index, s.direction) for s in engine.segments]
            assert len(after) == len(before)
            for i in range(1, len(after)):
                assert after[i] == before[i - 1]

    def test_content_stays_with_segment(self):
        engine = _engine_with_snake([6, 5, 4])
        engine.tick()
        assert [s.content for s in engine.segments] == ["seg-0", "seg-1", "seg-2"]


class TestEngineHeading:
    def test_reverse_rejected_for_long_snake(self):
        engine = _engine_with_snake([5, 4])
        assert engine.set_heading(Direction.LEFT) is False
        assert engine.heading == Direction.RIGHT

    def test_reverse_allowed_for_single_segment(self):
        engine = GridSnakeEngine(seed=0)
        engine.initialize(4, 4, 10.0)
        assert engine.set_heading(Direction.LEFT) is True
        engine.tick()
        assert engine.head.index == 3

    def test_perpendicular_accepted(self):
        engine = _engine_with_snake([5, 4])
        assert engine.set_heading(Direction.UP) is True
        assert engine.heading == Direction.UP

    def test_two_turns_before_tick_can_fold_back(self):
        engine = _engine_with_snake([5, 4])
        assert engine.set_heading(Direction.UP) is True
        assert engine.set_heading(Direction.LEFT) is True
        engine.tick()
        assert engine.head.index == 4
        assert engine.segments[1].index == 5

    def test_heading_takes_effect_on_next_tick(self):
        engine = _engine_with_snake([5, 4])
        engine.set_heading(Direction.DOWN)
        assert engine.head.index == 5
        engine.tick()
        assert engine.head.index == 9


class TestEngineRotation:
    def test_head_turn_classified(self):
        engine = _engine_with_snake([5, 4])
        engine.set_heading(Direction.DOWN)
        engine.tick()
        head = engine.head
        assert head.direction == Direction.DOWN
        assert head.previous_direction == Direction.RIGHT
        assert head.rotation_direction == CW
        assert head.rotation_angle == 90.0

    def test_body_turn_lags_one_tick(self):
        engine = _engine_with_snake([5, 4])
        engine.set_heading(Direction.DOWN)
        engine.tick()
        assert engine.segments[1].rotation_direction == NONE
        engine.tick()
        body = engine.segments[1]
        assert body.index == 9
        assert body.direction == Direction.DOWN
        assert body.previous_direction == Direction.RIGHT
        assert body.rotation_direction == CW
        assert engine.head.rotation_direction == NONE

    def test_counter_clockwise_turn(self):
        engine = _engine_with_snake([5, 4])
        engine.set_heading(Direction.UP)
        engine.tick()
        assert engine.head.rotation_direction == RotationDirection.COUNTER_CLOCKWISE
        assert engine.head.rotation_angle == -90.0

    def test_straight_move_has_no_rotation(self):
        engine = _engine_with_snake([5, 4])
        engine.tick()
        assert all(s.rotation_direction == NONE for s in engine.segments)
        assert all(s.rotation_angle == 0.0 for s in engine.segments)


class TestEngineGeometry:
    def test_head_leads_into_cell(self):
        engine = _engine_with_snake([5, 4])
        engine.tick()
        head = engine.head
        assert head.index == 6
        assert head.position == pytest.approx(Point(21.0, 10.0))
        assert head.previous_position == pytest.approx(Point(11.0, 10.0))
        assert head.pivot_offset == head.position

    def test_turning_head_pivot(self):
        engine = _engine_with_snake([5, 4])
        engine.set_heading(Direction.DOWN)
        engine.tick()
        head = engine.head
        assert head.index == 9
        assert head.position == pytest.approx(Point(10.0, 21.0))
        # Clockwise into DOWN pivots on the top-left corner.
        assert head.pivot_offset == head.position

    def test_body_sits_on_cell_origin(self):
        engine = _engine_with_snake([5, 4])
        engine.set_heading(Direction.DOWN)
        engine.tick()
        engine.tick()
        body = engine.segments[1]
        assert body.position == Point(10.0, 20.0)
        assert body.previous_position == Point(10.0, 10.0)
        assert body.pivot_offset == Point(10.0, 20.0)

    def test_geometry_recomputed_every_tick(self):
        engine = _engine_with_snake([6, 5, 4])
        for _ in range(5):
            engine.tick()
            for seg in engine.segments[1:]:
                assert seg.position == engine.grid.cell_origin(seg.index)


class TestEngineGrowth:
    def test_grows_on_reaching_target(self):
        engine = _engine_with_snake([5, 4])
        _place_target(engine, 6, content="cover-2")
        result = engine.tick()
        assert result.consumed
        assert len(engine.segments) == 3
        tail = engine.segments[-1]
        assert tail.content == "cover-2"
        assert tail.direction == Direction.RIGHT
        assert tail.previous_direction == Direction.RIGHT
        assert tail.index == 6

    def test_new_tail_inherits_old_tail_direction(self):
        engine = _engine_with_snake([5, 1], Direction.DOWN)
        engine.segments[0] = engine._build_segment(
            5, Direction.RIGHT, Direction.DOWN, "head",
        )
        engine.heading = Direction.RIGHT
        _place_target(engine, 6)
        engine.tick()
        assert engine.segments[-1].direction == Direction.DOWN

    def test_target_left_in_place(self):
        engine = _engine_with_snake([5, 4])
        _place_target(engine, 6, content="cover-2")
        engine.tick()
        assert engine.target.index == 6
        assert engine.target.content == "cover-2"

    def test_no_growth_elsewhere(self):
        engine = _engine_with_snake([5, 4])
        _place_target(engine, 15)
        result = engine.tick()
        assert not result.consumed
        assert len(engine.segments) == 2

    def test_single_segment_growth(self):
        engine = GridSnakeEngine(seed=0)
        engine.initialize(4, 4, 10.0)
        _place_target(engine, 1, content="first")
        assert engine.tick().consumed
        assert [s.index for s in engine.segments] == [1, 1]
        engine.tick()
        assert [s.index for s in engine.segments] == [2, 1]
        assert engine.segments[1].content == "first"


class TestEngineTargets:
    def test_first_content_places_target(self):
        engine = _engine_with_snake([5, 4])
        target = engine.set_target_content("cover-1")
        assert target is not None
        assert engine.target is target
        assert target.index not in (5, 4)

    def test_same_content_is_noop(self):
        engine = _engine_with_snake([5, 4])
        first = engine.set_target_content("cover-1")
        assert engine.set_target_content("cover-1") is None
        assert engine.target is first

    def test_new_content_replaces_target(self):
        engine = _engine_with_snake([5, 4])
        engine.set_target_content("cover-1")
        second = engine.set_target_content("cover-2")
        assert second is not None
        assert engine.target.content == "cover-2"

    def test_target_never_on_snake(self):
        engine = _engine_with_snake(
            [0, 1, 2, 3, 7, 6, 5, 4], rows=4, columns=4, cell_size=1.0,
        )
        occupied = {s.index for s in engine.segments}
        for i in range(200):
            target = engine.set_target_content(f"cover-{i}")
            assert target is not None
            assert target.index not in occupied

    def test_full_grid_keeps_target(self):
        engine = _engine_with_snake([1, 0], rows=1, columns=2, cell_size=1.0)
        assert engine.set_target_content("cover-1") is None
        assert engine.target is None

    def test_full_grid_keeps_previous_target(self):
        engine = _engine_with_snake([1, 0], rows=1, columns=2, cell_size=1.0)
        _place_target(engine, 1, content="old")
        assert engine.set_target_content("new") is None
        assert engine.target.content == "old"


class TestEngineSerialization:
    def test_state_is_json_serializable(self):
        engine = GridSnakeEngine(seed=42)
        engine.initialize(6, 6, 16.0)
        engine.set_target_content("cover")
        engine.tick()
        serialized = json.dumps(engine.get_state())
        assert isinstance(serialized, str)

    def test_state_structure(self):
        engine = GridSnakeEngine(seed=0)
        engine.initialize(4, 4, 10.0)
        state = engine.get_state()
        assert state["tick"] == 0
        assert state["grid"] == {"rows": 4, "columns": 4, "cell_size": 10.0}
        assert len(state["snake"]) == 1
        assert state["target"] is None

    def test_tick_result_includes_consumed(self):
        engine = _engine_with_snake([5, 4])
        _place_target(engine, 6)
        d = engine.tick().to_dict()
        assert d["consumed"] is True
        assert len(d["snake"]) == 3


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        actions = [
            Direction.RIGHT, Direction.DOWN, Direction.DOWN,
            Direction.LEFT, Direction.UP,
        ]
        assert self._run(123, actions) == self._run(123, actions)

    @staticmethod
    def _run(seed: int, actions: list[Direction]) -> dict:
        engine = GridSnakeEngine(seed=seed)
        engine.initialize(8, 8, 10.0)
        for i, action in enumerate(actions):
            engine.set_target_content(f"cover-{i}")
            engine.set_heading(action)
            engine.tick()
        return engine.get_state()

from dataclasses import replace

import numpy as np
import pytest

from config import LSystemConfig
from geometry import Vector3D
from lsystem import MalformedGrammarError, Turtle, generate_lsystem


def _rounded(vector, places=6):
    return tuple(round(c, places) for c in vector.to_tuple())


def test_stack_empty_after_balanced_program(branching_config):
    turtle = Turtle(branching_config)
    turtle.interpret('F[+F[&F]][-F]F[^F]')
    assert turtle.stack == []


def test_extra_closing_bracket_is_reported(branching_config):
    turtle = Turtle(branching_config)
    with pytest.raises(MalformedGrammarError) as excinfo:
        turtle.interpret('F[+F]]F')
    assert excinfo.value.index == 5


def test_unclosed_bracket_is_reported(branching_config):
    with pytest.raises(MalformedGrammarError) as excinfo:
        Turtle(branching_config).interpret('F[+F[-F]')
    assert excinfo.value.index == 1


def test_pop_restores_state_exactly(branching_config):
    turtle = Turtle(branching_config)
    turtle.interpret('F&+')
    before = turtle.state.copy()
    
    turtle.interpret('F&+[F+F&F/F]')
    assert turtle.state.position == before.position
    assert turtle.state.heading == before.heading
    assert turtle.state.left == before.left
    assert turtle.state.up == before.up
    assert turtle.state.depth == 0


def test_segment_length_shrinks_with_nesting():
    config = LSystemConfig(axiom='F', rules={}, depth=0, scale_factor=0.5, branch_length=2.0)
    log = Turtle(config).interpret('F[F[F]]')
    lengths = [s.length for s in log.segments]
    np.testing.assert_allclose(lengths, [2.0, 1.0, 0.5])
    assert [s.depth for s in log.segments] == [0, 1, 2]
    assert log.max_depth == 2


def test_rotations_keep_frame_orthonormal(branching_config):
    turtle = Turtle(branching_config)
    turtle.interpret('+&\\-^/|++&&//')
    s = turtle.state
    for v in (s.heading, s.left, s.up):
        assert v.magnitude == pytest.approx(1.0)
    assert s.heading.dot(s.left) == pytest.approx(0.0, abs=1e-9)
    assert s.heading.dot(s.up) == pytest.approx(0.0, abs=1e-9)
    assert s.left.cross(s.up) == s.heading


def test_yaw_turns_heading_toward_left():
    config = LSystemConfig(axiom='F', rules={}, depth=0, angle=90.0)
    log = Turtle(config).interpret('+F')
    end = log.segments[0].end
    # initial left is -X
    assert end == Vector3D(-1.0, 0.0, 0.0)


def test_pitch_down_turns_heading_away_from_up():
    config = LSystemConfig(axiom='F', rules={}, depth=0, angle=90.0)
    log = Turtle(config).interpret('&F')
    end = log.segments[0].end
    # initial up is +Z
    assert end == Vector3D(0.0, 0.0, -1.0)


def test_move_without_drawing():
    config = LSystemConfig(axiom='F', rules={}, depth=0)
    log = Turtle(config).interpret('fF')
    assert len(log.segments) == 1
    assert log.segments[0].start.y == pytest.approx(1.0)


def test_unknown_symbols_are_ignored():
    config = LSystemConfig(axiom='F', rules={}, depth=0)
    log = Turtle(config).interpret('XFY*F')
    assert len(log.segments) == 2


@pytest.mark.parametrize('k', [0, 1, 4])
def test_fixed_leaf_count_per_symbol(k):
    config = LSystemConfig(axiom='F', rules={}, depth=0, min_leaf_count=k, max_leaf_count=k)
    log = Turtle(config).interpret('FL[+FL]L')
    assert len(log.leaves) == 3 * k


def test_leaf_count_within_range_and_seeded():
    config = LSystemConfig(axiom='F', rules={}, depth=0, min_leaf_count=2, max_leaf_count=5,
                           random_seed=42)
    program = 'F' + 'L' * 50
    log = Turtle(config).interpret(program)
    assert 2 * 50 <= len(log.leaves) <= 5 * 50
    
    again = Turtle(config).interpret(program)
    assert len(again.leaves) == len(log.leaves)
    assert all(a.direction == b.direction for a, b in zip(log.leaves, again.leaves))


def test_leaves_point_outward_and_shrink_with_depth():
    config = LSystemConfig(axiom='F', rules={}, depth=0, min_leaf_count=6, max_leaf_count=6,
                           scale_factor=0.5, leaf_size=0.2, random_seed=3)
    log = Turtle(config).interpret('FL[FL]')
    outer, inner = log.leaves[:6], log.leaves[6:]
    for leaf in outer:
        assert leaf.direction.magnitude == pytest.approx(1.0)
        # leaning forward along the heading (+Y), never back down the branch
        assert leaf.direction.y > 0
        assert leaf.size == pytest.approx(0.2)
    for leaf in inner:
        assert leaf.size == pytest.approx(0.1)
        assert leaf.depth == 1


def test_branching_scenario_distinct_geometry(branching_config):
    program, log = generate_lsystem(branching_config)
    assert log.leaves == []
    
    # Every F becomes a segment; the two depth-1 branches are each drawn twice
    assert len(log.segments) == program.count('F') == 9
    
    distinct = {}
    for segment in log.segments:
        key = (_rounded(segment.start), _rounded(segment.end))
        distinct.setdefault(segment.depth, set()).add(key)
    
    assert {depth: len(keys) for depth, keys in distinct.items()} == {0: 1, 1: 2, 2: 4}


def test_same_config_same_tree(branching_config):
    config = replace(branching_config, axiom='X', rules={'X': 'F[+XL][-XL]'},
                     min_leaf_count=1, max_leaf_count=3, depth=3)
    _, first = generate_lsystem(config)
    _, second = generate_lsystem(config)
    assert len(first.segments) == len(second.segments)
    assert len(first.leaves) == len(second.leaves)
    assert all(a.end == b.end for a, b in zip(first.segments, second.segments))

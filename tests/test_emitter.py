from dataclasses import replace

import numpy as np
import pytest

from config import LSystemConfig, SpaceColonizationConfig
from geometry import Vector3D, emit_lsystem_transforms, emit_space_colonization_transforms
from geometry.transforms import translation
from lsystem import Turtle, generate_lsystem
from sca import AttractionPoint, AttractionPointField, TreeNodeManager


def _endpoints(matrix):
    center = matrix[:3, 3]
    half_axis = matrix[:3, 1] * 0.5
    return center - half_axis, center + half_axis


def test_one_branch_per_segment_and_leaf_per_leaf():
    config = LSystemConfig(axiom='X', rules={'X': 'F[+XL][-XL]'}, depth=3,
                           min_leaf_count=2, max_leaf_count=2, random_seed=5)
    program, log = generate_lsystem(config)
    transforms = emit_lsystem_transforms(log)
    
    assert transforms.branches.shape == (len(log.segments), 4, 4)
    assert transforms.leaves.shape == (len(log.leaves), 4, 4)
    assert len(log.leaves) == 2 * program.count('L')


def test_branch_matrices_follow_segments(branching_config):
    _, log = generate_lsystem(branching_config)
    transforms = emit_lsystem_transforms(log)
    for matrix, segment in zip(transforms.branches, log.segments):
        start, end = _endpoints(matrix)
        np.testing.assert_allclose(start, segment.start.to_array(), atol=1e-5)
        np.testing.assert_allclose(end, segment.end.to_array(), atol=1e-5)
        assert np.linalg.norm(matrix[:3, 0]) == pytest.approx(segment.radius_scale, rel=1e-5)


def test_no_leaf_symbol_means_no_leaves(branching_config):
    _, log = generate_lsystem(branching_config)
    assert emit_lsystem_transforms(log).leaves.shape == (0, 4, 4)


def test_leaf_matrices_sit_on_the_branch():
    config = LSystemConfig(axiom='F', rules={}, depth=0, min_leaf_count=3, max_leaf_count=3,
                           leaf_size=0.25, random_seed=1)
    log = Turtle(config).interpret('FL')
    leaves = emit_lsystem_transforms(log).leaves
    for matrix, leaf in zip(leaves, log.leaves):
        np.testing.assert_allclose(matrix[:3, 3], [0.0, 1.0, 0.0], atol=1e-6)
        blade = matrix[:3, 1]
        assert np.linalg.norm(blade) == pytest.approx(0.25, rel=1e-5)
        np.testing.assert_allclose(blade / np.linalg.norm(blade), leaf.direction.to_array(), atol=1e-5)


def test_model_matrix_moves_every_instance(branching_config):
    _, log = generate_lsystem(branching_config)
    plain = emit_lsystem_transforms(log)
    moved = emit_lsystem_transforms(log, model=translation(Vector3D(2, 0, -1)))
    np.testing.assert_allclose(moved.branches[:, :3, 3] - plain.branches[:, :3, 3],
                               np.tile([2, 0, -1], (len(plain.branches), 1)), atol=1e-5)


def _grown_manager():
    manager = TreeNodeManager(3, spacing=0.2)
    field = AttractionPointField([
        AttractionPoint(Vector3D(0.45, 0.4, 0.0)),
        AttractionPoint(Vector3D(-0.45, 0.2, 0.0)),
    ])
    field.update_links(manager, 0.5, 0.1)
    manager.grow_new_nodes(0.2)
    return manager


def test_one_branch_per_edge():
    manager = _grown_manager()
    config = SpaceColonizationConfig(joint_overlap=0.0)
    transforms = emit_space_colonization_transforms(manager, config)
    
    edges = manager.edges()
    assert transforms.branches.shape == (len(edges), 4, 4)
    assert transforms.leaves.shape == (0, 4, 4)
    for matrix, (parent, child) in zip(transforms.branches, edges):
        start, end = _endpoints(matrix)
        np.testing.assert_allclose(start, manager.nodes[parent].position.to_array(), atol=1e-5)
        np.testing.assert_allclose(end, manager.nodes[child].position.to_array(), atol=1e-5)


def test_pipe_model_thins_toward_tips():
    manager = _grown_manager()
    config = SpaceColonizationConfig()
    transforms = emit_space_colonization_transforms(manager, config)
    radii = np.linalg.norm(transforms.branches[:, :3, 0], axis=1)
    
    # the edge into node 1 sits below the fork and carries every tip
    trunk = [i for i, (_, child) in enumerate(manager.edges()) if child == 1]
    np.testing.assert_allclose(radii[trunk], 1.0, rtol=1e-5)
    assert radii.min() >= config.min_radius_scale - 1e-6
    assert radii.min() < 1.0


def test_tip_leaves_are_opt_in():
    manager = _grown_manager()
    config = SpaceColonizationConfig(leaves_per_tip=3, random_seed=2)
    transforms = emit_space_colonization_transforms(manager, config)
    assert transforms.leaves.shape == (3 * len(manager.tips), 4, 4)
    
    again = emit_space_colonization_transforms(manager, replace(config))
    np.testing.assert_allclose(transforms.leaves, again.leaves)

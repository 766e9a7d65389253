import pytest

from config import SpaceColonizationConfig
from geometry import Vector3D
from sca import AttractionPoint, AttractionPointField, Envelope, TreeNodeManager, grow_tree


def test_root_branch_seeds():
    manager = TreeNodeManager(4, spacing=0.25)
    assert len(manager) == 4
    assert manager.nodes[0].parent is None
    assert [n.parent for n in manager.nodes[1:]] == [0, 1, 2]
    assert manager.nodes[3].position == Vector3D(0.0, 0.75, 0.0)
    assert all(n.heading == Vector3D(0, 1, 0) for n in manager.nodes)
    assert manager.tips == [3]


def test_root_count_must_be_positive():
    with pytest.raises(ValueError):
        TreeNodeManager(0)


def test_single_point_scenario():
    manager = TreeNodeManager(1)
    field = AttractionPointField([AttractionPoint(Vector3D(0.0, 0.3, 0.0))])
    step = 0.2
    
    field.update_links(manager, attraction_radius=0.5, kill_radius=0.2)
    assert manager.grow_new_nodes(step) is True
    
    assert len(manager) == 2
    child = manager.nodes[1]
    assert child.parent == 0
    assert child.position.distance_to(manager.nodes[0].position) == pytest.approx(step)
    assert child.position == Vector3D(0.0, step, 0.0)
    
    removed = field.update_links(manager, attraction_radius=0.5, kill_radius=0.2)
    assert removed == 1
    assert len(field) == 0
    assert manager.grow_new_nodes(step) is False
    assert len(manager) == 2


def test_nodes_without_points_do_not_grow():
    manager = TreeNodeManager(3)
    assert manager.grow_new_nodes(0.2) is False
    assert len(manager) == 3


def test_growth_resets_accumulators():
    manager = TreeNodeManager(1)
    field = AttractionPointField([AttractionPoint(Vector3D(0.4, 0.0, 0.0))])
    field.update_links(manager, 0.5, 0.2)
    manager.grow_new_nodes(0.1)
    for node in manager.nodes:
        assert node.count == 0
        assert node.direction.is_zero


def test_one_child_per_node_per_round():
    manager = TreeNodeManager(1)
    field = AttractionPointField([
        AttractionPoint(Vector3D(0.4, 0.0, 0.0)),
        AttractionPoint(Vector3D(0.0, 0.4, 0.0)),
        AttractionPoint(Vector3D(0.0, 0.0, 0.4)),
    ])
    field.update_links(manager, 0.5, 0.2)
    manager.grow_new_nodes(0.1)
    assert len(manager) == 2
    assert manager.nodes[0].children == [1]


def test_new_nodes_have_one_existing_parent(capped_sca_config):
    config = capped_sca_config
    field = AttractionPointField.build(Envelope.from_config(config))
    manager = TreeNodeManager(config.root_count, spacing=config.growth_step)
    field.update_links(manager, config.attraction_radius, config.kill_radius)
    
    for _ in range(20):
        before = len(manager)
        grew = manager.grow_new_nodes(config.growth_step)
        for index in range(before, len(manager)):
            parent = manager.nodes[index].parent
            assert parent is not None and parent < before
        field.update_links(manager, config.attraction_radius, config.kill_radius)
        if not grew:
            break
    
    # every node is listed as a child by exactly its own parent
    seen = {}
    for index, node in enumerate(manager.nodes):
        for child in node.children:
            assert child not in seen
            seen[child] = index
    for index, node in enumerate(manager.nodes):
        assert seen.get(index) == node.parent


def test_grow_tree_reaches_into_envelope(capped_sca_config):
    result = grow_tree(capped_sca_config)
    
    assert result.node_count > capped_sca_config.root_count
    assert result.iterations <= capped_sca_config.max_iterations
    assert result.remaining_points < 7 * 4 * 7
    top = max(n.position.y for n in result.manager.nodes)
    assert top > capped_sca_config.envelope_distance + 0.5
    
    depths = result.manager.depths()
    assert depths[0] == 0
    for index, node in enumerate(result.manager.nodes):
        if node.parent is not None:
            assert depths[index] == depths[node.parent] + 1


def test_iteration_cap_is_a_diagnostic(capsys):
    config = SpaceColonizationConfig(max_iterations=1)
    result = grow_tree(config)
    
    assert result.iterations == 1
    assert result.converged is False
    assert "iteration cap" in capsys.readouterr().out


def test_stalled_growth_converges(capsys):
    config = SpaceColonizationConfig(envelope_distance=5.0)
    result = grow_tree(config)
    
    assert result.converged is True
    assert result.iterations == 1
    assert result.node_count == config.root_count
    assert "iteration cap" not in capsys.readouterr().out


def test_tip_counts():
    manager = TreeNodeManager(2)
    field = AttractionPointField([
        AttractionPoint(Vector3D(0.4, 0.2, 0.0)),
        AttractionPoint(Vector3D(0.0, -0.4, 0.0)),
    ])
    field.update_links(manager, 0.5, 0.05)
    manager.grow_new_nodes(0.1)
    # node 1 grew toward +x, node 0 grew downward
    assert manager.tip_counts()[0] == len(manager.tips) == 2


def test_default_config_converges_without_duplicate_nodes():
    config = SpaceColonizationConfig()
    result = grow_tree(config)
    
    assert result.converged is True
    assert result.iterations < config.max_iterations
    positions = {tuple(round(c, 6) for c in n.position.to_tuple()) for n in result.manager.nodes}
    assert len(positions) == result.node_count


def test_blocked_node_does_not_regrow():
    manager = TreeNodeManager(1)
    field = AttractionPointField([AttractionPoint(Vector3D(0.4, 0.0, 0.0))])
    
    field.update_links(manager, 0.5, 0.01)
    assert manager.grow_new_nodes(0.2) is True
    # same pull again would put a second child on top of the first
    manager.nodes[0].attract(Vector3D(1.0, 0.0, 0.0))
    assert manager.grow_new_nodes(0.2) is False
    assert len(manager) == 2


def _unreachable_point_config(**overrides):
    # one point at (0, 0.3, 0) that the trunk passes but never comes within kill range of
    return SpaceColonizationConfig(
        envelope_height=1.0, envelope_width=2.0, envelope_length=2.0,
        envelope_distance=0.3, envelope_density=(1, 1, 1), envelope_center=(0.0, 0.0),
        attraction_radius=0.5, kill_radius=0.001, growth_step=0.2, root_count=1,
        **overrides,
    )


def test_unreachable_point_stalls_instead_of_stacking_nodes(capsys):
    result = grow_tree(_unreachable_point_config())
    
    assert result.converged is True
    assert result.stagnated is False
    assert result.iterations == 3
    assert [n.position.y for n in result.manager.nodes] == pytest.approx([0.0, 0.2, 0.4])
    assert "iteration cap" not in capsys.readouterr().out


def test_stagnation_limit_stops_growth(capsys):
    result = grow_tree(_unreachable_point_config(stagnation_limit=1))
    
    assert result.iterations == 1
    assert result.stagnated is True
    assert result.converged is True
    assert "stagnation" in capsys.readouterr().out


def test_callback_sees_every_iteration():
    seen = []
    result = grow_tree(_unreachable_point_config(),
                       callback=lambda manager, iteration: seen.append((iteration, len(manager))))
    
    assert [i for i, _ in seen] == list(range(1, result.iterations + 1))
    assert [count for _, count in seen] == [2, 3, 3]


def test_links_refresh_after_growth():
    manager = TreeNodeManager(1)
    field = AttractionPointField([AttractionPoint(Vector3D(0.0, 0.45, 0.0))])
    field.update_links(manager, 0.5, 0.1)
    manager.grow_new_nodes(0.2)
    
    # counts are zeroed by growth; links hold until the next update
    assert sum(n.count for n in manager.nodes) == 0
    assert field.points[0].node == 0
    
    field.update_links(manager, 0.5, 0.1)
    assert field.points[0].node == 1
    assert sum(n.count for n in manager.nodes) == len(field.associated) == 1

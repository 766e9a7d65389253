"""
Convert generator output into per-instance model matrices.

Branches are drawn with a unit-height cylinder along +Y centred on the origin,
leaves with a unit leaf blade along +Y based at the origin.
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from .transforms import leaf_transform, segment_transform, stack
from .vector import LEAF_TILT, fan_directions


@dataclass
class TransformSet:
    branches: np.ndarray  # (N, 4, 4) float32
    leaves: np.ndarray    # (M, 4, 4) float32


def _apply_model(matrices: np.ndarray, model: Optional[np.ndarray]) -> np.ndarray:
    if model is None or len(matrices) == 0:
        return matrices
    return np.matmul(np.asarray(model, dtype=np.float32), matrices)


def emit_lsystem_transforms(log, model: Optional[np.ndarray] = None) -> TransformSet:
    """One branch matrix per drawn turtle segment, one leaf matrix per emitted leaf."""
    branches = [segment_transform(s.start, s.end, s.radius_scale) for s in log.segments]
    leaves = [leaf_transform(leaf.position, leaf.direction, leaf.size) for leaf in log.leaves]
    return TransformSet(_apply_model(stack(branches), model), _apply_model(stack(leaves), model))


def emit_space_colonization_transforms(manager, config, model: Optional[np.ndarray] = None,
                                       rng: Optional[np.random.Generator] = None) -> TransformSet:
    """
    One branch matrix per parent -> child edge.
    
    Branch thickness follows the pipe model: an edge carrying n of the tree's
    N tips is scaled by (n / N) ** (1 / pipe_exponent), never below
    min_radius_scale. Leaves are only added when leaves_per_tip > 0.
    """
    nodes = manager.nodes
    tip_counts = manager.tip_counts()
    total_tips = max(tip_counts[0], 1) if nodes else 1
    
    branches = []
    for parent_index, child_index in manager.edges():
        share = tip_counts[child_index] / total_tips
        radius_scale = max(config.min_radius_scale, share ** (1.0 / config.pipe_exponent))
        branches.append(segment_transform(
            nodes[parent_index].position,
            nodes[child_index].position,
            radius_scale,
            overlap=config.joint_overlap,
        ))
    
    leaves = []
    if config.leaves_per_tip > 0:
        rng = rng if rng is not None else np.random.default_rng(config.random_seed)
        for tip in manager.tips:
            node = nodes[tip]
            heading = node.heading.normalize()
            directions = fan_directions(heading, heading.any_perpendicular(),
                                        config.leaves_per_tip, LEAF_TILT, rng)
            for direction in directions:
                leaves.append(leaf_transform(node.position, direction, config.leaf_size))
    
    return TransformSet(_apply_model(stack(branches), model), _apply_model(stack(leaves), model))

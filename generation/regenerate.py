"""
Single regeneration entry point.

A config goes in; unit meshes plus branch and leaf model matrices come out.
Nothing is kept between calls, every parameter change regenerates from scratch.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import time

import numpy as np

from config.tree_config import LSystemConfig, SpaceColonizationConfig, TreeConfig
from geometry.emitter import emit_lsystem_transforms, emit_space_colonization_transforms
from geometry.primitives import Mesh, create_cylinder, create_leaf, create_sphere
from lsystem.generator import generate_lsystem
from sca.tree import grow_tree
from .buffers import BufferHandle, BufferPool


CYLINDER_SEGMENTS = 8
MARKER_RADIUS = 0.02


@dataclass
class GenerationStats:
    mode: str
    branch_count: int = 0
    leaf_count: int = 0
    program_length: int = 0
    max_nesting: int = 0
    iterations: int = 0
    converged: bool = True
    stagnated: bool = False
    node_count: int = 0
    remaining_points: int = 0
    elapsed: float = 0.0


@dataclass
class TreeResult:
    """
    Everything one regeneration produces.
    
    marker_mesh is a small sphere for renderers that instance it at
    node_positions and attraction_points; the matplotlib preview draws those
    as scatter points instead. branch_depths holds the nesting depth (L-System)
    or node depth (space colonization) of each branch transform.
    """
    branch_mesh: Mesh
    leaf_mesh: Mesh
    marker_mesh: Mesh
    branch_transforms: np.ndarray  # (N, 4, 4)
    leaf_transforms: np.ndarray    # (M, 4, 4)
    stats: GenerationStats
    node_positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    attraction_points: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    branch_depths: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))


def _build_meshes(config: TreeConfig):
    if isinstance(config, LSystemConfig):
        branch_mesh = create_cylinder(config.mesh_radius, 1.0, CYLINDER_SEGMENTS)
    else:
        branch_mesh = create_cylinder(config.branch_radius, 1.0, CYLINDER_SEGMENTS)
    return branch_mesh, create_leaf(), create_sphere(MARKER_RADIUS)


def generate_tree(config: TreeConfig, model: Optional[np.ndarray] = None) -> TreeResult:
    """
    Build meshes and regenerate the full transform lists for one config.
    
    Args:
        config: LSystemConfig or SpaceColonizationConfig
        model: Optional 4x4 world matrix applied to every instance
    
    Raises MalformedGrammarError / RewriteLimitError for bad grammars and
    TypeError for an unknown config type.
    """
    start = time.perf_counter()
    
    if isinstance(config, LSystemConfig):
        program, log = generate_lsystem(config)
        transforms = emit_lsystem_transforms(log, model)
        stats = GenerationStats(
            mode=config.mode,
            program_length=len(program),
            max_nesting=log.max_depth,
        )
        extras = {
            'branch_depths': np.array([s.depth for s in log.segments], dtype=int),
        }
    elif isinstance(config, SpaceColonizationConfig):
        growth = grow_tree(config)
        depths = growth.manager.depths()
        transforms = emit_space_colonization_transforms(growth.manager, config, model)
        stats = GenerationStats(
            mode=config.mode,
            iterations=growth.iterations,
            converged=growth.converged,
            stagnated=growth.stagnated,
            node_count=growth.node_count,
            remaining_points=growth.remaining_points,
        )
        extras = {
            'node_positions': np.array([n.position.to_tuple() for n in growth.manager.nodes]),
            'attraction_points': growth.field.positions(),
            'branch_depths': np.array([depths[child] for _, child in growth.manager.edges()], dtype=int),
        }
    else:
        raise TypeError(f"Unsupported config type: {type(config).__name__}")
    
    branch_mesh, leaf_mesh, marker_mesh = _build_meshes(config)
    stats.branch_count = len(transforms.branches)
    stats.leaf_count = len(transforms.leaves)
    stats.elapsed = time.perf_counter() - start
    
    return TreeResult(
        branch_mesh=branch_mesh,
        leaf_mesh=leaf_mesh,
        marker_mesh=marker_mesh,
        branch_transforms=transforms.branches,
        leaf_transforms=transforms.leaves,
        stats=stats,
        **extras,
    )


class TreeGenerator:
    """
    Keeps the current tree and its uploaded mesh buffers.
    
    regenerate() only touches the buffers once generation has succeeded, so a
    failing config leaves the previous tree and buffers in place.
    """
    
    def __init__(self, pool: Optional[BufferPool] = None, model: Optional[np.ndarray] = None):
        self.pool = pool if pool is not None else BufferPool()
        self.model = model
        self.config: Optional[TreeConfig] = None
        self.result: Optional[TreeResult] = None
        self.buffers: Dict[str, BufferHandle] = {}
    
    def regenerate(self, config: TreeConfig) -> TreeResult:
        result = generate_tree(config, self.model)
        
        self.release()
        self.buffers = {
            'branch': self.pool.create_buffers(result.branch_mesh),
            'leaf': self.pool.create_buffers(result.leaf_mesh),
        }
        if len(result.attraction_points) or len(result.node_positions):
            self.buffers['marker'] = self.pool.create_buffers(result.marker_mesh)
        self.config = config
        self.result = result
        return result
    
    def release(self):
        for handle in self.buffers.values():
            self.pool.delete_buffers(handle)
        self.buffers = {}

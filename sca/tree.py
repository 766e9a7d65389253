"""
Tree node growth for the Space Colonization Algorithm (SCA).

Attraction points claim their nearest node. Every node that was claimed grows
one child a fixed step toward the average direction of its points. Branching
happens naturally when neighbouring nodes are claimed by different groups of
points.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from config.tree_config import SpaceColonizationConfig
from geometry.vector import Vector3D, UP
from .envelope import Envelope
from .field import AttractionPointField
from .node import TreeNode


LOG_INTERVAL = 50
POSITION_DECIMALS = 6


def _position_key(position: Vector3D) -> tuple:
    return tuple(round(c, POSITION_DECIMALS) for c in position.to_tuple())


class TreeNodeManager:
    def __init__(self, root_count: int, spacing: float = 0.2, base: Optional[Vector3D] = None):
        """
        Seed the root branch: `root_count` nodes stacked straight up from the
        base, `spacing` apart. Node 0 is the tree root; each seed above it is
        parented to the one below.
        """
        if root_count < 1:
            raise ValueError(f"root_count must be >= 1, got {root_count}")
        
        base = base if base is not None else Vector3D(0, 0, 0)
        self.nodes: List[TreeNode] = []
        self.root_count = root_count
        self._occupied: Set[tuple] = set()
        
        for i in range(root_count):
            parent = i - 1 if i > 0 else None
            self._append(TreeNode(base + UP * (spacing * i), parent=parent, heading=UP.copy()))
    
    def _append(self, node: TreeNode) -> int:
        index = len(self.nodes)
        self.nodes.append(node)
        self._occupied.add(_position_key(node.position))
        if node.parent is not None:
            self.nodes[node.parent].children.append(index)
        return index
    
    def __len__(self) -> int:
        return len(self.nodes)
    
    def reset_directions(self):
        for node in self.nodes:
            node.reset_direction()
    
    def grow_new_nodes(self, step: float) -> bool:
        """
        Grow one child per node with a non-zero growth accumulator.
        
        A child that would land on an existing node position is skipped and
        does not count as growth. Children created in this call never grow in
        the same call. All accumulators are zeroed afterwards; attraction point
        links are only refreshed by the next update_links. Returns True if any
        node grew.
        """
        grew = False
        existing = len(self.nodes)
        
        for index in range(existing):
            node = self.nodes[index]
            if node.count == 0 or node.direction.is_zero:
                continue
            
            heading = node.direction.normalize()
            position = node.position + heading * step
            if _position_key(position) in self._occupied:
                continue
            self._append(TreeNode(position, parent=index, heading=heading))
            grew = True
        
        self.reset_directions()
        return grew
    
    @property
    def tips(self) -> List[int]:
        return [i for i, n in enumerate(self.nodes) if n.is_tip]
    
    def edges(self) -> List[tuple]:
        """(parent index, child index) for every non-root node."""
        return [(n.parent, i) for i, n in enumerate(self.nodes) if not n.is_root]
    
    def depths(self) -> List[int]:
        """Edge count from the tree root; parents always precede children in the arena."""
        depths = [0] * len(self.nodes)
        for i, node in enumerate(self.nodes):
            if node.parent is not None:
                depths[i] = depths[node.parent] + 1
        return depths
    
    def tip_counts(self) -> List[int]:
        """Number of tips in the subtree below (and including) each node."""
        counts = [1 if n.is_tip else 0 for n in self.nodes]
        for i in range(len(self.nodes) - 1, -1, -1):
            parent = self.nodes[i].parent
            if parent is not None:
                counts[parent] += counts[i]
        return counts


@dataclass
class GrowthResult:
    manager: TreeNodeManager
    field: AttractionPointField
    iterations: int
    converged: bool
    stagnated: bool = False
    
    @property
    def node_count(self) -> int:
        return len(self.manager)
    
    @property
    def remaining_points(self) -> int:
        return len(self.field)


def grow_tree(config: SpaceColonizationConfig,
              callback: Optional[Callable[[TreeNodeManager, int], None]] = None) -> GrowthResult:
    """
    Run the full growth loop: link, then alternate grow and link until no node
    grows, no attraction point has been removed for stagnation_limit
    iterations, or max_iterations is reached.
    
    Optional callback is called after each iteration with (manager, iteration).
    """
    envelope = Envelope.from_config(config)
    field = AttractionPointField.build(envelope)
    manager = TreeNodeManager(config.root_count, spacing=config.growth_step)
    
    print(f"Starting growth with {len(field)} attraction points, {len(manager)} root nodes...")
    field.update_links(manager, config.attraction_radius, config.kill_radius)
    
    iteration = 0
    stagnant = 0
    grew = True
    while grew and iteration < config.max_iterations and stagnant < config.stagnation_limit:
        grew = manager.grow_new_nodes(config.growth_step)
        removed = field.update_links(manager, config.attraction_radius, config.kill_radius)
        stagnant = 0 if removed else stagnant + 1
        iteration += 1
        
        if callback:
            callback(manager, iteration)
        
        if iteration % LOG_INTERVAL == 0:
            print(f"  Iteration {iteration}: {len(manager)} nodes, "
                  f"{len(field)} attraction points remaining")
    
    stagnated = grew and stagnant >= config.stagnation_limit
    converged = not grew or stagnated
    if stagnated:
        print(f"Growth stopped due to stagnation (no attraction points removed for "
              f"{config.stagnation_limit} iterations)")
    elif not converged:
        print(f"Growth stopped at the iteration cap ({config.max_iterations}) before stalling")
    print(f"Growth complete after {iteration} iterations")
    print(f"  Final nodes: {len(manager)}")
    print(f"  Remaining attraction points: {len(field)}")
    
    return GrowthResult(manager, field, iteration, converged, stagnated)

"""
Attraction point field - the set of points still waiting to be reached by the tree.

Each call to update_links associates every remaining point with its nearest
node, or removes it once a node has grown within the kill radius.
"""

from typing import List, Optional
import numpy as np

from .attractor import AttractionPoint
from .envelope import Envelope
from .spatial import NodeSpatialIndex


class AttractionPointField:
    def __init__(self, points: Optional[List[AttractionPoint]] = None):
        self.points: List[AttractionPoint] = list(points) if points else []
        self.spatial_index = NodeSpatialIndex()
    
    @classmethod
    def build(cls, envelope: Envelope) -> 'AttractionPointField':
        return cls([AttractionPoint(pos) for pos in envelope.lattice()])
    
    def __len__(self) -> int:
        return len(self.points)
    
    def update_links(self, manager, attraction_radius: float, kill_radius: float) -> int:
        """
        Re-associate every remaining point with its nearest node.
        
        Points within kill_radius of their nearest node are removed. Points
        within attraction_radius add the unit vector toward themselves to that
        node's growth accumulator. Farther points stay, unassociated.
        
        Returns the number of points removed.
        """
        manager.reset_directions()
        nodes = manager.nodes
        
        if not self.points or not nodes:
            for point in self.points:
                point.node = None
            return 0
        
        self.spatial_index.rebuild(nodes)
        positions = np.array([p.position.to_tuple() for p in self.points])
        distances, nearest = self.spatial_index.query_batch(positions)
        
        kill_mask = distances <= kill_radius
        influence_mask = ~kill_mask & (distances <= attraction_radius)
        
        for i, point in enumerate(self.points):
            if kill_mask[i]:
                point.kill()
            elif influence_mask[i]:
                node_index = int(nearest[i])
                point.node = node_index
                node = nodes[node_index]
                node.attract(point.position - node.position)
            else:
                point.node = None
        
        before = len(self.points)
        self.points = [p for p in self.points if p.alive]
        return before - len(self.points)
    
    @property
    def associated(self) -> List[AttractionPoint]:
        """
        Points linked by the last update_links call. grow_new_nodes zeroes the
        node counts but leaves these links in place until the next update.
        """
        return [p for p in self.points if p.is_associated]
    
    def positions(self) -> np.ndarray:
        if not self.points:
            return np.zeros((0, 3))
        return np.array([p.position.to_tuple() for p in self.points])

"""
Spatial partitioning for nearest-node queries.
Uses scipy's KDTree for O(log n) lookups instead of O(n) brute force.
"""

import numpy as np
from scipy.spatial import cKDTree
from typing import List, Optional, Tuple

from .node import TreeNode


class NodeSpatialIndex:
    """KD-Tree based spatial index over every tree node."""
    
    def __init__(self):
        self._tree: Optional[cKDTree] = None
        self._positions: Optional[np.ndarray] = None
    
    def rebuild(self, nodes: List[TreeNode]):
        if not nodes:
            self._tree = None
            self._positions = None
            return
        
        self._positions = np.array([n.position.to_tuple() for n in nodes])
        self._tree = cKDTree(self._positions)
    
    def query_batch(self, positions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Query nearest node for multiple positions at once.
        Returns (distances, indices) arrays; indices refer to the rebuilt node list.
        """
        if self._tree is None or len(positions) == 0:
            return np.array([]), np.array([], dtype=int)
        return self._tree.query(positions)

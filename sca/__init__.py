"""
Space Colonization Algorithm (SCA) for 3D tree skeletons.

Based on: "Modeling Trees with a Space Colonization Algorithm" 
by Runions, Lane, and Prusinkiewicz (2007).
"""

from .attractor import AttractionPoint
from .envelope import Envelope
from .field import AttractionPointField
from .node import TreeNode
from .spatial import NodeSpatialIndex
from .tree import TreeNodeManager, GrowthResult, grow_tree

__all__ = [
    'AttractionPoint',
    'Envelope',
    'AttractionPointField',
    'TreeNode',
    'NodeSpatialIndex',
    'TreeNodeManager',
    'GrowthResult',
    'grow_tree',
]

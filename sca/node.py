"""
TreeNode - one point of the growing space colonization skeleton.

Nodes live in an append-only arena owned by TreeNodeManager and refer to their
parent by index.
"""

from typing import Optional

from geometry.vector import Vector3D


class TreeNode:
    __slots__ = ('position', 'parent', 'heading', 'direction', 'count', 'children')
    
    def __init__(self, position: Vector3D, parent: Optional[int] = None,
                 heading: Optional[Vector3D] = None):
        self.position = position
        self.parent = parent
        self.heading = heading if heading is not None else Vector3D(0, 1, 0)
        self.direction = Vector3D(0, 0, 0)  # growth accumulator, zeroed every round
        self.count = 0  # number of attraction points pulling on this node
        self.children: list = []
    
    @property
    def is_root(self) -> bool:
        return self.parent is None
    
    @property
    def is_tip(self) -> bool:
        return len(self.children) == 0
    
    def attract(self, offset: Vector3D):
        self.direction = self.direction + offset.normalize()
        self.count += 1
    
    def reset_direction(self):
        self.direction = Vector3D(0, 0, 0)
        self.count = 0
    
    def __repr__(self) -> str:
        return f"TreeNode({self.position}, parent={self.parent})"

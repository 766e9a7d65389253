"""
Attraction point - a growth hormone source that pulls the nearest tree node toward it.
"""

from typing import Optional

from geometry.vector import Vector3D


class AttractionPoint:
    __slots__ = ('position', 'node', 'alive')
    
    def __init__(self, position: Vector3D):
        self.position = position
        self.node: Optional[int] = None  # nearest node index as of the last update_links
        self.alive = True
    
    @property
    def is_associated(self) -> bool:
        return self.node is not None
    
    def kill(self):
        self.alive = False
        self.node = None
    
    def __repr__(self) -> str:
        status = "alive" if self.alive else "dead"
        link = f" -> node {self.node}" if self.node is not None else ""
        return f"AttractionPoint({self.position}, {status}{link})"

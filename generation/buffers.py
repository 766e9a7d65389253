"""
Mesh buffer bookkeeping between the generator and whatever draws the meshes.

The pool stands in for GPU buffer objects: every uploaded mesh gets a handle
that must be deleted before its replacement is created.
"""

from dataclasses import dataclass
from itertools import count
from typing import Dict

from geometry.primitives import Mesh


@dataclass(frozen=True)
class BufferHandle:
    id: int
    vertex_count: int
    index_count: int


class BufferPool:
    def __init__(self):
        self._ids = count(1)
        self._live: Dict[int, Mesh] = {}
    
    def create_buffers(self, mesh: Mesh) -> BufferHandle:
        handle = BufferHandle(next(self._ids), mesh.vertex_count, mesh.index_count)
        self._live[handle.id] = mesh
        return handle
    
    def delete_buffers(self, handle: BufferHandle):
        if handle.id not in self._live:
            raise KeyError(f"Buffer {handle.id} is not live")
        del self._live[handle.id]
    
    def get(self, handle: BufferHandle) -> Mesh:
        return self._live[handle.id]
    
    @property
    def live_count(self) -> int:
        return len(self._live)

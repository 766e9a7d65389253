"""
Static mesh builders for the unit shapes drawn once per instance transform.

Every mesh uses interleaved float32 vertices laid out as
[px, py, pz, nx, ny, nz] and uint32 triangle indices wound counter-clockwise
when seen from the side the normal points to.
"""

from dataclasses import dataclass
import numpy as np


VERTEX_STRIDE = 6


@dataclass
class Mesh:
    vertices: np.ndarray  # (N, 6) float32
    indices: np.ndarray   # (M,) uint32, three per triangle
    
    @property
    def vertex_count(self) -> int:
        return len(self.vertices)
    
    @property
    def index_count(self) -> int:
        return len(self.indices)
    
    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3
    
    @property
    def positions(self) -> np.ndarray:
        return self.vertices[:, :3]
    
    @property
    def normals(self) -> np.ndarray:
        return self.vertices[:, 3:]


def _pack(vertices, indices) -> Mesh:
    return Mesh(
        vertices=np.asarray(vertices, dtype=np.float32).reshape(-1, VERTEX_STRIDE),
        indices=np.asarray(indices, dtype=np.uint32),
    )


def create_cylinder(radius: float, height: float, segments: int = 8) -> Mesh:
    """
    Closed cylinder along +Y, centred on the origin (y in [-height/2, height/2]).
    
    Side and cap vertices are kept separate so the caps get flat normals.
    """
    if segments < 3:
        raise ValueError(f"cylinder needs at least 3 segments, got {segments}")
    
    half = height / 2.0
    vertices = []
    indices = []
    
    # Side: one bottom/top pair per ring position, seam duplicated
    for j in range(segments + 1):
        theta = 2.0 * np.pi * j / segments
        cx, sz = np.cos(theta), np.sin(theta)
        vertices.append([radius * cx, -half, radius * sz, cx, 0.0, sz])
        vertices.append([radius * cx, half, radius * sz, cx, 0.0, sz])
    
    for j in range(segments):
        b0, t0 = 2 * j, 2 * j + 1
        b1, t1 = 2 * (j + 1), 2 * (j + 1) + 1
        indices += [b0, t0, b1, t0, t1, b1]
    
    # Caps
    for y, ny in ((half, 1.0), (-half, -1.0)):
        center = len(vertices)
        vertices.append([0.0, y, 0.0, 0.0, ny, 0.0])
        for j in range(segments + 1):
            theta = 2.0 * np.pi * j / segments
            vertices.append([radius * np.cos(theta), y, radius * np.sin(theta), 0.0, ny, 0.0])
        for j in range(segments):
            a = center + 1 + j
            b = center + 2 + j
            if ny > 0:
                indices += [center, b, a]
            else:
                indices += [center, a, b]
    
    return _pack(vertices, indices)


def create_leaf(rows: int = 4, width: float = 0.35) -> Mesh:
    """
    Flat leaf blade in the XY plane with its base at the origin and tip at (0, 1, 0).
    
    The outline follows half-width = width * sin(pi * t) along the midrib.
    """
    if rows < 2:
        raise ValueError(f"leaf needs at least 2 rows, got {rows}")
    
    normal = [0.0, 0.0, 1.0]
    vertices = [[0.0, 0.0, 0.0] + normal]
    for i in range(1, rows):
        t = i / rows
        w = width * np.sin(np.pi * t)
        vertices.append([-w, t, 0.0] + normal)
        vertices.append([w, t, 0.0] + normal)
    tip = len(vertices)
    vertices.append([0.0, 1.0, 0.0] + normal)
    
    def left(i):
        return 1 + 2 * (i - 1)
    
    def right(i):
        return 2 + 2 * (i - 1)
    
    indices = [0, right(1), left(1)]
    for i in range(1, rows - 1):
        indices += [left(i), right(i), right(i + 1)]
        indices += [left(i), right(i + 1), left(i + 1)]
    indices += [left(rows - 1), right(rows - 1), tip]
    
    return _pack(vertices, indices)


def create_sphere(radius: float = 1.0, stacks: int = 8, slices: int = 12) -> Mesh:
    """UV sphere centred on the origin, used as the marker for attraction points and nodes."""
    if stacks < 2 or slices < 3:
        raise ValueError(f"sphere needs stacks >= 2 and slices >= 3, got {stacks}x{slices}")
    
    vertices = []
    for i in range(stacks + 1):
        phi = np.pi * i / stacks
        y = np.cos(phi)
        ring = np.sin(phi)
        for j in range(slices + 1):
            theta = 2.0 * np.pi * j / slices
            nx, nz = ring * np.cos(theta), ring * np.sin(theta)
            vertices.append([radius * nx, radius * y, radius * nz, nx, y, nz])
    
    indices = []
    row = slices + 1
    for i in range(stacks):
        for j in range(slices):
            a = i * row + j
            b = a + row
            if i != 0:
                indices += [a, a + 1, b]
            if i != stacks - 1:
                indices += [a + 1, b + 1, b]
    
    return _pack(vertices, indices)

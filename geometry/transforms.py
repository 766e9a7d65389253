"""
4x4 affine transform builders (column-vector convention, translation in the last column).
"""

import numpy as np

from .vector import Vector3D


def translation(offset: Vector3D) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = offset.to_array()
    return m


def scaling(sx: float, sy: float, sz: float) -> np.ndarray:
    return np.diag([sx, sy, sz, 1.0])


def rotation_about(axis: Vector3D, angle: float) -> np.ndarray:
    """Rotation matrix for a unit axis and an angle in radians."""
    x, y, z = axis.normalize().to_tuple()
    c = np.cos(angle)
    s = np.sin(angle)
    t = 1.0 - c
    m = np.eye(4)
    m[:3, :3] = [
        [t * x * x + c,     t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c,     t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return m


def align_y(direction: Vector3D) -> np.ndarray:
    """
    Shortest-arc rotation taking the local +Y axis onto `direction`.
    
    Unit primitives are modelled along +Y, so this is the rotation used to lay
    a cylinder or leaf along a segment.
    """
    d = direction.normalize()
    if d.is_zero:
        return np.eye(4)
    
    up = Vector3D(0, 1, 0)
    cos_angle = float(np.clip(up.dot(d), -1.0, 1.0))
    if cos_angle > 1.0 - 1e-12:
        return np.eye(4)
    if cos_angle < -1.0 + 1e-12:
        return rotation_about(Vector3D(1, 0, 0), np.pi)
    
    axis = up.cross(d).normalize()
    return rotation_about(axis, np.arccos(cos_angle))


def segment_transform(start: Vector3D, end: Vector3D, radius_scale: float,
                      overlap: float = 0.0) -> np.ndarray:
    """
    Model matrix placing a unit-height, Y-aligned cylinder (centred on the
    origin) over the segment start -> end.
    """
    axis = end - start
    length = axis.magnitude + overlap
    midpoint = (start + end) * 0.5
    return translation(midpoint) @ align_y(axis) @ scaling(radius_scale, length, radius_scale)


def leaf_transform(position: Vector3D, direction: Vector3D, size: float) -> np.ndarray:
    """Model matrix for a leaf whose base sits at `position` and blade points along `direction`."""
    return translation(position) @ align_y(direction) @ scaling(size, size, size)


def stack(transforms) -> np.ndarray:
    """Stack a list of 4x4 matrices into an (N, 4, 4) float32 array; empty lists give shape (0, 4, 4)."""
    if not transforms:
        return np.zeros((0, 4, 4), dtype=np.float32)
    return np.asarray(transforms, dtype=np.float32)

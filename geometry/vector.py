"""
Simple 3D Vector class shared by the turtle interpreter and the space colonization tree.
"""

import numpy as np
from typing import List


class Vector3D:
    __slots__ = ('x', 'y', 'z')
    
    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
    
    def __add__(self, other: 'Vector3D') -> 'Vector3D':
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)
    
    def __sub__(self, other: 'Vector3D') -> 'Vector3D':
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)
    
    def __mul__(self, scalar: float) -> 'Vector3D':
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)
    
    def __rmul__(self, scalar: float) -> 'Vector3D':
        return self.__mul__(scalar)
    
    def __truediv__(self, scalar: float) -> 'Vector3D':
        return Vector3D(self.x / scalar, self.y / scalar, self.z / scalar)
    
    def __neg__(self) -> 'Vector3D':
        return Vector3D(-self.x, -self.y, -self.z)
    
    def __repr__(self) -> str:
        return f"Vector3D({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"
    
    def __eq__(self, other: 'Vector3D') -> bool:
        return (np.isclose(self.x, other.x) and np.isclose(self.y, other.y)
                and np.isclose(self.z, other.z))
    
    @property
    def magnitude(self) -> float:
        return np.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)
    
    @property
    def magnitude_squared(self) -> float:
        return self.x ** 2 + self.y ** 2 + self.z ** 2
    
    @property
    def is_zero(self) -> bool:
        return self.magnitude_squared < 1e-20
    
    def normalize(self) -> 'Vector3D':
        mag = self.magnitude
        if mag < 1e-10:
            return Vector3D(0, 0, 0)
        return self / mag
    
    def dot(self, other: 'Vector3D') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z
    
    def cross(self, other: 'Vector3D') -> 'Vector3D':
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )
    
    def rotate_about(self, axis: 'Vector3D', angle: float) -> 'Vector3D':
        """Rotate around a unit axis by angle radians (right-hand rule, Rodrigues)."""
        cos_a = np.cos(angle)
        sin_a = np.sin(angle)
        return (self * cos_a
                + axis.cross(self) * sin_a
                + axis * (axis.dot(self) * (1.0 - cos_a)))
    
    def any_perpendicular(self) -> 'Vector3D':
        """Unit vector perpendicular to this one; picks the least aligned world axis."""
        ax, ay, az = abs(self.x), abs(self.y), abs(self.z)
        if ax <= ay and ax <= az:
            reference = Vector3D(1, 0, 0)
        elif ay <= az:
            reference = Vector3D(0, 1, 0)
        else:
            reference = Vector3D(0, 0, 1)
        return self.cross(reference).normalize()
    
    def distance_to(self, other: 'Vector3D') -> float:
        return (self - other).magnitude
    
    def to_tuple(self) -> tuple:
        return (self.x, self.y, self.z)
    
    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])
    
    def copy(self) -> 'Vector3D':
        return Vector3D(self.x, self.y, self.z)


UP = Vector3D(0, 1, 0)
LEAF_TILT = 0.6  # forward lean of leaves fanned around a heading


def fan_directions(
    heading: Vector3D,
    side: Vector3D,
    count: int,
    tilt: float,
    rng: np.random.Generator
) -> List[Vector3D]:
    """
    Spread `count` unit directions around `heading`, leaning outward.
    
    Directions are evenly spaced in azimuth around the heading with a random
    phase, starting from `side` (any vector perpendicular to heading), and
    lean forward along the heading by `tilt`.
    """
    if count <= 0:
        return []
    
    other = heading.cross(side).normalize()
    phase = rng.uniform(0.0, 2.0 * np.pi)
    step = 2.0 * np.pi / count
    
    directions = []
    for i in range(count):
        azimuth = phase + i * step
        outward = side * np.cos(azimuth) + other * np.sin(azimuth)
        directions.append((outward + heading * tilt).normalize())
    return directions

"""
Growth envelope - the box the attraction point lattice is laid out in.
"""

from dataclasses import dataclass
from typing import List

from config.tree_config import SpaceColonizationConfig
from geometry.vector import Vector3D


@dataclass
class Envelope:
    position: Vector3D   # bottom centre of the box
    positive_x: int
    negative_x: int
    positive_y: int
    positive_z: int
    negative_z: int
    interval: Vector3D   # lattice spacing per axis
    
    @classmethod
    def from_config(cls, config: SpaceColonizationConfig) -> 'Envelope':
        """
        Height is stepped one way up from the envelope distance; length (x) and
        width (z) are stepped both ways from the centre, so those axes use half
        the extent per density step.
        """
        dx, dy, dz = config.envelope_density
        cx, cz = config.envelope_center
        return cls(
            position=Vector3D(cx, config.envelope_distance, cz),
            positive_x=dx,
            negative_x=dx,
            positive_y=dy,
            positive_z=dz,
            negative_z=dz,
            interval=Vector3D(
                config.envelope_length / (2.0 * dx),
                config.envelope_height / dy,
                config.envelope_width / (2.0 * dz),
            ),
        )
    
    def lattice(self) -> List[Vector3D]:
        """Every lattice position, x-major then y then z."""
        points = []
        for i in range(-self.negative_x, self.positive_x + 1):
            for j in range(0, self.positive_y + 1):
                for k in range(-self.negative_z, self.positive_z + 1):
                    offset = Vector3D(i * self.interval.x, j * self.interval.y, k * self.interval.z)
                    points.append(self.position + offset)
        return points
    
    @property
    def point_count(self) -> int:
        return ((self.positive_x + self.negative_x + 1)
                * (self.positive_y + 1)
                * (self.positive_z + self.negative_z + 1))

"""
Geometry: vectors, affine transforms, unit mesh primitives and the transform emitter.
"""

from .vector import Vector3D, fan_directions
from .primitives import Mesh, create_cylinder, create_leaf, create_sphere
from .transforms import align_y, segment_transform, leaf_transform
from .emitter import TransformSet, emit_lsystem_transforms, emit_space_colonization_transforms

__all__ = [
    'Vector3D',
    'fan_directions',
    'Mesh',
    'create_cylinder',
    'create_leaf',
    'create_sphere',
    'align_y',
    'segment_transform',
    'leaf_transform',
    'TransformSet',
    'emit_lsystem_transforms',
    'emit_space_colonization_transforms',
]

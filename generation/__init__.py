"""
Tree regeneration: dispatch on the active config, build meshes and transforms.
"""

from .buffers import BufferHandle, BufferPool
from .regenerate import GenerationStats, TreeResult, TreeGenerator, generate_tree

__all__ = [
    'BufferHandle',
    'BufferPool',
    'GenerationStats',
    'TreeResult',
    'TreeGenerator',
    'generate_tree',
]

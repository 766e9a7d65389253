"""
Preview rendering of generated trees with matplotlib.
"""

from .config import PreviewConfig
from .preview import preview_tree, plot_growth_statistics, branch_segments, leaf_centers

__all__ = [
    'PreviewConfig',
    'preview_tree',
    'plot_growth_statistics',
    'branch_segments',
    'leaf_centers',
]

"""
Configuration for the preview renderer.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class PreviewConfig:
    figsize: Tuple[int, int] = (10, 10)
    background_color: Tuple[float, float, float] = (0.8, 0.9, 1.0)
    
    tree_color: Tuple[float, float, float] = (0.45, 0.32, 0.12)
    leaf_color: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    point_color: Tuple[float, float, float] = (1.0, 0.0, 0.0)
    node_color: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    
    branch_base_width: float = 4.0   # line width for a radius scale of 1
    branch_min_width: float = 0.5
    leaf_size: float = 6.0
    
    show_leaves: bool = True
    show_attraction_points: bool = False
    show_nodes: bool = False
    elevation: float = 15.0
    azimuth: float = -60.0

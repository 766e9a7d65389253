"""
Preview of a generated tree with matplotlib.

Works from the instance transforms only, the same data a mesh renderer would
draw: a branch matrix maps the unit cylinder's axis (local +Y, centred) onto
the segment, a leaf matrix maps the unit blade (local +Y from its base).
"""

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Line3DCollection
from pathlib import Path
from typing import Optional, Tuple

from generation.regenerate import TreeResult
from .config import PreviewConfig


def branch_segments(transforms: np.ndarray) -> np.ndarray:
    """(N, 2, 3) start/end points of every branch axis."""
    if len(transforms) == 0:
        return np.zeros((0, 2, 3))
    centers = transforms[:, :3, 3]
    half_axes = transforms[:, :3, 1] * 0.5
    return np.stack([centers - half_axes, centers + half_axes], axis=1)


def branch_radius_scales(transforms: np.ndarray) -> np.ndarray:
    """Radius multiplier per branch, read back from the local x column."""
    if len(transforms) == 0:
        return np.zeros(0)
    return np.linalg.norm(transforms[:, :3, 0], axis=1)


def leaf_centers(transforms: np.ndarray) -> np.ndarray:
    if len(transforms) == 0:
        return np.zeros((0, 3))
    return transforms[:, :3, 3] + transforms[:, :3, 1] * 0.5


def _set_equal_aspect(ax, points: np.ndarray):
    if len(points) == 0:
        return
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    center = (lo + hi) / 2
    radius = max(float((hi - lo).max()) / 2, 1e-3)
    # Scene Y is up; matplotlib's vertical axis is z
    ax.set_xlim(center[0] - radius, center[0] + radius)
    ax.set_ylim(center[2] - radius, center[2] + radius)
    ax.set_zlim(center[1] - radius, center[1] + radius)


def _to_plot(points: np.ndarray) -> np.ndarray:
    return points[..., [0, 2, 1]]


def preview_tree(
    result: TreeResult,
    config: Optional[PreviewConfig] = None,
    save_path: Optional[str] = None,
    show: bool = False
):
    """Draw branches as 3D lines and leaves as points."""
    config = config or PreviewConfig()
    fig = plt.figure(figsize=config.figsize)
    ax = fig.add_subplot(projection='3d')
    ax.set_facecolor(config.background_color)
    
    segments = branch_segments(result.branch_transforms)
    all_points = [segments.reshape(-1, 3)]
    
    if len(segments):
        widths = np.maximum(
            branch_radius_scales(result.branch_transforms) * config.branch_base_width,
            config.branch_min_width
        )
        lc = Line3DCollection(_to_plot(segments), colors=[config.tree_color], linewidths=widths)
        ax.add_collection3d(lc)
    
    if config.show_leaves and len(result.leaf_transforms):
        centers = leaf_centers(result.leaf_transforms)
        leaves = _to_plot(centers)
        ax.scatter(leaves[:, 0], leaves[:, 1], leaves[:, 2],
                   c=[config.leaf_color], s=config.leaf_size, alpha=0.7, depthshade=False)
        all_points.append(centers)
    
    if config.show_attraction_points and len(result.attraction_points):
        points = _to_plot(result.attraction_points)
        ax.scatter(points[:, 0], points[:, 1], points[:, 2], c=[config.point_color], s=4)
        all_points.append(result.attraction_points)
    
    if config.show_nodes and len(result.node_positions):
        nodes = _to_plot(result.node_positions)
        ax.scatter(nodes[:, 0], nodes[:, 1], nodes[:, 2], c=[config.node_color], s=3)
        all_points.append(result.node_positions)
    
    _set_equal_aspect(ax, np.concatenate(all_points, axis=0))
    ax.view_init(elev=config.elevation, azim=config.azimuth)
    ax.set_title(f"{result.stats.mode}: {result.stats.branch_count} branches, "
                 f"{result.stats.leaf_count} leaves")
    
    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved preview to {save_path}")
    
    if show:
        plt.show()
    return fig, ax


def plot_growth_statistics(result: TreeResult, save_path: Optional[str] = None,
                           show: bool = False) -> Tuple:
    """Plot the branch length distribution and the branch count per depth level."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    
    segments = branch_segments(result.branch_transforms)
    lengths = np.linalg.norm(segments[:, 1] - segments[:, 0], axis=1)
    if len(lengths):
        # equal-length edges still need a non-empty bin range
        lo = float(lengths.min())
        axes[0].hist(lengths, bins=30, range=(lo, max(float(lengths.max()), lo + 1e-3)),
                     color='saddlebrown', edgecolor='black')
    axes[0].set_xlabel('Branch Length')
    axes[0].set_ylabel('Count')
    axes[0].set_title('Branch Length Distribution')
    
    depths = result.branch_depths
    max_depth = int(depths.max()) if len(depths) else 0
    depth_counts = np.bincount(depths, minlength=max_depth + 1) if len(depths) else [0]
    axes[1].bar(range(max_depth + 1), depth_counts, color='forestgreen', edgecolor='black')
    axes[1].set_xlabel('Tree Depth')
    axes[1].set_ylabel('Branch Count')
    axes[1].set_title('Branches per Depth Level')
    
    plt.tight_layout()
    
    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")
    
    if show:
        plt.show()
    return fig, axes

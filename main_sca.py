"""
Main entry point for the Space Colonization Algorithm (SCA).

This implements the algorithm by Runions et al. (2007) for growing a 3D tree
skeleton toward a box of attraction points above the trunk.
"""

from pathlib import Path

from config import SpaceColonizationConfig
from generation import generate_tree
from rendering import PreviewConfig, preview_tree, plot_growth_statistics


def main():
    config = SpaceColonizationConfig(leaves_per_tip=4)
    
    output_dir = Path('outputs/sca')
    output_dir.mkdir(parents=True, exist_ok=True)
    
    result = generate_tree(config)
    print(f"Generated {result.stats.branch_count} branches in {result.stats.iterations} iterations")
    
    preview = PreviewConfig(show_attraction_points=True, show_nodes=True)
    preview_tree(result, preview, save_path=str(output_dir / 'tree.png'))
    plot_growth_statistics(result, save_path=str(output_dir / 'stats.png'))


if __name__ == '__main__':
    main()

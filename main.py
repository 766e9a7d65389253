"""
Main entry point for procedural tree generation.

Generates a tree with either the L-System or the Space Colonization generator
and saves a preview image of the resulting branch and leaf instances.

Examples:
    python main.py --preset small_plant
    python main.py --mode space_colonization --show
    python main.py --config config/tree.json --seed 7
"""

import argparse
from dataclasses import replace
from pathlib import Path

from config import (
    LSystemConfig,
    PRESETS,
    PRESET_LEAF_COLORS,
    SpaceColonizationConfig,
    get_preset,
    load_config,
)
from generation import generate_tree
from rendering import PreviewConfig, preview_tree


MODES = (LSystemConfig.mode, SpaceColonizationConfig.mode)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Procedurally generate a 3D tree skeleton.")
    parser.add_argument('--mode', choices=MODES, default=None,
                        help='Generator to use (default: lsystem, or the mode of --config/--preset)')
    parser.add_argument('--preset', choices=sorted(PRESETS), default=None,
                        help='Start from a named preset')
    parser.add_argument('--config', type=str, default=None,
                        help='Load parameters from a JSON file')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for leaf placement')
    parser.add_argument('--depth', type=int, default=None,
                        help='Override the L-System rewrite depth')
    parser.add_argument('--no-leaves', action='store_true',
                        help='Do not draw leaves in the preview')
    parser.add_argument('--output', type=str, default='outputs/tree.png',
                        help='Where to save the preview image')
    parser.add_argument('--show', action='store_true',
                        help='Open an interactive preview window')
    return parser


def resolve_config(args):
    if args.config is not None:
        config = load_config(args.config)
    elif args.preset is not None:
        config = get_preset(args.preset)
    elif args.mode == SpaceColonizationConfig.mode:
        config = SpaceColonizationConfig()
    else:
        config = LSystemConfig()
    
    if args.mode is not None and config.mode != args.mode:
        raise SystemExit(f"--mode {args.mode} does not match the {config.mode} parameters given")
    
    if args.seed is not None:
        config = replace(config, random_seed=args.seed)
    if args.depth is not None:
        if not isinstance(config, LSystemConfig):
            raise SystemExit("--depth only applies to the lsystem mode")
        config = replace(config, depth=args.depth)
    return config


def main():
    args = build_parser().parse_args()
    config = resolve_config(args)
    
    print(f"Generating tree ({config.mode})")
    result = generate_tree(config)
    stats = result.stats
    
    print(f"  Branches: {stats.branch_count}")
    print(f"  Leaves: {stats.leaf_count}")
    if config.mode == LSystemConfig.mode:
        print(f"  Program length: {stats.program_length} symbols, nesting depth {stats.max_nesting}")
    else:
        print(f"  Nodes: {stats.node_count} after {stats.iterations} iterations "
              f"({'converged' if stats.converged else 'hit iteration cap'})")
        print(f"  Remaining attraction points: {stats.remaining_points}")
    print(f"  Time: {stats.elapsed:.3f}s")
    
    preview = PreviewConfig(show_leaves=not args.no_leaves)
    if args.preset in PRESET_LEAF_COLORS:
        preview.leaf_color = PRESET_LEAF_COLORS[args.preset]
    
    Path(args.output).parent.mkdir(parents=True, exist_ok=True)
    preview_tree(result, preview, save_path=args.output, show=args.show)


if __name__ == '__main__':
    main()

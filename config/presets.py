"""
Named parameter presets.
"""

from dataclasses import replace
from typing import Callable, Dict

from .tree_config import LSystemConfig, SpaceColonizationConfig, TreeConfig


def _default() -> LSystemConfig:
    return LSystemConfig()


def _small_plant() -> LSystemConfig:
    return LSystemConfig(
        depth=2,
        scale_factor=0.5,
        branch_radius=5.0,
        min_leaf_count=5,
        max_leaf_count=15,
        axiom='X',
        rules={
            'X': "F[//+XXL][+++YXL][-&^FXL]",
            'F': "F[/+FL][-FL]",
            'Y': "F[\\+&FYL][/-+F^YL]",
            'L': "L[+L][-L][&L][^L]",
        },
    )


def _dense_tree() -> LSystemConfig:
    return replace(_default(), depth=4)


def _autumn_tree() -> LSystemConfig:
    return replace(
        _small_plant(),
        scale_factor=0.75,
        branch_radius=15.0,
        depth=3,
        min_leaf_count=5,
        max_leaf_count=7,
    )


def _space_colonization() -> SpaceColonizationConfig:
    return SpaceColonizationConfig()


PRESETS: Dict[str, Callable[[], TreeConfig]] = {
    'default': _default,
    'small_plant': _small_plant,
    'dense_tree': _dense_tree,
    'autumn_tree': _autumn_tree,
    'space_colonization': _space_colonization,
}

# Leaf colours the presets are meant to be shown with
PRESET_LEAF_COLORS = {
    'default': (0.0, 1.0, 0.0),
    'small_plant': (0.0, 1.0, 0.0),
    'dense_tree': (0.0, 1.0, 0.0),
    'autumn_tree': (1.0, 0.5, 0.0),
    'space_colonization': (0.0, 1.0, 0.0),
}


def get_preset(name: str) -> TreeConfig:
    """Return a fresh config for a named preset."""
    try:
        factory = PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}; available: {', '.join(sorted(PRESETS))}") from None
    return factory()

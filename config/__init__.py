"""
Configuration module.
"""

from .tree_config import (
    MAX_LSYSTEM_DEPTH,
    InvalidParameterError,
    LSystemConfig,
    SpaceColonizationConfig,
    TreeConfig,
    default_rules,
)
from .presets import PRESETS, PRESET_LEAF_COLORS, get_preset
from .loader import load_config, save_config, config_from_dict, config_to_dict

__all__ = [
    'MAX_LSYSTEM_DEPTH',
    'InvalidParameterError',
    'LSystemConfig',
    'SpaceColonizationConfig',
    'TreeConfig',
    'default_rules',
    'PRESETS',
    'PRESET_LEAF_COLORS',
    'get_preset',
    'load_config',
    'save_config',
    'config_from_dict',
    'config_to_dict',
]

"""
JSON persistence for tree parameters.

Only the parameter set is stored, never a generated tree.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict
import json

from .tree_config import (
    InvalidParameterError,
    LSystemConfig,
    SpaceColonizationConfig,
    TreeConfig,
)


CONFIG_TYPES = {
    LSystemConfig.mode: LSystemConfig,
    SpaceColonizationConfig.mode: SpaceColonizationConfig,
}


def config_to_dict(config: TreeConfig) -> Dict[str, Any]:
    data = {'mode': config.mode}
    data.update(asdict(config))
    return data


def config_from_dict(data: Dict[str, Any]) -> TreeConfig:
    """Build a config from a plain mapping with a 'mode' key; missing fields take defaults."""
    data = dict(data)
    mode = data.pop('mode', LSystemConfig.mode)
    if mode not in CONFIG_TYPES:
        raise InvalidParameterError(
            f"Unknown mode {mode!r}; expected one of {', '.join(sorted(CONFIG_TYPES))}")
    config_cls = CONFIG_TYPES[mode]
    
    known = set(config_cls.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise InvalidParameterError(f"Unknown {mode} parameters: {', '.join(sorted(unknown))}")
    
    for key in ('envelope_density', 'envelope_center'):
        if key in data and isinstance(data[key], list):
            data[key] = tuple(data[key])
    
    return config_cls(**data)


def load_config(path: str = 'config/tree.json') -> TreeConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return LSystemConfig()
    
    with open(config_path, 'r') as f:
        data = json.load(f)
    
    return config_from_dict(data)


def save_config(config: TreeConfig, path: str = 'config/tree.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    
    with open(config_path, 'w') as f:
        json.dump(config_to_dict(config), f, indent=2)
    
    print(f"Saved config to {config_path}")

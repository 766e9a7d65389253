"""
Parameter variants for tree generation.

Exactly one variant is active per regeneration: an L-System grammar config or a
space colonization envelope config. Both are validated when constructed, so a
config that exists is a config the generators accept.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Tuple, Union
import math


MAX_LSYSTEM_DEPTH = 8


class InvalidParameterError(ValueError):
    """Raised when a configuration value is outside its accepted range."""


def default_rules() -> Dict[str, str]:
    return {
        'X': "F[//+XXL][+++YXL][-&^FXL][&FXL][\\^FXL][--^FXL][^&X]",
        'F': "F[/+FL][-FL]",
        'Y': "F[\\+&FYL][/-+F^YL][/&F^Y*L][\\^FYL][F++++YL]",
        'L': "L[+L][-L][&L][^L]",
    }


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_positive(name: str, value: float):
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be a finite number, got {value!r}")
    if value <= 0:
        raise InvalidParameterError(f"{name} must be > 0, got {value!r}")


def _require_finite(name: str, value: float):
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be a finite number, got {value!r}")


@dataclass
class LSystemConfig:
    mode: ClassVar[str] = 'lsystem'
    
    depth: int = 3
    scale_factor: float = 0.75       # length/radius multiplier per nesting level
    branch_radius: float = 15.0      # cylinder radius is 0.005 * branch_radius
    min_leaf_count: int = 10
    max_leaf_count: int = 20
    axiom: str = 'X'
    rules: Dict[str, str] = field(default_factory=default_rules)
    
    angle: float = 25.0              # degrees, shared by every rotation symbol
    branch_length: float = 1.0
    leaf_size: float = 0.1
    max_string_length: int = 2_000_000
    random_seed: Optional[int] = None
    
    def __post_init__(self):
        if not _is_int(self.depth) or not 0 <= self.depth <= MAX_LSYSTEM_DEPTH:
            raise InvalidParameterError(
                f"depth must be an integer in [0, {MAX_LSYSTEM_DEPTH}], got {self.depth!r}")
        _require_positive('scale_factor', self.scale_factor)
        _require_positive('branch_radius', self.branch_radius)
        _require_positive('branch_length', self.branch_length)
        _require_positive('leaf_size', self.leaf_size)
        _require_finite('angle', self.angle)
        
        for name in ('min_leaf_count', 'max_leaf_count'):
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise InvalidParameterError(f"{name} must be a non-negative integer, got {value!r}")
        if self.min_leaf_count > self.max_leaf_count:
            raise InvalidParameterError(
                f"min_leaf_count ({self.min_leaf_count}) must not exceed "
                f"max_leaf_count ({self.max_leaf_count})")
        
        if not isinstance(self.axiom, str) or not self.axiom:
            raise InvalidParameterError("axiom must be a non-empty string")
        if not isinstance(self.rules, dict):
            raise InvalidParameterError(f"rules must be a mapping, got {type(self.rules).__name__}")
        for key, replacement in self.rules.items():
            if not isinstance(key, str) or len(key) != 1:
                raise InvalidParameterError(f"rule keys must be single symbols, got {key!r}")
            if not isinstance(replacement, str):
                raise InvalidParameterError(f"rule for {key!r} must map to a string")
        
        if not _is_int(self.max_string_length) or self.max_string_length < 1:
            raise InvalidParameterError(
                f"max_string_length must be a positive integer, got {self.max_string_length!r}")
        if self.random_seed is not None and not _is_int(self.random_seed):
            raise InvalidParameterError(f"random_seed must be an integer or None, got {self.random_seed!r}")
    
    @property
    def mesh_radius(self) -> float:
        return 0.005 * self.branch_radius


@dataclass
class SpaceColonizationConfig:
    mode: ClassVar[str] = 'space_colonization'
    
    envelope_height: float = 1.0     # grow box height, determines the tree branch height
    envelope_width: float = 2.0      # grow box extent along z
    envelope_length: float = 2.0     # grow box extent along x
    envelope_distance: float = 1.0   # grow box distance from the bottom of the tree
    envelope_density: Tuple[int, int, int] = (3, 3, 3)  # lattice steps per axis (x, y, z)
    envelope_center: Tuple[float, float] = (0.1, 0.2)   # horizontal (x, z) centre of the box
    
    attraction_radius: float = 0.5
    kill_radius: float = 0.2
    growth_step: float = 0.2
    root_count: int = 7
    max_iterations: int = 200
    stagnation_limit: int = 50       # stop if no attraction point is removed for this many iterations
    
    branch_radius: float = 0.05
    joint_overlap: float = 0.04
    pipe_exponent: float = 2.0
    min_radius_scale: float = 0.15
    leaves_per_tip: int = 0
    leaf_size: float = 0.1
    random_seed: Optional[int] = None
    
    def __post_init__(self):
        _require_positive('envelope_height', self.envelope_height)
        _require_positive('envelope_width', self.envelope_width)
        _require_positive('envelope_length', self.envelope_length)
        _require_finite('envelope_distance', self.envelope_distance)
        
        density = tuple(self.envelope_density)
        if len(density) != 3 or not all(_is_int(d) and d > 0 for d in density):
            raise InvalidParameterError(
                f"envelope_density must be three positive integers, got {self.envelope_density!r}")
        self.envelope_density = density
        
        center = tuple(self.envelope_center)
        if len(center) != 2:
            raise InvalidParameterError(f"envelope_center must be (x, z), got {self.envelope_center!r}")
        for value in center:
            _require_finite('envelope_center', value)
        self.envelope_center = center
        
        _require_positive('attraction_radius', self.attraction_radius)
        _require_positive('kill_radius', self.kill_radius)
        if self.kill_radius >= self.attraction_radius:
            raise InvalidParameterError(
                f"kill_radius ({self.kill_radius}) must be smaller than "
                f"attraction_radius ({self.attraction_radius})")
        _require_positive('growth_step', self.growth_step)
        
        for name in ('root_count', 'max_iterations', 'stagnation_limit'):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise InvalidParameterError(f"{name} must be a positive integer, got {value!r}")
        if not _is_int(self.leaves_per_tip) or self.leaves_per_tip < 0:
            raise InvalidParameterError(
                f"leaves_per_tip must be a non-negative integer, got {self.leaves_per_tip!r}")
        
        _require_positive('branch_radius', self.branch_radius)
        _require_finite('joint_overlap', self.joint_overlap)
        if self.joint_overlap < 0:
            raise InvalidParameterError(f"joint_overlap must be >= 0, got {self.joint_overlap!r}")
        _require_positive('pipe_exponent', self.pipe_exponent)
        _require_positive('min_radius_scale', self.min_radius_scale)
        _require_positive('leaf_size', self.leaf_size)
        if self.random_seed is not None and not _is_int(self.random_seed):
            raise InvalidParameterError(f"random_seed must be an integer or None, got {self.random_seed!r}")


TreeConfig = Union[LSystemConfig, SpaceColonizationConfig]

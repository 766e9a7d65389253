"""
3D turtle interpretation of a rewritten L-System program.

Symbols:
    F, G   draw forward one branch segment
    f      move forward without drawing
    + -    yaw left / right around the up vector
    & ^    pitch down / up around the left vector
    \\ /    roll left / right around the heading
    |      turn around
    [ ]    push / pop the turtle state
    L      emit a cluster of leaves
Any other symbol is a no-op.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np

from config.tree_config import LSystemConfig
from geometry.vector import LEAF_TILT, Vector3D, fan_directions
from .grammar import MalformedGrammarError


DRAW_SYMBOLS = frozenset('FG')
MOVE_SYMBOLS = frozenset('f')
LEAF_SYMBOL = 'L'


class TurtleState:
    __slots__ = ('position', 'heading', 'left', 'up', 'depth')
    
    def __init__(self, position: Vector3D, heading: Vector3D, left: Vector3D, up: Vector3D,
                 depth: int = 0):
        self.position = position
        self.heading = heading
        self.left = left
        self.up = up
        self.depth = depth
    
    @classmethod
    def initial(cls) -> 'TurtleState':
        """At the origin, heading up the trunk (+Y), left -X, up +Z."""
        return cls(Vector3D(0, 0, 0), Vector3D(0, 1, 0), Vector3D(-1, 0, 0), Vector3D(0, 0, 1))
    
    def copy(self) -> 'TurtleState':
        return TurtleState(self.position.copy(), self.heading.copy(), self.left.copy(),
                           self.up.copy(), self.depth)
    
    def yaw(self, angle: float):
        self.heading = self.heading.rotate_about(self.up, angle).normalize()
        self.left = self.left.rotate_about(self.up, angle).normalize()
    
    def pitch(self, angle: float):
        self.heading = self.heading.rotate_about(self.left, angle).normalize()
        self.up = self.up.rotate_about(self.left, angle).normalize()
    
    def roll(self, angle: float):
        self.left = self.left.rotate_about(self.heading, angle).normalize()
        self.up = self.up.rotate_about(self.heading, angle).normalize()
    
    def __repr__(self) -> str:
        return f"TurtleState({self.position}, heading={self.heading}, depth={self.depth})"


@dataclass
class Segment:
    start: Vector3D
    end: Vector3D
    depth: int
    radius_scale: float
    
    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass
class Leaf:
    position: Vector3D
    direction: Vector3D
    depth: int
    size: float


@dataclass
class TurtleLog:
    segments: List[Segment] = field(default_factory=list)
    leaves: List[Leaf] = field(default_factory=list)
    max_depth: int = 0


class Turtle:
    def __init__(self, config: LSystemConfig, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.random_seed)
        self.angle = np.radians(config.angle)
        self.state = TurtleState.initial()
        self.stack: List[TurtleState] = []
    
    def _scale(self, depth: int) -> float:
        return self.config.scale_factor ** depth
    
    def _forward(self, log: TurtleLog, draw: bool):
        scale = self._scale(self.state.depth)
        start = self.state.position
        end = start + self.state.heading * (self.config.branch_length * scale)
        if draw:
            log.segments.append(Segment(start, end, self.state.depth, scale))
        self.state.position = end
    
    def _emit_leaves(self, log: TurtleLog):
        cfg = self.config
        count = int(self.rng.integers(cfg.min_leaf_count, cfg.max_leaf_count + 1))
        size = cfg.leaf_size * self._scale(self.state.depth)
        directions = fan_directions(self.state.heading, self.state.left, count, LEAF_TILT, self.rng)
        for direction in directions:
            log.leaves.append(Leaf(self.state.position.copy(), direction, self.state.depth, size))
    
    def interpret(self, program: str) -> TurtleLog:
        """
        Walk the program and record every drawn segment and leaf.
        
        Raises MalformedGrammarError on a ']' with nothing to pop, or when a
        '[' is still open at the end of the program.
        """
        self.state = TurtleState.initial()
        self.stack = []
        open_indices: List[int] = []
        log = TurtleLog()
        angle = self.angle
        
        for index, symbol in enumerate(program):
            if symbol in DRAW_SYMBOLS:
                self._forward(log, draw=True)
            elif symbol in MOVE_SYMBOLS:
                self._forward(log, draw=False)
            elif symbol == '+':
                self.state.yaw(angle)
            elif symbol == '-':
                self.state.yaw(-angle)
            elif symbol == '&':
                self.state.pitch(angle)
            elif symbol == '^':
                self.state.pitch(-angle)
            elif symbol == '\\':
                self.state.roll(angle)
            elif symbol == '/':
                self.state.roll(-angle)
            elif symbol == '|':
                self.state.yaw(np.pi)
            elif symbol == '[':
                self.stack.append(self.state.copy())
                open_indices.append(index)
                self.state.depth += 1
                log.max_depth = max(log.max_depth, self.state.depth)
            elif symbol == ']':
                if not self.stack:
                    raise MalformedGrammarError("']' without a matching '['", index)
                self.state = self.stack.pop()
                open_indices.pop()
            elif symbol == LEAF_SYMBOL:
                self._emit_leaves(log)
        
        if self.stack:
            raise MalformedGrammarError("'[' is never closed", open_indices[-1])
        
        return log

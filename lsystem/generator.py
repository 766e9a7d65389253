"""
Rewrite-then-interpret pipeline for one L-System config.
"""

from typing import Optional, Tuple
import numpy as np

from config.tree_config import LSystemConfig
from .grammar import rewrite
from .turtle import Turtle, TurtleLog


def generate_lsystem(config: LSystemConfig,
                     rng: Optional[np.random.Generator] = None) -> Tuple[str, TurtleLog]:
    """Return the rewritten program and the turtle log of its segments and leaves."""
    program = rewrite(config.axiom, config.rules, config.depth, max_length=config.max_string_length)
    turtle = Turtle(config, rng)
    return program, turtle.interpret(program)

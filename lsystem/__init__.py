"""
Bracketed L-System generator: grammar rewriting plus 3D turtle interpretation.
"""

from .grammar import MalformedGrammarError, RewriteLimitError, rewrite, rewrite_once, parse_rules
from .turtle import Turtle, TurtleState, TurtleLog, Segment, Leaf
from .generator import generate_lsystem

__all__ = [
    'MalformedGrammarError',
    'RewriteLimitError',
    'rewrite',
    'rewrite_once',
    'parse_rules',
    'Turtle',
    'TurtleState',
    'TurtleLog',
    'Segment',
    'Leaf',
    'generate_lsystem',
]

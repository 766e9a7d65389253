"""
Grammar rewriting for bracketed L-Systems.

Each pass replaces every symbol that has a rule with its replacement, left to
right. Text produced by a pass is never rewritten within that same pass.
"""

from typing import Dict, Iterable, Optional


class MalformedGrammarError(ValueError):
    """Raised when a program's brackets do not balance."""
    
    def __init__(self, message: str, index: int):
        super().__init__(f"{message} (symbol {index})")
        self.index = index


class RewriteLimitError(ValueError):
    """Raised when rewriting grows the program past the configured length limit."""


def rewrite_once(program: str, rules: Dict[str, str]) -> str:
    return ''.join(rules.get(symbol, symbol) for symbol in program)


def rewrite(axiom: str, rules: Dict[str, str], depth: int, max_length: Optional[int] = None) -> str:
    """
    Apply the production rules `depth` times to the axiom.
    
    Args:
        axiom: Starting program
        rules: Single symbol -> replacement string; unmapped symbols are copied
        depth: Number of rewrite passes (0 returns the axiom)
        max_length: Abort with RewriteLimitError once the program exceeds this
    """
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    
    program = axiom
    for iteration in range(depth):
        program = rewrite_once(program, rules)
        if max_length is not None and len(program) > max_length:
            raise RewriteLimitError(
                f"Program reached {len(program)} symbols after {iteration + 1} of {depth} "
                f"passes (limit {max_length})")
    return program


def parse_rules(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse rules written as 'F=F[+F]F'. Blank entries are skipped.
    
    A symbol may only be defined once.
    """
    rules = {}
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if '=' not in line:
            raise ValueError(f"Rule {line!r} is missing '='")
        
        symbol, replacement = line.split('=', 1)
        symbol = symbol.strip()
        if len(symbol) != 1:
            raise ValueError(f"Rule {line!r} must rewrite a single symbol")
        if symbol in rules:
            raise ValueError(f"Symbol {symbol!r} has more than one rule")
        rules[symbol] = replacement.strip()
    return rules

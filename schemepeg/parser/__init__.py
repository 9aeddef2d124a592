from .number import NumberDescriptor
from .program import Position, SchemeGrammar, parse, read

__all__ = ['NumberDescriptor', 'Position', 'SchemeGrammar', 'parse', 'read']

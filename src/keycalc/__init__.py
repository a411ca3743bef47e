'''
Keystroke-driven infix calculator.

Takes one key at a time, the way a pocket calculator does, and keeps a live
expression tree: operators reduce as soon as precedence allows, functions
apply eagerly to the number just typed, and backspace or a failed = simply
rebuild the tree from the keys logged so far.
'''

from .cli import CLI
from .calculator import Calculator
from .builder import ExpressionBuilder
from .lexer import Lexer


__all__ = 'Calculator', 'ExpressionBuilder', 'Lexer', 'CLI'

'''
Operator registry.

Static table of every operator and function the builder accepts, keyed by
the symbol it is typed and rendered as.
'''

from collections import namedtuple
from enum import Enum
import operator
import math

from .util import DivisionByZero, DomainError, wrap_user_errors


class Kind(Enum):
    ADD = '+'
    SUBTRACT = '\N{MINUS SIGN}'
    MULTIPLY = '\N{MULTIPLICATION SIGN}'
    DIVIDE = '\N{DIVISION SIGN}'
    SINE = 'sin'
    COSINE = 'cos'
    TANGENT = 'tan'
    SQUARE = '\N{SUPERSCRIPT TWO}'
    SQUARE_ROOT = '\N{SQUARE ROOT}'
    INVERSE = '\N{FRACTION NUMERATOR ONE}'
    OPEN_GROUP = '('


# Not an operator: a control signal the builder handles itself.
CLOSE_GROUP = ')'

# Lower binds tighter, except groups, which must never be pre-empted.
ADDITIVE = 6
MULTIPLICATIVE = 5
UNARY = 3
GROUP = 999


Operator = namedtuple('Operator', ['kind', 'arity', 'precedence', 'rule'])


def _divide(left, right):
    if right == 0:
        raise DivisionByZero('Division by zero')
    return left / right


def _inverse(only):
    if only == 0:
        raise DivisionByZero('Division by zero')
    return 1 / only


def _square(only):
    return only * only


def _identity(only):
    return only


OPERATORS = {
    op.kind.value: op
    for op
    in [
        Operator(Kind.ADD, 2, ADDITIVE, operator.__add__),
        Operator(Kind.SUBTRACT, 2, ADDITIVE, operator.__sub__),
        Operator(Kind.MULTIPLY, 2, MULTIPLICATIVE, operator.__mul__),
        Operator(Kind.DIVIDE, 2, MULTIPLICATIVE, _divide),
        Operator(Kind.SINE, 1, UNARY, math.sin),
        Operator(Kind.COSINE, 1, UNARY, math.cos),
        Operator(Kind.TANGENT, 1, UNARY, math.tan),
        Operator(Kind.SQUARE, 1, UNARY, _square),
        Operator(Kind.SQUARE_ROOT, 1, UNARY, math.sqrt),
        Operator(Kind.INVERSE, 1, UNARY, _inverse),
        Operator(Kind.OPEN_GROUP, 1, GROUP, _identity),
    ]
}


def lookup(name):
    '''
    Return the operator typed as name, or None.
    '''
    return OPERATORS.get(name)


@wrap_user_errors('Cannot apply {0.kind.value}', DomainError)
def apply(op, *args):
    '''
    Run op's rule on already evaluated arguments, leftmost first.

    Refuses to let NaN or infinity leak out as a result.
    '''
    result = op.rule(*args)
    if not math.isfinite(result):
        raise DomainError('{} is out of range'.format(op.kind.value))
    return result

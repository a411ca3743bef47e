from pytest import fixture

from keycalc.builder import ExpressionBuilder
from keycalc.calculator import Calculator
from keycalc.lexer import isnumeral


@fixture
def calculator():
    return Calculator({'\N{GREEK SMALL LETTER PI}': '3.141592653589793'})


@fixture
def builder():
    return ExpressionBuilder()


def press(calculator, keys):
    '''
    Feed every key, returning what each one showed.
    '''
    return [calculator.feed(key) for key in keys]


def build(tokens, builder=None):
    '''
    Feed tokens straight to a builder, never preferring immediate evaluation.
    '''
    builder = builder or ExpressionBuilder()
    for token in tokens:
        if isnumeral(token):
            assert builder.push_operand(token)
        else:
            builder.push_operator(token)
    return builder

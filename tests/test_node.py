'''
Expression node tests
'''

from keycalc.node import Binary, Constant, Group, Unary, operation
from keycalc.operators import lookup
from keycalc.util import DivisionByZero, MissingOperand

from pytest import raises


def node(name, *operands, index=0):
    return operation(lookup(name), index).bind(*operands)


def test_constant():
    three = Constant(3.0, 1)
    assert three.evaluate() == 3
    assert three.render() == '3'
    assert Constant(0.5, 1).render() == '0.5'


def test_placeholder_classes():
    assert isinstance(operation(lookup('+'), 1), Binary)
    assert isinstance(operation(lookup('sin'), 1), Unary)
    assert isinstance(operation(lookup('('), 1), Group)


def test_placeholders_render_bare():
    assert operation(lookup('×'), 1).render() == '×'
    assert operation(lookup('sin'), 1).render() == 'sin'
    assert operation(lookup('('), 1).render() == '('


def test_placeholder_missing_operand():
    with raises(MissingOperand):
        operation(lookup('+'), 1).evaluate()
    with raises(MissingOperand):
        operation(lookup('√'), 1).evaluate()


def test_bind_keeps_index_and_placeholder():
    pending = operation(lookup('+'), 7)
    bound = pending.bind(Constant(1.0, 6), Constant(2.0, 8))
    assert bound.index == 7
    assert bound.evaluate() == 3
    assert pending.operands == ()


def test_binary_render():
    tree = node('−', Constant(8.0, 1), node('×', Constant(2.0, 3),
                                            Constant(3.0, 5)))
    assert tree.render() == '8−2×3'
    assert tree.evaluate() == 2


def test_prefix_render():
    assert node('sin', Constant(0.0, 1)).render() == 'sin(0)'
    assert node('√', Constant(9.0, 1)).render() == '√(9)'
    assert node('⅟', Constant(4.0, 1)).render() == '⅟(4)'


def test_prefix_reuses_group_parentheses():
    group = node('(', node('+', Constant(1.0, 2), Constant(2.0, 4)))
    assert group.render() == '(1+2)'
    assert node('√', group).render() == '√(1+2)'
    assert node('cos', group).render() == 'cos(1+2)'


def test_square_suffix():
    assert node('²', Constant(3.0, 1)).render() == '3²'
    group = node('(', node('+', Constant(1.0, 2), Constant(2.0, 4)))
    square = node('²', group)
    assert square.render() == '(1+2)²'
    assert square.evaluate() == 9


def test_group_identity():
    assert node('(', Constant(5.0, 2)).evaluate() == 5


def test_division_by_zero_deep():
    tree = node('+', Constant(1.0, 1),
                node('÷', Constant(1.0, 3), Constant(0.0, 5)))
    with raises(DivisionByZero):
        tree.evaluate()

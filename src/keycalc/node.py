'''
Expression tree nodes.

Operator nodes start out as placeholders with no operands (that is how the
builder keeps pending operators) and are bound to their operands on
reduction. Binding returns a new node; nodes are never mutated in place.
'''

from .operators import Kind, apply
from .util import MissingOperand, format_number


class Node:
    '''
    Anything that can sit on the builder's stacks.

    :param index: Sequence index, the keystroke order the node entered in.
    '''
    def __init__(self, index):
        self.index = index

    def evaluate(self):
        raise NotImplementedError

    def render(self):
        raise NotImplementedError

    def __repr__(self):
        return '<{} {!r} @{}>'.format(type(self).__name__,
                                      self.render(),
                                      self.index)


class Constant(Node):
    def __init__(self, value, index):
        super().__init__(index)
        self.value = value

    def evaluate(self):
        return self.value

    def render(self):
        return format_number(self.value)


class Operation(Node):
    '''
    Registered operator applied to its operands, leftmost first.
    '''
    def __init__(self, op, index, operands=()):
        super().__init__(index)
        self.op = op
        self.operands = tuple(operands)

    @property
    def kind(self):
        return self.op.kind

    @property
    def arity(self):
        return self.op.arity

    @property
    def precedence(self):
        return self.op.precedence

    @property
    def symbol(self):
        return self.op.kind.value

    def bind(self, *operands):
        '''
        Return a copy of this node holding operands, keeping its index.
        '''
        return type(self)(self.op, self.index, operands)

    def evaluate(self):
        if len(self.operands) != self.arity:
            raise MissingOperand('Missing operand for {}'.format(self.symbol))
        return apply(self.op, *[operand.evaluate()
                                for operand
                                in self.operands])


class Unary(Operation):
    def render(self):
        if not self.operands:
            return self.symbol
        only, = self.operands
        if self.kind is Kind.SQUARE:
            return only.render() + self.symbol
        if isinstance(only, Group):
            # Reuse the group's parentheses: sin(1), not sin((1))
            return self.symbol + only.render()
        return '{}({})'.format(self.symbol, only.render())


class Binary(Operation):
    def render(self):
        if not self.operands:
            return self.symbol
        left, right = self.operands
        return left.render() + self.symbol + right.render()


class Group(Unary):
    def render(self):
        if not self.operands:
            return self.symbol
        only, = self.operands
        return '({})'.format(only.render())


def operation(op, index):
    '''
    Create the unbound placeholder node for a registry entry.
    '''
    if op.kind is Kind.OPEN_GROUP:
        return Group(op, index)
    elif op.arity == 2:
        return Binary(op, index)
    else:
        return Unary(op, index)

'''
Incremental operator-precedence expression builder.

Operands and pending operators live on two stacks. Operators reduce as soon
as precedence allows, so the tree is always as collapsed as the input typed
so far permits, and every reduction yields a value for the display.
'''

from operator import attrgetter
import logging
import math

from .lexer import isnumeral
from .node import Constant, operation
from .operators import CLOSE_GROUP, Kind, lookup
from .util import (CalcError, IncompleteExpression, InvalidExpression,
                   MissingOpenBracket, UnknownToken, format_number)


logger = logging.getLogger(__name__)


class ExpressionBuilder:
    '''
    Two-stack builder of one expression tree.

    Every operand and operator accepted gets the next sequence index, which
    both enforces bracket scope and lets render() put the stacks back into
    typing order.
    '''

    def __init__(self):
        '''
        Create empty builder.
        '''
        self.operands = []
        self.operators = []
        self.count = 0
        # Arity of the last accepted token; 0 for operands.
        self.last_arity = None
        # Whether the last push reduced eagerly (unary) or closed a group.
        self.restructured = False

    def push_operand(self, text):
        '''
        Push numeral text as a constant.

        Return False, changing nothing, if text is no numeral.
        '''
        if not isnumeral(text):
            return False
        value = float(text)
        if not math.isfinite(value):
            return False
        self.count += 1
        self.operands.append(Constant(value, self.count))
        self.last_arity = 0
        self.restructured = False
        return True

    def push_operator(self, name, prefer_immediate=False):
        '''
        Push operator, function or bracket typed as name.

        Return the value of the last reduction this caused, if any. On error,
        the builder is left as it was.

        :param prefer_immediate: Apply a unary function to the top operand
                                 right away instead of deferring it.
        '''
        snapshot = self._snapshot()
        try:
            return self._push_operator(name, prefer_immediate)
        except CalcError:
            self._restore(snapshot)
            raise

    def _push_operator(self, name, prefer_immediate):
        self.restructured = False
        if name == CLOSE_GROUP:
            value = self._close_group()
            self.last_arity = 1
            self.restructured = True
            return value

        op = lookup(name)
        if op is None:
            raise UnknownToken('Unknown token {}'.format(name))
        self.count += 1
        pending = operation(op, self.count)
        self.last_arity = op.arity

        if prefer_immediate and op.arity == 1 and \
           op.kind is not Kind.OPEN_GROUP:
            self.operators.append(pending)
            self.restructured = True
            return self._reduce()

        if op.kind is Kind.OPEN_GROUP:
            self.operators.append(pending)
            return None

        value = None
        # Ties reduce the earlier operator first: left associative.
        while self.operators and \
              self.operators[-1].precedence <= op.precedence:
            value = self._reduce()
        self.operators.append(pending)
        return value

    def _close_group(self):
        '''
        Reduce everything back to and including the nearest open bracket.
        '''
        bound = None
        for pending in reversed(self.operators):
            if pending.kind is Kind.OPEN_GROUP:
                bound = pending.index
                break
        if bound is None:
            raise MissingOpenBracket('Missing open bracket')
        while True:
            kind = self.operators[-1].kind
            value = self._reduce(bound)
            if kind is Kind.OPEN_GROUP:
                return value

    def _popoperands(self, n):
        '''
        Pop specified number of operands, topmost first.
        '''
        if len(self.operands) < n:
            raise InvalidExpression('Invalid expression')
        return [self.operands.pop() for _ in range(n)]

    def _reduce(self, bound=None):
        '''
        Pop the top operator and bind it to its operands.

        Push the bound node back as an operand and return its value, or None
        if it cannot be evaluated (yet).

        :param bound: Sequence index of the open bracket being closed; no
                      operand at or before it may be consumed.
        '''
        pending = self.operators.pop()
        args = self._popoperands(pending.arity)
        if bound is not None and any(arg.index <= bound for arg in args):
            raise InvalidExpression('Invalid expression')
        # If you don't reverse, you'll do 2÷8 when you typed 8÷2.
        node = pending.bind(*reversed(args))
        self.operands.append(node)
        try:
            value = format_number(node.evaluate())
        except CalcError as e:
            logger.debug('Reduced %s without a value: %s',
                         node.render(), e.args[0])
            return None
        logger.debug('Reduced %s to %s', node.render(), value)
        return value

    def _snapshot(self):
        # Nodes are immutable, so shallow copies of the stacks suffice.
        return (list(self.operands), list(self.operators), self.count,
                self.last_arity, self.restructured)

    def _restore(self, snapshot):
        operands, operators, self.count, self.last_arity, \
            self.restructured = snapshot
        self.operands = list(operands)
        self.operators = list(operators)

    def finish(self):
        '''
        Reduce all pending operators and return the single root node.
        '''
        while self.operators:
            self._reduce()
        if len(self.operands) != 1:
            raise InvalidExpression('Invalid expression')
        return self.operands[-1]

    def render(self):
        '''
        Return the text of everything typed so far, in typing order.
        '''
        pending = sorted(self.operands + self.operators,
                         key=attrgetter('index'))
        return ''.join(node.render() for node in pending)

    def peek(self):
        '''
        Evaluate the top operand, changing nothing.
        '''
        if not self.operands:
            raise IncompleteExpression('Incomplete expression')
        return self.operands[-1].evaluate()

'''
Keystroke calculator session.
'''

import logging

from .builder import ExpressionBuilder
from .lexer import Lexer, isnumeral
from .operators import CLOSE_GROUP, lookup
from .util import CalcError, InvalidNumeral, UnknownToken, format_number


logger = logging.getLogger(__name__)


class Calculator:
    '''
    Keystroke-level calculator session on top of an ExpressionBuilder.

    Takes one token at a time and returns what the display should show, or
    None for no change. Keeps a log of the tokens accepted into the builder,
    so that any edit the tree cannot express (delete, failed evaluation) is
    done by throwing the builder away and replaying the log.
    '''

    ZERO = '0'
    DIGITS = frozenset('0123456789.')

    def __init__(self, constants=None):
        '''
        Create calculator in its empty state.

        :param constants: Mapping of constant names to their numeral text.
        '''
        self.constants = dict(constants or {})
        self.lexer = Lexer()
        self.memory = None
        self.clrall()

    def add_constant(self, name, literal):
        '''
        Make name pickable as a constant standing for literal.
        '''
        if not isnumeral(literal):
            raise InvalidNumeral('Bad numeral {} for {}'.format(literal,
                                                                 name))
        self.constants[name] = literal

    def feed(self, token):
        '''
        Run one token: digit, constant, operator or feature.
        '''
        if not token:
            raise UnknownToken('Empty input')
        feature = type(self).FEATURES.get(token)
        if feature is not None:
            return feature(self)
        elif token in type(self).DIGITS and len(token) == 1:
            return self.digit(token)
        elif token in self.constants:
            return self.constant(token)
        else:
            return self.operator(token)

    def digit(self, char):
        '''
        Append digit or decimal point to the numeral being typed.
        '''
        if len(char) != 1 or char not in type(self).DIGITS:
            raise UnknownToken('Not a digit {}'.format(char))
        self.cached = ''
        # Typing after a result starts a new expression.
        self.last_result = ''
        self.buffer += char
        self.last_immediate = self.buffer
        return self.buffer

    def constant(self, name):
        '''
        Replace the numeral being typed with a named constant.
        '''
        try:
            literal = self.constants[name]
        except KeyError:
            raise UnknownToken('No such constant {}'.format(name))
        self.cached = ''
        self.last_result = ''
        self.buffer = literal
        self.last_immediate = self.buffer
        return self.buffer

    def operator(self, name):
        '''
        Flush the numeral being typed, then push operator name.
        '''
        if name != CLOSE_GROUP and lookup(name) is None:
            raise UnknownToken('Unknown token {}'.format(name))
        saved = self._save()
        self.cached = ''
        flushed = self._flush() is not None
        try:
            value = self._putoperator(name)
        except CalcError:
            # The builder undid its own push; take the flushed operand back.
            if flushed:
                self._unflush(saved)
            raise
        self._log(name)
        if value is not None:
            self.last_immediate = value
        return value

    def _flush(self):
        '''
        Push the numeral being typed, or else the last result, as operand.

        Return the pushed text, or None if there was nothing to push.
        '''
        text = self.buffer or self.last_result
        if not text:
            return None
        if not self.builder.push_operand(text):
            raise InvalidNumeral('Bad numeral {}'.format(text))
        self.operand_last = True
        self.tokens.append(text)
        self.buffer = ''
        self.last_result = ''
        return text

    def _save(self):
        return self.buffer, self.last_result, self.cached

    def _unflush(self, saved):
        '''
        Drop the last flushed operand and rebuild without it.
        '''
        self.tokens.pop()
        self.buffer, self.last_result, self.cached = saved
        self._replay()

    def _putoperator(self, name):
        value = self.builder.push_operator(name, self.operand_last)
        # After an eager unary or a closed bracket, the top of the operand
        # stack is what the next unary applies to.
        self.operand_last = self.builder.restructured and \
            self.builder.last_arity == 1
        self.stale = self.builder.restructured
        return value

    def _puttoken(self, token):
        if isnumeral(token):
            if not self.builder.push_operand(token):
                raise InvalidNumeral('Bad numeral {}'.format(token))
            self.operand_last = True
            return token
        return self._putoperator(token)

    def _log(self, name):
        '''
        Record operator name, or resync the log if the tree was restructured.
        '''
        if self.stale:
            self.tokens = self.lexer.tokenize(self.builder.render())
            self.stale = False
            logger.debug('Resynced tokens %s', self.tokens)
        else:
            self.tokens.append(name)

    def _replay(self):
        '''
        Throw the builder away and rebuild it from the token log.
        '''
        logger.debug('Replaying %s', self.tokens)
        self.builder = ExpressionBuilder()
        self.operand_last = False
        for token in self.tokens:
            self._puttoken(token)
        self.stale = False

    def _peek(self):
        '''
        Return the top operand's value as text, or None if it has none.
        '''
        try:
            return format_number(self.builder.peek())
        except CalcError as e:
            logger.debug('No preview: %s', e.args[0])
            return None

    def _preview(self):
        if self.buffer:
            return self.buffer
        if not self.builder.operands:
            return type(self).ZERO
        return self._peek()

    def evaluate(self):
        '''
        Evaluate the whole expression (=).

        On failure, restore the expression as it was before and reraise.
        '''
        saved = self._save()
        self.cached = ''
        flushed = self._flush() is not None
        try:
            root = self.builder.finish()
            value = root.evaluate()
        except CalcError as e:
            logger.info('Rolling back: %s', e.args[0])
            if flushed:
                self._unflush(saved)
            else:
                self._replay()
            raise
        self.cached = root.render() + ' ='
        self.last_result = format_number(value)
        self.last_immediate = self.last_result
        self.builder = ExpressionBuilder()
        self.buffer = ''
        self.tokens = []
        self.operand_last = False
        return self.last_result

    def clrentry(self):
        '''
        Clear the numeral being typed (CE).
        '''
        self.cached = ''
        self.buffer = ''
        self.last_result = ''
        if not self.builder.operands:
            return None
        return self._peek()

    def clrall(self):
        '''
        Clear everything but memory (C).
        '''
        self.builder = ExpressionBuilder()
        self.buffer = ''
        self.last_result = ''
        self.last_immediate = ''
        self.cached = ''
        self.tokens = []
        self.operand_last = False
        self.stale = False
        return type(self).ZERO

    def delete(self):
        '''
        Delete the last typed character, or else the last logged token.
        '''
        self.cached = ''
        if self.buffer:
            self.buffer = self.buffer[:-1]
            return self._preview()
        if not self.tokens:
            return None
        self.tokens.pop()
        self._replay()
        return self._preview()

    def memstore(self):
        '''
        Store the last shown value in memory, if it is a bare numeral (MS).
        '''
        if not self.last_immediate:
            return None
        if isnumeral(self.last_immediate):
            self.memory = self.last_immediate
        return None

    def memrecall(self):
        '''
        Recall memory as the numeral being typed (MR).
        '''
        if self.memory is None:
            return None
        self.cached = ''
        self.last_result = ''
        self.buffer = self.memory
        return self.buffer

    def memquery(self):
        '''
        Return the stored memory value, or None.
        '''
        return self.memory

    def history(self):
        '''
        Return the expression line shown above the display.
        '''
        if self.cached:
            return self.cached
        return self.builder.render() + self.buffer

    FEATURES = {
        '=': evaluate,
        'CE': clrentry,
        'C': clrall,
        'DEL': delete,
        'MS': memstore,
        'MR': memrecall,
    }

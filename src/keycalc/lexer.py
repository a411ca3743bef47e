from functools import reduce
import operator

import regex

from .util import UnknownToken
from .operators import OPERATORS, CLOSE_GROUP


class Lexer:
    '''
    Lexer for rendered expressions and for typed keystrokes.

    Rendered expressions (what the builder's render() produces) lex into the
    same tokens the calculator accepts, so they can be replayed. Typed lines
    lex into single keystrokes.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Number, as typed or as rendered by format_number.
    NUMBER = r'''
              # Results can be negative; subtraction is U+2212, so no clash.
              -?
              (?:
                  (?:
                      # 1, 12, 1. (notice trailing dot), 1.3
                      \d+
                      (?:
                          \.
                          \d*
                      )?
                  )|(?:
                      # .2
                      \.
                      \d+
                  )
              )
              (?:
                  # 1e+16, as the shortest float repr has it.
                  e
                  [+-]?
                  \d+
              )?
              '''

    # Longest first, so that nothing ever shadows a longer name.
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      sorted(list(OPERATORS) + [CLOSE_GROUP],
                                             key=len,
                                             reverse=True))) + r')'
    SPACE = r'\s+'

    # All possible lexemes of a rendered expression.
    LEXEME = r'(?<number>(?:' + NUMBER + r'))|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<space>' + SPACE + r')'

    # A keystroke is one digit, one word (function, constant, command), or
    # one symbol.
    KEY = r'(?<digit>[0-9.])|' \
          r'(?<word>[^\W\d_]+)|' \
          r'(?<symbol>[^\w\s])|' \
          r'(?<space>' + SPACE + r')'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def _scan(self, pattern, line):
        while line:
            match = regex.match(pattern, line, flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise UnknownToken("Couldn't lex {0}".format(line.strip()))

    def lex(self, line):
        '''
        Take a rendered expression and yield all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        yield from self._scan(type(self).LEXEME, line)

    def keys(self, line):
        '''
        Take a typed line and yield all keystroke lexemes.
        '''
        yield from self._scan(type(self).KEY, line)

    def tokenize(self, line):
        '''
        Return the calculator tokens a rendered expression is made of.
        '''
        return [match.group(0)
                for match
                in self.lex(line)
                if self.isfeedable(match)]

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to a calculator.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the named groups a lexeme matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}


def isnumeral(text):
    '''
    Return True if text is one bare numeral and nothing else.
    '''
    return regex.fullmatch(Lexer.NUMBER, text, flags=Lexer.FLAGS) is not None

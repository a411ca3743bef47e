from os import isatty
from sys import stdin, stdout, exit
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import logging
import math
import sys

from prompt_toolkit import PromptSession

from .util import CalcError
from .calculator import Calculator
from .lexer import Lexer, isnumeral
from .operators import lookup


class InteractiveInput:
    def __init__(self, prompt, calculator):
        self.prompt = prompt
        self.calculator = calculator

    def _memory_marker(self):
        return 'M' if self.calculator.memquery() is not None else ''

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    rprompt=self._memory_marker,
                                    bottom_toolbar=self.calculator.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=True,
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


def constant(text):
    '''
    Parse NAME=VALUE command line constant.
    '''
    name, sep, value = text.partition('=')
    if not sep or not name or not isnumeral(value):
        raise ArgumentTypeError('Expected NAME=NUMBER, got {}'.format(text))
    return name, value


class CLI:
    '''
    Command line interface to the calculator.

    Each line typed is split into keystrokes, which go to the calculator one
    at a time; the display is printed once the line is done.
    '''

    DEFAULT_PROMPT = '> '
    DEFAULT_CONSTANTS = {
        '\N{GREEK SMALL LETTER PI}': repr(math.pi),
        'e': repr(math.e),
    }
    # What to type on a plain keyboard, for keys that don't have one.
    ALIASES = {
        '-': '\N{MINUS SIGN}',
        '*': '\N{MULTIPLICATION SIGN}',
        'x': '\N{MULTIPLICATION SIGN}',
        '/': '\N{DIVISION SIGN}',
        'sqrt': '\N{SQUARE ROOT}',
        'sqr': '\N{SUPERSCRIPT TWO}',
        'inv': '\N{FRACTION NUMERATOR ONE}',
        'pi': '\N{GREEK SMALL LETTER PI}',
        'ce': 'CE',
        'c': 'C',
        'ms': 'MS',
        'mr': 'MR',
        'del': 'DEL',
        'bs': 'DEL',
    }

    def translate(self, key):
        '''
        Map keystroke to the token the calculator takes.
        '''
        return type(self).ALIASES.get(key.lower(), key)

    def _keys(self, lexer, line):
        for match in lexer.keys(line):
            if lexer.isfeedable(match):
                yield match

    def dumper(self):
        '''
        Dump all keystroke matches, their token, and arity.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(key)>\t<token>\t<arity>')
        for line in self.args.expressions:
            for match in self._keys(lexer, line):
                key = match.group(0)
                token = self.translate(key)
                op = lookup(token)
                print(*lexer.matchedgroups(match).keys(),
                      repr(key),
                      token,
                      op.arity if op else '-',
                      sep='\t')

    def executor(self):
        '''
        Run calculator.
        '''
        calculator = self.calculator
        lexer = Lexer()
        display = calculator.ZERO
        for line in self.args.expressions:
            try:
                for match in self._keys(lexer, line):
                    value = calculator.feed(self.translate(match.group(0)))
                    if value is not None:
                        display = value
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                print(e.args[0], file=sys.stderr)
            if self.args.show_history:
                print(calculator.history())
            print(display, flush=True)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting input, or plain stdin.

        Prompts if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    calculator=self.calculator)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-H', '--show-history',
                                          action='store_true')
        self.argument_parser.add_argument('-c', '--constant',
                                          type=constant,
                                          action='append',
                                          default=[],
                                          dest='constants',
                                          metavar='NAME=VALUE')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(stream=sys.stderr,
                            level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        constants = dict(self.DEFAULT_CONSTANTS)
        constants.update(self.args.constants)
        self.calculator = Calculator(constants)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)

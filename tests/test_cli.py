'''
Command line interface tests
'''

from keycalc.cli import CLI
from keycalc.lexer import Lexer

from pytest import raises


def run(*args):
    cli = CLI()
    cli.run(args=list(args))
    return cli


def test_expression(capsys):
    run('-e', '3+4*2=')
    assert capsys.readouterr().out == '11\n'


def test_lines_share_one_session(capsys):
    run('-e', '3 + 4 =', '* 2 =', '9 sqrt')
    assert capsys.readouterr().out.splitlines() == ['7', '14', '3']


def test_aliases(capsys):
    run('-e', '(1+2) sqr / 4 =', 'pi ms c mr', 'c 10 - 4 inv =')
    assert capsys.readouterr().out.splitlines() == \
        ['2.25', '3.141592653589793', '9.75']


def test_show_history(capsys):
    run('-H', '-e', '12 del del 5 x 3 =')
    assert capsys.readouterr().out.splitlines() == ['5×3 =', '15']


def test_error_aborts_line(capsys):
    cli = run('-e', '5 / 0 =', 'c 2 =')
    out, err = capsys.readouterr()
    assert err.strip() == 'Division by zero'
    # The failed line keeps showing what was typed; the next line carries on.
    assert out.splitlines() == ['0', '2']
    assert cli.calculator.history() == '2 ='


def test_constants_option(capsys):
    run('-c', 'g=9.81', '-e', 'g * 2 =')
    assert capsys.readouterr().out == '19.62\n'


def test_bad_constant_option(capsys):
    with raises(SystemExit):
        run('-c', 'g=fast', '-e', '1')
    assert 'NAME=NUMBER' in capsys.readouterr().err


def test_raw_grammar(capsys):
    run('-G', '-e')
    assert capsys.readouterr().out.strip() == Lexer.LEXEME.strip()


def test_dump(capsys):
    run('-D', '-e', '9 sqrt +')
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith('[groups]')
    assert lines[1:] == ["digit\t'9'\t9\t-",
                         "word\t'sqrt'\t√\t1",
                         "symbol\t'+'\t+\t2"]

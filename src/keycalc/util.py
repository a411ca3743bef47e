from functools import wraps


class CalcError(Exception):
    pass


class MissingOperand(CalcError):
    pass


class MissingOpenBracket(CalcError):
    pass


class InvalidExpression(CalcError):
    pass


class DivisionByZero(CalcError):
    pass


class UnknownToken(CalcError):
    pass


class InvalidNumeral(CalcError):
    pass


class IncompleteExpression(CalcError):
    pass


class DomainError(CalcError):
    pass


def wrap_user_errors(fmt, error=CalcError):
    '''
    Decorator that converts stray exceptions into calculator errors.

    Passes through CalcErrors. Anything else becomes ``error``, with the
    message formatted from the wrapped call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def format_number(value):
    '''
    Numeral text for a float, as shown on the display.

    Integral values drop the fractional part; anything else (including huge
    integral values) uses the shortest repr that round-trips.
    '''
    if value.is_integer() and abs(value) < 1e16:
        # int() also turns -0.0 into 0
        return str(int(value))
    return repr(value)

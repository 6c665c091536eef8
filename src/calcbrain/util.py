from functools import wraps
import sys


class BrainError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Report failures of the decorated function as a BrainError.

    The message is fmt formatted with the function's own arguments; the
    original exception is kept as the cause.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except (ArithmeticError, LookupError, TypeError, ValueError) as e:
                raise BrainError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator


def format_number(value):
    '''
    Format a float for display: no decimal point if integral.

    Integral means no fractional part and within native integer range.
    Everything else (including inf and nan) keeps full float precision.
    '''
    # nan % 1 and inf % 1 are both nan, so they never count as integral.
    if value % 1 == 0 and abs(value) < sys.maxsize:
        return str(int(value))
    return repr(float(value))

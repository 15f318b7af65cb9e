"""
Exact conversion and formatting helpers for Fraction based linear programming.

                                 Disclaimer
                                 ==========

This code is provided for educational and research purposes.
The authors are not responsible for any errors or damages resulting from its use.

Feedback, error reports and improvements are welcome via GitHub issues or
pull requests.

Input values may be given as Fractions, ints, sympy rationals or strings such
as "1/7" or "10^100+1". Strings are evaluated by sympy, so arbitrarily large
integers and exact quotients survive unchanged. Floats are refused: a float
already carries a rounding error and there is no floating-point mode.
"""

import numbers
from fractions import Fraction

from mpmath import mp
from sympy import sympify
from sympy.core.sympify import SympifyError


def to_fraction(x):
    """Convert input to Fraction while preserving exact values.

    Args:
        x: Input value (Fraction, int, other numbers.Rational, str, or sympy expression)

    Returns:
        Exact Fraction representation
    """
    if isinstance(x, Fraction):
        return x
    if isinstance(x, int) and not isinstance(x, bool):
        return Fraction(x)
    if isinstance(x, str):
        try:
            expr = sympify(x.replace('^', '**'))
        except SympifyError as e:
            raise ValueError(f"Could not parse expression: {x}. Error: {e}") from e
    elif hasattr(x, 'evalf'):
        expr = x
    elif isinstance(x, numbers.Rational) and not isinstance(x, bool):
        return Fraction(int(x.numerator), int(x.denominator))
    else:
        raise ValueError(f"Cannot convert {type(x)} to Fraction")

    if not expr.is_Rational:
        raise ValueError(f"Expression {x} is not an exact rational number")
    return Fraction(int(expr.p), int(expr.q))


def to_vector(values):
    return [to_fraction(v) for v in values]


def to_matrix(rows):
    return [[to_fraction(v) for v in row] for row in rows]


def dot(u, v):
    total = Fraction(0)
    for a, b in zip(u, v):
        if a and b:
            total += a * b
    return total


def format_decimal(value, digits=30):
    """Decimal rendering of a Fraction with `digits` significant digits (mpmath)."""
    with mp.workdps(digits):
        return mp.nstr(mp.mpf(value.numerator) / value.denominator, digits)


def format_linear(coeffs, names):
    """Render sum(coeffs[j] * names[j]) the way the problem printouts show it."""
    parts = []
    for a, name in zip(coeffs, names):
        if a != 0:
            if parts:
                parts.append(f"{' + ' if a > 0 else ' - '}{abs(a)} {name}")
            else:
                parts.append(f"{a} {name}")
    return ''.join(parts) if parts else '0'

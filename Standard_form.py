"""
General form to standard computational form conversion.

                                 Disclaimer
                                 ==========

This code is provided for educational and research purposes.
The authors are not responsible for any errors or damages resulting from its use.

Feedback, error reports and improvements are welcome via GitHub issues or
pull requests.

Transforms
        {min/max}  dot(c, x)
        subject to A x {<=|=|>=} b,  x >= 0
into
        min        dot(c', x')
        subject to A' x' = b',  x' >= 0,  b' >= 0

- one auxiliary column per non-equality row, assigned in row order:
  +1 for '<=' (slack), -1 for '>=' (surplus)
- c' = -c for maximisation, the solver always minimises
- rows with negative rhs are multiplied by -1

The first len(c) entries of a standard form solution are the solution of
the general form problem.
"""

from fractions import Fraction
from typing import List, NamedTuple

from Exact_fraction import to_matrix, to_vector
from Simplex_types import Sense, SimplexPreconditionError, parse_relation, parse_sense


class StandardForm(NamedTuple):
    c: List[Fraction]
    A: List[List[Fraction]]
    b: List[Fraction]
    num_original: int
    var_types: List[str]        # 'decision', 'slack' or 'surplus' per column
    row_flipped: List[bool]     # rows negated because b[i] < 0

    @property
    def num_auxiliary(self):
        return len(self.c) - self.num_original


def check_dimensions(c, A, b, rel=None):
    """Raise SimplexPreconditionError unless A is len(b) x len(c) (and len(rel) == len(b))."""
    if len(A) != len(b):
        raise SimplexPreconditionError(
            f"Constraint matrix has {len(A)} rows but right-hand side has {len(b)} entries")
    if rel is not None and len(rel) != len(b):
        raise SimplexPreconditionError(
            f"{len(rel)} constraint relations given for {len(b)} constraints")
    for i, row in enumerate(A):
        if len(row) != len(c):
            raise SimplexPreconditionError(
                f"Constraint {i+1} has {len(row)} coefficients, expected {len(c)}")


def to_standard_form(c, sense, A, b, rel):
    """Rewrite a general form LP in standard computational form.

    Args:
        c: Objective coefficients
        sense: Sense.MIN / Sense.MAX or 'min' / 'max'
        A: Constraint matrix (list of lists)
        b: Right-hand side values
        rel: Constraint relations ('<=', '=', '>='; '<', '==', '>' accepted)

    Returns:
        StandardForm
    """
    sense = parse_sense(sense)
    rel = [parse_relation(r) for r in rel]
    check_dimensions(c, A, b, rel)

    c = to_vector(c)
    A = to_matrix(A)
    b = to_vector(b)
    m, n = len(A), len(c)

    # Count number of auxiliaries we will need
    extra = sum(1 for r in rel if r != '=')

    true_c = [-x if sense == Sense.MAX else x for x in c] + [Fraction(0)] * extra
    true_A = [row + [Fraction(0)] * extra for row in A]
    true_b = list(b)
    var_types = ['decision'] * n

    # Add the auxiliaries
    offset = n
    for i in range(m):
        if rel[i] == '<=':
            true_A[i][offset] = Fraction(1)
            var_types.append('slack')
            offset += 1
        elif rel[i] == '>=':
            true_A[i][offset] = Fraction(-1)
            var_types.append('surplus')
            offset += 1

    # Make sure right-hand side is non-negative
    row_flipped = [False] * m
    for i in range(m):
        if true_b[i] < 0:
            true_A[i] = [-x for x in true_A[i]]
            true_b[i] = -true_b[i]
            row_flipped[i] = True

    return StandardForm(true_c, true_A, true_b, n, var_types, row_flipped)

"""
Shared types for the exact rational simplex solver.

                                 Disclaimer
                                 ==========

This code is provided for educational and research purposes.
The authors are not responsible for any errors or damages resulting from its use.

Feedback, error reports and improvements are welcome via GitHub issues or
pull requests.
"""

from enum import Enum
from fractions import Fraction
from typing import List, NamedTuple


class Status(Enum):
    """Terminal outcome of a simplex solve."""

    OPTIMAL = 'optimal'
    INFEASIBLE = 'infeasible'
    UNBOUNDED = 'unbounded'


class Phase(Enum):
    ONE = 1  # minimise the sum of artificials
    TWO = 2  # minimise the true objective


class PivotRule(Enum):
    """Entering/leaving selection rule.

    DANTZIG: most negative reduced cost enters, first row at the minimum ratio leaves.
    BLAND:   lowest-index column with negative reduced cost enters, ties in the
             ratio test go to the lowest basic column index. Cannot cycle.
    """

    DANTZIG = 0
    BLAND = 1


class Sense(Enum):
    MIN = 'min'
    MAX = 'max'


# Accepted spellings of the constraint relations
RELATIONS = {
    '<=': '<=', '<': '<=',
    '=': '=', '==': '=',
    '>=': '>=', '>': '>=',
}


class SimplexResult(NamedTuple):
    """Status plus the decision-variable part of the final solution vector.

    For INFEASIBLE and UNBOUNDED the vector is whatever the iteration held
    when it stopped and carries no meaning.
    """

    status: Status
    x: List[Fraction]


class SimplexPreconditionError(ValueError):
    """Input violates the solver's preconditions (non-positive rhs, bad shapes)."""


class SimplexIterationLimit(RuntimeError):
    """The optional iteration cap was reached before a terminal status."""

    def __init__(self, iterations, phase):
        super().__init__(f"Max iterations exceeded ({iterations} iterations, phase {phase.value})")
        self.iterations = iterations
        self.phase = phase


def parse_sense(sense):
    """Return a Sense from a Sense member or the strings 'min'/'max' (any case)."""
    if isinstance(sense, Sense):
        return sense
    try:
        return Sense(str(sense).lower())
    except ValueError:
        raise SimplexPreconditionError("Sense must be either 'max' or 'min'") from None


def parse_relation(rel):
    """Normalise a constraint relation to one of '<=', '=', '>='."""
    key = str(rel).replace(' ', '')
    if key not in RELATIONS:
        raise SimplexPreconditionError(f"Unknown constraint relation: {rel!r}")
    return RELATIONS[key]

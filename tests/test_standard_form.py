from fractions import Fraction as F

import pytest

from Simplex_types import Sense, SimplexPreconditionError
from Standard_form import to_standard_form


def test_slack_and_surplus_columns_in_row_order():
    """Auxiliary columns are assigned one per non-equality row, in row order.

    min  x + 2y
    s.t. x +  y >= 1     (surplus, column 2)
         x -  y  = 0     (no column)
         2x + y <= 4     (slack, column 3)
    """
    std = to_standard_form([1, 2], 'min', [[1, 1], [1, -1], [2, 1]], [1, 0, 4], ['>=', '=', '<='])

    assert std.A == [
        [F(1), F(1), F(-1), F(0)],
        [F(1), F(-1), F(0), F(0)],
        [F(2), F(1), F(0), F(1)],
    ]
    assert std.b == [F(1), F(0), F(4)]
    assert std.c == [F(1), F(2), F(0), F(0)]
    assert std.num_original == 2
    assert std.num_auxiliary == 2
    assert std.var_types == ['decision', 'decision', 'surplus', 'slack']
    assert std.row_flipped == [False, False, False]


def test_maximisation_negates_costs():
    std = to_standard_form([10, 12, 12], Sense.MAX, [[1, 2, 2]], [20], ['<='])
    assert std.c == [F(-10), F(-12), F(-12), F(0)]


def test_negative_rhs_flips_the_whole_row():
    """-x >= -2 becomes x + s = 2 after the surplus column is added."""
    std = to_standard_form([1], 'min', [[1], [-1]], [3, -2], ['>', '>'])

    assert std.A == [[F(1), F(-1), F(0)], [F(1), F(0), F(1)]]
    assert std.b == [F(3), F(2)]
    assert std.row_flipped == [False, True]


def test_equality_only_problem_adds_no_columns():
    std = to_standard_form(["1/2", 0], 'min', [[1, 1]], ["1/3"], ['=='])
    assert std.c == [F(1, 2), F(0)]
    assert std.A == [[F(1), F(1)]]
    assert std.b == [F(1, 3)]
    assert std.num_auxiliary == 0


def test_string_aliases_for_relations():
    a = to_standard_form([1, 1], 'min', [[1, 0], [0, 1]], [1, 1], ['<', '>'])
    b = to_standard_form([1, 1], 'min', [[1, 0], [0, 1]], [1, 1], ['<=', '>='])
    assert a == b


@pytest.mark.parametrize("c, A, b, rel", [
    ([1, 1], [[1, 1]], [1, 2], ['<=']),          # rows vs rhs
    ([1, 1], [[1, 1]], [1], ['<=', '<=']),       # relations vs rhs
    ([1, 1], [[1, 1], [1]], [1, 1], ['<=', '=']),  # ragged row
])
def test_dimension_mismatch_is_a_precondition_error(c, A, b, rel):
    with pytest.raises(SimplexPreconditionError):
        to_standard_form(c, 'min', A, b, rel)


def test_unknown_relation_and_sense():
    with pytest.raises(SimplexPreconditionError):
        to_standard_form([1], 'min', [[1]], [1], ['!='])
    with pytest.raises(SimplexPreconditionError):
        to_standard_form([1], 'maximize', [[1]], [1], ['<='])

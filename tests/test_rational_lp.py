import runpy
from fractions import Fraction as F
from pathlib import Path

import pytest

from Rational_simplex import RationalLP
from Simplex_types import PivotRule, Sense, SimplexIterationLimit, SimplexPreconditionError

ROOT = Path(__file__).resolve().parent.parent


def test_solve_maximisation():
    """max 90x + y st 2x + y <= 40, 20x + y <= 100, 2x <= 3"""
    lp = RationalLP([90, 1], [[2, 1], [20, 1], [2, 0]], [40, 100, 3], ['<=', '<=', '<='], 'max',
                    Print_Debug=-1)
    solution, obj_value, status = lp.solve()
    assert status == 'optimal'
    assert solution == [F(3, 2), F(37)]
    assert obj_value == F(172)


def test_solve_infeasible_and_unbounded():
    lp = RationalLP([1], [[1], [1]], [3, 2], ['>=', '<='], 'min', Print_Debug=-1)
    assert lp.solve() == (None, None, 'infeasible')

    lp = RationalLP([1], [[1]], [2], ['>='], 'max', Print_Debug=-1)
    assert lp.solve() == (None, None, 'unbounded')


def test_string_expressions_and_large_numbers():
    """max x st x <= 10^100 + 1/3"""
    lp = RationalLP(['1'], [['1']], ['10^100 + 1/3'], ['<='], 'MAX', Print_Debug=-1)
    solution, obj_value, status = lp.solve()
    assert status == 'optimal'
    assert obj_value == F(10**100) + F(1, 3)


def test_control_parameters():
    lp = RationalLP([1, 1], [[1, 1]], [1], ['>='], 'min', Print_Debug=-1, CP_pivot_rule=1)
    assert lp.sense == Sense.MIN
    assert lp.CP_pivot_rule == PivotRule.BLAND
    assert lp.solve()[2] == 'optimal'


def test_iteration_cap_propagates():
    lp = RationalLP([1, 1], [[1, 1]], [1], ['>='], 'min', Print_Debug=-1, CP_max_iterations=0)
    with pytest.raises(SimplexIterationLimit):
        lp.solve()


def test_validate_solution_is_exact():
    lp = RationalLP([1, 1], [[3, 0], [0, 1]], [1, "1/2"], ['=', '<='], 'min', Print_Debug=-1)
    assert lp._validate_solution([F(1, 3), F(1, 2)])
    assert not lp._validate_solution([F(1, 3) + F(1, 10**60), F(0)])
    assert not lp._validate_solution([F(1, 3), F(-1)])
    assert not lp._validate_solution([F(1, 3), F(1, 2) + F(1, 10**60)])


def test_bad_input_is_rejected_before_solving():
    with pytest.raises(SimplexPreconditionError):
        RationalLP([1, 1], [[1, 1]], [1, 2], ['<='], 'min', Print_Debug=-1)
    with pytest.raises(SimplexPreconditionError):
        RationalLP([1], [[1]], [1], ['<='], 'minimise', Print_Debug=-1)
    with pytest.raises(ValueError):
        RationalLP([0.1], [[1]], [1], ['<='], 'min', Print_Debug=-1)


def test_printing(capsys):
    lp = RationalLP([1, "-1/2"], [[1, 1]], ["1/3"], ['<='], 'max')
    lp.solve()
    out = capsys.readouterr().out
    assert "LINEAR PROGRAMMING PROBLEM" in out
    assert "Maximize:" in out
    assert "1 x1 - 1/2 x2" in out
    assert "1 x1 + 1 x2 <= 1/3" in out
    assert "x1 = 1/3  (~0.333333333333333333333333333333)" in out
    assert "Objective value: 1/3" in out


def test_silent_level():
    lp = RationalLP([1], [[1]], [1], ['<='], 'max', Print_Debug=-1)
    assert lp.var_names == ['x1']


def test_kantorovich_example_script(capsys):
    module = runpy.run_path(str(ROOT / "Kantorovich-Ex1-transport.py"))
    c, A, b, rel = module['transport_problem']([1, 2, 4], [1, 1, 2])
    assert c == [0, 1, 1, 1, 0, 1, 1, 1, 0]
    assert A[0] == [1, 1, 1, 0, 0, 0, 0, 0, 0]
    assert A[3] == [1, 0, 0, 1, 0, 0, 1, 0, 0]
    assert rel == ['='] * 6

    solution, obj_value, status = module['main']()
    assert status == 'optimal'
    assert obj_value == F(3, 28)
    assert "Kantorovich distance: 3/28" in capsys.readouterr().out


def test_equality_system_with_single_feasible_point():
    """max y st x + y = 1, x - y = 1: only (1, 0) is feasible."""
    lp = RationalLP([0, 1], [[1, 1], [1, -1]], [1, 1], ['=', '='], 'max', Print_Debug=-1)
    assert lp.solve() == ([F(1), F(0)], F(0), 'optimal')

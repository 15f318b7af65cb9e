"""
Exact Fraction Linear Programming Solver using the Two-Phase Revised Simplex Method

                                 Disclaimer
                                 ==========

This code is provided for educational and research purposes.
The authors are not responsible for any errors or damages resulting from its use.

Feedback, error reports and improvements are welcome via GitHub issues or
pull requests.


This implementation handles:
- Exact arithmetic using fractions (no floating-point rounding errors)
- Both minimization and maximization problems
- Equality and inequality constraints ('<=', '=', '>=')
- Two-phase primal revised simplex with an explicit basis inverse
- Dantzig (default) or Bland pivoting (CP_pivot_rule)
- Optional iteration cap (CP_max_iterations)

Key Components:
1. SimplexState: basis, basis inverse, basic costs and current solution of one solve
2. solve_standard: min dot(c,x) s.t. A x = b, x >= 0 with every b[i] > 0
3. solve_general: {min/max} dot(c,x) s.t. A x {<=|=|>=} b, x >= 0
4. RationalLP class: problem object with printing and exact solution validation

Phase one starts from the m artificial columns n..n+m-1 (never materialised in A)
and minimises their sum. When no reduced cost is negative any artificial still
positive means infeasibility, otherwise phase two continues from the same basis
with the true costs. Artificial columns never re-enter. There is no anti-cycling
under the default rule; degenerate problems that cycle need PivotRule.BLAND.
"""

from fractions import Fraction

from Exact_fraction import dot, format_decimal, format_linear, to_matrix, to_vector
from Simplex_types import (
    Phase,
    PivotRule,
    Sense,
    SimplexIterationLimit,
    SimplexPreconditionError,
    SimplexResult,
    Status,
    parse_relation,
    parse_sense,
)
from Standard_form import check_dimensions, to_standard_form


class SimplexState:
    """Mutable iteration state of a single standard form solve."""

    def __init__(self, c, A, b, pivot_rule=PivotRule.DANTZIG):
        self.c = c
        self.m, self.n = len(A), len(c)
        m, n = self.m, self.n
        self.pivot_rule = PivotRule(pivot_rule)
        self.columns = [[A[i][j] for i in range(m)] for j in range(n)]

        # Initialise phase 1 with the artificial basis
        self.basic = [n + j for j in range(m)]
        self.is_basic = [False] * n + [True] * m
        self.Binv = [[Fraction(int(i == j)) for j in range(m)] for i in range(m)]
        self.cB = [Fraction(1)] * m
        self.x = [Fraction(0)] * n + list(b)
        self.phase = Phase.ONE
        self.iterations = 0

    def var_name(self, j):
        return f'x{j+1}' if j < self.n else f'a{j-self.n+1}'

    def duals(self):
        """pi = cB^T Binv"""
        pi = [Fraction(0)] * self.m
        for i, cost in enumerate(self.cB):
            if cost:
                row = self.Binv[i]
                for k in range(self.m):
                    pi[k] += cost * row[k]
        return pi

    def reduced_cost(self, s, pi):
        cost = Fraction(0) if self.phase == Phase.ONE else self.c[s]
        return cost - dot(pi, self.columns[s])

    def reduced_costs(self, pi=None):
        """Reduced costs of all non-basic, non-artificial columns, keyed by column."""
        if pi is None:
            pi = self.duals()
        return {s: self.reduced_cost(s, pi) for s in range(self.n) if not self.is_basic[s]}

    def choose_entering(self, pi):
        """Return (column, reduced cost) of the entering variable, or (None, 0)."""
        entering = None
        best_rc = Fraction(0)
        for s in range(self.n):
            if self.is_basic[s]:
                continue
            rc = self.reduced_cost(s, pi)
            if rc < best_rc:
                entering, best_rc = s, rc
                if self.pivot_rule == PivotRule.BLAND:
                    break
        return entering, best_rc

    def artificial_values(self):
        return self.x[self.n:]

    def start_phase_two(self):
        self.phase = Phase.TWO
        self.cB = [Fraction(0) if j >= self.n else self.c[j] for j in self.basic]

    def entering_column(self, s):
        """d = Binv A[:,s]: change of the basic variables per unit of column s."""
        col = self.columns[s]
        return [dot(row, col) for row in self.Binv]

    def ratio_test(self, d):
        """Return (row, ratio) of the leaving variable, or (None, None) if unbounded.

        In phase 2 an artificial still basic (at zero) blocks at ratio 0 whenever
        d[j] != 0, whatever the sign, so it is pivoted out instead of leaving zero.
        """
        leaving = None
        min_ratio = None
        for j in range(self.m):
            if self.phase == Phase.TWO and self.basic[j] >= self.n and d[j]:
                ratio = Fraction(0)
            elif d[j] > 0:
                ratio = self.x[self.basic[j]] / d[j]
            else:
                continue
            if leaving is None or ratio < min_ratio:
                min_ratio, leaving = ratio, j
            elif (self.pivot_rule == PivotRule.BLAND and ratio == min_ratio
                    and self.basic[j] < self.basic[leaving]):
                leaving = j
        return leaving, min_ratio

    def pivot(self, entering, leaving, ratio, d):
        m = self.m

        # Now we update solution...
        for i in range(m):
            if d[i]:
                self.x[self.basic[i]] -= ratio * d[i]
        self.x[entering] = ratio

        # ... and the basis inverse: Gauss-Jordan on the leaving row of d ...
        pivot_value = d[leaving]
        pivot_row = self.Binv[leaving]
        for i in range(m):
            if i == leaving or not d[i]:
                continue
            factor = d[i] / pivot_value
            row = self.Binv[i]
            for k in range(m):
                if pivot_row[k]:
                    row[k] -= factor * pivot_row[k]
        self.Binv[leaving] = [v / pivot_value for v in pivot_row]

        # ... and variable status flags
        self.is_basic[self.basic[leaving]] = False
        self.is_basic[entering] = True
        self.cB[leaving] = Fraction(0) if self.phase == Phase.ONE else self.c[entering]
        self.basic[leaving] = entering
        self.iterations += 1

    def solution(self):
        return self.x[:self.n]

    def run(self, max_iterations=None, Print_Debug=0):
        """Iterate until a terminal status is reached.

        Args:
            max_iterations: Pivot cap, None for no cap
            Print_Debug: Debug level (0-3)

        Returns:
            SimplexResult
        """
        while True:
            # Calculate dual solution and thus the reduced costs
            pi = self.duals()

            if Print_Debug >= 3:
                print(f"\n--- Iteration {self.iterations + 1} (Phase {self.phase.value}) ---")
                print("Basis:", [self.var_name(j) for j in self.basic])
                print("Solution:", [self.x[j] for j in self.basic])
                print("Duals:", pi)
                print("Reduced Costs:")
                for s, rc in self.reduced_costs(pi).items():
                    print(f"{self.var_name(s)}: {rc}")

            entering, rc = self.choose_entering(pi)

            # No negative reduced cost: this phase is at its optimum
            if entering is None:
                if self.phase == Phase.ONE:
                    if any(v > 0 for v in self.artificial_values()):
                        if Print_Debug >= 1:
                            print(f"Phase 1 ended with artificial sum "
                                  f"{sum(self.artificial_values())} > 0: problem is infeasible")
                        return SimplexResult(Status.INFEASIBLE, self.solution())
                    if Print_Debug >= 1:
                        remaining = [self.var_name(j) for j in self.basic if j >= self.n]
                        print(f"Phase 1 completed after {self.iterations} iterations")
                        if remaining:
                            print(f"Note: artificial variables {remaining} remain basic at zero")
                    # Start again in phase 2 with our feasible basis
                    self.start_phase_two()
                    continue
                if Print_Debug >= 1:
                    print(f"Optimal after {self.iterations} iterations (Phase 2)")
                return SimplexResult(Status.OPTIMAL, self.solution())

            # Ratio test: which basic variable reaches 0 first
            d = self.entering_column(entering)
            leaving, ratio = self.ratio_test(d)

            if leaving is None:
                if Print_Debug >= 1:
                    print(f"Column {self.var_name(entering)} can increase without limit: "
                          f"problem is unbounded")
                return SimplexResult(Status.UNBOUNDED, self.solution())

            if max_iterations is not None and self.iterations >= max_iterations:
                raise SimplexIterationLimit(self.iterations, self.phase)

            if Print_Debug >= 2:
                print(f"Entering {self.var_name(entering)} (reduced cost {rc}), "
                      f"leaving {self.var_name(self.basic[leaving])} (ratio {ratio})")

            self.pivot(entering, leaving, ratio, d)


def solve_standard(c, A, b, pivot_rule=PivotRule.DANTZIG, max_iterations=None, Print_Debug=0):
    """Solve min dot(c,x) s.t. A x = b, x >= 0 exactly.

    Args:
        c: Cost vector (length n)
        A: Constraint matrix (m rows of length n)
        b: Right-hand side, every entry strictly positive
        pivot_rule: PivotRule.DANTZIG or PivotRule.BLAND (or 0/1)
        max_iterations: Pivot cap, None for no cap
        Print_Debug: Debug level (0-3)

    Returns:
        SimplexResult(status, x) with len(x) == n

    Raises:
        SimplexPreconditionError: if shapes disagree or some b[i] <= 0
    """
    check_dimensions(c, A, b)
    c = to_vector(c)
    A = to_matrix(A)
    b = to_vector(b)

    for i, rhs in enumerate(b):
        if rhs <= 0:
            raise SimplexPreconditionError(
                f"Right-hand side b[{i+1}] = {rhs} must be strictly positive")

    state = SimplexState(c, A, b, pivot_rule)
    if Print_Debug >= 1:
        print(f"\n=== Revised simplex: {state.m} constraints, {state.n} variables, "
              f"{state.pivot_rule.name} pivoting ===")
    return state.run(max_iterations=max_iterations, Print_Debug=Print_Debug)


def solve_general(c, sense, A, b, rel, pivot_rule=PivotRule.DANTZIG, max_iterations=None,
                  Print_Debug=0):
    """Solve {min/max} dot(c,x) s.t. A x {<=|=|>=} b, x >= 0 exactly.

    Args:
        c: Objective coefficients
        sense: Sense.MIN / Sense.MAX or 'min' / 'max'
        A: Constraint matrix (list of lists)
        b: Right-hand side values (any sign)
        rel: List of constraint relations ('<=', '>=', '=')

    Returns:
        SimplexResult(status, x) with len(x) == len(c)
    """
    std = to_standard_form(c, sense, A, b, rel)
    if Print_Debug >= 2:
        flipped = [i + 1 for i, f in enumerate(std.row_flipped) if f]
        print(f"Standard form: {len(std.b)} constraints, {std.num_original} decision "
              f"+ {std.num_auxiliary} auxiliary variables")
        if flipped:
            print(f"Rows negated for non-negative rhs: {flipped}")

    status, x = solve_standard(std.c, std.A, std.b, pivot_rule=pivot_rule,
                               max_iterations=max_iterations, Print_Debug=Print_Debug)
    return SimplexResult(status, x[:std.num_original])


class RationalLP:
    """LP problem object solved with exact fraction arithmetic."""

    def __init__(self, c, A, b, rel, sense, Print_Debug=0, CP_pivot_rule=0,
                 CP_max_iterations=None, CP_digits=30):
        """Store the problem.

        Args:
            c: List of objective coefficients
            A: Constraint matrix (list of lists)
            b: Right-hand side values
            rel: List of constraint relations ('<=', '>=', '=')
            sense: 'max' or 'min'
            Print_Debug: Debug level (-1 silent, 0 problem and result, 1-3 solver detail)
            CP_pivot_rule: Control parameter (0/1)
                        0: Dantzig, most negative reduced cost (default)
                        1: Bland, lowest index, cannot cycle
            CP_max_iterations: Pivot cap, None for no cap
            CP_digits: Significant digits of the decimal renderings in printouts
        """
        self.sense = parse_sense(sense)
        self.rel = [parse_relation(r) for r in rel]
        check_dimensions(c, A, b, self.rel)

        self.Print_Debug = Print_Debug
        self.CP_pivot_rule = PivotRule(CP_pivot_rule)
        self.CP_max_iterations = CP_max_iterations
        self.CP_digits = CP_digits

        self.c = to_vector(c)
        self.A = to_matrix(A)
        self.b = to_vector(b)
        self.num_vars = len(self.c)
        self.num_constraints = len(self.A)
        self.var_names = [f'x{i+1}' for i in range(self.num_vars)]

        if self.Print_Debug >= 0:
            self.print_problem()

    def objective_value(self, solution):
        """Exact dot(c, x) in the original objective sense."""
        return dot(self.c, solution)

    def _validate_solution(self, solution):
        """Verify that the solution satisfies all constraints of the original problem.

        Every comparison is exact.
        """
        feasible = True
        for j, val in enumerate(solution):
            if val < 0:
                if self.Print_Debug >= 1:
                    print(f"Variable {self.var_names[j]} = {val} is negative")
                feasible = False

        for i, row in enumerate(self.A):
            lhs = dot(row, solution)
            rhs = self.b[i]
            rel = self.rel[i]
            if (rel == '<=' and lhs > rhs) or (rel == '>=' and lhs < rhs) or (rel == '=' and lhs != rhs):
                if self.Print_Debug >= 1:
                    print(f"Constraint {i+1} violated: {lhs} {rel} {rhs}")
                feasible = False
        return feasible

    def solve(self):
        """Solve the LP problem.

        Returns:
            (solution, obj_value, status) where status is 'optimal', 'infeasible'
            or 'unbounded'; solution and obj_value are None unless optimal.
        """
        status, solution = solve_general(
            self.c, self.sense, self.A, self.b, self.rel,
            pivot_rule=self.CP_pivot_rule,
            max_iterations=self.CP_max_iterations,
            Print_Debug=self.Print_Debug)

        if status != Status.OPTIMAL:
            if self.Print_Debug >= 0:
                print(f"\nProblem is {status.value}")
            return None, None, status.value

        if not self._validate_solution(solution):
            raise RuntimeError("Optimal solution violates the original constraints")

        obj_value = self.objective_value(solution)
        if self.Print_Debug >= 0:
            self.print_solution(solution, obj_value)
        return solution, obj_value, status.value

    def print_solution(self, solution, obj_value):
        print("\n=== Optimal Solution ===")
        for name, val in zip(self.var_names, solution):
            if val.denominator == 1:
                print(f"{name} = {val}")
            else:
                print(f"{name} = {val}  (~{format_decimal(val, self.CP_digits)})")
        print(f"Objective value: {obj_value}")
        if obj_value.denominator != 1:
            print(f"               ~ {format_decimal(obj_value, self.CP_digits)}")

    def print_problem(self):
        """Print the problem formulation."""
        print("\n" + "="*60)
        print("LINEAR PROGRAMMING PROBLEM")
        print("="*60)
        print(f"Variables: {self.num_vars}, Constraints: {self.num_constraints}")

        print(f"\n{'Maximize' if self.sense == Sense.MAX else 'Minimize'}:")
        print(format_linear(self.c, self.var_names))

        print("\nSubject to:")
        for i in range(self.num_constraints):
            print(f"{format_linear(self.A[i], self.var_names)} {self.rel[i]} {self.b[i]}")
        print(f"{', '.join(self.var_names)} >= 0")
        print("="*60 + "\n")

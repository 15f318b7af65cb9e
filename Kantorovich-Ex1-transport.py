"""

Example 1: Kantorovich distance between two discrete distributions
           Kantorovich-Ex1-transport.py


                                 Disclaimer
                                 ==========

This code is provided for educational and research purposes.
The authors are not responsible for any errors or damages resulting from its use.

Feedback, error reports and improvements are welcome via GitHub issues or
pull requests.


Optimal transport of mu = (1/7, 2/7, 4/7) onto nu = (1/4, 1/4, 1/2) on the
points {1, 2, 3} with the discrete metric (cost 0 on the diagonal, 1 elsewhere).
Variable x_{3(i-1)+j} is the mass moved from point i to point j.
The exact distance is 3/28.

"""

import sys

from Rational_simplex import RationalLP


def transport_problem(mu, nu):
    """Build (c, A, b, rel) of the transport LP for the discrete metric."""
    k = len(mu)
    c = [0 if i == j else 1 for i in range(k) for j in range(k)]
    A = []
    for i in range(k):  # mass leaving point i
        A.append([1 if r == i else 0 for r in range(k) for _ in range(k)])
    for j in range(k):  # mass arriving at point j
        A.append([1 if s == j else 0 for _ in range(k) for s in range(k)])
    b = list(mu) + list(nu)
    rel = ['='] * (2 * k)
    return c, A, b, rel


def main(Print_Debug=0):
    mu = ['1/7', '2/7', '4/7']
    nu = ['1/4', '1/4', '1/2']
    c, A, b, rel = transport_problem(mu, nu)

    lp = RationalLP(c, A, b, rel, 'min', Print_Debug=Print_Debug)
    solution, obj_value, status = lp.solve()

    if status == 'optimal':
        print(f"\nKantorovich distance: {obj_value}")
    else:
        print(f"\nSolver status: {status}")
    return solution, obj_value, status


if __name__ == "__main__":
    level = int(sys.argv[1]) if len(sys.argv) > 1 else 0
    main(Print_Debug=level)

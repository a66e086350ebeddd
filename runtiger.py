"""Running PERSEUS on the tiger problem

usage: python runtiger.py <nbeliefs> <horizon> <epsilon> [discount]
"""

import numpy as np
import sys

from perseus.models.tiger import TigerPOMDP
from perseus.core import PERSEUS
from perseus.vfun import bestaction


def main():
    nbeliefs, horizon, epsilon = int(sys.argv[1]), int(sys.argv[2]), float(sys.argv[3])
    discount = float(sys.argv[4]) if len(sys.argv) > 4 else 0.95
    # generate a POMDP model
    Tiger = TigerPOMDP(discount)
    # fixed seed so that runs can be compared
    Solver = PERSEUS(nbeliefs, horizon, epsilon, seed=777)
    variation, V = Solver.Solve(Tiger)
    print("Final variation: {0:.6f}".format(variation))
    for b in (np.array([0.5, 0.5]), np.array([0.9, 0.1]), np.array([0.05, 0.95])):
        a, vb = bestaction(V, b)
        print("Belief {0}: action {1}, value {2:.3f}".format(b, a, vb))

if __name__ == '__main__':
    main()

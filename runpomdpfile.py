"""Running PERSEUS on a model in Cassandra's .pomdp format

usage: python runpomdpfile.py <filename> <nbeliefs> <horizon> <epsilon>
"""

import sys

from perseus.pomdpparser import POMDPParser
from perseus.core import PerseusValueIteration
from perseus.vfun import bestaction


def main():
    filename = sys.argv[1]
    nbeliefs, horizon, epsilon = int(sys.argv[2]), int(sys.argv[3]), float(sys.argv[4])
    M = POMDPParser(filename).generatePOMDP()
    print("Parsed {0}: {1} states, {2} actions, {3} observations".format(
        filename, M.S, M.A, M.O))
    variation, V = PerseusValueIteration(M, nbeliefs, horizon, epsilon)
    a, vb = bestaction(V, M.b0)
    print("Initial belief: action {0}, value {1:.6f}, variation {2:.6f}".format(
        a, vb, variation))

if __name__ == '__main__':
    main()

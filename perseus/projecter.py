"""One-step lookahead projections of a VList
"""

import numpy as np


class Projecter():
    def __init__(self, M):
        self.M = M
        # the immediate reward is split evenly among observations, so that
        # summing one projection per observation counts it exactly once
        self.rO = self.M.r[:, :, np.newaxis, np.newaxis] / self.M.O # S x A x 1 x 1

    def __call__(self, vlist):
        """Compute the projections of every alpha-vector of vlist
        Input:
            vlist: VList of the previous timestep, V alpha-vectors
        Output:
            alpao: S x A x O x V numpy array,
            alpao[s, a, o, v] = r(s, a) / O
                + discount * sum_{s'} P(s', o|s, a) alp_v(s')
            alpao[:, a, o, :] are the projections for the pair (a, o), column
            v being the projection of vlist[v]
        """
        return self.rO + self.M.discount * self.M.Pmult(vlist.alp)
